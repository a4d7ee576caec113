import matplotlib
matplotlib.use("Agg")

import numpy as np

from csim.plot import hitRate, parseResults, plot


def test_parse_results_skips_other_lines():
    lines = [
        "L 10,1 miss",
        "hits:4 misses:5 evictions:3",
        "INFO csim.cacheMemTrace: s=4 E=1 b=4 trace=yi.trace",
        "hits:0 misses:2 evictions:1\n",
    ]
    results = parseResults(lines)
    assert results.shape == (2, 3)
    assert results.tolist() == [[4, 5, 3], [0, 2, 1]]


def test_parse_results_empty():
    assert parseResults([]).shape == (0, 3)


def test_hit_rate_handles_empty_runs():
    results = np.array([[3, 1, 0], [0, 0, 0]])
    assert hitRate(results).tolist() == [0.75, 0.0]


def test_plot_fills_missing_labels():
    results = np.array([[4, 5, 3], [2, 3, 0]])
    ax = plot(results, ["yi"])
    assert [t.get_text() for t in ax.get_xticklabels()] == ["yi", "1"]
