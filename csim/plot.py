#! /usr/bin/env python3

from matplotlib import pyplot as plt
from matplotlib.gridspec import GridSpec
import sys
import numpy as np


def parseResults(lines):
    """Collect `hits:h misses:m evictions:e` lines into an (n, 3) array.

    Any other line (verbose output, log messages) is skipped.
    """
    rows = []
    for line in lines:
        spl = line.split()
        if len(spl) != 3 or not spl[0].startswith('hits:'):
            continue
        fields = dict(item.split(':', 1) for item in spl)
        rows.append([int(fields['hits']), int(fields['misses']), int(fields['evictions'])])
    return np.asarray(rows, dtype=np.int64).reshape(-1, 3)


def hitRate(results):
    accesses = results[:, 0] + results[:, 1]
    return np.divide(results[:, 0], accesses, out=np.zeros(len(results)), where=accesses > 0)


def plot(results, labels):
    if len(labels) < len(results):
        labels = list(labels) + [str(i) for i in range(len(labels), len(results))]
    labels = labels[:len(results)]

    bar_width = 0.25
    index = np.arange(len(results))
    gs = GridSpec(2,1)

    ax = plt.subplot(gs[0,0])
    ax.bar(index, results[:,0], width=bar_width, color='C0', label='Hits')
    ax.bar(index + bar_width, results[:,1], width=bar_width, color='C1', label='Misses')
    ax.bar(index + 2*bar_width, results[:,2], width=bar_width, color='C3', label='Evictions')
    ax.set_ylabel("Count")
    ax.set_xticks([])
    ax.legend()

    ax = plt.subplot(gs[1,0])
    ax.bar(index + bar_width, hitRate(results) * 100, width=bar_width, color='C0')
    ax.set_ylabel("Hit rate (%)")
    ax.set_ylim(0, 100)
    ax.set_xticks(index + bar_width)
    ax.set_xticklabels(labels)
    return ax


def main():
    results = parseResults(sys.stdin)
    if len(results) == 0:
        print("csim-plot: no results on stdin", file=sys.stderr)
        return 1
    plot(results, sys.argv[1:])
    plt.show()
    return 0


if __name__ == '__main__':
    sys.exit(main())
