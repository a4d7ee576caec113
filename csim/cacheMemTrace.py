#! /usr/bin/env python3
import argparse
import logging
import sys

from csim.cache import Cache
from csim.trace import TraceError, parseTrace, readTrace

logger = logging.getLogger(__name__)


def positive(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError("%r is not an integer"%text) from None
    if value <= 0:
        raise argparse.ArgumentTypeError("must be an integer greater than 0")
    return value


def buildParser():
    parser = argparse.ArgumentParser(
        prog="csim",
        description="Replay a valgrind memory trace against a set associative LRU cache.")
    parser.add_argument("-s", dest="setBits", type=positive, required=True, metavar="<num>",
                        help="Number of set index bits.")
    parser.add_argument("-E", dest="associativity", type=positive, required=True, metavar="<num>",
                        help="Number of lines per set.")
    parser.add_argument("-b", dest="offsetBits", type=positive, required=True, metavar="<num>",
                        help="Number of block offset bits.")
    parser.add_argument("-t", dest="traceFile", required=True, metavar="<file>",
                        help="Trace file.")
    parser.add_argument("-v", dest="verbose", action="store_true",
                        help="Print the outcome of every trace entry.")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def printEntry(entry, outcome):
    print("%s %x,%d %s"%(entry.operation.value, entry.address, entry.size, " ".join(outcome)))


def main(argv=None):
    parser = buildParser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        lines = readTrace(args.traceFile)
    except OSError as e:
        parser.error("failed to read trace file: %s"%e)

    logger.info("s=%d E=%d b=%d trace=%s", args.setBits, args.associativity, args.offsetBits, args.traceFile)
    cache = Cache(args.setBits, args.associativity)
    try:
        cache.replay(parseTrace(lines), args.setBits, args.offsetBits,
                     verbose=printEntry if args.verbose else None)
    except TraceError as e:
        print("csim: %s"%e, file=sys.stderr)
        return 1

    print(cache.report())
    return 0


if __name__ == '__main__':
    sys.exit(main())
