import enum
import logging
import re
from collections import namedtuple

logger = logging.getLogger(__name__)


class TraceError(ValueError):
    """A trace line which is not of the form `<op> <hex-address>,<size>`."""


class Operation(enum.Enum):
    LOAD = "L"
    STORE = "S"
    MODIFY = "M"
    INSTRUCTION = "I"

    def isModify(self):
        return self is Operation.MODIFY


TraceEntry = namedtuple("TraceEntry", "operation address size")

hex_re = re.compile("[0-9a-fA-F]+")


def parseLine(line):
    """Interpret one line of a valgrind style memory trace.

    Returns None for blank lines and instruction fetches, which the cache
    does not see, and a TraceEntry otherwise.
    """
    text = line.strip()
    if not text or text[0] == Operation.INSTRUCTION.value:
        return None

    parts = text.split()
    try:
        operation = Operation(parts[0])
    except ValueError:
        raise TraceError("unknown operation %r in trace line %r"%(parts[0], line)) from None
    if len(parts) != 2:
        raise TraceError("malformed trace line %r"%line)

    fields = parts[1].split(",")
    if len(fields) < 2:
        raise TraceError("missing size in trace line %r"%line)
    if not hex_re.fullmatch(fields[0]):
        raise TraceError("bad address in trace line %r"%line)
    address = int(fields[0], 16)
    if address >= 1 << 64:
        raise TraceError("address wider than 64 bits in trace line %r"%line)
    try:
        size = int(fields[1])
    except ValueError:
        raise TraceError("bad size in trace line %r"%line) from None
    return TraceEntry(operation, address, size)


def parseTrace(lines):
    """Yield the entries of a trace in order, skipping instruction fetches."""
    for i, line in enumerate(lines):
        try:
            entry = parseLine(line)
        except TraceError as e:
            raise TraceError("line %d: %s"%(i + 1, e)) from None
        if entry is not None:
            yield entry


def readTrace(path):
    with open(path, "r") as f:
        lines = f.read().splitlines()
    logger.info("read %d lines from %s", len(lines), path)
    return lines
