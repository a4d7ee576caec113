from csim.cache import Cache, CacheLine, CacheSet, Clock, decode
from csim.trace import Operation, TraceEntry, TraceError, parseLine, parseTrace, readTrace
