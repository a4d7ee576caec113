import logging

logger = logging.getLogger(__name__)


def decode(address, setBits, offsetBits):
    """Split an address into its set index and tag.

    The lowest `offsetBits` bits address bytes within a line and are dropped,
    the next `setBits` bits select the set and the remainder is the tag.
    """
    setIndex = (address >> offsetBits) & ((1 << setBits) - 1)
    tag = address >> (setBits + offsetBits)
    return setIndex, tag


class Clock:
    """Logical time shared by every set of one cache, ticked once per miss."""

    def __init__(self):
        self.time = 0

    def tick(self):
        self.time += 1
        return self.time


class CacheLine:

    def __init__(self, valid=False, tag=0, lastUsed=0):
        self.valid = valid
        self.tag = tag
        self.lastUsed = lastUsed

    def isHit(self, tag):
        return self.valid and self.tag == tag

    def __repr__(self):
        return "CacheLine(valid=%r, tag=%#x, lastUsed=%d)"%(self.valid, self.tag, self.lastUsed)


class CacheSet:

    def __init__(self, associativity):
        self.lines = [CacheLine() for i in range(associativity)]

    def access(self, tag, clock):
        """Access one tag within the set.

        Parameters
        ----------
        tag (int):
            The tag bits of the accessed address.
        clock (Clock):
            The owning cache's logical clock. Only a miss advances it.

        Returns
        -------
        (hit, evicted) as a pair of bools.
        """
        for line in self.lines:
            if line.isHit(tag):
                line.lastUsed = clock.time
                return True, False

        if not self.lines:
            raise RuntimeError("cache set has no lines")
        now = clock.tick()
        way = self.selectEviction()
        victim = self.lines[way]
        evicted = victim.valid
        if evicted:
            logger.debug("evicting tag %#x from way %d", victim.tag, way)
        victim.valid = True
        victim.tag = tag
        victim.lastUsed = now
        return False, evicted

    def selectEviction(self):
        """Way of the least recently used line, the lowest way winning ties."""
        index = 0
        minAccess = self.lines[0].lastUsed
        for i, line in enumerate(self.lines):
            if line.lastUsed < minAccess:
                index = i
                minAccess = line.lastUsed
        return index

    def tags(self):
        return [line.tag for line in self.lines if line.valid]


class Cache:


    def __init__(self, setBits, associativity):
        """Set associative cache with LRU replacement.

        Parameters
        ----------

        setBits (int):
            Number of set index bits, the cache holds 2**setBits sets.
        associativity (int):
            Number of lines per set.

        Both are expected to be validated by the caller.
        """
        self.setBits = setBits
        self.associativity = associativity
        self.nSets = 1 << setBits

        self.sets = [CacheSet(self.associativity) for i in range(self.nSets)]
        self.clock = Clock()

        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def access(self, address, setBits, offsetBits):
        """Access a single address and count it, returning (hit, evicted)."""
        setIndex, tag = decode(address, setBits, offsetBits)
        hit, evicted = self.sets[setIndex].access(tag, self.clock)
        if hit:
            self.hits += 1
        else:
            self.misses += 1
            if evicted:
                self.evictions += 1
        return hit, evicted

    def process(self, entry, setBits, offsetBits):
        """Replay one trace entry.

        Parameters
        ----------
        entry (TraceEntry):
            A load, store or modify entry. Instruction fetches never get here.
        setBits (int):
            Number of set index bits used to decode the address.
        offsetBits (int):
            Number of block offset bits used to decode the address.

        Returns
        -------
        A list of outcome words ("hit", "miss", "eviction") in the order they
        happened, as printed by the verbose driver.
        """
        hit, evicted = self.access(entry.address, setBits, offsetBits)

        if hit:
            outcome = ["hit"]
        else:
            outcome = ["miss"]
            if evicted:
                outcome.append("eviction")

        # The store half of a modify always finds the line the load just touched
        if entry.operation.isModify():
            self.hits += 1
            outcome.append("hit")
        return outcome

    def replay(self, entries, setBits, offsetBits, verbose=None):
        """Replay trace entries in order.

        If `verbose` is given it is called with each entry and its outcome.
        """
        n = 0
        for entry in entries:
            outcome = self.process(entry, setBits, offsetBits)
            if verbose is not None:
                verbose(entry, outcome)
            n += 1
        logger.debug("replayed %d entries: %s", n, self.stats())
        return self.stats()

    def stats(self):
        return self.hits, self.misses, self.evictions

    def report(self):
        return "hits:%d misses:%d evictions:%d"%self.stats()
