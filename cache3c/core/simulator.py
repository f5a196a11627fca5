"""CacheSimulator coordinates cache accesses, miss classification and statistics.

Every address goes to the set-associative cache and, in lock-step, to a
fully-associative LRU shadow cache with the same number of blocks. A miss
in the real cache is then classified as:

- compulsory: the block has never been referenced before
- conflict:   the shadow cache still holds the block
- capacity:   the shadow cache lost the block too

Addresses must be processed in trace order; both the shadow's recency
state and the seen-block set depend on history.
"""
from dataclasses import asdict, dataclass
from typing import Callable, Iterable, List, Optional, Set

from .cache import Cache, ShadowCache
from .classification import AccessResult, Classification
from .config import CacheConfig
from ..data.stats_export import Statistics
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class SimulationSummary:
    cache_size: int
    block_size: int
    associativity: int
    num_sets: int
    policy: str
    offset_bits: int
    index_bits: int
    tag_bits: int
    accesses: int
    hits: int
    misses: int
    miss_compulsory: int
    miss_capacity: int
    miss_conflict: int
    hit_rate: float
    miss_rate: float

    def as_dict(self) -> dict:
        return asdict(self)


class CacheSimulator:
    def __init__(self, cache: Cache, stats: Optional[Statistics] = None):
        self.cache = cache
        self.stats = stats or Statistics()
        self.shadow = ShadowCache(cache.num_blocks)
        self.seen_blocks: Set[int] = set()
        self.sequence: List[int] = []
        self.index = 0
        logger.debug("Simulator ready: %d sets x %d ways, shadow holds %d blocks",
                     cache.num_sets, cache.associativity, self.shadow.capacity)

    @classmethod
    def from_config(cls, config: CacheConfig, stats: Optional[Statistics] = None) -> "CacheSimulator":
        return cls(Cache.from_config(config), stats=stats)

    def reset(self):
        # clear stats, bookkeeping and cache contents, rewind the sequence pointer
        self.stats.reset()
        self.cache.reset()
        self.shadow.reset()
        self.seen_blocks.clear()
        self.index = 0

    def access(self, address: int) -> AccessResult:
        """Simulate one reference to `address` and classify it."""
        decoded = self.cache._decode(address)
        block_id, set_index, tag = decoded.block_id, decoded.set_index, decoded.tag

        first_time = block_id not in self.seen_blocks
        self.seen_blocks.add(block_id)

        evicted = None
        if self.cache.lookup(set_index, tag):
            self.cache.touch(set_index, tag)
            # keep the shadow's recency in step with real traffic
            self.shadow.access(block_id)
            classification = Classification.HIT
        else:
            fa_hit = self.shadow.access(block_id)
            if first_time:
                classification = Classification.MISS_COMPULSORY
            elif fa_hit:
                classification = Classification.MISS_CONFLICT
            else:
                classification = Classification.MISS_CAPACITY
            evicted = self.cache.fill(set_index, tag)

        self.stats.record_access(classification)
        return AccessResult(
            address=address,
            hit=classification.is_hit,
            classification=classification,
            tag=tag,
            set_index=set_index,
            block_id=block_id,
            evicted=evicted,
        )

    def load_sequence(self, addresses: Iterable[int]):
        self.sequence = list(addresses)
        self.index = 0
        # step() walks the sequence and advances self.index

    def has_next(self) -> bool:
        return self.index < len(self.sequence)

    def step(self) -> Optional[AccessResult]:
        if not self.has_next():
            return None
        address = self.sequence[self.index]
        self.index += 1
        return self.access(address)

    def run_all(self, callback: Optional[Callable[[AccessResult], None]] = None):
        while self.has_next():
            info = self.step()
            if callback:
                callback(info)

    def run(self, addresses: Iterable[int], callback: Optional[Callable[[AccessResult], None]] = None) -> "SimulationSummary":
        """Stream `addresses` through the simulator without buffering them."""
        for address in addresses:
            info = self.access(address)
            if callback:
                callback(info)
        return self.summary()

    def summary(self) -> SimulationSummary:
        c = self.cache
        s = self.stats
        return SimulationSummary(
            cache_size=c.cache_size,
            block_size=c.block_size,
            associativity=c.associativity,
            num_sets=c.num_sets,
            policy=c.replacement,
            offset_bits=c.offset_bits,
            index_bits=c.index_bits,
            tag_bits=c.tag_bits,
            accesses=s.accesses,
            hits=s.hits,
            misses=s.misses,
            miss_compulsory=s.miss_compulsory,
            miss_capacity=s.miss_capacity,
            miss_conflict=s.miss_conflict,
            hit_rate=s.hit_rate,
            miss_rate=s.miss_rate,
        )
