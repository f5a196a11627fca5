"""Core cache implementation

This file provides the set-associative cache model and the fully-associative
shadow cache used to classify misses.
Behavior:
- Cache is composed of `num_sets` replacement sets, each holding up to
  `associativity` tags.
  block_id = address >> offset_bits
  set_index = block_id & (num_sets - 1)
  tag = block_id >> index_bits
- Access returns (hit:bool, set_index:int, tag:int, evicted:Optional[int])
- ShadowCache holds block ids (not tags) under pure LRU with the same total
  number of blocks as the real cache.
"""

from typing import List, Optional, Tuple

from .address import AddressDecomposer, DecodedAddress
from .config import CacheConfig
from .replacement_policies import LRUReplacement, ReplacementSet, make_replacement_set


class Cache:
    """Set-associative cache holding tags only (no data, no dirty bits)."""

    def __init__(
        self,
        cache_size: int = 32768,
        block_size: int = 64,
        associativity: int = 4,
        replacement: str = "LRU",
        address_bits: int = 32,
    ):
        config = CacheConfig(
            cache_size=cache_size,
            block_size=block_size,
            associativity=associativity,
            policy=replacement,
            address_bits=address_bits,
        )
        self._setup(config)

    @classmethod
    def from_config(cls, config: CacheConfig) -> "Cache":
        cache = cls.__new__(cls)
        config.validate()
        cache._setup(config)
        return cache

    def _setup(self, config: CacheConfig):
        self.config = config
        self.cache_size = config.cache_size
        self.block_size = config.block_size
        self.associativity = config.associativity
        self.num_blocks = config.num_blocks
        self.num_sets = config.num_sets
        self.replacement = config.policy
        self.decomposer = AddressDecomposer(config.block_size, config.num_sets)
        self.offset_bits = self.decomposer.offset_bits
        self.index_bits = self.decomposer.index_bits
        self.tag_bits = self.decomposer.tag_bits(config.address_bits)
        self.sets: List[ReplacementSet] = [
            make_replacement_set(config.policy, config.associativity) for _ in range(self.num_sets)
        ]

    def _decode(self, address: int) -> DecodedAddress:
        return self.decomposer.decompose(address)

    def lookup(self, set_index: int, tag: int) -> bool:
        return self.sets[set_index].contains(tag)

    def touch(self, set_index: int, tag: int) -> None:
        self.sets[set_index].touch(tag)

    def fill(self, set_index: int, tag: int) -> Optional[int]:
        """Place `tag` in its set after a miss. Returns the evicted tag, if any."""
        return self.sets[set_index].insert(tag)

    def access(self, address: int) -> Tuple[bool, int, int, Optional[int]]:
        """Perform a plain cache access (no miss classification).

        Returns (hit, set_index, tag, evicted_tag).
        """
        decoded = self._decode(address)
        set_index, tag = decoded.set_index, decoded.tag
        if self.lookup(set_index, tag):
            self.touch(set_index, tag)
            return True, set_index, tag, None
        evicted = self.fill(set_index, tag)
        return False, set_index, tag, evicted

    def block_address(self, set_index: int, tag: int) -> int:
        return self.decomposer.reconstruct(tag, set_index)

    def resident_blocks(self) -> List[int]:
        """Base addresses of every resident block, set by set."""
        blocks = []
        for set_index, s in enumerate(self.sets):
            for tag in s.peek():
                blocks.append(self.block_address(set_index, tag))
        return blocks

    def occupancy(self) -> int:
        return sum(len(s) for s in self.sets)

    def reset(self):
        """Clear cache contents."""
        for s in self.sets:
            s.reset()


class ShadowCache:
    """Fully-associative LRU cache of block ids, used as a miss-classification oracle.

    `access` always mutates state: a hit moves the block to MRU, a miss
    inserts it (evicting the LRU block when full).
    """

    def __init__(self, num_blocks: int):
        self._lru = LRUReplacement(num_blocks)

    @property
    def capacity(self) -> int:
        return self._lru.capacity

    def __len__(self) -> int:
        return len(self._lru)

    def __contains__(self, block_id: int) -> bool:
        return block_id in self._lru

    def access(self, block_id: int) -> bool:
        return self._lru.access(block_id)

    def peek(self) -> List[int]:
        return self._lru.peek()

    def reset(self):
        self._lru.reset()
