"""Address decomposition into block id, set index and tag.

  block_id  = address >> offset_bits
  set_index = block_id & (num_sets - 1)     (0 when there is a single set)
  tag       = block_id >> index_bits

Bit counts come from integer bit scans, so block_size and num_sets must be
exact powers of two. Anything else is rejected instead of rounded.
"""
from typing import NamedTuple

from .errors import ConfigurationError


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def log2_exact(n: int) -> int:
    """Return k such that 2**k == n. `n` must already be a power of two."""
    return n.bit_length() - 1


class DecodedAddress(NamedTuple):
    block_id: int
    set_index: int
    tag: int
    offset: int


class AddressDecomposer:
    def __init__(self, block_size: int, num_sets: int = 1):
        if block_size <= 0:
            raise ConfigurationError("block_size must be > 0")
        if not is_power_of_two(block_size):
            raise ConfigurationError(f"block_size must be a power of two, got {block_size}")
        if not is_power_of_two(num_sets):
            raise ConfigurationError(f"number of sets must be a power of two, got {num_sets}")

        self.block_size = block_size
        self.num_sets = num_sets
        self.offset_bits = log2_exact(block_size)
        self.index_bits = log2_exact(num_sets) if num_sets > 1 else 0
        self.offset_mask = block_size - 1
        self.index_mask = num_sets - 1

    def decompose(self, address: int) -> DecodedAddress:
        block_id = address >> self.offset_bits
        set_index = block_id & self.index_mask if self.num_sets > 1 else 0
        tag = block_id >> self.index_bits
        return DecodedAddress(block_id, set_index, tag, address & self.offset_mask)

    def reconstruct(self, tag: int, set_index: int) -> int:
        """Base address of the block identified by (tag, set_index)."""
        return ((tag << self.index_bits) | set_index) << self.offset_bits

    def tag_bits(self, address_bits: int) -> int:
        bits = address_bits - self.index_bits - self.offset_bits
        if bits < 0:
            raise ConfigurationError(
                f"address_bits={address_bits} cannot hold {self.offset_bits} offset bits "
                f"and {self.index_bits} index bits"
            )
        return bits
