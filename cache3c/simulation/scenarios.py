"""Built-in synthetic traces.

Used when no trace file is given, and handy for quick experiments:

- stream:   sequential walk over a buffer, one word at a time
- conflict: blocks spaced exactly one cache "way" apart so they all land in
            the same set, visited round-robin
- random:   uniformly random addresses (seeded, so runs are repeatable)
- matrix:   row-major traversal of an N x N matrix of words
"""
import random
from typing import List

from ..core.config import CacheConfig

SCENARIOS = ("stream", "conflict", "random", "matrix")


def stream_trace(length: int = 4096, word_size: int = 4, base: int = 0) -> List[int]:
    return [base + i * word_size for i in range(length)]


def conflict_trace(config: CacheConfig, num_blocks: int = 0, passes: int = 8) -> List[int]:
    # one more block than the set can hold, unless told otherwise
    n = num_blocks or config.associativity + 1
    stride = config.num_sets * config.block_size
    seq = []
    for _ in range(passes):
        for k in range(n):
            seq.append(k * stride)
    return seq


def random_trace(length: int = 4096, address_bits: int = 16, seed: int = 0) -> List[int]:
    rng = random.Random(seed)
    limit = (1 << address_bits) - 1
    return [rng.randint(0, limit) for _ in range(length)]


def matrix_trace(n: int = 64, word_size: int = 4, base: int = 0) -> List[int]:
    seq = []
    for i in range(n):
        for j in range(n):
            seq.append(base + (i * n + j) * word_size)
    return seq


def generate_scenario(name: str, config: CacheConfig, length: int = 4096, seed: int = 0) -> List[int]:
    if name == "stream":
        return stream_trace(length)
    elif name == "conflict":
        return conflict_trace(config)
    elif name == "random":
        return random_trace(length, address_bits=min(config.address_bits, 16), seed=seed)
    elif name == "matrix":
        return matrix_trace()
    raise ValueError(f"unknown scenario '{name}' (choose from {', '.join(SCENARIOS)})")
