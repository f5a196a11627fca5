"""Cache configuration.

Defaults match the command line defaults: a 32 KiB, 4-way cache with
64-byte blocks, LRU replacement and 32-bit addresses.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .address import is_power_of_two, log2_exact
from .errors import ConfigurationError
from ..utils.logging import get_logger

POLICIES = ("LRU", "FIFO")

logger = get_logger(__name__)


def normalize_policy(policy: str) -> str:
    name = str(policy).strip().upper()
    if name not in POLICIES:
        raise ConfigurationError(f"unsupported replacement policy '{policy}' (expected LRU or FIFO)")
    return name


@dataclass
class CacheConfig:
    cache_size: int = 32768
    block_size: int = 64
    associativity: int = 4
    policy: str = "LRU"
    address_bits: int = 32
    verbose: bool = False

    # Derived
    num_blocks: int = field(init=False)
    num_sets: int = field(init=False)

    def __post_init__(self):
        self.validate()

    def validate(self):
        for name in ("cache_size", "block_size", "associativity", "address_bits"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")

        if self.block_size <= 0:
            raise ConfigurationError("block_size must be > 0")
        if self.associativity <= 0:
            raise ConfigurationError("associativity must be >= 1")
        if self.cache_size <= 0:
            raise ConfigurationError("cache_size must be > 0")
        if self.address_bits <= 0:
            raise ConfigurationError("address_bits must be > 0")
        if self.cache_size % (self.block_size * self.associativity) != 0:
            raise ConfigurationError("cache_size must be divisible by (block_size * assoc)")
        if not is_power_of_two(self.block_size):
            raise ConfigurationError(f"block_size must be a power of two, got {self.block_size}")

        self.num_blocks = self.cache_size // self.block_size
        self.num_sets = self.cache_size // (self.block_size * self.associativity)
        if not is_power_of_two(self.num_sets):
            raise ConfigurationError(f"number of sets must be a power of two, got {self.num_sets}")

        self.policy = normalize_policy(self.policy)

        used = log2_exact(self.block_size) + (log2_exact(self.num_sets) if self.num_sets > 1 else 0)
        if used > self.address_bits:
            raise ConfigurationError(
                f"address_bits={self.address_bits} is too narrow for {used} offset+index bits"
            )

    @property
    def is_lru(self) -> bool:
        return self.policy == "LRU"

    def update_from_yaml(self, yaml_path: str):
        """Updates config fields from a YAML file."""
        with open(yaml_path, "r") as f:
            yaml_config = yaml.safe_load(f) or {}
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"config file {yaml_path} must contain a mapping")
        for key, value in yaml_config.items():
            if key in ("num_blocks", "num_sets"):
                continue
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                logger.warning("Ignoring unknown config key '%s' in %s", key, yaml_path)

    @classmethod
    def from_args(cls, args) -> CacheConfig:
        """Build a config from parsed CLI arguments, layered over an optional YAML file."""
        config = cls()

        config_file = getattr(args, "config", None)
        if config_file:
            if Path(config_file).exists():
                config.update_from_yaml(config_file)
            else:
                logger.warning("Config file %s not found, using defaults", config_file)

        arg_dict = vars(args)
        for key in ("cache_size", "block_size", "associativity", "policy", "address_bits"):
            value = arg_dict.get(key)
            if value is not None:
                setattr(config, key, value)
        if arg_dict.get("verbose"):
            config.verbose = True

        config.validate()
        return config

    def __str__(self) -> str:
        return (
            f"cache_size={self.cache_size} block_size={self.block_size} "
            f"assoc={self.associativity} sets={self.num_sets} policy={self.policy} "
            f"address_bits={self.address_bits}"
        )
