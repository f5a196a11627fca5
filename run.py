"""Entry point for the cache miss-classification simulator.

Usage:
    python run.py trace.txt [cache_size] [block_size] [assoc] [policy] [addr_bits] [-v]
    python run.py --scenario conflict 1024 64 2 LRU   # built-in trace, no file needed
    python run.py --selftest                          # quick headless check of the core logic
"""
import sys

from cache3c.core.cache import Cache
from cache3c.core.simulator import CacheSimulator
from cache3c.simulation.report import format_access, format_summary


def headless_test():
    # direct-mapped, 16 sets: 0 and 1024 share set 0, so the third access conflicts
    cache = Cache(cache_size=1024, block_size=64, associativity=1, replacement='LRU')
    sim = CacheSimulator(cache)
    sim.load_sequence([0, 1024, 0, 0, 64, 2048, 1024])
    sim.run_all(lambda info: print(format_access(info)))
    print(format_summary(sim.summary()))


def main():
    if '--selftest' in sys.argv:
        headless_test()
        return 0
    from cache3c.simulation.cli import main as cli_main
    return cli_main(sys.argv[1:])


if __name__ == '__main__':
    sys.exit(main())
