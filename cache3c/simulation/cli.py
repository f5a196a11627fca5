"""Command line front end.

    cache3c trace.txt [cache_size] [block_size] [assoc] [policy] [addr_bits] [-v]

Example:
    cache3c traces/conflict.txt 32768 64 4 LRU 32 -v
"""
import argparse
import sys
from pathlib import Path

import yaml

from cache3c.core.config import CacheConfig
from cache3c.core.errors import ConfigurationError
from cache3c.data.stats_export import Exporter, export_hit_rate_chart, export_summary_json
from cache3c.simulation.report import format_summary
from cache3c.simulation.scenarios import SCENARIOS
from cache3c.simulation.simulation import Simulation
from cache3c.utils.logging import get_logger, set_verbose

logger = get_logger("cache3c")


def build_parser():
    p = argparse.ArgumentParser(
        prog="cache3c",
        description="Set-associative cache simulator with compulsory/capacity/conflict miss classification",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    # positional order mirrors the classic usage line; defaults come from CacheConfig.
    # Values stay strings here and are converted in _resolve_positionals.
    p.add_argument("trace", nargs="?", default=None,
                   help="Trace file (or '-' for stdin): one address per line, hex (0x...) or decimal, "
                        "'#' starts a comment")
    p.add_argument("cache_size", nargs="?", default=None, help="Cache size in bytes (default 32768)")
    p.add_argument("block_size", nargs="?", default=None, help="Block size in bytes (default 64)")
    p.add_argument("associativity", nargs="?", default=None, help="Ways per set (default 4)")
    p.add_argument("policy", nargs="?", default=None, help="Replacement policy: LRU or FIFO (default LRU)")
    p.add_argument("address_bits", nargs="?", default=None, help="Address width in bits (default 32)")

    p.add_argument("-v", "--verbose", action="store_true", help="Print every access and its classification")
    p.add_argument("-c", "--config", type=str, default=None,
                   help="YAML file with cache parameters; positional arguments override it")
    p.add_argument("--scenario", choices=SCENARIOS, default=None,
                   help="Run a built-in synthetic trace; positionals then start at cache_size")
    p.add_argument("--length", type=int, default=4096, help="Number of accesses for stream/random scenarios")
    p.add_argument("--seed", type=int, default=0, help="Seed for the random scenario")
    p.add_argument("--passes", type=int, default=1, help="Run the trace this many times back to back")
    p.add_argument("--csv", type=str, default=None, help="Write final statistics to this CSV file")
    p.add_argument("--json", type=str, default=None, help="Write summary and hit-rate history to this JSON file")
    p.add_argument("--chart", type=str, default=None, help="Save a hit-rate chart (pdf/png/svg) to this path")
    p.add_argument("--history-interval", type=int, default=1,
                   help="Sample the hit rate every N accesses for --json/--chart")
    return p


POSITIONALS = ("trace", "cache_size", "block_size", "associativity", "policy", "address_bits")
INT_FIELDS = ("cache_size", "block_size", "associativity", "address_bits")


def _parse_int(value: str) -> int:
    # "0x8000" is hex, "0100" is plain decimal
    try:
        return int(value, 0)
    except ValueError:
        return int(value, 10)


def _resolve_positionals(parser, args):
    """Assign positional values to their fields and convert the numeric ones.

    With --scenario there is no trace file, so the first positional is the
    cache size.
    """
    given = [getattr(args, name) for name in POSITIONALS]
    given = [v for v in given if v is not None]
    names = POSITIONALS[1:] if args.scenario else POSITIONALS
    if len(given) > len(names):
        parser.error("too many positional arguments")
    for name in POSITIONALS:
        setattr(args, name, None)
    for name, value in zip(names, given):
        if name in INT_FIELDS:
            try:
                value = _parse_int(value)
            except ValueError:
                parser.error(f"invalid {name} '{value}'")
        setattr(args, name, value)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)
    _resolve_positionals(parser, args)
    set_verbose(args.verbose)

    if not args.trace and not args.scenario:
        parser.print_usage(sys.stderr)
        return 1

    try:
        config = CacheConfig.from_args(args)
    except (ConfigurationError, yaml.YAMLError) as ex:
        print(f"Fatal error: {ex}", file=sys.stderr)
        return 3

    if args.trace and args.trace != "-" and not Path(args.trace).is_file():
        print(f"Error: could not open trace file '{args.trace}'", file=sys.stderr)
        return 2

    logger.debug("Configuration: %s", config)
    # history is only kept when something will export it
    history_interval = args.history_interval if (args.json or args.chart) else 0
    simulation = Simulation(config, history_interval=history_interval)
    addresses = simulation.addresses_for(args.trace, args.scenario, length=args.length, seed=args.seed)
    summary = simulation.run_simulation(addresses, num_passes=max(1, args.passes))
    print(format_summary(summary))

    if args.csv:
        Exporter.export_stats_csv(args.csv, simulation.stats)
    if args.json:
        export_summary_json(summary.as_dict(), simulation.stats.hit_rate_history, args.json)
    if args.chart:
        export_hit_rate_chart(simulation.stats.hit_rate_history, args.chart,
                              title=f"{config.policy} {config.associativity}-way, {config.cache_size} bytes")
    return 0


if __name__ == "__main__":
    sys.exit(main())
