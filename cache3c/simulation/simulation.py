"""Simulation wrapper used by the command line

Turns a configuration plus a trace source (a trace file or a built-in
scenario) into a sequence of addresses and forwards them to the
classifying simulator.
"""
from typing import Callable, Iterable, List, Optional

from cache3c.core.classification import AccessResult
from cache3c.core.config import CacheConfig
from cache3c.core.simulator import CacheSimulator, SimulationSummary
from cache3c.data.stats_export import Statistics
from cache3c.data.trace_reader import open_stdin, read_trace
from cache3c.simulation.report import format_access
from cache3c.simulation.scenarios import generate_scenario


class Simulation:
    def __init__(self, config: CacheConfig, history_interval: int = 1,
                 printer: Callable[[str], None] = print, keep_results: bool = False):
        self.config = config
        self.printer = printer
        self.sim = CacheSimulator.from_config(config, stats=Statistics(history_interval))
        self.results: List[AccessResult] = []
        self.keep_results = keep_results

    def addresses_for(self, trace: Optional[str] = None, scenario: Optional[str] = None,
                      length: int = 4096, seed: int = 0) -> Iterable[int]:
        # a trace file wins over a scenario
        if trace == "-":
            return read_trace(open_stdin(), address_bits=self.config.address_bits)
        if trace:
            return read_trace(trace, address_bits=self.config.address_bits)
        if scenario:
            return generate_scenario(scenario, self.config, length=length, seed=seed)
        raise ValueError("either a trace file or a scenario is required")

    def _on_access(self, info: AccessResult):
        if self.keep_results:
            self.results.append(info)
        if self.config.verbose:
            self.printer(format_access(info))

    def run_simulation(self, addresses: Iterable[int], num_passes: int = 1) -> SimulationSummary:
        # State (replacement order, seen blocks, shadow recency) carries over
        # between passes, so a second pass shows the warmed-up behaviour.
        if num_passes > 1:
            addresses = list(addresses)
        for _ in range(num_passes):
            self.sim.run(addresses, callback=self._on_access)
        return self.sim.summary()

    @property
    def stats(self) -> Statistics:
        return self.sim.stats
