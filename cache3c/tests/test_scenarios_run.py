import pytest
from cache3c.core.config import CacheConfig
from cache3c.simulation.scenarios import SCENARIOS, conflict_trace, generate_scenario
from cache3c.simulation.simulation import Simulation


def test_builtin_scenarios_produce_results():
    config = CacheConfig(cache_size=1024, block_size=64, associativity=2)
    for name in SCENARIOS:
        sim = Simulation(config)
        summary = sim.run_simulation(generate_scenario(name, config, length=500))
        assert summary.accesses > 0, f"Scenario {name} produced no results"
        assert sim.stats.consistent()


def test_conflict_scenario_is_all_conflicts_after_warmup():
    config = CacheConfig(cache_size=1024, block_size=64, associativity=2, policy='LRU')
    trace = conflict_trace(config, passes=8)
    # every address lands in set 0
    assert all(((a >> 6) & (config.num_sets - 1)) == 0 for a in trace)
    summary = Simulation(config).run_simulation(trace)
    assert summary.miss_compulsory == 3
    assert summary.miss_conflict == len(trace) - 3
    assert summary.hits == 0


def test_random_scenario_is_repeatable():
    config = CacheConfig()
    assert generate_scenario('random', config, seed=3) == generate_scenario('random', config, seed=3)


def test_unknown_scenario():
    with pytest.raises(ValueError):
        generate_scenario('zigzag', CacheConfig())
