from cache3c.core.classification import Classification
from cache3c.core.config import CacheConfig
from cache3c.simulation import Simulation


def test_simulation_reuses_simulator_and_accumulates_stats():
    config = CacheConfig(cache_size=1024, block_size=64, associativity=2)
    sim = Simulation(config)
    trace = [0, 64, 128, 0]

    sim.run_simulation(trace)
    core1 = sim.sim
    accesses1 = sim.stats.accesses

    # run again; state and stats carry over, so the warm pass only hits
    sim.run_simulation(trace)
    assert sim.sim is core1
    assert sim.stats.accesses == accesses1 + len(trace)
    assert sim.stats.hits == 1 + len(trace)


def test_multiple_passes_and_kept_results():
    config = CacheConfig(cache_size=1024, block_size=64, associativity=1)
    sim = Simulation(config, keep_results=True)
    summary = sim.run_simulation(iter([0, 1024]), num_passes=2)
    assert summary.accesses == 4
    kinds = [r.classification for r in sim.results]
    assert kinds == [Classification.MISS_COMPULSORY, Classification.MISS_COMPULSORY,
                     Classification.MISS_CONFLICT, Classification.MISS_CONFLICT]


def test_verbose_lines_go_to_printer():
    lines = []
    config = CacheConfig(cache_size=1024, block_size=64, associativity=1, verbose=True)
    Simulation(config, printer=lines.append).run_simulation([0, 1024, 0])
    assert lines == [
        '0x00000000  set= 0 tag=0  => MISS (Compulsory)',
        '0x00000400  set= 0 tag=1  => MISS (Compulsory)',
        '0x00000000  set= 0 tag=0  => MISS (Conflict)',
    ]
