"""Text rendering of per-access results and the final summary."""
from ..core.classification import AccessResult
from ..core.simulator import SimulationSummary


def format_access(result: AccessResult) -> str:
    return (
        f"0x{result.address:08x}  set={result.set_index:2d} tag={result.tag}  "
        f"=> {result.classification.label}"
    )


def format_summary(summary: SimulationSummary) -> str:
    s = summary
    lines = [
        "",
        "=== Simulation Summary ===",
        f"Cache size: {s.cache_size} bytes   Block size: {s.block_size} bytes   "
        f"Associativity: {s.associativity}-way   Num sets: {s.num_sets}",
        f"Replacement policy: {s.policy}",
        f"Address decomposition: offset_bits={s.offset_bits} index_bits={s.index_bits} tag_bits={s.tag_bits}",
        f"Accesses: {s.accesses}  Hits: {s.hits}  Misses: {s.misses}  Hit rate: {100.0 * s.hit_rate:.2f}%",
        f"Miss breakdown: Compulsory={s.miss_compulsory}  Conflict={s.miss_conflict}  Capacity={s.miss_capacity}",
    ]
    return "\n".join(lines)
