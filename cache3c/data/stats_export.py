"""Statistics and exporter.
"""
import csv
import json
from typing import Dict, List, Optional

from ..core.classification import Classification
from ..utils.logging import get_logger

logger = get_logger(__name__)

CSV_FIELDS = [
    'accesses', 'hits', 'misses', 'hit_rate', 'miss_rate',
    'miss_compulsory', 'miss_capacity', 'miss_conflict',
]


class Statistics:
    def __init__(self, history_interval: int = 1):
        # 0 turns the hit-rate history off
        self.history_interval = max(0, int(history_interval))
        self.reset()

    def reset(self):
        # counters start from zero
        self.accesses = 0
        self.hits = 0
        self.misses = 0
        self.miss_compulsory = 0
        self.miss_capacity = 0
        self.miss_conflict = 0
        self.hit_rate_history: List[float] = []

    def record_access(self, classification: Classification):
        # call this once for every cache access
        self.accesses += 1
        if classification is Classification.HIT:
            self.hits += 1
        else:
            self.misses += 1
            if classification is Classification.MISS_COMPULSORY:
                self.miss_compulsory += 1
            elif classification is Classification.MISS_CAPACITY:
                self.miss_capacity += 1
            else:
                self.miss_conflict += 1
        if self.history_interval and self.accesses % self.history_interval == 0:
            self.hit_rate_history.append(self.hit_rate)

    @property
    def hit_rate(self):
        return (self.hits / self.accesses) if self.accesses else 0.0

    @property
    def miss_rate(self):
        return (self.misses / self.accesses) if self.accesses else 0.0

    def consistent(self) -> bool:
        """Counters add up: hits + misses == accesses and the 3C split == misses."""
        return (
            self.hits + self.misses == self.accesses
            and self.miss_compulsory + self.miss_capacity + self.miss_conflict == self.misses
        )

    def as_dict(self) -> Dict[str, float]:
        return {
            'accesses': self.accesses,
            'hits': self.hits,
            'misses': self.misses,
            'hit_rate': self.hit_rate,
            'miss_rate': self.miss_rate,
            'miss_compulsory': self.miss_compulsory,
            'miss_capacity': self.miss_capacity,
            'miss_conflict': self.miss_conflict,
        }


def export_summary_json(summary: Dict, hit_rate_history: List[float], fpath: str) -> str:
    """Export the final summary and the hit-rate history to a JSON file. Returns the path."""
    data = {
        'summary': summary,
        'hit_rate_history': list(hit_rate_history),
    }
    with open(fpath, 'w', encoding='utf-8') as fh:
        json.dump(data, fh, indent=2)
    logger.info("Summary JSON exported to %s", fpath)
    return fpath


def export_hit_rate_chart(hit_rate_history: List[float], fpath: str, title: Optional[str] = None) -> str:
    """Render the hit-rate history with matplotlib and save it.

    The output format follows the file extension (pdf, png, svg, ...).
    """
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    data = list(hit_rate_history) or [0]
    fig, ax = plt.subplots(figsize=(6, 2))
    ax.plot(range(len(data)), data, color='#FFA500', linewidth=2)
    ax.fill_between(range(len(data)), data, color='#FFA500', alpha=0.1)
    ax.set_ylim(0, 1)
    ax.set_xlabel('Sample')
    ax.set_ylabel('Hit rate')
    if title:
        ax.set_title(title)
    ax.grid(False)
    fig.tight_layout()
    fig.savefig(fpath, dpi=150)
    plt.close(fig)
    logger.info("Hit-rate chart exported to %s", fpath)
    return fpath


class Exporter:
    @staticmethod
    def export_stats_csv(path: str, stats: Statistics):
        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(CSV_FIELDS)
            row = stats.as_dict()
            writer.writerow([row[k] for k in CSV_FIELDS])
        logger.info("Statistics CSV exported to %s", path)
        return path
