"""Per-access outcome types shared by the simulator and the reporting layer."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Classification(Enum):
    HIT = "HIT"
    MISS_COMPULSORY = "MISS-Compulsory"
    MISS_CAPACITY = "MISS-Capacity"
    MISS_CONFLICT = "MISS-Conflict"

    @property
    def is_hit(self) -> bool:
        return self is Classification.HIT

    @property
    def label(self) -> str:
        """Text used in the verbose trace, e.g. 'MISS (Conflict)'."""
        if self is Classification.HIT:
            return "HIT"
        return f"MISS ({self.value.split('-', 1)[1]})"


@dataclass(frozen=True)
class AccessResult:
    address: int
    hit: bool
    classification: Classification
    tag: int
    set_index: int
    block_id: int
    # tag pushed out of the real set by this access, if any
    evicted: Optional[int] = None
