from dataclasses import dataclass
from enum import Enum

_RANK = {"LOW": 0, "MEDIUM": 1, "HIGH": 2}


class SensitivityLevel(str, Enum):
    """Vendor sensitivity, ordered by risk: LOW < MEDIUM < HIGH."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _RANK[self.value]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SensitivityLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, SensitivityLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, SensitivityLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, SensitivityLevel):
            return NotImplemented
        return self.rank >= other.rank


@dataclass(frozen=True)
class ClassifiedVendor:
    original_name: str
    level: SensitivityLevel
    masked_name: str

    @property
    def is_masked(self) -> bool:
        return self.masked_name != self.original_name
