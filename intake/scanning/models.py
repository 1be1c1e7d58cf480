from dataclasses import dataclass, field
from enum import Enum


class ThreatCategory(str, Enum):
    EXECUTABLE_EMBEDDED = "EXECUTABLE_EMBEDDED"
    MACRO_DETECTED = "MACRO_DETECTED"
    SUSPICIOUS_PATTERN = "SUSPICIOUS_PATTERN"
    HIGH_RISK = "HIGH_RISK"
    SIZE_ANOMALY = "SIZE_ANOMALY"
    STEGANOGRAPHY_RISK = "STEGANOGRAPHY_RISK"
    SCAN_ERROR = "SCAN_ERROR"

    def tag(self, description: str) -> str:
        """Render a threat tag in ``CATEGORY: description`` form."""
        return f"{self.value}: {description}"


@dataclass(frozen=True)
class ScanResult:
    """Outcome of one security scan.

    ``threats`` keeps every tag in the order it was raised, duplicates included.
    """

    clean: bool
    threats: list[str] = field(default_factory=list)
    duration_ms: float = 0.0

    def has_category(self, category: ThreatCategory) -> bool:
        prefix = f"{category.value}:"
        return any(tag.startswith(prefix) for tag in self.threats)
