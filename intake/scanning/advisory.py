from enum import Enum

from intake.scanning.models import ScanResult, ThreatCategory

_REJECT_MIN_THREATS = 3


class Recommendation(str, Enum):
    SAFE = "File passed security scan - safe to process"
    REVIEW = "File contains potentially suspicious content - review before processing"
    CAUTION = "File contains security concerns - proceed with caution"
    REJECT = "File contains multiple security threats - DO NOT PROCESS"

    @property
    def message(self) -> str:
        return self.value


def recommend(scan_result: ScanResult) -> Recommendation:
    """Map a scan result's tags to a one-line recommendation."""
    threats = scan_result.threats
    if not threats:
        return Recommendation.SAFE
    if len(threats) >= _REJECT_MIN_THREATS or scan_result.has_category(
        ThreatCategory.HIGH_RISK
    ):
        return Recommendation.REJECT
    if len(threats) == 1 and scan_result.has_category(ThreatCategory.SUSPICIOUS_PATTERN):
        return Recommendation.REVIEW
    return Recommendation.CAUTION
