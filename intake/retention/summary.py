from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

from intake.classification.models import SensitivityLevel
from intake.retention.models import RetentionDisposition
from intake.retention.records import ExpenseRecord


@dataclass(frozen=True)
class RetentionSummary:
    """Dashboard counts over a set of persisted records."""

    total: int = 0
    permanent: int = 0
    temporary: int = 0
    expiring_soon: int = 0
    discarded: int = 0
    high_sensitivity: int = 0
    masked_providers: int = 0

    @classmethod
    def from_records(
        cls,
        records: Iterable[ExpenseRecord],
        now: datetime,
        expiring_within: timedelta = timedelta(days=30),
    ) -> "RetentionSummary":
        counts = dict.fromkeys(
            (
                "total",
                "permanent",
                "temporary",
                "expiring_soon",
                "discarded",
                "high_sensitivity",
                "masked_providers",
            ),
            0,
        )
        horizon = now + expiring_within
        for record in records:
            counts["total"] += 1
            disposition = record.retention.disposition
            retain_until = record.retention.retain_until
            if disposition is RetentionDisposition.HOLD_PERMANENT:
                counts["permanent"] += 1
            elif disposition is RetentionDisposition.DELETE_IMMEDIATELY:
                counts["discarded"] += 1
            elif retain_until is not None and retain_until > now:
                counts["temporary"] += 1
                if retain_until <= horizon:
                    counts["expiring_soon"] += 1
            if record.sensitivity_level is SensitivityLevel.HIGH:
                counts["high_sensitivity"] += 1
            if record.vendor.is_masked:
                counts["masked_providers"] += 1
        return cls(**counts)
