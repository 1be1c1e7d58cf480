"""Age-based narrowing of what a persisted record still exposes.

The tier is recomputed from ``created_at`` on every read, so no "already
reduced" flag has to be stored or kept in sync.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum

from intake.config.settings import Settings
from intake.retention.records import ExpenseRecord


class ReductionTier(str, Enum):
    FULL = "FULL"
    ESSENTIAL = "ESSENTIAL"
    MINIMAL = "MINIMAL"


TIER_FIELDS: dict[ReductionTier, tuple[str, ...] | None] = {
    ReductionTier.FULL: None,
    ReductionTier.ESSENTIAL: ("provider", "amount", "currency", "sensitivity_level"),
    ReductionTier.MINIMAL: ("content_sha256", "amount", "provider"),
}


@dataclass(frozen=True)
class ReducedView:
    tier: ReductionTier
    fields: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class ReductionSchedule:
    """Under ``full_days`` everything is exposed, up to ``essential_days`` the
    essential subset, after that only hash, amount and masked provider."""

    full_days: int = 30
    essential_days: int = 90

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReductionSchedule":
        return cls(
            full_days=settings.reduction_full_days,
            essential_days=settings.reduction_essential_days,
        )

    def tier_for(self, created_at: datetime, now: datetime | None = None) -> ReductionTier:
        age = (now or datetime.now(timezone.utc)) - created_at
        if age < timedelta(days=self.full_days):
            return ReductionTier.FULL
        if age <= timedelta(days=self.essential_days):
            return ReductionTier.ESSENTIAL
        return ReductionTier.MINIMAL

    def reduce(self, record: ExpenseRecord, now: datetime | None = None) -> ReducedView:
        tier = self.tier_for(record.created_at, now)
        exposed = record.exposed_fields()
        keep = TIER_FIELDS[tier]
        if keep is None:
            return ReducedView(tier=tier, fields=exposed)
        return ReducedView(tier=tier, fields={name: exposed[name] for name in keep})
