from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation

from intake.classification.models import SensitivityLevel
from intake.config.settings import Settings
from intake.logging.logger import Log
from intake.retention.models import RetentionDecision, RetentionDisposition

AmountLike = Decimal | int | float | str | None


@dataclass(frozen=True)
class RetentionThresholds:
    high_value: Decimal = Decimal("20000")
    mid_value: Decimal = Decimal("5000")
    temporary_horizon: timedelta = timedelta(days=365)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetentionThresholds":
        return cls(
            high_value=settings.retention_high_value_threshold,
            mid_value=settings.retention_mid_value_threshold,
            temporary_horizon=timedelta(days=settings.temporary_retention_days),
        )


def to_decimal(amount: AmountLike) -> Decimal:
    """Coerce a parsed amount to Decimal; missing or unreadable amounts count as 0."""
    if amount is None:
        return Decimal(0)
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation:
        Log.warning(f"Unreadable amount {amount!r}, treating as 0 for retention")
        return Decimal(0)
    return value if value.is_finite() else Decimal(0)


class RetentionPolicyEngine:
    """Decides file retention from amount and sensitivity only.

    Thresholds are inclusive: an amount equal to a threshold falls in the
    higher tier.
    """

    def __init__(self, thresholds: RetentionThresholds | None = None) -> None:
        self._thresholds = thresholds or RetentionThresholds()

    def decide(
        self,
        amount: AmountLike,
        sensitivity_level: SensitivityLevel,
        created_at: datetime,
    ) -> RetentionDecision:
        value = to_decimal(amount)
        if sensitivity_level is SensitivityLevel.HIGH or value >= self._thresholds.high_value:
            return RetentionDecision(RetentionDisposition.HOLD_PERMANENT)
        if value >= self._thresholds.mid_value:
            horizon = self._thresholds.temporary_horizon
            return RetentionDecision(
                RetentionDisposition.HOLD_TEMPORARY,
                horizon=horizon,
                retain_until=created_at + horizon,
            )
        return RetentionDecision(
            RetentionDisposition.DELETE_IMMEDIATELY,
            retain_until=created_at,
        )
