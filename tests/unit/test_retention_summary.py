from datetime import datetime, timedelta

from intake.classification.models import ClassifiedVendor, SensitivityLevel
from intake.retention.models import RetentionDecision, RetentionDisposition
from intake.retention.records import ExpenseRecord
from intake.retention.summary import RetentionSummary


def _record(
    vendor: ClassifiedVendor, retention: RetentionDecision, created_at: datetime
) -> ExpenseRecord:
    return ExpenseRecord(
        vendor=vendor,
        amount=None,
        currency=None,
        date=None,
        text_preview="",
        content_sha256="0" * 64,
        retention=retention,
        created_at=created_at,
    )


class TestRetentionSummary:
    def test_counts(self, created_at: datetime) -> None:
        now = created_at + timedelta(days=340)
        high = ClassifiedVendor("Anthropic", SensitivityLevel.HIGH, "An******c")
        cloud = ClassifiedVendor("Amazon", SensitivityLevel.MEDIUM, "Cloud-Provider-A")
        low = ClassifiedVendor("Slack", SensitivityLevel.LOW, "Slack")
        year = timedelta(days=365)
        records = [
            _record(high, RetentionDecision(RetentionDisposition.HOLD_PERMANENT), created_at),
            # expires 25 days after now
            _record(
                cloud,
                RetentionDecision(RetentionDisposition.HOLD_TEMPORARY, year, created_at + year),
                created_at,
            ),
            # expires well after the window
            _record(
                low,
                RetentionDecision(RetentionDisposition.HOLD_TEMPORARY, year, now + year),
                now,
            ),
            # already expired
            _record(
                low,
                RetentionDecision(
                    RetentionDisposition.HOLD_TEMPORARY, year, created_at - timedelta(days=60)
                ),
                created_at - timedelta(days=425),
            ),
            _record(
                low, RetentionDecision(RetentionDisposition.DELETE_IMMEDIATELY, None, now), now
            ),
        ]

        summary = RetentionSummary.from_records(records, now=now)

        assert summary == RetentionSummary(
            total=5,
            permanent=1,
            temporary=2,
            expiring_soon=1,
            discarded=1,
            high_sensitivity=1,
            masked_providers=2,
        )

    def test_empty(self, created_at: datetime) -> None:
        assert RetentionSummary.from_records([], now=created_at) == RetentionSummary()
