from dataclasses import dataclass
from datetime import datetime

from intake.classification.models import ClassifiedVendor, SensitivityLevel
from intake.processor.models import IngestionResult
from intake.retention.models import RetentionDecision


@dataclass(frozen=True)
class ExpenseRecord:
    """Persisted view of an ingestion result.

    The vendor's original name is kept only so it can be re-masked; every
    exposed field uses the masked name.
    """

    vendor: ClassifiedVendor
    amount: str | None
    currency: str | None
    date: str | None
    text_preview: str
    content_sha256: str
    retention: RetentionDecision
    created_at: datetime

    @classmethod
    def from_result(cls, result: IngestionResult) -> "ExpenseRecord":
        return cls(
            vendor=result.vendor_classification,
            amount=result.fields.amount,
            currency=result.fields.currency,
            date=result.fields.date,
            text_preview=result.text_preview,
            content_sha256=result.content_sha256,
            retention=result.retention,
            created_at=result.created_at,
        )

    @property
    def provider(self) -> str:
        return self.vendor.masked_name

    @property
    def sensitivity_level(self) -> SensitivityLevel:
        return self.vendor.level

    def exposed_fields(self) -> dict[str, object]:
        retain_until = self.retention.retain_until
        return {
            "provider": self.provider,
            "sensitivity_level": self.sensitivity_level.value,
            "amount": self.amount,
            "currency": self.currency,
            "date": self.date,
            "text_preview": self.text_preview,
            "content_sha256": self.content_sha256,
            "file_retention_policy": self.retention.file_policy,
            "retention_until": retain_until.isoformat() if retain_until else None,
            "created_at": self.created_at.isoformat(),
        }
