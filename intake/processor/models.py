from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from intake.classification.models import ClassifiedVendor
from intake.parsing.models import InvoiceFields
from intake.retention.models import RetentionDecision
from intake.scanning.models import ScanResult


class MediaType(str, Enum):
    PDF = "application/pdf"
    JPEG = "image/jpeg"
    PNG = "image/png"

    @classmethod
    def from_declared(cls, declared: str) -> "MediaType | None":
        """Resolve a declared content type, accepting the ``image/jpg`` alias."""
        value = declared.strip().lower()
        if value == "image/jpg":
            return cls.JPEG
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def is_image(self) -> bool:
        return self is not MediaType.PDF


@dataclass(frozen=True)
class RawDocument:
    """An uploaded file as received at the upload boundary (never persisted)."""

    data: bytes
    media_type: str
    filename: str
    size: int


@dataclass(frozen=True)
class ExtractionSummary:
    engine: str
    confidence: float | None = None


@dataclass(frozen=True)
class IngestionResult:
    """Aggregate output handed to the caller for persistence."""

    filename: str
    media_type: str
    content_sha256: str
    scan: ScanResult
    extraction: ExtractionSummary
    fields: InvoiceFields
    text_preview: str
    vendor_classification: ClassifiedVendor
    retention: RetentionDecision
    created_at: datetime
