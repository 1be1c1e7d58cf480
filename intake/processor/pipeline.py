from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from intake.classification.models import ClassifiedVendor
from intake.extraction.models import ExtractedText
from intake.parsing.models import InvoiceFields
from intake.processor.models import MediaType, RawDocument
from intake.retention.models import RetentionDecision
from intake.scanning.models import ScanResult


@dataclass(slots=True)
class PipelineContext:
    """Accumulates stage outputs as one document moves through the pipeline."""

    document: RawDocument
    created_at: datetime
    media_type: MediaType | None = None
    scan: ScanResult | None = None
    extracted: ExtractedText | None = None
    fields: InvoiceFields | None = None
    vendor: ClassifiedVendor | None = None
    retention: RetentionDecision | None = None


class PipelineStep(ABC):
    stage: str = "pipeline"

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
