import hashlib
from datetime import datetime, timezone

from intake.classification.classifier import SensitivityClassifier
from intake.config.settings import Settings
from intake.extraction.extractor import TextExtractorFactory
from intake.logging.logger import Log
from intake.parsing.parser import FieldParser
from intake.processor.exceptions import ProcessorError
from intake.processor.models import ExtractionSummary, IngestionResult, RawDocument
from intake.processor.pipeline import PipelineContext, PipelineStep
from intake.processor.steps import (
    ClassifyVendorStep,
    DecideRetentionStep,
    ExtractTextStep,
    ParseFieldsStep,
    ScanStep,
    ValidateDocumentStep,
)
from intake.retention.policy import RetentionPolicyEngine, RetentionThresholds
from intake.scanning.scanner import ScanLimits, SecurityScanner

PREVIEW_ELLIPSIS = "…"


def make_preview(text: str, limit: int) -> str:
    """Cut *text* to at most *limit* characters, the ellipsis included."""
    if len(text) <= limit:
        return text
    return f"{text[: max(limit - 1, 0)]}{PREVIEW_ELLIPSIS}"


class Processor:
    """Runs one uploaded document through the intake pipeline.

    Pipeline: validate -> scan -> extract -> parse -> classify -> retention.
    Validation, scan, and extraction fail fast with a ``ProcessorError``;
    parsing and classification degrade to empty fields and LOW.
    """

    def __init__(self, steps: list[PipelineStep], text_preview_limit: int = 5000) -> None:
        self._steps = steps
        self._text_preview_limit = text_preview_limit

    def process(
        self,
        document: RawDocument,
        created_at: datetime | None = None,
    ) -> IngestionResult:
        if created_at is None:
            created_at = datetime.now(timezone.utc)
        elif created_at.tzinfo is None:
            # naive timestamps are taken as UTC
            created_at = created_at.replace(tzinfo=timezone.utc)
        context = PipelineContext(document=document, created_at=created_at)
        Log.info(f"Processing {document.filename} ({document.media_type})")

        for step in self._steps:
            try:
                context = step.run(context)
            except ProcessorError as exc:
                Log.error(
                    f"Stage '{exc.stage}' rejected {document.filename}: {exc.public_message}"
                )
                raise

        result = self._build_result(context)
        Log.info(f"Finished processing {document.filename}")
        return result

    def _build_result(self, context: PipelineContext) -> IngestionResult:
        if (
            context.scan is None
            or context.extracted is None
            or context.fields is None
            or context.vendor is None
            or context.retention is None
        ):
            raise ValueError("Pipeline finished without producing every stage output")
        document = context.document
        return IngestionResult(
            filename=document.filename,
            media_type=context.media_type.value if context.media_type else document.media_type,
            content_sha256=hashlib.sha256(document.data).hexdigest(),
            scan=context.scan,
            extraction=ExtractionSummary(
                engine=context.extracted.engine,
                confidence=context.extracted.confidence,
            ),
            fields=context.fields,
            text_preview=make_preview(context.extracted.text, self._text_preview_limit),
            vendor_classification=context.vendor,
            retention=context.retention,
            created_at=context.created_at,
        )


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with all stages wired from one Settings value."""
    steps: list[PipelineStep] = [
        ValidateDocumentStep(max_upload_bytes=settings.max_upload_bytes),
        ScanStep(SecurityScanner(ScanLimits.from_settings(settings))),
        ExtractTextStep(TextExtractorFactory.create(settings)),
        ParseFieldsStep(FieldParser()),
        ClassifyVendorStep(SensitivityClassifier.from_settings(settings)),
        DecideRetentionStep(
            RetentionPolicyEngine(RetentionThresholds.from_settings(settings))
        ),
    ]
    return Processor(steps=steps, text_preview_limit=settings.text_preview_limit)
