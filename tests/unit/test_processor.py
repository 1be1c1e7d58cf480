import hashlib
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

pytest.importorskip("icu")

from intake.classification.classifier import SensitivityClassifier  # noqa: E402
from intake.classification.models import ClassifiedVendor, SensitivityLevel  # noqa: E402
from intake.extraction.extractor import TextExtractor  # noqa: E402
from intake.extraction.models import ENGINE_OCR, ENGINE_PDF, ExtractedText  # noqa: E402
from intake.parsing.models import AmountFormat  # noqa: E402
from intake.parsing.parser import FieldParser  # noqa: E402
from intake.processor.exceptions import (  # noqa: E402
    ExtractionTimeoutError,
    InvalidInputError,
    ThreatDetectedError,
)
from intake.processor.models import RawDocument  # noqa: E402
from intake.processor.processor import Processor, build_processor, make_preview  # noqa: E402
from intake.processor.steps import (  # noqa: E402
    ClassifyVendorStep,
    DecideRetentionStep,
    ExtractTextStep,
    ParseFieldsStep,
    ScanStep,
    ValidateDocumentStep,
)
from intake.retention.models import RetentionDisposition  # noqa: E402
from intake.retention.policy import RetentionPolicyEngine  # noqa: E402
from intake.retention.reduction import ReductionSchedule, ReductionTier  # noqa: E402
from intake.scanning.advisory import Recommendation  # noqa: E402
from intake.scanning.models import ScanResult, ThreatCategory  # noqa: E402
from intake.scanning.scanner import SecurityScanner  # noqa: E402

PDF_BYTES = b"%PDF-1.4 fake invoice"
INVOICE_TEXT = "Acme Corp Invoice\nTotal: $1,234.56\nDate: 2024-01-15"


def _document(
    data: bytes = PDF_BYTES, media_type: str = "application/pdf", filename: str = "invoice.pdf"
) -> RawDocument:
    return RawDocument(data=data, media_type=media_type, filename=filename, size=len(data))


def _make_pipeline(
    max_upload_bytes: int = 1024, text_preview_limit: int = 5000
) -> tuple[Processor, MagicMock, MagicMock, MagicMock]:
    scanner = MagicMock(spec=SecurityScanner)
    text_extractor = MagicMock(spec=TextExtractor)
    classifier = MagicMock(spec=SensitivityClassifier)

    scanner.scan.return_value = ScanResult(clean=True, threats=[], duration_ms=1.5)
    text_extractor.extract.return_value = ExtractedText(text=INVOICE_TEXT, engine=ENGINE_PDF)
    classifier.classify.side_effect = lambda name: ClassifiedVendor(
        original_name=name, level=SensitivityLevel.LOW, masked_name=name
    )

    processor = Processor(
        steps=[
            ValidateDocumentStep(max_upload_bytes=max_upload_bytes),
            ScanStep(scanner),
            ExtractTextStep(text_extractor),
            ParseFieldsStep(FieldParser()),
            ClassifyVendorStep(classifier),
            DecideRetentionStep(RetentionPolicyEngine()),
        ],
        text_preview_limit=text_preview_limit,
    )
    return processor, scanner, text_extractor, classifier


class TestProcessorHappyPath:
    def test_builds_full_result(self, created_at: datetime) -> None:
        processor, scanner, text_extractor, classifier = _make_pipeline()

        result = processor.process(_document(), created_at=created_at)

        assert result.filename == "invoice.pdf"
        assert result.media_type == "application/pdf"
        assert result.content_sha256 == hashlib.sha256(PDF_BYTES).hexdigest()
        assert result.scan.clean is True
        assert result.extraction.engine == ENGINE_PDF
        assert result.extraction.confidence is None
        assert result.fields.amount == "1234.56"
        assert result.fields.currency == "USD"
        assert result.fields.date == "2024-01-15"
        assert result.fields.vendor is None
        assert result.fields.amount_format is AmountFormat.US
        assert result.text_preview == INVOICE_TEXT
        assert result.vendor_classification.level is SensitivityLevel.LOW
        assert result.retention.disposition is RetentionDisposition.DELETE_IMMEDIATELY
        assert result.retention.retain_until == created_at
        assert result.created_at == created_at

        scanner.scan.assert_called_once_with(PDF_BYTES, "invoice.pdf", "application/pdf")
        text_extractor.extract.assert_called_once_with(PDF_BYTES, "application/pdf")
        classifier.classify.assert_called_once_with("")

    def test_dot_grouped_high_value_is_held_permanently(self, created_at: datetime) -> None:
        processor, _, text_extractor, classifier = _make_pipeline()
        text_extractor.extract.return_value = ExtractedText(
            text="Mega Supplies Ltd\nTotal: €1.234.567", engine=ENGINE_PDF
        )

        result = processor.process(_document(), created_at=created_at)

        classifier.classify.assert_called_once_with("Mega Supplies Ltd")
        assert result.fields.amount == "1234567"
        assert result.vendor_classification.level is SensitivityLevel.LOW
        assert result.retention.disposition is RetentionDisposition.HOLD_PERMANENT

    def test_high_sensitivity_vendor_is_held_permanently(self, created_at: datetime) -> None:
        processor, _, text_extractor, classifier = _make_pipeline()
        text_extractor.extract.return_value = ExtractedText(
            text="Anthropic\nTotal: $12.00", engine=ENGINE_PDF
        )
        classifier.classify.side_effect = None
        classifier.classify.return_value = ClassifiedVendor(
            "Anthropic", SensitivityLevel.HIGH, "An******c"
        )

        result = processor.process(_document(), created_at=created_at)

        classifier.classify.assert_called_once_with("Anthropic")
        assert result.vendor_classification.masked_name == "An******c"
        assert result.retention.disposition is RetentionDisposition.HOLD_PERMANENT

    def test_strips_pagination_from_vendor(self, created_at: datetime) -> None:
        processor, _, text_extractor, classifier = _make_pipeline()
        text_extractor.extract.return_value = ExtractedText(
            text="Globex Ltd Page 1 of 2\nTotal 99,00 EUR", engine=ENGINE_PDF
        )

        result = processor.process(_document(), created_at=created_at)

        assert result.fields.vendor == "Globex Ltd"
        classifier.classify.assert_called_once_with("Globex Ltd")

    def test_image_alias_is_resolved(self, created_at: datetime, jpeg_bytes: bytes) -> None:
        processor, scanner, text_extractor, _ = _make_pipeline(max_upload_bytes=1024 * 1024)
        text_extractor.extract.return_value = ExtractedText(
            text="Receipt", engine=ENGINE_OCR, confidence=0.87
        )

        result = processor.process(
            _document(jpeg_bytes, "image/jpg", "receipt.jpg"), created_at=created_at
        )

        assert result.media_type == "image/jpeg"
        assert result.extraction.confidence == 0.87
        assert scanner.scan.call_args.args[2] == "image/jpeg"

    def test_preview_is_truncated(self, created_at: datetime) -> None:
        processor, _, _, _ = _make_pipeline(text_preview_limit=10)
        result = processor.process(_document(), created_at=created_at)
        assert result.text_preview == "Acme Corp…"
        assert len(result.text_preview) == 10

    def test_created_at_defaults_to_utc_now(self) -> None:
        processor, _, _, _ = _make_pipeline()
        before = datetime.now(timezone.utc)
        result = processor.process(_document())
        assert result.created_at.tzinfo is not None
        assert result.created_at >= before

    def test_naive_created_at_is_taken_as_utc(self) -> None:
        processor, _, _, _ = _make_pipeline()
        result = processor.process(_document(), created_at=datetime(2024, 1, 15, 12, 0))

        assert result.created_at == datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        assert result.retention.retain_until == result.created_at
        now = datetime(2024, 2, 1, tzinfo=timezone.utc)
        assert ReductionSchedule().tier_for(result.created_at, now) is ReductionTier.FULL


class TestProcessorFailures:
    def test_invalid_type_stops_before_scan(self) -> None:
        processor, scanner, _, _ = _make_pipeline()
        with pytest.raises(InvalidInputError):
            processor.process(_document(b"GIF89a", "image/gif", "a.gif"))
        scanner.scan.assert_not_called()

    def test_oversize_stops_before_scan(self) -> None:
        processor, scanner, _, _ = _make_pipeline(max_upload_bytes=8)
        with pytest.raises(InvalidInputError, match="File too large"):
            processor.process(_document())
        scanner.scan.assert_not_called()

    def test_threat_stops_before_extraction(self) -> None:
        processor, scanner, text_extractor, _ = _make_pipeline()
        threats = [
            ThreatCategory.SUSPICIOUS_PATTERN.tag("a"),
            ThreatCategory.HIGH_RISK.tag("Multiple suspicious patterns detected"),
        ]
        scanner.scan.return_value = ScanResult(clean=False, threats=threats)

        with pytest.raises(ThreatDetectedError) as exc_info:
            processor.process(_document())

        assert exc_info.value.threats == threats
        assert exc_info.value.advisory == Recommendation.REJECT.message
        assert exc_info.value.stage == "scan"
        assert "Security scan failed" in exc_info.value.public_message
        text_extractor.extract.assert_not_called()

    def test_extraction_failure_propagates(self) -> None:
        processor, _, text_extractor, classifier = _make_pipeline()
        text_extractor.extract.side_effect = ExtractionTimeoutError("retry")
        with pytest.raises(ExtractionTimeoutError) as exc_info:
            processor.process(_document())
        assert exc_info.value.retryable is True
        classifier.classify.assert_not_called()

    def test_missing_stage_output(self) -> None:
        processor = Processor(steps=[])
        with pytest.raises(ValueError, match="every stage output"):
            processor.process(_document())


class TestMakePreview:
    def test_short_text_untouched(self) -> None:
        assert make_preview("abc", 3) == "abc"

    def test_long_text_gets_ellipsis(self) -> None:
        assert make_preview("abcdef", 3) == "ab…"

    def test_exact_length_untouched(self) -> None:
        assert make_preview("abcdef", 6) == "abcdef"

    def test_zero_limit_is_only_ellipsis(self) -> None:
        assert make_preview("abc", 0) == "…"


class TestBuildProcessor:
    def test_wires_every_stage_in_order(self) -> None:
        settings = MagicMock()
        settings.pdf_engine = "pdfplumber"
        settings.ocr_engine = "tesseract"
        settings.high_sensitivity_keywords = ["bank"]
        settings.medium_sensitivity_keywords = ["cloud"]
        settings.text_preview_limit = 100
        settings.temporary_retention_days = 365

        processor = build_processor(settings)

        assert [step.stage for step in processor._steps] == [
            "validation",
            "scan",
            "extraction",
            "parsing",
            "classification",
            "retention",
        ]
        assert processor._text_preview_limit == 100
