from dataclasses import replace

from intake.classification.classifier import SensitivityClassifier
from intake.extraction.extractor import TextExtractor
from intake.logging.logger import Log
from intake.parsing.parser import FieldParser
from intake.parsing.vendor import strip_pagination
from intake.processor.exceptions import ThreatDetectedError
from intake.processor.pipeline import PipelineContext, PipelineStep
from intake.processor.validator import validate_document
from intake.retention.policy import RetentionPolicyEngine
from intake.scanning.advisory import recommend
from intake.scanning.scanner import SecurityScanner


class ValidateDocumentStep(PipelineStep):
    stage = "validation"

    def __init__(self, max_upload_bytes: int) -> None:
        self._max_upload_bytes = max_upload_bytes

    def run(self, context: PipelineContext) -> PipelineContext:
        context.media_type = validate_document(context.document, self._max_upload_bytes)
        Log.info(
            f"Accepted {context.document.filename} as {context.media_type.value} "
            f"({len(context.document.data)} bytes)"
        )
        return context


class ScanStep(PipelineStep):
    stage = "scan"

    def __init__(self, scanner: SecurityScanner) -> None:
        self._scanner = scanner

    def run(self, context: PipelineContext) -> PipelineContext:
        document = context.document
        media_type = context.media_type.value if context.media_type else document.media_type
        result = self._scanner.scan(document.data, document.filename, media_type)
        context.scan = result
        if not result.clean:
            raise ThreatDetectedError(result.threats, recommend(result).message)
        return context


class ExtractTextStep(PipelineStep):
    stage = "extraction"

    def __init__(self, text_extractor: TextExtractor) -> None:
        self._text_extractor = text_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.scan is None or not context.scan.clean:
            raise ValueError("PipelineContext.scan must be clean before extraction")
        document = context.document
        media_type = context.media_type.value if context.media_type else document.media_type
        context.extracted = self._text_extractor.extract(document.data, media_type)
        return context


class ParseFieldsStep(PipelineStep):
    stage = "parsing"

    def __init__(self, parser: FieldParser) -> None:
        self._parser = parser

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extracted is None:
            raise ValueError("PipelineContext.extracted must be set before parsing")
        fields = self._parser.parse(context.extracted.text)
        context.fields = replace(fields, vendor=strip_pagination(fields.vendor))
        Log.info(
            f"Parsed fields from {context.document.filename}: "
            f"amount={'yes' if fields.amount else 'no'}, "
            f"date={'yes' if fields.date else 'no'}, "
            f"vendor={'yes' if fields.vendor else 'no'}"
        )
        return context


class ClassifyVendorStep(PipelineStep):
    stage = "classification"

    def __init__(self, classifier: SensitivityClassifier) -> None:
        self._classifier = classifier

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.fields is None:
            raise ValueError("PipelineContext.fields must be set before classification")
        context.vendor = self._classifier.classify(context.fields.vendor or "")
        Log.info(
            f"Vendor '{context.vendor.masked_name}' classified as {context.vendor.level.value}"
        )
        return context


class DecideRetentionStep(PipelineStep):
    stage = "retention"

    def __init__(self, engine: RetentionPolicyEngine) -> None:
        self._engine = engine

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.fields is None or context.vendor is None:
            raise ValueError("PipelineContext.fields and vendor must be set before retention")
        context.retention = self._engine.decide(
            context.fields.amount, context.vendor.level, context.created_at
        )
        Log.info(f"Retention for {context.document.filename}: {context.retention.file_policy}")
        return context
