from intake.config.settings import Settings
from intake.extraction.models import ENGINE_OCR, ENGINE_PDF, ExtractedText
from intake.logging.logger import Log
from intake.ocr.base import BaseOcrEngine
from intake.ocr.exceptions import OcrError, OcrTimeoutError
from intake.ocr.factory import OcrEngineFactory
from intake.pdf.base import BasePdfExtractor
from intake.pdf.exceptions import PdfExtractionError
from intake.pdf.factory import PdfExtractorFactory
from intake.processor.exceptions import (
    ExtractionError,
    ExtractionTimeoutError,
    ScannedPdfError,
)

_PDF_MEDIA_TYPE = "application/pdf"
_IMAGE_MEDIA_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png"})


class TextExtractor:
    """Dispatches to embedded-text PDF extraction or OCR by declared media type."""

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        ocr_engine: BaseOcrEngine,
        min_pdf_text_length: int = 20,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._ocr_engine = ocr_engine
        self._min_pdf_text_length = min_pdf_text_length

    def extract(self, data: bytes, media_type: str) -> ExtractedText:
        """Extract text from *data*.

        Raises:
            ScannedPdfError: PDF without a usable embedded text layer.
            ExtractionTimeoutError: OCR exceeded its timeout (retryable).
            ExtractionError: any other case where no usable text is produced.
        """
        declared = media_type.strip().lower()
        if declared == _PDF_MEDIA_TYPE:
            return self._extract_pdf(data)
        if declared in _IMAGE_MEDIA_TYPES:
            return self._extract_image(data)
        raise ExtractionError(f"Cannot extract text from media type '{media_type}'")

    def _extract_pdf(self, data: bytes) -> ExtractedText:
        try:
            text = self._pdf_extractor.extract(data)
        except PdfExtractionError as exc:
            raise ExtractionError("Could not read text from PDF") from exc

        if len(text) < self._min_pdf_text_length:
            Log.warning(
                f"PDF text layer too short ({len(text)} chars), likely a scanned image"
            )
            raise ScannedPdfError(
                "No selectable text in PDF (likely a scanned image). "
                "PDF OCR fallback is not enabled."
            )
        Log.info(f"Extracted {len(text)} chars with {self._pdf_extractor.name}")
        return ExtractedText(text=text, engine=ENGINE_PDF)

    def _extract_image(self, data: bytes) -> ExtractedText:
        try:
            result = self._ocr_engine.recognize(data)
        except OcrTimeoutError as exc:
            raise ExtractionTimeoutError(
                "Text recognition timed out, please retry the upload"
            ) from exc
        except OcrError as exc:
            raise ExtractionError("Could not extract text from image") from exc

        text = result.text.strip()
        if not text:
            raise ExtractionError("Could not extract text from file")
        Log.info(
            f"Recognized {len(text)} chars with {self._ocr_engine.name} "
            f"(confidence={result.confidence})"
        )
        return ExtractedText(text=text, engine=ENGINE_OCR, confidence=result.confidence)


class TextExtractorFactory:
    """Wires the configured PDF adapter and OCR engine into a TextExtractor."""

    @classmethod
    def create(cls, settings: Settings) -> TextExtractor:
        return TextExtractor(
            pdf_extractor=PdfExtractorFactory.create(settings),
            ocr_engine=OcrEngineFactory.create(settings),
            min_pdf_text_length=settings.pdf_min_text_length,
        )
