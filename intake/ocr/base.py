from abc import ABC, abstractmethod

from intake.ocr.models import OcrResult


class BaseOcrEngine(ABC):
    """Contract for all OCR adapters."""

    name: str = "ocr"

    @abstractmethod
    def recognize(self, image_bytes: bytes) -> OcrResult:
        """Run OCR over a raster image.

        Args:
            image_bytes: Raw JPEG or PNG content.

        Returns:
            OcrResult with the recognized text and a confidence in [0, 1].

        Raises:
            OcrTimeoutError: if recognition exceeds the configured timeout.
            OcrError: on any other failure.
        """
