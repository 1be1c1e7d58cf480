class OcrError(Exception):
    """Raised when the OCR engine cannot process an image."""


class OcrTimeoutError(OcrError):
    """Raised when the OCR engine exceeds its time budget."""
