from dataclasses import dataclass

ENGINE_PDF = "pdf"
ENGINE_OCR = "ocr"


@dataclass(frozen=True)
class ExtractedText:
    """Machine-readable text of one document.

    ``confidence`` is only set for OCR output.
    """

    text: str
    engine: str
    confidence: float | None = None
