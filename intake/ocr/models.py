from dataclasses import dataclass


@dataclass(frozen=True)
class OcrResult:
    """Recognized text plus the engine's own confidence, normalized to [0, 1]."""

    text: str
    confidence: float | None = None
