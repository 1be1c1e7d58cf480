class ProcessorError(Exception):
    """Base exception for all pipeline stage failures.

    ``public_message`` is safe to show to the uploader; internal detail is only
    reachable through ``__cause__``.
    """

    stage: str = "pipeline"
    retryable: bool = False

    def __init__(self, public_message: str) -> None:
        super().__init__(public_message)
        self.public_message = public_message


class InvalidInputError(ProcessorError):
    """Raised for an unsupported media type, magic-byte mismatch, or oversize payload."""

    stage = "validation"


class ThreatDetectedError(ProcessorError):
    """Raised when the security scan returns an unclean result."""

    stage = "scan"

    def __init__(self, threats: list[str], advisory: str) -> None:
        super().__init__(f"Security scan failed: {', '.join(threats)}. {advisory}")
        self.threats = list(threats)
        self.advisory = advisory


class InternalScanError(ProcessorError):
    """Raised inside the scanner when it cannot complete; always mapped to fail-closed."""

    stage = "scan"


class ExtractionError(ProcessorError):
    """Raised when no usable text can be extracted from the document."""

    stage = "extraction"


class ScannedPdfError(ExtractionError):
    """Raised when a PDF carries no embedded text layer and OCR fallback is not available."""


class ExtractionTimeoutError(ExtractionError):
    """Raised when OCR exceeds its per-request timeout."""

    retryable = True
