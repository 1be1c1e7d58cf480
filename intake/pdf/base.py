from abc import ABC, abstractmethod

_SPACE_VARIANTS = str.maketrans({"\u00a0": " ", "\u202f": " ", "\u2009": " "})


class BasePdfExtractor(ABC):
    """Contract for all embedded-text PDF adapters."""

    name: str = "pdf"

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract the embedded text layer from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Page texts joined by newlines, stripped. Empty for image-only PDFs.

        Raises:
            PdfExtractionError: if the document cannot be opened or read.
        """

    @staticmethod
    def _join_pages(pages: list[str]) -> str:
        return "\n".join(page.translate(_SPACE_VARIANTS) for page in pages).strip()
