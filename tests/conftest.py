import io
from collections.abc import Callable
from datetime import datetime, timezone

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

PdfFactory = Callable[..., bytes]


def _build_pdf(*pages: list[str]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter, pageCompression=0)
    for page_lines in pages:
        y = 720
        for line in page_lines:
            c.drawString(72, y, line)
            y -= 18
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def make_pdf() -> PdfFactory:
    """Return a builder: ``make_pdf(["line 1", "line 2"], ["page 2"])`` -> PDF bytes."""
    return _build_pdf


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """A single-page invoice PDF with known text content."""
    return _build_pdf(["Hello PDF World", "Invoice number 42 for services"])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    return _build_pdf(["Page one content"], ["Page two content"])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """A valid PDF with a blank page, as produced by a scan without a text layer."""
    return _build_pdf([])


@pytest.fixture()
def png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (64, 32), color=(255, 255, 255)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def jpeg_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (64, 32), color=(255, 255, 255)).save(buf, format="JPEG")
    return buf.getvalue()


@pytest.fixture()
def created_at() -> datetime:
    return datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
