"""Upload boundary checks run before the security scan."""

from intake.processor.exceptions import InvalidInputError
from intake.processor.models import MediaType, RawDocument

MAGIC_BYTES: dict[MediaType, bytes] = {
    MediaType.PDF: b"%PDF",
    MediaType.JPEG: b"\xff\xd8\xff",
    MediaType.PNG: b"\x89PNG\r\n\x1a\n",
}


def matches_magic(data: bytes, media_type: MediaType) -> bool:
    return data.startswith(MAGIC_BYTES[media_type])


def validate_document(document: RawDocument, max_bytes: int) -> MediaType:
    """Check declared type, size, and magic bytes.

    Raises:
        InvalidInputError: on any violation.
    """
    media_type = MediaType.from_declared(document.media_type)
    if media_type is None:
        raise InvalidInputError(
            "Invalid file type. Only PDF, JPEG, JPG, and PNG files are allowed."
        )
    if not document.data:
        raise InvalidInputError("No file uploaded")
    if max(document.size, len(document.data)) > max_bytes:
        raise InvalidInputError("File too large")
    if not matches_magic(document.data, media_type):
        raise InvalidInputError("Invalid file format")
    return media_type
