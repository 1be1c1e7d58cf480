from pathlib import Path

from intake.processor.models import RawDocument

SUFFIX_MEDIA_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}


def guess_media_type(path: Path) -> str:
    """Declared media type for a file on disk, from its suffix (empty if unknown)."""
    return SUFFIX_MEDIA_TYPES.get(path.suffix.lower(), "")


class FileLoader:
    """Reads a file from disk into a RawDocument for the pipeline."""

    def load(self, path: Path, media_type: str | None = None) -> RawDocument:
        """Read document bytes from disk.

        Raises:
            FileNotFoundError: if *path* does not exist or is not a file.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        data = path.read_bytes()
        return RawDocument(
            data=data,
            media_type=media_type or guess_media_type(path),
            filename=path.name,
            size=len(data),
        )
