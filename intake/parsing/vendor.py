import re

VENDOR_MIN_LENGTH = 3
VENDOR_MAX_LENGTH = 80

# Latin or Hebrew letter
_LETTER_RE = re.compile(r"[A-Za-z\u0590-\u05FF]")
_STOPLIST_RE = re.compile(r"invoice|tax|total|amount|date", re.IGNORECASE)
_LABEL_RE = re.compile(r"\b(from|supplier|vendor|billed by|issued by)\b", re.IGNORECASE)
_PAGINATION_RE = re.compile(r"\bpage\s*\d+\s*of\s*\d+", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


def is_vendor_candidate(line: str) -> bool:
    return (
        _LETTER_RE.search(line) is not None
        and _STOPLIST_RE.search(line) is None
        and VENDOR_MIN_LENGTH <= len(line) <= VENDOR_MAX_LENGTH
    )


def find_vendor(lines: list[str]) -> str | None:
    """Pick the first company-like line, else the line after a vendor label."""
    for line in lines:
        if is_vendor_candidate(line):
            return line
    for i, line in enumerate(lines[:-1]):
        if _LABEL_RE.search(line):
            return lines[i + 1]
    return None


def strip_pagination(vendor: str | None) -> str | None:
    """Remove ``page N of M`` artifacts OCR leaves on header lines."""
    if vendor is None:
        return None
    cleaned = _WHITESPACE_RE.sub(" ", _PAGINATION_RE.sub("", vendor)).strip()
    return cleaned or None


