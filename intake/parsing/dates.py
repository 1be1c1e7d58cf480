"""Invoice date detection.

Candidates are collected shape by shape (ISO, slash, dotted, then the two
long forms) and each is tried against an ordered list of formats; the first
format that yields a real calendar date wins. ``03/04/2024`` therefore always
reads day-first. That ambiguity is accepted and reported through the format
label so callers can correct it.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class DateFormat:
    label: str
    strptime: str


DATE_SHAPES: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b\d{4}-\d{2}-\d{2}\b"),  # 2024-01-15
    re.compile(r"\b\d{2}/\d{2}/\d{4}\b"),  # 15/01/2024 or 01/15/2024
    re.compile(r"\b\d{2}\.\d{2}\.\d{4}\b"),  # 15.01.2024
    re.compile(r"\b\d{1,2}\s+[A-Za-z]{3,}\s+\d{4}\b"),  # 15 January 2024
    re.compile(r"\b[A-Za-z]{3,}\s+\d{1,2},\s+\d{4}\b"),  # January 15, 2024
)

DATE_FORMATS: tuple[DateFormat, ...] = (
    DateFormat("yyyy-MM-dd", "%Y-%m-%d"),
    DateFormat("dd/MM/yyyy", "%d/%m/%Y"),
    DateFormat("MM/dd/yyyy", "%m/%d/%Y"),
    DateFormat("dd.MM.yyyy", "%d.%m.%Y"),
    DateFormat("d MMMM yyyy", "%d %B %Y"),
    DateFormat("d MMM yyyy", "%d %b %Y"),
    DateFormat("MMMM d, yyyy", "%B %d, %Y"),
    DateFormat("MMM d, yyyy", "%b %d, %Y"),
)

ISO_FALLBACK_LABEL = "iso"

_WHITESPACE_RE = re.compile(r"\s+")


def find_date_candidates(text: str) -> list[str]:
    found: list[str] = []
    for shape in DATE_SHAPES:
        found.extend(shape.findall(text))
    return found


def parse_date(candidate: str) -> tuple[date, str] | None:
    """Parse one candidate, returning the date and the label of the format used."""
    value = _WHITESPACE_RE.sub(" ", candidate.strip())
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt.strptime).date(), fmt.label
        except ValueError:
            continue
    try:
        return date.fromisoformat(value), ISO_FALLBACK_LABEL
    except ValueError:
        return None


def find_date(text: str) -> tuple[str, str] | None:
    """Return ``(iso_date, format_label)`` for the first parseable candidate."""
    for candidate in find_date_candidates(text):
        parsed = parse_date(candidate)
        if parsed is not None:
            day, label = parsed
            return day.isoformat(), label
    return None
