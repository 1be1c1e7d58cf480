import re

from intake.parsing.amount import find_amount
from intake.parsing.dates import find_date
from intake.parsing.models import InvoiceFields
from intake.parsing.vendor import find_vendor

_INLINE_SPACE_RE = re.compile(r"[ \t]+")


def normalize_text(raw_text: str) -> str:
    return _INLINE_SPACE_RE.sub(" ", raw_text.replace("\r", "")).strip()


def split_lines(text: str) -> list[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


class FieldParser:
    """Heuristic invoice field extractor. Never raises; missing fields stay ``None``."""

    def parse(self, text: str) -> InvoiceFields:
        normalized = normalize_text(text or "")
        if not normalized:
            return InvoiceFields()

        amount = find_amount(normalized)
        found_date = find_date(normalized)
        vendor = find_vendor(split_lines(normalized))

        return InvoiceFields(
            amount=amount[0] if amount else None,
            currency=amount[1] if amount else None,
            amount_format=amount[2] if amount else None,
            date=found_date[0] if found_date else None,
            date_format=found_date[1] if found_date else None,
            vendor=vendor,
        )
