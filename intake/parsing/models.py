from dataclasses import dataclass
from enum import Enum


class AmountFormat(str, Enum):
    """Which digit-grouping convention an amount was read with."""

    US = "US"  # 1,234.56
    EU = "EU"  # 1.234,56


@dataclass(frozen=True)
class InvoiceFields:
    """Heuristically parsed invoice fields; every field is independently optional."""

    amount: str | None = None
    currency: str | None = None
    date: str | None = None
    vendor: str | None = None
    amount_format: AmountFormat | None = None
    date_format: str | None = None
