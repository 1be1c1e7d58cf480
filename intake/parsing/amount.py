"""Amount and currency detection.

Matches either ``<symbol> <number>`` (``$1,234.56``, ``₪ 450.00``) or
``<number> <code>`` (``1,234.56 USD``, ``99,00 EUR``) and normalizes the number
to a plain decimal string.
"""

import re

from intake.parsing.models import AmountFormat

CURRENCY_SYMBOLS: dict[str, str] = {
    "$": "USD",
    "€": "EUR",
    "£": "GBP",
    "₪": "ILS",
}

CURRENCY_CODES: tuple[str, ...] = ("USD", "EUR", "GBP", "ILS", "NIS", "AUD", "CAD")

CODE_ALIASES: dict[str, str] = {"NIS": "ILS"}

_NUMBER = r"(?:\d{1,3}(?:[.,]\d{3})+|\d+)(?:[.,]\d{2})?"

_AMOUNT_RE = re.compile(
    rf"(?:(?P<symbol>{'|'.join(re.escape(s) for s in CURRENCY_SYMBOLS)})\u200e?\s*"
    rf"(?P<symbol_amount>{_NUMBER})"
    rf"|(?<![\d.,])(?P<code_amount>{_NUMBER})\s*"
    rf"(?P<code>{'|'.join(CURRENCY_CODES)})\b)",
    re.IGNORECASE,
)

_EU_DECIMAL_RE = re.compile(r",\d{2}$")
_US_DECIMAL_RE = re.compile(r"\.\d{2}$")


def normalize_currency_code(code: str) -> str:
    upper = code.upper()
    return CODE_ALIASES.get(upper, upper)


def normalize_amount(raw: str) -> tuple[str, AmountFormat]:
    """Normalize a grouped number to a ``.``-separated decimal string.

    A trailing ``,dd`` group without a trailing ``.dd`` group selects the EU
    convention (dots group thousands, comma is the decimal mark); anything else
    is read as US grouping. The trailing group shape is the only signal, so
    ``1,234`` reads as one thousand two hundred thirty-four. Several dots and
    no comma (``1.234.567``) can only be EU thousands grouping.
    """
    s = raw.strip()
    if _EU_DECIMAL_RE.search(s) and not _US_DECIMAL_RE.search(s):
        integer, _, decimals = s.replace(".", "").rpartition(",")
        return f"{integer.replace(',', '')}.{decimals}", AmountFormat.EU
    if "," not in s and s.count(".") > 1:
        if _US_DECIMAL_RE.search(s):
            integer, _, decimals = s.rpartition(".")
            return f"{integer.replace('.', '')}.{decimals}", AmountFormat.EU
        return s.replace(".", ""), AmountFormat.EU
    return s.replace(",", ""), AmountFormat.US


def find_amount(text: str) -> tuple[str, str, AmountFormat] | None:
    """Return ``(amount, currency, format)`` for the first amount in *text*."""
    match = _AMOUNT_RE.search(text)
    if match is None:
        return None
    if match.group("symbol"):
        currency = CURRENCY_SYMBOLS[match.group("symbol")]
        raw = match.group("symbol_amount")
    else:
        currency = normalize_currency_code(match.group("code"))
        raw = match.group("code_amount")
    amount, fmt = normalize_amount(raw)
    return amount, currency, fmt
