"""
Moneybird Field Parsers
Defensive coercion of loosely typed Moneybird document fields.

Shared by the collectors, the aggregator and the detail-row assembler so that
every consumer applies the same fallbacks: amounts that cannot be read count
as zero, dates that cannot be read are ``None``.
"""

import logging
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional

from app.integrations.moneybird.document_types import DocumentKind, RawDocument

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Field names seen across document kinds and API versions, in lookup order
DATE_FIELDS = {
    DocumentKind.SALES_INVOICE: ("invoice_date", "date"),
    DocumentKind.PURCHASE_INVOICE: ("date", "invoice_date", "receipt_date"),
    DocumentKind.RECEIPT: ("date", "receipt_date", "invoice_date"),
}
AMOUNT_EXCL_FIELDS = (
    "total_price_excl_tax",
    "total_price_excl_tax_base",
    "amount_excl",
    "amount",
)
AMOUNT_INCL_FIELDS = (
    "total_price_incl_tax",
    "total_price_incl_tax_base",
    "amount_incl",
)
PAYMENT_DATE_FIELDS = ("payment_date", "date")
PAYMENT_AMOUNT_FIELDS = ("price", "amount", "price_base")

_CURRENCY_MARKERS = ("€", "$", "£", "EUR", "USD", "GBP")
_EUROPEAN_THOUSANDS = re.compile(r"^-?\d{1,3}(\.\d{3})+,\d+$")
_US_THOUSANDS = re.compile(r"^-?\d{1,3}(,\d{3})+\.\d+$")


def parse_amount(value: Any) -> Decimal:
    """
    Parse a monetary value from a Moneybird payload.

    Handles:
    - ints, floats and Decimals
    - strings with "." or "," as decimal separator: "12.50", "12,50"
    - thousands separators: "1.234,56", "1,234.56"
    - currency markers and surrounding whitespace: "€ 12,50"
    - parentheses for negatives: "(12.50)" -> -12.50

    Returns:
        Decimal value, or 0 for None, empty and unparsable input
    """
    if value is None or isinstance(value, bool):
        return ZERO

    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, (int, float)):
            result = Decimal(str(value))
        elif isinstance(value, str):
            result = _parse_amount_string(value)
        else:
            raise TypeError(f"unsupported amount type {type(value).__name__}")
    except (InvalidOperation, ValueError, TypeError) as e:
        logger.warning("Failed to parse amount %r: %s. Using 0", value, e)
        return ZERO

    if not result.is_finite():
        logger.warning("Non-finite amount %r. Using 0", value)
        return ZERO

    return result


def _parse_amount_string(raw: str) -> Decimal:
    value_str = raw.strip()
    for marker in _CURRENCY_MARKERS:
        value_str = value_str.replace(marker, "")
    value_str = value_str.replace("\u00a0", "").replace(" ", "")

    if not value_str or value_str in ("-", "—", "–"):
        return ZERO

    if value_str.startswith("(") and value_str.endswith(")"):
        value_str = "-" + value_str[1:-1]

    if _EUROPEAN_THOUSANDS.match(value_str):
        value_str = value_str.replace(".", "").replace(",", ".")
    elif _US_THOUSANDS.match(value_str):
        value_str = value_str.replace(",", "")
    elif "," in value_str and "." not in value_str:
        value_str = value_str.replace(",", ".")

    return Decimal(value_str)


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a calendar day from a Moneybird payload.

    Accepts date objects, datetimes and ISO strings ("2024-01-02" or
    "2024-01-02T10:00:00+01:00"). Only the calendar day as written is used;
    no timezone conversion is applied.

    Returns:
        date, or None if missing or unparsable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    value_str = value.strip()
    if len(value_str) < 10:
        return None

    try:
        return date.fromisoformat(value_str[:10])
    except ValueError:
        logger.debug("Unparsable date %r", value)
        return None


def first_present(document: RawDocument, field_names: Iterable[str]) -> Any:
    """Return the first field value that is neither missing nor empty."""
    for name in field_names:
        value = document.get(name)
        if value is not None and value != "":
            return value
    return None


def document_date(document: RawDocument, kind: DocumentKind) -> Optional[date]:
    """Relevant date of a document: the first candidate field that parses."""
    for name in DATE_FIELDS[kind]:
        parsed = parse_date(document.get(name))
        if parsed is not None:
            return parsed
    return None


def amount_excl_tax(document: RawDocument) -> Decimal:
    return parse_amount(first_present(document, AMOUNT_EXCL_FIELDS))


def amount_incl_tax(document: RawDocument) -> Optional[Decimal]:
    """Incl. tax total, or None when the document does not carry one."""
    raw = first_present(document, AMOUNT_INCL_FIELDS)
    if raw is None:
        return None
    return parse_amount(raw)


def document_payments(document: RawDocument) -> list[RawDocument]:
    """Embedded payment records; anything that is not a list of dicts is ignored."""
    payments = document.get("payments")
    if not isinstance(payments, list):
        return []
    return [payment for payment in payments if isinstance(payment, dict)]


def payment_date(payment: RawDocument) -> Optional[date]:
    return parse_date(first_present(payment, PAYMENT_DATE_FIELDS))


def payment_amount(payment: RawDocument) -> Decimal:
    return parse_amount(first_present(payment, PAYMENT_AMOUNT_FIELDS))
