"""
Moneybird Document Types
========================

Shapes of the documents returned by the Moneybird API.

These are descriptive only: payloads differ between document kinds and API
versions, so every field is optional and values are read through the
coercion helpers in ``parsers`` rather than trusted.
"""

from enum import Enum
from typing import Any, Optional, TypedDict, Union


class ContactRecord(TypedDict, total=False):
    company_name: Optional[str]
    firstname: Optional[str]
    lastname: Optional[str]


class PaymentRecord(TypedDict, total=False):
    """One partial or full settlement of an invoice."""
    payment_date: Optional[str]
    date: Optional[str]
    price: Union[str, float, None]
    amount: Union[str, float, None]
    price_base: Union[str, float, None]


class SalesInvoiceDocument(TypedDict, total=False):
    id: Optional[str]
    invoice_id: Optional[str]
    reference: Optional[str]
    invoice_date: Optional[str]
    state: Optional[str]
    total_price_excl_tax: Union[str, float, None]
    total_price_incl_tax: Union[str, float, None]
    contact: Optional[ContactRecord]
    payments: Optional[list[PaymentRecord]]
    url: Optional[str]


class PurchaseInvoiceDocument(TypedDict, total=False):
    id: Optional[str]
    reference: Optional[str]
    date: Optional[str]
    state: Optional[str]
    total_price_excl_tax: Union[str, float, None]
    total_price_incl_tax: Union[str, float, None]
    contact: Optional[ContactRecord]
    payments: Optional[list[PaymentRecord]]
    url: Optional[str]


class ReceiptDocument(TypedDict, total=False):
    id: Optional[str]
    reference: Optional[str]
    date: Optional[str]
    receipt_date: Optional[str]
    state: Optional[str]
    total_price_excl_tax: Union[str, float, None]
    total_price_incl_tax: Union[str, float, None]
    contact: Optional[ContactRecord]
    url: Optional[str]


# What actually flows through the pipeline
RawDocument = dict[str, Any]


class DocumentKind(str, Enum):
    """Document collections aggregated by the finance engine."""

    SALES_INVOICE = "sales_invoice"
    PURCHASE_INVOICE = "purchase_invoice"
    RECEIPT = "receipt"

    @property
    def label(self) -> str:
        """Display label used in detail rows."""
        return _LABELS[self]

    @property
    def ledger(self) -> str:
        """Ledger side the document is booked on."""
        return "revenue" if self is DocumentKind.SALES_INVOICE else "expenses"


_LABELS = {
    DocumentKind.SALES_INVOICE: "Verkoop",
    DocumentKind.PURCHASE_INVOICE: "Inkoop",
    DocumentKind.RECEIPT: "Bon",
}
