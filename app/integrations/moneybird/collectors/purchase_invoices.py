"""
Purchase Invoices Collector
Fetches purchase invoices (all states) by document date.
"""

from app.integrations.moneybird.collectors.base import BaseCollector
from app.integrations.moneybird.document_types import DocumentKind


class PurchaseInvoicesCollector(BaseCollector):
    """Collector for purchase invoices."""

    kind = DocumentKind.PURCHASE_INVOICE
    endpoint = "documents/purchase_invoices.json"
    date_fields = ("date", "period")
    include_all_states = True
