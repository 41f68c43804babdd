"""
Sales Invoices Collector
Fetches sales invoices (all states) by invoice date.
"""

from app.integrations.moneybird.collectors.base import BaseCollector
from app.integrations.moneybird.document_types import DocumentKind


class SalesInvoicesCollector(BaseCollector):
    """Collector for sales invoices."""

    kind = DocumentKind.SALES_INVOICE
    endpoint = "sales_invoices.json"
    # "period" is accepted by API versions that reject "invoice_date"
    date_fields = ("invoice_date", "period")
    include_all_states = True
