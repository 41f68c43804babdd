"""
Moneybird Document Collectors
One collector per document collection aggregated by the finance engine.

- SalesInvoicesCollector: sales invoices by invoice date
- PurchaseInvoicesCollector: purchase invoices by document date
- ReceiptsCollector: receipts by document date
"""

from app.integrations.moneybird.collectors.base import (
    BaseCollector,
    CollectorError,
    CollectorResult,
)
from app.integrations.moneybird.collectors.purchase_invoices import PurchaseInvoicesCollector
from app.integrations.moneybird.collectors.receipts import ReceiptsCollector
from app.integrations.moneybird.collectors.sales_invoices import SalesInvoicesCollector

__all__ = [
    "BaseCollector",
    "CollectorError",
    "CollectorResult",
    "PurchaseInvoicesCollector",
    "ReceiptsCollector",
    "SalesInvoicesCollector",
]
