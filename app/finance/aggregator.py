"""
Daily Aggregator
Attributes sales invoices, purchase invoices and receipts to calendar days.

Accrual basis books a document on its own date for its excl. tax total.
Cash basis books invoices on the dates of their embedded payments and
receipts on their document date (treated as paid the same day).
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from app.finance.periods import AccountingBasis, DateRange
from app.integrations.moneybird.document_types import DocumentKind, RawDocument
from app.integrations.moneybird.parsers import (
    ZERO,
    amount_excl_tax,
    document_date,
    document_payments,
    payment_amount,
    payment_date,
)

logger = logging.getLogger(__name__)


@dataclass
class DayBucket:
    """One calendar day's slice of the series."""

    day: date
    revenue: Decimal = ZERO
    costs: Decimal = ZERO
    cumulative_revenue: Decimal = ZERO
    cumulative_costs: Decimal = ZERO
    net_cash: Decimal = ZERO


@dataclass
class AggregateKpis:
    """Range totals. Profit is always derived, never stored."""

    revenue_excl: Decimal = ZERO
    costs_excl: Decimal = ZERO
    cash_net: Decimal = ZERO

    @property
    def profit_excl(self) -> Decimal:
        return self.revenue_excl - self.costs_excl


@dataclass
class DailyAggregator:
    """
    Accumulates documents into pre-allocated day buckets.

    Usage:
        aggregator = DailyAggregator(date_range, AccountingBasis.CASH)
        for doc in sales:
            aggregator.add_sales_invoice(doc)
        ...
        kpis, points = aggregator.finish()
    """

    date_range: DateRange
    basis: AccountingBasis
    kpis: AggregateKpis = field(default_factory=AggregateKpis)
    buckets: list[DayBucket] = field(init=False, default_factory=list)
    skipped: int = 0

    def __post_init__(self) -> None:
        self.buckets = [DayBucket(day=day) for day in self.date_range.iter_days()]

    def bucket_for(self, day: Optional[date]) -> Optional[DayBucket]:
        """Bucket for a day, or None when the day is unknown or out of range."""
        if day is None or not self.date_range.contains(day):
            return None
        return self.buckets[self.date_range.offset(day)]

    def _book_revenue(self, day: Optional[date], amount: Decimal, cash_flow: bool) -> None:
        bucket = self.bucket_for(day)
        if bucket is None:
            self.skipped += 1
            return
        bucket.revenue += amount
        self.kpis.revenue_excl += amount
        if cash_flow:
            bucket.net_cash += amount
            self.kpis.cash_net += amount

    def _book_cost(self, day: Optional[date], amount: Decimal, cash_flow: bool) -> None:
        bucket = self.bucket_for(day)
        if bucket is None:
            self.skipped += 1
            return
        bucket.costs += amount
        self.kpis.costs_excl += amount
        if cash_flow:
            bucket.net_cash -= amount
            self.kpis.cash_net -= amount

    def add_sales_invoice(self, document: RawDocument) -> None:
        if self.basis == AccountingBasis.ACCRUAL:
            self._book_revenue(
                document_date(document, DocumentKind.SALES_INVOICE),
                amount_excl_tax(document),
                cash_flow=False,
            )
            return

        for payment in document_payments(document):
            self._book_revenue(payment_date(payment), payment_amount(payment), cash_flow=True)

    def add_purchase_invoice(self, document: RawDocument) -> None:
        if self.basis == AccountingBasis.ACCRUAL:
            self._book_cost(
                document_date(document, DocumentKind.PURCHASE_INVOICE),
                amount_excl_tax(document),
                cash_flow=False,
            )
            return

        for payment in document_payments(document):
            self._book_cost(payment_date(payment), payment_amount(payment), cash_flow=True)

    def add_receipt(self, document: RawDocument) -> None:
        # Receipts carry no payment records; on cash basis they count as paid on their date
        self._book_cost(
            document_date(document, DocumentKind.RECEIPT),
            amount_excl_tax(document),
            cash_flow=self.basis == AccountingBasis.CASH,
        )

    def finish(self) -> tuple[AggregateKpis, list[DayBucket]]:
        """Fill the running totals and return the KPIs and day series."""
        revenue = ZERO
        costs = ZERO
        for bucket in self.buckets:
            revenue += bucket.revenue
            costs += bucket.costs
            bucket.cumulative_revenue = revenue
            bucket.cumulative_costs = costs

        if self.skipped:
            logger.debug(
                "Skipped %d documents or payments dated outside %s..%s or undated",
                self.skipped,
                self.date_range.start,
                self.date_range.end,
            )

        return self.kpis, self.buckets


def aggregate(
    sales: Iterable[RawDocument],
    purchases: Iterable[RawDocument],
    receipts: Iterable[RawDocument],
    date_range: DateRange,
    basis: AccountingBasis,
) -> tuple[AggregateKpis, list[DayBucket]]:
    """
    Build the day series and KPIs for a range under an accounting basis.

    Args:
        sales: Sales invoice documents
        purchases: Purchase invoice documents
        receipts: Receipt documents
        date_range: Inclusive range; one bucket per day
        basis: Cash or accrual

    Returns:
        (kpis, buckets) with buckets in ascending date order
    """
    aggregator = DailyAggregator(date_range=date_range, basis=basis)

    for document in sales:
        aggregator.add_sales_invoice(document)
    for document in purchases:
        aggregator.add_purchase_invoice(document)
    for document in receipts:
        aggregator.add_receipt(document)

    return aggregator.finish()
