"""
Financial Aggregates Service
Collects Moneybird documents concurrently and turns them into the
daily series, KPIs and detail rows returned to the dashboard.
"""

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from app.finance.aggregator import aggregate
from app.finance.assembler import AggregateResult, assemble_result, build_detail_rows
from app.finance.periods import AccountingBasis, DateRange
from app.integrations.moneybird.client import MoneybirdClient
from app.integrations.moneybird.collectors import (
    CollectorResult,
    PurchaseInvoicesCollector,
    ReceiptsCollector,
    SalesInvoicesCollector,
)

logger = logging.getLogger(__name__)


@dataclass
class CollectedDocuments:
    sales: CollectorResult
    purchases: CollectorResult
    receipts: CollectorResult

    @property
    def failed_sources(self) -> list[str]:
        return [
            result.kind.value
            for result in (self.sales, self.purchases, self.receipts)
            if result.failed
        ]


class FinancialAggregatesService:
    """
    Runs the collect -> aggregate -> assemble pipeline for one administration.

    The three collectors share nothing and run concurrently; aggregation
    happens once, after all of them have returned.
    """

    def __init__(
        self,
        client: MoneybirdClient,
        administration_id: str,
        vat_rate: Optional[Decimal] = None,
    ):
        self.administration_id = administration_id
        self.vat_rate = vat_rate
        self.sales_collector = SalesInvoicesCollector(client, administration_id)
        self.purchases_collector = PurchaseInvoicesCollector(client, administration_id)
        self.receipts_collector = ReceiptsCollector(client, administration_id)

    async def collect(self, date_range: DateRange) -> CollectedDocuments:
        sales, purchases, receipts = await asyncio.gather(
            self.sales_collector.collect(date_range),
            self.purchases_collector.collect(date_range),
            self.receipts_collector.collect(date_range),
        )
        collected = CollectedDocuments(sales=sales, purchases=purchases, receipts=receipts)

        if collected.failed_sources:
            logger.warning(
                "Administration %s: aggregating without %s",
                self.administration_id,
                ", ".join(collected.failed_sources),
            )

        return collected

    async def build(self, date_range: DateRange, basis: AccountingBasis) -> AggregateResult:
        """
        Produce the aggregate result for a range and basis.

        Args:
            date_range: Inclusive reporting range
            basis: Cash or accrual

        Returns:
            AggregateResult with one point per day and at most 50 detail rows
        """
        collected = await self.collect(date_range)

        kpis, points = aggregate(
            sales=collected.sales.documents,
            purchases=collected.purchases.documents,
            receipts=collected.receipts.documents,
            date_range=date_range,
            basis=basis,
        )
        details = build_detail_rows(
            collected.sales.documents,
            collected.purchases.documents,
            collected.receipts.documents,
            vat_rate=self.vat_rate,
        )

        logger.info(
            "Aggregated %s..%s (%s) for administration %s: %d sales, %d purchases, %d receipts",
            date_range.start,
            date_range.end,
            basis.value,
            self.administration_id,
            len(collected.sales.documents),
            len(collected.purchases.documents),
            len(collected.receipts.documents),
        )

        return assemble_result(kpis, points, details)
