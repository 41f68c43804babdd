"""Tests for the collect -> aggregate -> assemble pipeline."""

from datetime import date
from decimal import Decimal

import pytest

from app.finance.periods import AccountingBasis, DateRange
from app.finance.service import FinancialAggregatesService

JAN_1_TO_3 = DateRange(date(2024, 1, 1), date(2024, 1, 3))

SALES_PATH = "adm1/sales_invoices.json"
PURCHASES_PATH = "adm1/documents/purchase_invoices.json"
RECEIPTS_PATH = "adm1/documents/receipts.json"


@pytest.fixture
def documents(moneybird):
    moneybird.add(
        SALES_PATH,
        [
            {
                "invoice_id": "2024-001",
                "invoice_date": "2024-01-02",
                "total_price_excl_tax": "1000.0",
                "total_price_incl_tax": "1210.0",
                "contact": {"company_name": "Acme"},
                "payments": [{"payment_date": "2024-01-03", "price": "1210.0"}],
            }
        ],
    )
    moneybird.add(
        PURCHASES_PATH,
        [{"reference": "INK-9", "date": "2024-01-01", "total_price_excl_tax": "200.0"}],
    )
    moneybird.add(RECEIPTS_PATH, [{"reference": "Lunch", "date": "2024-01-01", "total_price_excl_tax": "50"}])
    return moneybird


class TestFinancialAggregatesService:

    @pytest.mark.asyncio
    async def test_accrual_pipeline(self, documents):
        async with documents.client() as client:
            result = await FinancialAggregatesService(client, "adm1").build(JAN_1_TO_3, AccountingBasis.ACCRUAL)

        assert len(result.points) == 3
        assert result.kpis.revenue_excl == Decimal("1000")
        assert result.kpis.costs_excl == Decimal("250")
        assert result.kpis.profit_excl == Decimal("750")
        assert result.kpis.cash_net == 0
        assert [row.type for row in result.details] == ["Verkoop", "Inkoop", "Bon"]
        assert result.details[0].amount_incl == Decimal("1210.0")
        assert result.details[1].amount_incl == Decimal("242.00")

    @pytest.mark.asyncio
    async def test_cash_pipeline(self, documents):
        async with documents.client() as client:
            result = await FinancialAggregatesService(client, "adm1").build(JAN_1_TO_3, AccountingBasis.CASH)

        # Payment price is booked as-is; receipt counts as paid on its date
        assert result.points[2].revenue == Decimal("1210.0")
        assert result.points[0].costs == Decimal("50")
        assert result.kpis.cash_net == Decimal("1160")
        assert len(result.details) == 3

    @pytest.mark.asyncio
    async def test_failed_source_degrades_to_empty(self, moneybird):
        moneybird.add(SALES_PATH, [{"invoice_date": "2024-01-01", "total_price_excl_tax": "80"}])
        moneybird.add(PURCHASES_PATH, {"error": "boom"}, status_code=500)
        moneybird.add(RECEIPTS_PATH, [])

        async with moneybird.client() as client:
            service = FinancialAggregatesService(client, "adm1")
            collected = await service.collect(JAN_1_TO_3)
            result = await service.build(JAN_1_TO_3, AccountingBasis.ACCRUAL)

        assert collected.failed_sources == ["purchase_invoice"]
        assert result.kpis.revenue_excl == Decimal("80")
        assert result.kpis.costs_excl == 0
        assert [row.type for row in result.details] == ["Verkoop"]

    @pytest.mark.asyncio
    async def test_custom_vat_rate(self, moneybird):
        moneybird.add(SALES_PATH, [{"total_price_excl_tax": "100"}])
        moneybird.add(PURCHASES_PATH, [])
        moneybird.add(RECEIPTS_PATH, [])

        async with moneybird.client() as client:
            service = FinancialAggregatesService(client, "adm1", vat_rate=Decimal("0.09"))
            result = await service.build(JAN_1_TO_3, AccountingBasis.ACCRUAL)

        assert result.details[0].vat == Decimal("0.09")
        assert result.details[0].amount_incl == Decimal("109.00")
