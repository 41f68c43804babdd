"""Tests for the daily aggregator (bucketing, bases, running totals, KPIs)."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from app.finance.aggregator import aggregate
from app.finance.periods import AccountingBasis, DateRange

JAN_1_TO_3 = DateRange(date(2024, 1, 1), date(2024, 1, 3))


def sales_invoice(invoice_date, total, payments=None):
    return {
        "invoice_date": invoice_date,
        "total_price_excl_tax": total,
        "payments": payments or [],
    }


def purchase_invoice(doc_date, total, payments=None):
    return {
        "date": doc_date,
        "total_price_excl_tax": total,
        "payments": payments or [],
    }


def receipt(doc_date, total):
    return {"date": doc_date, "total_price_excl_tax": total}


def payment(payment_date, price):
    return {"payment_date": payment_date, "price": price}


class TestBuckets:

    def test_one_bucket_per_day_in_order(self):
        date_range = DateRange(date(2024, 1, 30), date(2024, 3, 2))
        _, points = aggregate([], [], [], date_range, AccountingBasis.ACCRUAL)

        assert len(points) == 33
        assert points[0].day == date_range.start
        assert points[-1].day == date_range.end
        for previous, current in zip(points, points[1:]):
            assert current.day - previous.day == timedelta(days=1)

    def test_zero_filled_without_documents(self):
        kpis, points = aggregate([], [], [], JAN_1_TO_3, AccountingBasis.CASH)

        assert all(
            p.revenue == p.costs == p.net_cash == p.cumulative_revenue == p.cumulative_costs == 0
            for p in points
        )
        assert kpis.revenue_excl == kpis.costs_excl == kpis.cash_net == kpis.profit_excl == 0

    def test_single_day_range(self):
        date_range = DateRange(date(2024, 6, 1), date(2024, 6, 1))
        kpis, points = aggregate(
            [sales_invoice("2024-06-01", "10")], [], [], date_range, AccountingBasis.ACCRUAL
        )
        assert len(points) == 1
        assert points[0].revenue == Decimal("10")


class TestAccrualBasis:

    def test_single_sales_invoice_scenario(self):
        kpis, points = aggregate(
            [sales_invoice("2024-01-02", 1000)], [], [], JAN_1_TO_3, AccountingBasis.ACCRUAL
        )

        assert len(points) == 3
        assert points[1].revenue == 1000
        assert points[1].cumulative_revenue == 1000
        assert points[2].cumulative_revenue == 1000
        assert points[0].cumulative_revenue == 0
        assert kpis.revenue_excl == 1000
        assert kpis.costs_excl == 0
        assert kpis.profit_excl == 1000
        assert kpis.cash_net == 0

    def test_payments_are_not_consulted(self):
        invoice = sales_invoice(
            "2023-12-15",
            "500",
            payments=[payment("2024-01-02", "500")],
        )
        kpis, points = aggregate([invoice], [], [], JAN_1_TO_3, AccountingBasis.ACCRUAL)

        assert kpis.revenue_excl == 0
        assert all(p.revenue == 0 for p in points)

    def test_purchase_and_receipt_are_costs_without_cash_movement(self):
        kpis, points = aggregate(
            [],
            [purchase_invoice("2024-01-01", "200")],
            [receipt("2024-01-03", "50")],
            JAN_1_TO_3,
            AccountingBasis.ACCRUAL,
        )

        assert points[0].costs == Decimal("200")
        assert points[2].costs == Decimal("50")
        assert points[2].cumulative_costs == Decimal("250")
        assert kpis.costs_excl == Decimal("250")
        assert kpis.cash_net == 0
        assert all(p.net_cash == 0 for p in points)
        assert kpis.profit_excl == Decimal("-250")


class TestCashBasis:

    def test_invoice_without_payments_contributes_nothing(self):
        kpis, points = aggregate(
            [sales_invoice("2024-01-02", 1000)], [], [], JAN_1_TO_3, AccountingBasis.CASH
        )

        assert all(p.revenue == 0 and p.cumulative_revenue == 0 for p in points)
        assert kpis.revenue_excl == 0
        assert kpis.costs_excl == 0
        assert kpis.profit_excl == 0
        assert kpis.cash_net == 0

    def test_receipt_counts_as_paid_on_its_date(self):
        kpis, points = aggregate(
            [], [], [receipt("2024-01-01", 50)], JAN_1_TO_3, AccountingBasis.CASH
        )

        assert points[0].costs == 50
        assert points[0].net_cash == -50
        assert kpis.cash_net == -50
        assert kpis.costs_excl == 50

    def test_partial_payments_land_on_payment_days(self):
        invoice = sales_invoice(
            "2023-12-20",
            "1000",
            payments=[
                payment("2024-01-01", "300"),
                payment("2024-01-03", "250,50"),
                payment("2024-01-04", "449.50"),
            ],
        )
        kpis, points = aggregate([invoice], [], [], JAN_1_TO_3, AccountingBasis.CASH)

        assert [p.revenue for p in points] == [Decimal("300"), Decimal("0"), Decimal("250.50")]
        assert [p.net_cash for p in points] == [Decimal("300"), Decimal("0"), Decimal("250.50")]
        assert points[2].cumulative_revenue == Decimal("550.50")
        assert kpis.revenue_excl == Decimal("550.50")
        assert kpis.cash_net == Decimal("550.50")

    def test_purchase_payments_decrease_cash(self):
        bill = purchase_invoice("2023-11-01", "400", payments=[payment("2024-01-02", "400")])
        kpis, points = aggregate([], [bill], [], JAN_1_TO_3, AccountingBasis.CASH)

        assert points[1].costs == Decimal("400")
        assert points[1].net_cash == Decimal("-400")
        assert kpis.costs_excl == Decimal("400")
        assert kpis.cash_net == Decimal("-400")

    def test_net_cash_is_not_accumulated(self):
        invoice = sales_invoice(
            "2024-01-01",
            "100",
            payments=[payment("2024-01-01", "60"), payment("2024-01-02", "40")],
        )
        _, points = aggregate([invoice], [], [], JAN_1_TO_3, AccountingBasis.CASH)

        assert [p.net_cash for p in points] == [Decimal("60"), Decimal("40"), Decimal("0")]


class TestRobustness:

    @pytest.mark.parametrize("basis", list(AccountingBasis))
    def test_out_of_range_documents_never_count(self, basis):
        kpis, points = aggregate(
            [sales_invoice("2023-12-31", "100", payments=[payment("2023-12-31", "100")])],
            [purchase_invoice("2024-01-04", "100", payments=[payment("2024-01-04", "100")])],
            [receipt("2024-02-01", "100")],
            JAN_1_TO_3,
            basis,
        )

        assert kpis.revenue_excl == kpis.costs_excl == kpis.cash_net == 0
        assert all(p.revenue == p.costs == p.net_cash == 0 for p in points)

    @pytest.mark.parametrize("basis", list(AccountingBasis))
    def test_garbage_fields_do_not_raise(self, basis):
        documents = [
            {"invoice_date": "2024-01-02", "total_price_excl_tax": "not money"},
            {"invoice_date": None, "total_price_excl_tax": "10"},
            {"payments": [{"payment_date": "2024-01-02", "price": None}, "junk"]},
            {},
        ]
        kpis, points = aggregate(documents, documents, documents, JAN_1_TO_3, basis)

        assert kpis.revenue_excl == 0
        assert kpis.costs_excl == 0
        assert len(points) == 3

    @pytest.mark.parametrize("basis", list(AccountingBasis))
    def test_totals_and_running_sums_are_consistent(self, basis):
        date_range = DateRange(date(2024, 3, 1), date(2024, 3, 10))
        sales = [
            sales_invoice(f"2024-03-0{d}", f"{d * 11},25", payments=[payment(f"2024-03-0{d}", d * 7)])
            for d in range(1, 10)
        ]
        purchases = [
            purchase_invoice(f"2024-03-0{d}", d * 3, payments=[payment(f"2024-03-0{d + 1}", "2.5")])
            for d in range(1, 9, 2)
        ]
        receipts = [receipt("2024-03-05", "19.99"), receipt("2024-03-10", "0.01")]

        kpis, points = aggregate(sales, purchases, receipts, date_range, basis)

        running_revenue = Decimal("0")
        running_costs = Decimal("0")
        for point in points:
            running_revenue += point.revenue
            running_costs += point.costs
            assert point.cumulative_revenue == running_revenue
            assert point.cumulative_costs == running_costs

        assert kpis.revenue_excl == running_revenue
        assert kpis.costs_excl == running_costs
        assert kpis.profit_excl == kpis.revenue_excl - kpis.costs_excl
        assert kpis.cash_net == sum((p.net_cash for p in points), Decimal("0"))
