"""
Finance Package
Aggregation engine turning accounting documents into a daily series and KPIs.

- periods: DateRange and AccountingBasis
- aggregator: day buckets and KPI accumulation
- assembler: detail rows and result packaging
- service: concurrent collection and the full pipeline
"""

from app.finance.aggregator import AggregateKpis, DailyAggregator, DayBucket, aggregate
from app.finance.assembler import (
    MAX_DETAIL_ROWS,
    AggregateResult,
    DetailRow,
    assemble_result,
    build_detail_rows,
)
from app.finance.periods import AccountingBasis, DateRange

__all__ = [
    "AccountingBasis",
    "AggregateKpis",
    "AggregateResult",
    "DailyAggregator",
    "DateRange",
    "DayBucket",
    "DetailRow",
    "MAX_DETAIL_ROWS",
    "aggregate",
    "assemble_result",
    "build_detail_rows",
]
