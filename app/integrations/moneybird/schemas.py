"""
Moneybird Integration Schemas
Request/response models for the Moneybird endpoints.

Aggregate responses use camelCase keys as consumed by the dashboard.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.finance.aggregator import AggregateKpis, DayBucket
from app.finance.assembler import AggregateResult, DetailRow


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Request Models
# =============================================================================

class AggregatesRequest(BaseModel):
    """Range and options for the aggregates endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    from_date: Optional[str] = Field(
        None,
        alias="from",
        description="First day of the range (YYYY-MM-DD, inclusive)",
    )
    to_date: Optional[str] = Field(
        None,
        alias="to",
        description="Last day of the range (YYYY-MM-DD, inclusive)",
    )
    basis: Optional[str] = Field(
        None,
        description='"cash" or "accrual" (default; any other value is accrual)',
    )
    grouping: Optional[str] = Field(
        None,
        description="Echoed back; reserved for grouped output",
    )
    bucket: Optional[str] = Field(
        None,
        description="Echoed back; reserved for bucket granularity",
    )


class MoneybirdConnectRequest(BaseModel):
    """Personal access token to store for the current user."""

    token: Optional[str] = Field(None, description="Moneybird personal access token")
    label: Optional[str] = Field(None, description="Connection label (default: Moneybird)")


# =============================================================================
# Response Models
# =============================================================================

class KpisResponse(CamelModel):
    revenue_excl: float
    costs_excl: float
    profit_excl: float
    cash_net: float

    @classmethod
    def from_kpis(cls, kpis: AggregateKpis) -> "KpisResponse":
        return cls(
            revenue_excl=float(kpis.revenue_excl),
            costs_excl=float(kpis.costs_excl),
            profit_excl=float(kpis.profit_excl),
            cash_net=float(kpis.cash_net),
        )


class PointResponse(CamelModel):
    """One day of the series."""

    date: str
    revenue: float
    costs: float
    cum_revenue: float
    cum_costs: float
    cash_net: float

    @classmethod
    def from_bucket(cls, bucket: DayBucket) -> "PointResponse":
        return cls(
            date=bucket.day.isoformat(),
            revenue=float(bucket.revenue),
            costs=float(bucket.costs),
            cum_revenue=float(bucket.cumulative_revenue),
            cum_costs=float(bucket.cumulative_costs),
            cash_net=float(bucket.net_cash),
        )


class DetailResponse(CamelModel):
    """One document row for the transactions table."""

    date: Optional[str]
    type: str
    description: str
    counterparty: str
    ledger: str
    amount_excl: float
    vat: float
    amount_incl: float
    status: Optional[str]
    link: Optional[str]

    @classmethod
    def from_row(cls, row: DetailRow) -> "DetailResponse":
        return cls(
            date=row.date.isoformat() if row.date else None,
            type=row.type,
            description=row.description,
            counterparty=row.counterparty,
            ledger=row.ledger,
            amount_excl=float(row.amount_excl),
            vat=float(row.vat),
            amount_incl=float(row.amount_incl),
            status=row.status,
            link=row.link,
        )


class AggregatesResponse(CamelModel):
    """Aggregated financial data for a connected administration."""

    connected: bool = True
    administration_id: str
    basis: str
    grouping: str
    bucket: str
    kpis: KpisResponse
    points: list[PointResponse]
    details: list[DetailResponse]
    source: str = "moneybird-live"

    @classmethod
    def from_result(
        cls,
        result: AggregateResult,
        administration_id: str,
        basis: str,
        grouping: str,
        bucket: str,
    ) -> "AggregatesResponse":
        return cls(
            administration_id=administration_id,
            basis=basis,
            grouping=grouping,
            bucket=bucket,
            kpis=KpisResponse.from_kpis(result.kpis),
            points=[PointResponse.from_bucket(point) for point in result.points],
            details=[DetailResponse.from_row(row) for row in result.details],
        )


class MoneybirdConnectResponse(BaseModel):
    ok: bool
    administration_id: Optional[str] = None
    message: Optional[str] = None


class MoneybirdConnectionStatus(BaseModel):
    """Moneybird connection status for the current user."""

    connected: bool = Field(..., description="Whether a Moneybird token is stored")
    administration_id: Optional[str] = Field(None, description="Moneybird administration id")
    connection_label: Optional[str] = Field(None, description="Connection label")
    connected_at: Optional[datetime] = Field(None, description="When the connection was stored")


class MoneybirdDisconnectResponse(BaseModel):
    success: bool
    message: str
