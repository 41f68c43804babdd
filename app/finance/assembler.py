"""
Result Assembler
Packages KPIs, the day series and a bounded list of display rows.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from itertools import chain, islice
from typing import Iterable, Iterator, Optional

from app.config import settings
from app.finance.aggregator import AggregateKpis, DayBucket
from app.integrations.moneybird.document_types import DocumentKind, RawDocument
from app.integrations.moneybird.parsers import (
    amount_excl_tax,
    amount_incl_tax,
    document_date,
    first_present,
)

MAX_DETAIL_ROWS = 50
CENTS = Decimal("0.01")


@dataclass
class DetailRow:
    """Display projection of one source document."""

    date: Optional[date]
    type: str
    description: str
    counterparty: str
    ledger: str
    amount_excl: Decimal
    vat: Decimal
    amount_incl: Decimal
    status: Optional[str]
    link: Optional[str]


@dataclass
class AggregateResult:
    kpis: AggregateKpis
    points: list[DayBucket]
    details: list[DetailRow]


def counterparty_name(document: RawDocument) -> str:
    """Company name, else contact person, else "-"."""
    contact = document.get("contact")
    if not isinstance(contact, dict):
        return "-"

    company = contact.get("company_name")
    if isinstance(company, str) and company.strip():
        return company.strip()

    person = " ".join(
        str(part).strip()
        for part in (contact.get("firstname"), contact.get("lastname"))
        if part
    ).strip()
    return person or "-"


def build_detail_row(
    document: RawDocument,
    kind: DocumentKind,
    vat_rate: Decimal,
) -> DetailRow:
    amount_excl = amount_excl_tax(document)
    amount_incl = amount_incl_tax(document)
    if not amount_incl:
        # No incl. total on the document: estimate with the flat display rate
        amount_incl = (amount_excl * (1 + vat_rate)).quantize(CENTS)

    description = first_present(document, ("invoice_id", "reference", "description"))
    status = first_present(document, ("state", "status"))
    link = document.get("url")

    return DetailRow(
        date=document_date(document, kind),
        type=kind.label,
        description=str(description) if description is not None else kind.label,
        counterparty=counterparty_name(document),
        ledger=kind.ledger,
        amount_excl=amount_excl,
        vat=vat_rate,
        amount_incl=amount_incl,
        status=str(status) if status is not None else None,
        link=link if isinstance(link, str) and link else None,
    )


def build_detail_rows(
    sales: Iterable[RawDocument],
    purchases: Iterable[RawDocument],
    receipts: Iterable[RawDocument],
    vat_rate: Optional[Decimal] = None,
    limit: int = MAX_DETAIL_ROWS,
) -> list[DetailRow]:
    """
    Map documents to detail rows in fixed order and keep the first ``limit``.

    Order is sales, then purchases, then receipts, each in the order
    received; no sorting is applied.
    """
    if vat_rate is None:
        vat_rate = Decimal(str(settings.vat_rate))

    def rows(documents: Iterable[RawDocument], kind: DocumentKind) -> Iterator[DetailRow]:
        for document in documents:
            yield build_detail_row(document, kind, vat_rate)

    all_rows = chain(
        rows(sales, DocumentKind.SALES_INVOICE),
        rows(purchases, DocumentKind.PURCHASE_INVOICE),
        rows(receipts, DocumentKind.RECEIPT),
    )
    return list(islice(all_rows, limit))


def assemble_result(
    kpis: AggregateKpis,
    points: list[DayBucket],
    details: list[DetailRow],
) -> AggregateResult:
    return AggregateResult(kpis=kpis, points=points, details=details[:MAX_DETAIL_ROWS])
