"""
Base Collector
Common functionality for all Moneybird document collectors.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from app.config import settings
from app.finance.periods import DateRange
from app.integrations.moneybird.client import MoneybirdClient
from app.integrations.moneybird.document_types import DocumentKind, RawDocument
from app.integrations.moneybird.exceptions import MoneybirdAPIError, MoneybirdMalformedResponse

logger = logging.getLogger(__name__)


@dataclass
class CollectorError:
    """Why a collector degraded to an empty document list."""

    kind: DocumentKind
    message: str
    status_code: Optional[int] = None
    endpoint: Optional[str] = None


@dataclass
class CollectorResult:
    """
    Outcome of one collector run.

    ``documents`` is empty both when nothing matched and when the collector
    failed; ``error`` tells the two apart.
    """

    kind: DocumentKind
    documents: list[RawDocument] = field(default_factory=list)
    error: Optional[CollectorError] = None
    truncated: bool = False
    date_field: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class PageBatch:
    documents: list[RawDocument]
    truncated: bool


def format_filter_date(day: date) -> str:
    return day.strftime("%Y%m%d")


class BaseCollector:
    """
    Base class for Moneybird document collectors.

    Subclasses set the document kind, endpoint and candidate date fields,
    and may override ``_fetch_documents`` to change how candidates are tried.
    """

    kind: DocumentKind
    endpoint: str
    date_fields: tuple[str, ...] = ()
    include_all_states: bool = False

    def __init__(
        self,
        client: MoneybirdClient,
        administration_id: str,
        per_page: Optional[int] = None,
        max_pages: Optional[int] = None,
    ):
        """
        Initialize collector.

        Args:
            client: Authenticated Moneybird client
            administration_id: Moneybird administration to read from
            per_page: Page size requested from Moneybird
            max_pages: Safety cap on pages fetched per filter
        """
        self.client = client
        self.administration_id = administration_id
        self.per_page = per_page or settings.moneybird_per_page
        self.max_pages = max_pages or settings.moneybird_max_pages

    @property
    def path(self) -> str:
        return f"{self.administration_id}/{self.endpoint}"

    def build_filter(self, date_field: str, date_range: DateRange) -> str:
        """
        Build the Moneybird filter expression for a date field and range.

        Example: "invoice_date:20240101..20240131,state:all"
        """
        expression = (
            f"{date_field}:{format_filter_date(date_range.start)}"
            f"..{format_filter_date(date_range.end)}"
        )
        if self.include_all_states:
            expression += ",state:all"
        return expression

    async def _fetch_pages(self, date_field: str, date_range: DateRange) -> PageBatch:
        """
        Fetch every page for one filter expression.

        Raises:
            MoneybirdAPIError: If any page request fails
            MoneybirdMalformedResponse: If a page is not a JSON array
        """
        documents: list[RawDocument] = []
        filter_expression = self.build_filter(date_field, date_range)
        page = 1

        while True:
            body = await self.client.get_json(
                self.path,
                params={
                    "filter": filter_expression,
                    "page": page,
                    "per_page": self.per_page,
                },
            )

            if not isinstance(body, list):
                raise MoneybirdMalformedResponse(
                    f"Expected a list of {self.kind.value} documents, got {type(body).__name__}",
                    endpoint=self.path,
                )

            page_documents = [item for item in body if isinstance(item, dict)]
            if len(page_documents) != len(body):
                logger.warning(
                    "Dropped %d non-object entries from %s page %d",
                    len(body) - len(page_documents),
                    self.path,
                    page,
                )

            documents.extend(page_documents)

            if len(body) < self.per_page:
                return PageBatch(documents, truncated=False)

            page += 1
            if page > self.max_pages:
                logger.warning(
                    "Reached page limit (%d) for %s with filter %s. Results truncated.",
                    self.max_pages,
                    self.path,
                    filter_expression,
                )
                return PageBatch(documents, truncated=True)

    async def _fetch_documents(self, date_range: DateRange) -> tuple[PageBatch, str]:
        """
        Fetch with the primary date field, retrying once with the alternate.

        Only a non-success HTTP status (the service rejecting the field name)
        triggers the alternate; transport failures and malformed bodies do not.
        """
        primary, alternate = self.date_fields[0], self.date_fields[1]

        try:
            return await self._fetch_pages(primary, date_range), primary
        except MoneybirdMalformedResponse:
            raise
        except MoneybirdAPIError as e:
            if e.status_code is None:
                raise
            logger.info(
                "Moneybird rejected filter field %r for %s (status %s). Retrying with %r",
                primary,
                self.kind.value,
                e.status_code,
                alternate,
            )

        return await self._fetch_pages(alternate, date_range), alternate

    async def collect(self, date_range: DateRange) -> CollectorResult:
        """
        Collect all documents of this kind dated within the range.

        Never raises for API failures: they are logged and reported
        through ``CollectorResult.error`` with an empty document list.
        """
        try:
            batch, date_field = await self._fetch_documents(date_range)
        except MoneybirdAPIError as e:
            logger.warning(
                "Collecting %s documents failed, continuing without them: %s",
                self.kind.value,
                e.message,
            )
            return CollectorResult(
                kind=self.kind,
                error=CollectorError(
                    kind=self.kind,
                    message=e.message,
                    status_code=e.status_code,
                    endpoint=e.endpoint,
                ),
            )

        logger.debug(
            "Collected %d %s documents using date field %r",
            len(batch.documents),
            self.kind.value,
            date_field,
        )
        return CollectorResult(
            kind=self.kind,
            documents=batch.documents,
            truncated=batch.truncated,
            date_field=date_field,
        )
