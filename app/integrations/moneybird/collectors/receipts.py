"""
Receipts Collector
Fetches receipts by document date.
"""

import logging
from typing import Optional

from app.finance.periods import DateRange
from app.integrations.moneybird.collectors.base import BaseCollector, PageBatch
from app.integrations.moneybird.document_types import DocumentKind
from app.integrations.moneybird.exceptions import MoneybirdAPIError

logger = logging.getLogger(__name__)


class ReceiptsCollector(BaseCollector):
    """
    Collector for receipts.

    Both "date" and "receipt_date" are in use across API versions. The
    second name is only tried when the first yields no receipts; a failed
    request counts as yielding none.
    """

    kind = DocumentKind.RECEIPT
    endpoint = "documents/receipts.json"
    date_fields = ("date", "receipt_date")

    async def _fetch_documents(self, date_range: DateRange) -> tuple[PageBatch, str]:
        last_error: Optional[MoneybirdAPIError] = None
        succeeded = False

        for date_field in self.date_fields:
            try:
                batch = await self._fetch_pages(date_field, date_range)
            except MoneybirdAPIError as e:
                logger.info(
                    "Receipts filter on %r failed: %s",
                    date_field,
                    e.message,
                )
                last_error = e
                continue

            succeeded = True
            if batch.documents:
                return batch, date_field

        if not succeeded and last_error is not None:
            raise last_error

        return PageBatch([], truncated=False), self.date_fields[-1]
