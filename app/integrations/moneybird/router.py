"""
Moneybird Integration Router
API endpoints for connecting Moneybird and reading aggregated financials.
"""

import logging
from datetime import date
from typing import Callable, Optional, Union

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import CurrentUser
from app.auth.rate_limit import limiter
from app.config import settings
from app.core.errors import ErrorCode, error_response
from app.database import get_async_session
from app.finance.periods import AccountingBasis, DateRange
from app.finance.service import FinancialAggregatesService
from app.integrations.moneybird.client import MoneybirdClient
from app.integrations.moneybird.schemas import (
    AggregatesRequest,
    AggregatesResponse,
    MoneybirdConnectionStatus,
    MoneybirdConnectRequest,
    MoneybirdConnectResponse,
    MoneybirdDisconnectResponse,
)
from app.integrations.moneybird.service import MoneybirdConnectionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/integrations/moneybird", tags=["Moneybird Integration"])

MoneybirdClientFactory = Callable[[str], MoneybirdClient]


# =============================================================================
# Dependencies
# =============================================================================

async def get_connection_service(
    db: AsyncSession = Depends(get_async_session),
) -> MoneybirdConnectionService:
    """Dependency to get MoneybirdConnectionService instance."""
    return MoneybirdConnectionService(db)


def get_moneybird_client_factory() -> MoneybirdClientFactory:
    """Dependency returning how to build a Moneybird client for a token."""
    return MoneybirdClient


class RangeValidationError(ValueError):
    pass


def parse_date_range(from_date: Optional[str], to_date: Optional[str]) -> DateRange:
    """
    Validate the requested range.

    Raises:
        RangeValidationError: If a bound is missing or invalid, the range is
            reversed, or it spans more than the configured maximum
    """
    if not from_date or not to_date:
        raise RangeValidationError("Missing 'from' or 'to' date")

    try:
        start = date.fromisoformat(from_date.strip()[:10])
        end = date.fromisoformat(to_date.strip()[:10])
    except ValueError:
        raise RangeValidationError("Dates must be formatted as YYYY-MM-DD")

    try:
        date_range = DateRange(start=start, end=end)
    except ValueError as e:
        raise RangeValidationError(str(e))

    if date_range.days > settings.aggregates_max_range_days:
        raise RangeValidationError(
            f"Range spans {date_range.days} days; the maximum is "
            f"{settings.aggregates_max_range_days}. Narrow the range."
        )

    return date_range


# =============================================================================
# Endpoints
# =============================================================================

@router.post(
    "/aggregates",
    response_model=AggregatesResponse,
    summary="Aggregated financials",
    description=(
        "Fetch sales invoices, purchase invoices and receipts from Moneybird and "
        "return a daily series, KPIs and up to 50 transaction rows."
    ),
)
async def get_aggregates(
    current_user: CurrentUser,
    payload: Optional[AggregatesRequest] = None,
    connection_service: MoneybirdConnectionService = Depends(get_connection_service),
    client_factory: MoneybirdClientFactory = Depends(get_moneybird_client_factory),
) -> Union[AggregatesResponse, JSONResponse]:
    """
    Build the financial dashboard data for the caller's Moneybird administration.

    Responses:
    - 400 when the range is missing or invalid (no Moneybird calls are made)
    - 403 with connected=false when no Moneybird token is stored
    - 200 with connected=false when the token lists no administration
    - 500 with the error message on unexpected failures
    """
    payload = payload or AggregatesRequest()

    try:
        date_range = parse_date_range(payload.from_date, payload.to_date)
    except RangeValidationError as e:
        return error_response(ErrorCode.VALIDATION_ERROR, status.HTTP_400_BAD_REQUEST, str(e))

    basis = AccountingBasis.from_request(payload.basis)
    grouping = payload.grouping or "none"
    bucket = payload.bucket or "day"

    try:
        connection = await connection_service.get_connection(current_user.id)
        if connection is None:
            return error_response(
                ErrorCode.MONEYBIRD_NOT_CONNECTED,
                status.HTTP_403_FORBIDDEN,
                connected=False,
            )

        async with client_factory(connection.access_token) as client:
            administration_id = (
                connection.administration_id
                or await client.get_first_administration_id()
            )
            if not administration_id:
                return JSONResponse(
                    status_code=status.HTTP_200_OK,
                    content={
                        "connected": False,
                        "administrationId": None,
                        "message": "No Moneybird administration found for this connection",
                    },
                )

            service = FinancialAggregatesService(client, administration_id)
            result = await service.build(date_range, basis)

    except Exception as e:
        logger.error("Moneybird aggregates failed for user %s: %s", current_user.id, e, exc_info=True)
        return error_response(
            ErrorCode.INTERNAL_ERROR,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(e) or None,
        )

    return AggregatesResponse.from_result(
        result,
        administration_id=administration_id,
        basis=basis.value,
        grouping=grouping,
        bucket=bucket,
    )


@router.post(
    "/connect",
    response_model=MoneybirdConnectResponse,
    summary="Connect Moneybird",
    description="Validate a Moneybird personal access token and store it for the current user.",
)
@limiter.limit("20/hour")
async def connect_moneybird(
    request: Request,
    current_user: CurrentUser,
    payload: MoneybirdConnectRequest,
    connection_service: MoneybirdConnectionService = Depends(get_connection_service),
    client_factory: MoneybirdClientFactory = Depends(get_moneybird_client_factory),
) -> Union[MoneybirdConnectResponse, JSONResponse]:
    """
    Store a Moneybird token after checking it can list an administration.

    The first administration returned is remembered and used for aggregates.
    """
    token = (payload.token or "").strip()
    if not token:
        return error_response(ErrorCode.VALIDATION_ERROR, status.HTTP_400_BAD_REQUEST, "Missing token")

    label = (payload.label or "").strip() or "Moneybird"

    async with client_factory(token) as client:
        administration_id = await client.get_first_administration_id()

    if not administration_id:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "ok": False,
                "message": "Invalid token or no administration found",
            },
        )

    await connection_service.upsert_connection(
        user_id=current_user.id,
        access_token=token,
        administration_id=administration_id,
        connection_label=label,
    )

    return MoneybirdConnectResponse(ok=True, administration_id=administration_id)


@router.get(
    "/status",
    response_model=MoneybirdConnectionStatus,
    summary="Get Moneybird connection status",
)
async def get_moneybird_status(
    current_user: CurrentUser,
    connection_service: MoneybirdConnectionService = Depends(get_connection_service),
) -> MoneybirdConnectionStatus:
    connection = await connection_service.get_connection(current_user.id)

    if connection is None:
        return MoneybirdConnectionStatus(connected=False)

    return MoneybirdConnectionStatus(
        connected=True,
        administration_id=connection.administration_id,
        connection_label=connection.connection_label,
        connected_at=connection.created_at,
    )


@router.post(
    "/disconnect",
    response_model=MoneybirdDisconnectResponse,
    summary="Disconnect Moneybird",
    description="Remove the stored Moneybird token.",
)
async def disconnect_moneybird(
    current_user: CurrentUser,
    connection_service: MoneybirdConnectionService = Depends(get_connection_service),
) -> MoneybirdDisconnectResponse:
    removed = await connection_service.delete_connection(current_user.id)

    if not removed:
        return MoneybirdDisconnectResponse(
            success=False,
            message="No Moneybird connection to disconnect",
        )

    return MoneybirdDisconnectResponse(
        success=True,
        message="Moneybird disconnected successfully",
    )
