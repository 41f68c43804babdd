"""
Moneybird API Client
Thin async HTTP client for the Moneybird REST API (bearer token auth).
"""

import logging
from typing import Any, Optional

import httpx

from app.config import settings
from app.integrations.moneybird.exceptions import MoneybirdAPIError, MoneybirdMalformedResponse

logger = logging.getLogger(__name__)


class MoneybirdClient:
    """
    Read-only Moneybird API client.

    Usage:
        async with MoneybirdClient(access_token) as client:
            admins = await client.list_administrations()

    An existing httpx.AsyncClient can be passed in; it is then left open
    for its owner to close.
    """

    def __init__(
        self,
        access_token: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.access_token = access_token
        self.base_url = (base_url or settings.moneybird_api_base_url).rstrip("/")
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout or settings.moneybird_timeout_seconds,
        )

    async def __aenter__(self) -> "MoneybirdClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

    async def get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        GET a Moneybird endpoint and decode the JSON body.

        Args:
            path: Path relative to the API base, e.g. "administrations.json"
            params: Query parameters

        Returns:
            Decoded JSON body

        Raises:
            MoneybirdAPIError: On transport failure or non-success status
            MoneybirdMalformedResponse: If the body is not JSON
        """
        url = f"{self.base_url}/{path.lstrip('/')}"

        try:
            response = await self._http.get(url, params=params, headers=self.headers)
        except httpx.HTTPError as e:
            raise MoneybirdAPIError(
                f"Moneybird request failed: {e}",
                endpoint=path,
            ) from e

        if not response.is_success:
            raise MoneybirdAPIError(
                f"Moneybird error {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
                endpoint=path,
            )

        try:
            return response.json()
        except ValueError as e:
            raise MoneybirdMalformedResponse(
                f"Moneybird returned invalid JSON for {path}",
                status_code=response.status_code,
                endpoint=path,
            ) from e

    async def list_administrations(self) -> list[dict[str, Any]]:
        """List the administrations the token has access to."""
        admins = await self.get_json("administrations.json")
        if not isinstance(admins, list):
            raise MoneybirdMalformedResponse(
                "Expected a list of administrations",
                endpoint="administrations.json",
            )
        return [admin for admin in admins if isinstance(admin, dict)]

    async def get_first_administration_id(self) -> Optional[str]:
        """
        Resolve the administration to aggregate for.

        Uses the first administration's id, falling back to its
        administration_id or slug.

        Returns:
            Administration id, or None if the token lists none or the call fails
        """
        try:
            admins = await self.list_administrations()
        except MoneybirdAPIError as e:
            logger.warning("Failed to list Moneybird administrations: %s", e.message)
            return None

        if not admins:
            return None

        first = admins[0]
        for key in ("id", "administration_id", "slug"):
            value = first.get(key)
            if value is not None and value != "":
                return str(value)
        return None
