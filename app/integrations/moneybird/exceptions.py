"""
Moneybird Integration Exceptions
Custom exceptions for Moneybird API access.
"""

from typing import Optional


class MoneybirdAPIError(Exception):
    """Non-success response or transport failure talking to Moneybird."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(self.message)


class MoneybirdMalformedResponse(MoneybirdAPIError):
    """Moneybird answered with a body that is not the expected JSON shape."""
