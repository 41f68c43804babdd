"""
Moneybird Integration Package
Read-only access to the Moneybird accounting API.
"""

from app.integrations.moneybird.client import MoneybirdClient
from app.integrations.moneybird.exceptions import MoneybirdAPIError, MoneybirdMalformedResponse

__all__ = [
    "MoneybirdClient",
    "MoneybirdAPIError",
    "MoneybirdMalformedResponse",
]
