"""
Rate Limiting Utilities
Limiter shared by endpoints that call out to Moneybird on user request.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
