"""
Models Package
SQLAlchemy ORM models for the application.
"""

from app.models.moneybird_connection import MoneybirdAuthType, MoneybirdConnection

__all__ = [
    "MoneybirdAuthType",
    "MoneybirdConnection",
]
