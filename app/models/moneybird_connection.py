"""
Moneybird Connection Model
Stores the per-user Moneybird credential used by the aggregates endpoint.
"""

import uuid
from enum import Enum
from typing import Optional

from sqlalchemy import Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.database.base import Base, TimestampMixin, UUIDMixin


class MoneybirdAuthType(str, Enum):
    """How the stored access token was obtained."""

    PAT = "pat"


class MoneybirdConnection(Base, UUIDMixin, TimestampMixin):
    """
    Moneybird credential storage, one row per user.

    Attributes:
        id: Unique identifier (UUID)
        user_id: Supabase auth user id owning the connection
        access_token: Bearer token sent to the Moneybird API
        administration_id: Moneybird administration the token was validated against
        connection_label: Human readable label chosen by the user
        auth_type: How the token was issued (personal access token)

    Security Note:
        Tokens are stored as plain text; row access is restricted to the owner.
    """

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        unique=True,
        nullable=False,
    )

    access_token: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    administration_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Moneybird administration identifier",
    )

    connection_label: Mapped[str] = mapped_column(
        String(255),
        default="Moneybird",
        nullable=False,
    )

    auth_type: Mapped[str] = mapped_column(
        String(20),
        default=MoneybirdAuthType.PAT.value,
        nullable=False,
    )

    __table_args__ = (
        Index("ix_moneybird_connections_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<MoneybirdConnection(id={self.id}, user_id={self.user_id}, "
            f"administration_id={self.administration_id!r})>"
        )
