"""
Moneybird Connection Service
Database operations for stored Moneybird credentials.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.moneybird_connection import MoneybirdAuthType, MoneybirdConnection

logger = logging.getLogger(__name__)


class MoneybirdConnectionService:
    """
    Service for Moneybird credential management.

    Each user has at most one connection; connecting again replaces it.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_connection(self, user_id: UUID) -> Optional[MoneybirdConnection]:
        """
        Get the Moneybird connection for a user.

        Args:
            user_id: Supabase user id

        Returns:
            MoneybirdConnection if one is stored, None otherwise
        """
        result = await self.db.execute(
            select(MoneybirdConnection).where(MoneybirdConnection.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def upsert_connection(
        self,
        user_id: UUID,
        access_token: str,
        administration_id: str,
        connection_label: str = "Moneybird",
    ) -> MoneybirdConnection:
        """
        Create or replace the user's Moneybird connection.

        Args:
            user_id: Supabase user id
            access_token: Validated Moneybird token
            administration_id: Administration the token was validated against
            connection_label: Label shown in the UI

        Returns:
            The stored connection
        """
        connection = await self.get_connection(user_id)

        if connection is None:
            connection = MoneybirdConnection(user_id=user_id)
            self.db.add(connection)

        connection.access_token = access_token
        connection.administration_id = administration_id
        connection.connection_label = connection_label
        connection.auth_type = MoneybirdAuthType.PAT.value

        await self.db.commit()
        await self.db.refresh(connection)

        logger.info(
            "Stored Moneybird connection for user %s (administration %s)",
            user_id,
            administration_id,
        )
        return connection

    async def delete_connection(self, user_id: UUID) -> bool:
        """
        Remove the user's Moneybird connection.

        Returns:
            True if a connection was removed, False if none existed
        """
        connection = await self.get_connection(user_id)
        if connection is None:
            return False

        await self.db.delete(connection)
        await self.db.commit()

        logger.info("Removed Moneybird connection for user %s", user_id)
        return True
