"""Designated forwarders: the per-user list of forwarders to ask for quotes."""

import logging
import uuid

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from freightview.models.forwarder import Forwarder
from freightview.models.user import User
from freightview.models.user_forwarder import UserForwarder

logger = logging.getLogger(__name__)


class UserForwarderService:

    async def list_for_user(self, db: AsyncSession, user: User) -> list[UserForwarder]:
        """Caller's designated forwarders, oldest first."""
        result = await db.execute(
            select(UserForwarder)
            .where(UserForwarder.user_id == user.id)
            .order_by(UserForwarder.created_at)
        )
        return list(result.scalars().unique().all())

    async def add_for_user(self, db: AsyncSession, user: User, data: dict) -> UserForwarder:
        """Add a forwarder to the caller's list.

        400 without forwarder_id, 404 for an unknown forwarder, 409 when the
        forwarder is already on the list.
        """
        forwarder_id: uuid.UUID | None = data.get("forwarder_id")
        if forwarder_id is None:
            raise HTTPException(status_code=400, detail="forwarder_id is required")

        if await db.get(Forwarder, forwarder_id) is None:
            raise HTTPException(status_code=404, detail="Forwarder not found")

        existing = await db.execute(
            select(UserForwarder.id).where(
                UserForwarder.user_id == user.id,
                UserForwarder.forwarder_id == forwarder_id,
            )
        )
        if existing.scalar_one_or_none():
            raise HTTPException(status_code=409, detail="Forwarder already in your designated list")

        entry = UserForwarder(user_id=user.id, **data)
        db.add(entry)
        await db.commit()
        logger.info(f"Forwarder {forwarder_id} designated by user {user.id}")

        result = await db.execute(
            select(UserForwarder)
            .where(UserForwarder.id == entry.id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().unique().one()


user_forwarder_service = UserForwarderService()
