"""Shipment service — owner-scoped access to shipment requests and their quotes."""

import logging
import math
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from freightview.models.forwarder import Forwarder
from freightview.models.shipment import Quote, ShipmentRequest
from freightview.models.user import User

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class ShipmentService:
    """Reads and writes requests on behalf of their owner."""

    async def get_user_request(
        self,
        db: AsyncSession,
        request_id: uuid.UUID,
        user: User,
        with_quotes: bool = False,
    ) -> ShipmentRequest:
        """Fetch a request, ensuring it belongs to the caller. 404 otherwise."""
        stmt = select(ShipmentRequest).where(
            ShipmentRequest.id == request_id,
            ShipmentRequest.user_id == user.id,
        ).execution_options(populate_existing=True)
        if with_quotes:
            stmt = stmt.options(selectinload(ShipmentRequest.quotes))
        result = await db.execute(stmt)
        shipment = result.scalar_one_or_none()
        if not shipment:
            raise HTTPException(status_code=404, detail="Request not found")
        return shipment

    async def list_requests(
        self,
        db: AsyncSession,
        user: User,
        status: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[ShipmentRequest], int]:
        """Newest first. Returns the page and the total matching count."""
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        offset = max(0, offset)

        filters = [ShipmentRequest.user_id == user.id]
        if status:
            filters.append(ShipmentRequest.status == status)

        total = await db.scalar(select(func.count()).select_from(ShipmentRequest).where(*filters))
        result = await db.execute(
            select(ShipmentRequest)
            .where(*filters)
            .order_by(ShipmentRequest.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total or 0

    async def create_request(self, db: AsyncSession, user: User, data: dict) -> ShipmentRequest:
        shipment = ShipmentRequest(
            user_id=user.id,
            status="pending_quotes",
            submitted_at=datetime.now(timezone.utc),
            **{k: _to_decimal(v) if k in _DECIMAL_FIELDS else v for k, v in data.items()},
        )
        db.add(shipment)
        await db.commit()
        logger.info(f"Request {shipment.id} created for user {user.id}")
        return await self.get_user_request(db, shipment.id, user)

    async def update_request(
        self, db: AsyncSession, request_id: uuid.UUID, user: User, updates: dict
    ) -> ShipmentRequest:
        """Apply a partial update. Explicit nulls clear the optional text fields."""
        updates = {
            k: v for k, v in updates.items()
            if v is not None or k not in _NOT_NULL_ON_UPDATE
        }
        if not updates:
            raise HTTPException(status_code=400, detail="No valid fields to update")
        shipment = await self.get_user_request(db, request_id, user)
        for key, value in updates.items():
            setattr(shipment, key, value)
        await db.commit()
        return await self.get_user_request(db, request_id, user)

    async def delete_request(self, db: AsyncSession, request_id: uuid.UUID, user: User) -> None:
        shipment = await self.get_user_request(db, request_id, user, with_quotes=True)
        await db.delete(shipment)
        await db.commit()
        logger.info(f"Request {request_id} deleted by user {user.id}")

    async def list_quotes(
        self,
        db: AsyncSession,
        request_id: uuid.UUID,
        user: User,
        mode: str | None = None,
    ) -> list[Quote]:
        """Quotes of an owned request, cheapest first."""
        await self.get_user_request(db, request_id, user)
        stmt = select(Quote).where(Quote.request_id == request_id)
        if mode in ("air", "sea"):
            stmt = stmt.where(Quote.mode == mode)
        result = await db.execute(stmt.order_by(Quote.total_amount.asc()))
        return list(result.scalars().unique().all())

    async def create_quote(
        self, db: AsyncSession, request_id: uuid.UUID, user: User, data: dict
    ) -> Quote:
        """Record a manually entered quote.

        Derives transit_days from etd/eta when not given. The first quote on a
        request waiting for quotes moves it to quotes_received.
        """
        shipment = await self.get_user_request(db, request_id, user)
        if await db.get(Forwarder, data["forwarder_id"]) is None:
            raise HTTPException(status_code=400, detail="Unknown forwarder")

        if not data.get("transit_days") and data.get("etd") and data.get("eta"):
            delta = data["eta"] - data["etd"]
            data["transit_days"] = math.ceil(delta.total_seconds() / 86400)

        quote = Quote(
            request_id=shipment.id,
            received_via="manual",
            **{k: _to_decimal(v) if k in _DECIMAL_FIELDS else v for k, v in data.items()},
        )
        db.add(quote)

        if shipment.status == "pending_quotes":
            shipment.status = "quotes_received"

        await db.commit()
        logger.info(f"Quote {quote.id} ({quote.mode}) added to request {shipment.id}")

        result = await db.execute(
            select(Quote)
            .where(Quote.id == quote.id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().unique().one()

    @staticmethod
    def summarize(quotes: list[Quote]) -> dict:
        """Counts per mode and the lowest amount of each. Expects quotes cheapest first."""
        air = [q for q in quotes if q.mode == "air"]
        sea = [q for q in quotes if q.mode == "sea"]
        return {
            "total": len(quotes),
            "air_count": len(air),
            "sea_count": len(sea),
            "lowest_air": float(air[0].total_amount) if air else None,
            "lowest_sea": float(sea[0].total_amount) if sea else None,
        }


_DECIMAL_FIELDS = {
    "weight_kg",
    "volume_cbm",
    "value_usd",
    "total_amount",
    "freight_charge",
    "fuel_surcharge",
    "handling_charge",
    "documentation_fee",
    "terminal_handling",
}


_NOT_NULL_ON_UPDATE = {"status", "mode_preference"}


def _to_decimal(value):
    if value is None:
        return None
    return Decimal(str(value))


shipment_service = ShipmentService()
