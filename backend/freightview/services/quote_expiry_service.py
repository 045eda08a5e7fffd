"""Quote expiry — retires active quotes whose validity window has passed."""

import logging
from datetime import date

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from freightview.models.shipment import Quote

logger = logging.getLogger(__name__)


class QuoteExpiryService:
    """Marks stale quotes as expired so callers can filter them out."""

    async def expire_stale_quotes(self, db: AsyncSession, today: date | None = None) -> int:
        """Set status=expired on active quotes with valid_until before today.

        Returns the number of quotes updated.
        """
        today = today or date.today()
        result = await db.execute(
            update(Quote)
            .where(
                Quote.status == "active",
                Quote.valid_until.is_not(None),
                Quote.valid_until < today,
            )
            .values(status="expired")
            .execution_options(synchronize_session=False)
        )
        await db.commit()
        count = result.rowcount or 0
        if count:
            logger.info(f"Quote expiry: {count} quotes past valid_until marked expired")
        return count


quote_expiry_service = QuoteExpiryService()
