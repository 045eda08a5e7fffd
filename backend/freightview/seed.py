"""Seed script for FreightView development database."""

import asyncio
import logging

from sqlalchemy import select

from freightview.database import Base, async_session_factory, engine
from freightview.models import Forwarder

logger = logging.getLogger(__name__)

# ── Forwarders ─────────────────────────────────────────────────────────────────

FORWARDERS = [
    ("DHL Global Forwarding", "DHL", "quotes@dhl-forwarding.example"),
    ("Kuehne + Nagel", "KN", "quotes@kuehne-nagel.example"),
    ("DB Schenker", "DBS", "quotes@dbschenker.example"),
    ("Expeditors International", "EXPD", "quotes@expeditors.example"),
    ("C.H. Robinson", "CHR", "quotes@chrobinson.example"),
    ("Flexport", "FLEX", "quotes@flexport.example"),
]


async def seed() -> int:
    """Create tables and insert reference forwarders. Safe to run repeatedly."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    created = 0
    async with async_session_factory() as db:
        existing = set((await db.execute(select(Forwarder.short_code))).scalars().all())
        for name, short_code, email in FORWARDERS:
            if short_code in existing:
                continue
            db.add(Forwarder(name=name, short_code=short_code, default_quote_email=email))
            created += 1
        await db.commit()

    if created:
        logger.info(f"Seeded {created} forwarders")
    return created


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
