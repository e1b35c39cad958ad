"""
Storefront Backend — Reference Data Seeding
=============================================

What:  Loads the ISO country and currency tables when they are empty.
When:  Application startup (lifespan) and the test fixtures. The initial
       Alembic migration inserts the same rows from `storefront.data`.
"""

import logging

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.data.countries import country_rows
from storefront.data.currencies import currency_rows
from storefront.models import Country, Currency

logger = logging.getLogger(__name__)


async def seed_reference_data(db: AsyncSession) -> None:
    """Insert currencies and countries unless they are already present."""
    currency_count = (await db.execute(select(func.count()).select_from(Currency))).scalar_one()
    if currency_count == 0:
        rows = currency_rows()
        await db.execute(insert(Currency), rows)
        logger.info("Seeded %d currencies", len(rows))

    country_count = (await db.execute(select(func.count()).select_from(Country))).scalar_one()
    if country_count == 0:
        rows = country_rows()
        await db.execute(insert(Country), rows)
        logger.info("Seeded %d countries", len(rows))

    await db.flush()
