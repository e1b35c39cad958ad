"""Read access to the seeded currency table."""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.exceptions import NotFoundError
from storefront.models import Currency
from storefront.services.common import list_and_count

logger = logging.getLogger(__name__)


class CurrencyService:
    async def list(
        self,
        db: AsyncSession,
        q: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Currency], int]:
        query = select(Currency).order_by(Currency.code)
        if q:
            pattern = f"%{q.lower()}%"
            query = query.where(or_(Currency.code.ilike(pattern), Currency.name.ilike(pattern)))
        return await list_and_count(db, query, limit, offset)

    async def retrieve(self, db: AsyncSession, code: str) -> Currency:
        currency = await db.get(Currency, code.lower())
        if currency is None:
            raise NotFoundError(
                resource="Currency",
                resource_id=code,
                message=f"Currency with code {code} was not found",
            )
        return currency


currency_service = CurrencyService()
