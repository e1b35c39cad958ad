"""
Storefront Backend — Store Service
====================================

What:  Reads and updates the single store record and its currencies.
Who:   /admin/store routes, RegionService (currency check), app startup.

Invariants:
    - Exactly one store row exists (created by ensure_default_store on boot)
    - The default currency is always one of the store currencies
    - default_location_id, when set, references a live stock location
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.exceptions import DuplicateError, NotAllowedError, NotFoundError, ValidationError
from storefront.models import Currency, Store
from storefront.services.common import apply_fields, merge_metadata
from storefront.services.currency_service import currency_service
from storefront.services.stock_location_service import stock_location_service

logger = logging.getLogger(__name__)

DEFAULT_STORE_NAME = "Storefront"
DEFAULT_CURRENCY_CODE = "usd"

_UPDATABLE_FIELDS = (
    "name",
    "swap_link_template",
    "payment_link_template",
    "invite_link_template",
)


class StoreService:
    """
    Business logic for the store record.

    Every mutating method flushes and then returns a fresh `retrieve()` so
    relationship collections (currencies, default_currency) reflect the
    write.
    """

    async def retrieve(self, db: AsyncSession) -> Store:
        result = await db.execute(
            select(Store)
            .order_by(Store.created_at)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        store = result.scalar_one_or_none()
        if store is None:
            raise NotFoundError(resource="Store", message="Store does not exist")
        return store

    async def ensure_default_store(self, db: AsyncSession) -> Store:
        """
        Create the store if none exists yet.

        Requires the currency table to be seeded (the default currency is
        attached to the new store).
        """
        result = await db.execute(select(Store).limit(1))
        if result.scalar_one_or_none() is not None:
            return await self.retrieve(db)

        currency = await currency_service.retrieve(db, DEFAULT_CURRENCY_CODE)
        store = Store(name=DEFAULT_STORE_NAME, default_currency_code=currency.code)
        store.currencies = [currency]
        db.add(store)
        await db.flush()
        logger.info("Created default store %s", store.id)
        return await self.retrieve(db)

    async def update(self, db: AsyncSession, data: Dict[str, Any]) -> Store:
        """
        Update store settings.

        Args:
            data: Fields to change; keys absent from the dict are untouched.
                  `currencies` replaces the whole currency set.

        Raises:
            ValidationError: unknown currency, or default currency not among
                             the store currencies
            NotFoundError: default_location_id does not reference a live
                           stock location
        """
        store = await self.retrieve(db)

        currency_codes = [c.code for c in store.currencies]
        if data.get("currencies") is not None:
            currencies = await self._load_currencies(db, data["currencies"])
            currency_codes = [c.code for c in currencies]
            store.currencies = currencies

        default_code = store.default_currency_code
        if data.get("default_currency_code") is not None:
            default_code = data["default_currency_code"].lower()
            if await db.get(Currency, default_code) is None:
                raise ValidationError(
                    f"Currency with code {default_code} does not exist",
                    field="default_currency_code",
                )
        if default_code not in currency_codes:
            raise ValidationError(
                f"Store does not have currency: {default_code}",
                field="default_currency_code",
            )
        store.default_currency_code = default_code

        if "default_location_id" in data:
            location_id = data["default_location_id"]
            if location_id is not None:
                await stock_location_service.retrieve(db, location_id)
            store.default_location_id = location_id

        apply_fields(store, data, _UPDATABLE_FIELDS)
        if "metadata" in data:
            store.metadata_ = merge_metadata(store.metadata_, data["metadata"])

        await db.flush()
        logger.info("Store %s updated", store.id)
        return await self.retrieve(db)

    async def add_currency(self, db: AsyncSession, code: str) -> Store:
        currency = await currency_service.retrieve(db, code)
        store = await self.retrieve(db)
        if store.has_currency(currency.code):
            raise DuplicateError(
                "Currency already added",
                context={"currency_code": currency.code},
            )
        store.currencies.append(currency)
        await db.flush()
        logger.info("Added currency %s to store", currency.code)
        return await self.retrieve(db)

    async def remove_currency(self, db: AsyncSession, code: str) -> Store:
        code = code.lower()
        store = await self.retrieve(db)
        if code == store.default_currency_code:
            raise NotAllowedError(
                "You are not allowed to remove default currency from store currencies without replacing it as well",
                context={"currency_code": code},
            )
        if not store.has_currency(code):
            return store

        store.currencies = [c for c in store.currencies if c.code != code]
        await db.flush()
        logger.info("Removed currency %s from store", code)
        return await self.retrieve(db)

    async def _load_currencies(self, db: AsyncSession, codes: List[str]) -> List[Currency]:
        normalized = list(dict.fromkeys(code.lower() for code in codes))
        result = await db.execute(select(Currency).where(Currency.code.in_(normalized)))
        found = {c.code: c for c in result.scalars().all()}
        for code in normalized:
            if code not in found:
                raise ValidationError(
                    f"Currency with code {code} does not exist",
                    field="currencies",
                )
        return [found[code] for code in normalized]


store_service = StoreService()
