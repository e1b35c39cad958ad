"""
Storefront Backend — Stock Location Service
=============================================

What:  CRUD for stock locations and their (optional) address.
Who:   /admin/stock-locations routes; StoreService validates
       default_location_id through retrieve().

Address Handling:
    The address is a separate row. Creating a location with an address
    inserts both; updating with an address overwrites the existing address
    fields or creates the address if the location had none.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.exceptions import NotFoundError, ValidationError
from storefront.models import Country, StockLocation, StockLocationAddress, Store
from storefront.models.mixins import utc_now
from storefront.services.common import list_and_count, live, merge_metadata

logger = logging.getLogger(__name__)

_ADDRESS_FIELDS = (
    "address_1",
    "address_2",
    "company",
    "city",
    "country_code",
    "phone",
    "province",
    "postal_code",
)


class StockLocationService:
    async def list(
        self,
        db: AsyncSession,
        q: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[StockLocation], int]:
        query = live(StockLocation).order_by(StockLocation.created_at.desc(), StockLocation.id)
        if q:
            query = query.where(StockLocation.name.ilike(f"%{q}%"))
        return await list_and_count(db, query, limit, offset)

    async def retrieve(self, db: AsyncSession, location_id: str) -> StockLocation:
        result = await db.execute(
            live(StockLocation)
            .where(StockLocation.id == location_id)
            .execution_options(populate_existing=True)
        )
        location = result.scalar_one_or_none()
        if location is None:
            raise NotFoundError(resource="StockLocation", resource_id=location_id)
        return location

    async def create(
        self,
        db: AsyncSession,
        name: str,
        address: Optional[Dict[str, Any]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> StockLocation:
        location = StockLocation(name=name, metadata_=metadata)
        if address is not None:
            location.address = await self._build_address(db, StockLocationAddress(), address)
        db.add(location)
        await db.flush()
        logger.info("Stock location %s created", location.id)
        return await self.retrieve(db, location.id)

    async def update(
        self,
        db: AsyncSession,
        location_id: str,
        data: Dict[str, Any],
    ) -> StockLocation:
        location = await self.retrieve(db, location_id)

        if data.get("name") is not None:
            location.name = data["name"]
        if data.get("address") is not None:
            address = location.address or StockLocationAddress()
            location.address = await self._build_address(db, address, data["address"])
        if "metadata" in data:
            location.metadata_ = merge_metadata(location.metadata_, data["metadata"])

        await db.flush()
        logger.info("Stock location %s updated", location.id)
        return await self.retrieve(db, location.id)

    async def delete(self, db: AsyncSession, location_id: str) -> None:
        """
        Soft-delete a location. Unknown or already deleted ids are a no-op.

        A store whose default location this was is left without one.
        """
        location = await db.get(StockLocation, location_id)
        if location is None or location.is_deleted:
            return
        location.deleted_at = utc_now()
        await db.execute(
            update(Store)
            .where(Store.default_location_id == location_id)
            .values(default_location_id=None)
        )
        await db.flush()
        logger.info("Stock location %s deleted", location_id)

    async def _build_address(
        self,
        db: AsyncSession,
        address: StockLocationAddress,
        data: Dict[str, Any],
    ) -> StockLocationAddress:
        country_code = data["country_code"].lower()
        result = await db.execute(select(Country.id).where(Country.iso_2 == country_code))
        if result.scalar_one_or_none() is None:
            raise ValidationError(
                f"Invalid country code: '{country_code}'",
                field="address.country_code",
            )

        for field in _ADDRESS_FIELDS:
            if field in data:
                setattr(address, field, data[field])
        address.country_code = country_code
        if "metadata" in data:
            address.metadata_ = merge_metadata(address.metadata_, data["metadata"])
        return address


stock_location_service = StockLocationService()
