"""
Storefront Backend — Region Service (Business Logic)
======================================================

What:  Creates, updates and deletes regions and manages which countries
       belong to them.
Who:   /admin/regions and /store/regions route handlers, ExportService.

Region/Country Rules:
    ┌────────────┐   0..1   ┌──────────┐
    │  Country   │─────────▶│  Region  │
    └────────────┘          └──────────┘
    - A country belongs to at most one live region
    - Country codes are ISO 3166-1 alpha-2, matched case-insensitively and
      stored lowercase
    - A region's currency must be one of the store's currencies
    - tax_rate is a percentage between 0 and 100

Write Pattern:
    Mutations flush only; the request's session commits. Callers that need
    the post-mutation state (routes) call retrieve() again, which re-reads
    the row and its countries from the database.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.exceptions import DuplicateError, NotFoundError, ValidationError
from storefront.models import Country, Region
from storefront.models.mixins import utc_now
from storefront.services.common import apply_fields, list_and_count, live, merge_metadata
from storefront.services.store_service import store_service

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = (
    "name",
    "tax_code",
    "includes_tax",
    "gift_cards_taxable",
    "automatic_taxes",
)


class RegionService:
    """
    Business logic layer for regions.

    Error Handling Strategy:
        Rule violations raise domain exceptions (ValidationError,
        DuplicateError, NotFoundError) which the global handlers turn into
        4xx responses. Database failures propagate as SQLAlchemy errors and
        are mapped to 422/500 by the same handlers.
    """

    async def list(
        self,
        db: AsyncSession,
        q: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Region], int]:
        """
        Live regions, newest first.

        Args:
            q: Case-insensitive substring match on the region name
            limit: Page size
            offset: Number of regions to skip

        Returns:
            (regions on this page, total matching count)
        """
        query = live(Region).order_by(Region.created_at.desc(), Region.id)
        if q:
            query = query.where(Region.name.ilike(f"%{q}%"))
        return await list_and_count(db, query, limit, offset)

    async def retrieve(self, db: AsyncSession, region_id: str) -> Region:
        """
        Fetch a live region with its countries.

        populate_existing makes the read authoritative even when the region
        is already in the session's identity map from an earlier mutation.

        Raises:
            NotFoundError: region does not exist or was deleted (→ 404)
        """
        result = await db.execute(
            live(Region)
            .where(Region.id == region_id)
            .execution_options(populate_existing=True)
        )
        region = result.scalar_one_or_none()
        if region is None:
            raise NotFoundError(resource="Region", resource_id=region_id)
        return region

    async def create(self, db: AsyncSession, data: Dict[str, Any]) -> Region:
        """
        Create a region.

        Raises:
            ValidationError: currency not in the store, tax rate out of
                             range, unknown country code
            DuplicateError: a country already belongs to another region
        """
        currency_code = await self._validate_currency(db, data["currency_code"])
        tax_rate = self._validate_tax_rate(data.get("tax_rate", 0))

        region = Region(
            name=data["name"],
            currency_code=currency_code,
            tax_rate=tax_rate,
            metadata_=data.get("metadata"),
        )
        apply_fields(region, data, _UPDATABLE_FIELDS)

        countries = []
        for code in data.get("countries") or []:
            countries.append(await self._validate_country(db, code, region_id=None))
        region.countries = countries

        db.add(region)
        await db.flush()
        logger.info("Region %s created with %d countries", region.id, len(countries))
        return region

    async def update(
        self,
        db: AsyncSession,
        region_id: str,
        data: Dict[str, Any],
    ) -> Region:
        """
        Update a region. Keys absent from `data` are left unchanged; a
        `countries` list replaces the region's current countries.
        """
        region = await self.retrieve(db, region_id)

        if data.get("currency_code") is not None:
            region.currency_code = await self._validate_currency(db, data["currency_code"])
        if data.get("tax_rate") is not None:
            region.tax_rate = self._validate_tax_rate(data["tax_rate"])
        if data.get("countries") is not None:
            countries = []
            for code in data["countries"]:
                countries.append(await self._validate_country(db, code, region_id=region.id))
            region.countries = countries

        # tax_code is the only nullable field; null elsewhere means "unchanged"
        changes = {k: v for k, v in data.items() if v is not None or k == "tax_code"}
        apply_fields(region, changes, _UPDATABLE_FIELDS)
        if "metadata" in data:
            region.metadata_ = merge_metadata(region.metadata_, data["metadata"])

        await db.flush()
        logger.info("Region %s updated", region.id)
        return region

    async def delete(self, db: AsyncSession, region_id: str) -> None:
        """
        Soft-delete a region and release its countries.

        Deleting an unknown or already deleted region is a no-op so DELETE
        stays idempotent.
        """
        result = await db.execute(live(Region).where(Region.id == region_id))
        region = result.scalar_one_or_none()
        if region is None:
            return

        region.countries = []
        region.deleted_at = utc_now()
        await db.flush()
        logger.info("Region %s deleted", region_id)

    async def add_country(self, db: AsyncSession, region_id: str, code: str) -> Region:
        """
        Attach a country to a region.

        What:    Assigns the country with ISO code `code` to the region.
        Who:     POST /admin/regions/{id}/countries

        Behavior:
            - code is matched lowercase ("DK" and "dk" are the same country)
            - already in this region → region returned unchanged
            - unknown code → ValidationError (400)
            - owned by another region → DuplicateError (422)

        Raises:
            NotFoundError: region missing or deleted
        """
        region = await self.retrieve(db, region_id)
        iso_2 = code.lower()
        if region.has_country(iso_2):
            return region

        country = await self._validate_country(db, iso_2, region_id=region.id)
        region.countries.append(country)
        await db.flush()
        logger.info("Country %s added to region %s", iso_2, region.id)
        return region

    async def remove_country(self, db: AsyncSession, region_id: str, code: str) -> Region:
        """Detach a country from a region; a country not in the region is a no-op."""
        region = await self.retrieve(db, region_id)
        iso_2 = code.lower()
        if not region.has_country(iso_2):
            return region

        region.countries = [c for c in region.countries if c.iso_2 != iso_2]
        await db.flush()
        logger.info("Country %s removed from region %s", iso_2, region.id)
        return region

    # ── Validation helpers ────────────────────────────────────────────────

    async def _validate_currency(self, db: AsyncSession, code: str) -> str:
        code = code.lower()
        store = await store_service.retrieve(db)
        if not store.has_currency(code):
            raise ValidationError(
                f"Currency {code} is not added to the store",
                field="currency_code",
            )
        return code

    def _validate_tax_rate(self, tax_rate: float) -> float:
        if tax_rate < 0 or tax_rate > 100:
            raise ValidationError(
                "The tax_rate must be between 0 and 100",
                field="tax_rate",
                context={"tax_rate": tax_rate},
            )
        return tax_rate

    async def _validate_country(
        self,
        db: AsyncSession,
        code: str,
        region_id: Optional[str],
    ) -> Country:
        """
        Look up a country for assignment to `region_id`.

        Raises:
            ValidationError: no country has this ISO code
            DuplicateError: the country belongs to a different region
        """
        iso_2 = code.lower()
        result = await db.execute(select(Country).where(Country.iso_2 == iso_2))
        country = result.scalar_one_or_none()
        if country is None:
            raise ValidationError(
                f"Invalid country code: '{code}'",
                field="country_code",
            )

        if country.region_id and country.region_id != region_id:
            raise DuplicateError(
                f"{country.display_name} already exists in region {country.region_id}",
                context={"country_code": iso_2, "region_id": country.region_id},
            )
        return country


region_service = RegionService()
