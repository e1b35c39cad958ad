"""
Storefront Backend — Region Service Tests
===========================================

What:  RegionService business rules against a real (SQLite) session.

What we test:
    - create validates currency, tax rate and countries
    - add_country: lowercase matching, idempotence, ownership conflicts
    - remove_country: detaches, no-op when absent
    - update replaces the country set
    - delete releases countries and is idempotent
"""

import pytest

from storefront.exceptions import DuplicateError, NotFoundError, ValidationError
from storefront.services.region_service import region_service


def region_data(**overrides):
    data = {
        "name": "Scandinavia",
        "currency_code": "usd",
        "tax_rate": 25,
        "countries": [],
    }
    data.update(overrides)
    return data


class TestRegionCreate:
    @pytest.mark.asyncio
    async def test_create_with_countries(self, db_session):
        region = await region_service.create(db_session, region_data(countries=["DK", "se"]))
        fetched = await region_service.retrieve(db_session, region.id)

        assert fetched.id.startswith("reg_")
        assert [c.iso_2 for c in fetched.countries] == ["dk", "se"]
        assert all(c.region_id == region.id for c in fetched.countries)

    @pytest.mark.asyncio
    async def test_currency_must_belong_to_store(self, db_session):
        with pytest.raises(ValidationError, match="not added to the store"):
            await region_service.create(db_session, region_data(currency_code="eur"))

    @pytest.mark.asyncio
    async def test_tax_rate_out_of_range(self, db_session):
        with pytest.raises(ValidationError, match="tax_rate"):
            await region_service.create(db_session, region_data(tax_rate=101))

    @pytest.mark.asyncio
    async def test_unknown_country_rejected(self, db_session):
        with pytest.raises(ValidationError, match="Invalid country code"):
            await region_service.create(db_session, region_data(countries=["xx"]))


class TestAddCountry:
    @pytest.mark.asyncio
    async def test_add_country_normalizes_code(self, db_session):
        region = await region_service.create(db_session, region_data())

        await region_service.add_country(db_session, region.id, "DK")
        fetched = await region_service.retrieve(db_session, region.id)

        assert [c.iso_2 for c in fetched.countries] == ["dk"]

    @pytest.mark.asyncio
    async def test_add_existing_country_is_noop(self, db_session):
        region = await region_service.create(db_session, region_data(countries=["dk"]))

        await region_service.add_country(db_session, region.id, "dk")
        fetched = await region_service.retrieve(db_session, region.id)

        assert [c.iso_2 for c in fetched.countries] == ["dk"]

    @pytest.mark.asyncio
    async def test_country_in_other_region_is_duplicate(self, db_session):
        first = await region_service.create(db_session, region_data(countries=["dk"]))
        second = await region_service.create(db_session, region_data(name="Nordics"))

        with pytest.raises(DuplicateError) as exc_info:
            await region_service.add_country(db_session, second.id, "dk")

        assert exc_info.value.message == f"Denmark already exists in region {first.id}"
        assert exc_info.value.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_country_code(self, db_session):
        region = await region_service.create(db_session, region_data())
        with pytest.raises(ValidationError):
            await region_service.add_country(db_session, region.id, "zz")

    @pytest.mark.asyncio
    async def test_unknown_region(self, db_session):
        with pytest.raises(NotFoundError):
            await region_service.add_country(db_session, "reg_missing", "dk")


class TestRemoveCountry:
    @pytest.mark.asyncio
    async def test_remove_country(self, db_session):
        region = await region_service.create(db_session, region_data(countries=["dk", "se"]))

        await region_service.remove_country(db_session, region.id, "SE")
        fetched = await region_service.retrieve(db_session, region.id)

        assert [c.iso_2 for c in fetched.countries] == ["dk"]

    @pytest.mark.asyncio
    async def test_remove_absent_country_is_noop(self, db_session):
        region = await region_service.create(db_session, region_data(countries=["dk"]))

        await region_service.remove_country(db_session, region.id, "de")
        fetched = await region_service.retrieve(db_session, region.id)

        assert [c.iso_2 for c in fetched.countries] == ["dk"]

    @pytest.mark.asyncio
    async def test_removed_country_can_join_another_region(self, db_session):
        first = await region_service.create(db_session, region_data(countries=["dk"]))
        second = await region_service.create(db_session, region_data(name="Nordics"))

        await region_service.remove_country(db_session, first.id, "dk")
        await region_service.add_country(db_session, second.id, "dk")
        fetched = await region_service.retrieve(db_session, second.id)

        assert [c.iso_2 for c in fetched.countries] == ["dk"]


class TestUpdateAndDelete:
    @pytest.mark.asyncio
    async def test_update_replaces_countries(self, db_session):
        region = await region_service.create(db_session, region_data(countries=["dk", "se"]))

        await region_service.update(db_session, region.id, {"countries": ["de"], "name": "DACH"})
        fetched = await region_service.retrieve(db_session, region.id)

        assert fetched.name == "DACH"
        assert [c.iso_2 for c in fetched.countries] == ["de"]

    @pytest.mark.asyncio
    async def test_delete_releases_countries(self, db_session):
        region = await region_service.create(db_session, region_data(countries=["dk"]))

        await region_service.delete(db_session, region.id)

        with pytest.raises(NotFoundError):
            await region_service.retrieve(db_session, region.id)
        other = await region_service.create(db_session, region_data(name="Other", countries=["dk"]))
        fetched = await region_service.retrieve(db_session, other.id)
        assert [c.iso_2 for c in fetched.countries] == ["dk"]

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, db_session):
        await region_service.delete(db_session, "reg_does_not_exist")

    @pytest.mark.asyncio
    async def test_list_excludes_deleted(self, db_session):
        keep = await region_service.create(db_session, region_data(name="Keep"))
        gone = await region_service.create(db_session, region_data(name="Gone"))
        await region_service.delete(db_session, gone.id)

        regions, count = await region_service.list(db_session)

        assert count == 1
        assert [r.id for r in regions] == [keep.id]
