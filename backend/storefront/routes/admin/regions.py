"""
Storefront Backend — Admin Region Routes
==========================================

What:  CRUD for regions plus country membership.
How:   Thin handlers: validate the body (pydantic), call RegionService, then
       re-read the region so the response reflects the committed shape.

Route Inventory:
    GET    /admin/regions                                  list
    POST   /admin/regions                                  create
    GET    /admin/regions/{id}                             retrieve
    POST   /admin/regions/{id}                             update
    DELETE /admin/regions/{id}                             soft delete
    POST   /admin/regions/{id}/countries                   add a country
    DELETE /admin/regions/{id}/countries/{country_code}    remove a country
"""

import logging

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.routes.deps import Pagination, admin_pagination
from storefront.schemas.common import ERROR_RESPONSES, DeleteResponse, ErrorResponse
from storefront.schemas.region import (
    AdminPostRegionsRegionCountriesReq,
    AdminPostRegionsRegionReq,
    AdminPostRegionsReq,
    RegionEnvelope,
    RegionListResponse,
)
from storefront.services.region_service import region_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/regions", tags=["Admin Regions"])


@router.get(
    "",
    response_model=RegionListResponse,
    summary="List regions",
    description="Live regions, newest first. The total count is also returned in X-Total-Count.",
)
async def list_regions(
    response: Response,
    q: str | None = Query(default=None, description="Filter by region name"),
    page: Pagination = Depends(admin_pagination),
    db: AsyncSession = Depends(get_db_session),
) -> RegionListResponse:
    regions, count = await region_service.list(db, q=q, limit=page.limit, offset=page.offset)
    response.headers["X-Total-Count"] = str(count)
    return RegionListResponse(regions=regions, count=count, offset=page.offset, limit=page.limit)


@router.post(
    "",
    response_model=RegionEnvelope,
    responses={400: ERROR_RESPONSES[400], 422: ERROR_RESPONSES[422]},
    summary="Create a region",
)
async def create_region(
    body: AdminPostRegionsReq,
    db: AsyncSession = Depends(get_db_session),
) -> RegionEnvelope:
    created = await region_service.create(db, body.model_dump())
    region = await region_service.retrieve(db, created.id)
    return RegionEnvelope(region=region)


@router.get(
    "/{region_id}",
    response_model=RegionEnvelope,
    responses={404: ERROR_RESPONSES[404]},
    summary="Get a region",
)
async def get_region(
    region_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> RegionEnvelope:
    region = await region_service.retrieve(db, region_id)
    return RegionEnvelope(region=region)


@router.post(
    "/{region_id}",
    response_model=RegionEnvelope,
    responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404], 422: ERROR_RESPONSES[422]},
    summary="Update a region",
)
async def update_region(
    region_id: str,
    body: AdminPostRegionsRegionReq,
    db: AsyncSession = Depends(get_db_session),
) -> RegionEnvelope:
    await region_service.update(db, region_id, body.model_dump(exclude_unset=True))
    region = await region_service.retrieve(db, region_id)
    return RegionEnvelope(region=region)


@router.delete(
    "/{region_id}",
    response_model=DeleteResponse,
    summary="Delete a region",
    description="Soft-deletes the region and releases its countries. Idempotent.",
)
async def delete_region(
    region_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    await region_service.delete(db, region_id)
    return DeleteResponse(id=region_id, object="region", deleted=True)


@router.post(
    "/{region_id}/countries",
    response_model=RegionEnvelope,
    responses={
        400: ERROR_RESPONSES[400],
        404: ERROR_RESPONSES[404],
        422: {"description": "Country already belongs to another region", "model": ErrorResponse},
    },
    summary="Add a country to a region",
    description=(
        "Adds the country with the given ISO 3166-1 alpha-2 code to the region. "
        "A country already in the region is a no-op; a country in another region is rejected."
    ),
)
async def add_country(
    region_id: str,
    body: AdminPostRegionsRegionCountriesReq,
    db: AsyncSession = Depends(get_db_session),
) -> RegionEnvelope:
    await region_service.add_country(db, region_id, body.country_code)
    region = await region_service.retrieve(db, region_id)
    return RegionEnvelope(region=region)


@router.delete(
    "/{region_id}/countries/{country_code}",
    response_model=RegionEnvelope,
    responses={404: ERROR_RESPONSES[404]},
    summary="Remove a country from a region",
)
async def remove_country(
    region_id: str,
    country_code: str,
    db: AsyncSession = Depends(get_db_session),
) -> RegionEnvelope:
    await region_service.remove_country(db, region_id, country_code)
    region = await region_service.retrieve(db, region_id)
    return RegionEnvelope(region=region)
