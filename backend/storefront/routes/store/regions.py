"""Read-only region routes for the storefront (/store/regions)."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.routes.deps import Pagination, store_pagination
from storefront.schemas.common import ERROR_RESPONSES
from storefront.schemas.region import RegionEnvelope, RegionListResponse
from storefront.services.region_service import region_service

router = APIRouter(prefix="/regions", tags=["Store Regions"])


@router.get("", response_model=RegionListResponse, summary="List regions")
async def list_regions(
    response: Response,
    page: Pagination = Depends(store_pagination),
    db: AsyncSession = Depends(get_db_session),
) -> RegionListResponse:
    regions, count = await region_service.list(db, limit=page.limit, offset=page.offset)
    response.headers["X-Total-Count"] = str(count)
    return RegionListResponse(regions=regions, count=count, offset=page.offset, limit=page.limit)


@router.get(
    "/{region_id}",
    response_model=RegionEnvelope,
    responses={404: ERROR_RESPONSES[404]},
    summary="Get a region",
)
async def get_region(region_id: str, db: AsyncSession = Depends(get_db_session)) -> RegionEnvelope:
    return RegionEnvelope(region=await region_service.retrieve(db, region_id))
