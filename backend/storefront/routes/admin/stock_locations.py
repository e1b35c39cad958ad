"""Admin CRUD for stock locations (/admin/stock-locations)."""

import logging

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.routes.deps import Pagination, admin_pagination
from storefront.schemas.common import ERROR_RESPONSES, DeleteResponse
from storefront.schemas.location import (
    AdminPostStockLocationsLocationReq,
    AdminPostStockLocationsReq,
    StockLocationEnvelope,
    StockLocationListResponse,
)
from storefront.services.stock_location_service import stock_location_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stock-locations", tags=["Admin Stock Locations"])


@router.get("", response_model=StockLocationListResponse, summary="List stock locations")
async def list_stock_locations(
    response: Response,
    q: str | None = Query(default=None, description="Filter by name"),
    page: Pagination = Depends(admin_pagination),
    db: AsyncSession = Depends(get_db_session),
) -> StockLocationListResponse:
    locations, count = await stock_location_service.list(
        db, q=q, limit=page.limit, offset=page.offset
    )
    response.headers["X-Total-Count"] = str(count)
    return StockLocationListResponse(
        stock_locations=locations, count=count, offset=page.offset, limit=page.limit
    )


@router.post(
    "",
    response_model=StockLocationEnvelope,
    responses={400: ERROR_RESPONSES[400]},
    summary="Create a stock location",
)
async def create_stock_location(
    body: AdminPostStockLocationsReq,
    db: AsyncSession = Depends(get_db_session),
) -> StockLocationEnvelope:
    location = await stock_location_service.create(
        db,
        name=body.name,
        address=body.address.model_dump(exclude_unset=True) if body.address else None,
        metadata=body.metadata,
    )
    return StockLocationEnvelope(stock_location=location)


@router.get(
    "/{location_id}",
    response_model=StockLocationEnvelope,
    responses={404: ERROR_RESPONSES[404]},
    summary="Get a stock location",
)
async def get_stock_location(
    location_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> StockLocationEnvelope:
    location = await stock_location_service.retrieve(db, location_id)
    return StockLocationEnvelope(stock_location=location)


@router.post(
    "/{location_id}",
    response_model=StockLocationEnvelope,
    responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]},
    summary="Update a stock location",
)
async def update_stock_location(
    location_id: str,
    body: AdminPostStockLocationsLocationReq,
    db: AsyncSession = Depends(get_db_session),
) -> StockLocationEnvelope:
    location = await stock_location_service.update(
        db, location_id, body.model_dump(exclude_unset=True)
    )
    return StockLocationEnvelope(stock_location=location)


@router.delete(
    "/{location_id}",
    response_model=DeleteResponse,
    summary="Delete a stock location",
)
async def delete_stock_location(
    location_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    await stock_location_service.delete(db, location_id)
    return DeleteResponse(id=location_id, object="stock_location", deleted=True)
