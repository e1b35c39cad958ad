"""GET /admin/currencies: the seeded ISO 4217 currencies."""

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.routes.deps import Pagination, admin_pagination
from storefront.schemas.store import CurrencyListResponse
from storefront.services.currency_service import currency_service

router = APIRouter(prefix="/currencies", tags=["Admin Currencies"])


@router.get("", response_model=CurrencyListResponse, summary="List currencies")
async def list_currencies(
    response: Response,
    q: str | None = Query(default=None, description="Filter by code or name"),
    page: Pagination = Depends(admin_pagination),
    db: AsyncSession = Depends(get_db_session),
) -> CurrencyListResponse:
    currencies, count = await currency_service.list(db, q=q, limit=page.limit, offset=page.offset)
    response.headers["X-Total-Count"] = str(count)
    return CurrencyListResponse(
        currencies=currencies, count=count, offset=page.offset, limit=page.limit
    )
