"""Admin routes for the store record and its currencies."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.schemas.common import ERROR_RESPONSES
from storefront.schemas.store import AdminPostStoreReq, StoreEnvelope
from storefront.services.store_service import store_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/store", tags=["Admin Store"])


@router.get("", response_model=StoreEnvelope, summary="Get the store")
async def get_store(db: AsyncSession = Depends(get_db_session)) -> StoreEnvelope:
    store = await store_service.retrieve(db)
    return StoreEnvelope(store=store)


@router.post(
    "",
    response_model=StoreEnvelope,
    responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]},
    summary="Update the store",
)
async def update_store(
    body: AdminPostStoreReq,
    db: AsyncSession = Depends(get_db_session),
) -> StoreEnvelope:
    store = await store_service.update(db, body.model_dump(exclude_unset=True))
    return StoreEnvelope(store=store)


@router.post(
    "/currencies/{code}",
    response_model=StoreEnvelope,
    responses={404: ERROR_RESPONSES[404], 422: ERROR_RESPONSES[422]},
    summary="Add a currency to the store",
)
async def add_currency(code: str, db: AsyncSession = Depends(get_db_session)) -> StoreEnvelope:
    store = await store_service.add_currency(db, code)
    return StoreEnvelope(store=store)


@router.delete(
    "/currencies/{code}",
    response_model=StoreEnvelope,
    responses={400: ERROR_RESPONSES[400]},
    summary="Remove a currency from the store",
)
async def remove_currency(code: str, db: AsyncSession = Depends(get_db_session)) -> StoreEnvelope:
    store = await store_service.remove_currency(db, code)
    return StoreEnvelope(store=store)
