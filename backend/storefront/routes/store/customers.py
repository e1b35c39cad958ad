"""Customer registration and profile routes (/store/customers)."""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.models import Customer
from storefront.routes.deps import require_customer
from storefront.routes.store.auth import set_session_cookie
from storefront.schemas.common import ERROR_RESPONSES
from storefront.schemas.customer import (
    CustomerEnvelope,
    StorePostCustomersCustomerReq,
    StorePostCustomersReq,
)
from storefront.services.customer_service import customer_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["Store Customers"])


@router.post(
    "",
    response_model=CustomerEnvelope,
    responses={400: ERROR_RESPONSES[400], 422: ERROR_RESPONSES[422]},
    summary="Register a customer",
    description="Creates a customer account and logs the customer in.",
)
async def create_customer(
    body: StorePostCustomersReq,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> CustomerEnvelope:
    created = await customer_service.create(
        db,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
    )
    set_session_cookie(response, created.id)
    return CustomerEnvelope(customer=await customer_service.retrieve(db, created.id))


@router.get(
    "/me",
    response_model=CustomerEnvelope,
    responses={401: ERROR_RESPONSES[401]},
    summary="Get the logged-in customer",
)
async def get_me(customer: Customer = Depends(require_customer)) -> CustomerEnvelope:
    return CustomerEnvelope(customer=customer)


@router.post(
    "/me",
    response_model=CustomerEnvelope,
    responses={400: ERROR_RESPONSES[400], 401: ERROR_RESPONSES[401]},
    summary="Update the logged-in customer",
)
async def update_me(
    body: StorePostCustomersCustomerReq,
    customer: Customer = Depends(require_customer),
    db: AsyncSession = Depends(get_db_session),
) -> CustomerEnvelope:
    await customer_service.update(db, customer.id, body.model_dump(exclude_unset=True))
    return CustomerEnvelope(customer=await customer_service.retrieve(db, customer.id))
