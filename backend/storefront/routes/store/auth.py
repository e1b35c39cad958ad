"""
Storefront Backend — Store Authentication Routes
==================================================

    POST   /store/auth           email + password → {customer} and a session cookie
    POST   /store/auth/token     email + password → {access_token}
    GET    /store/auth           the logged-in customer (401 when anonymous)
    DELETE /store/auth           clears the session cookie
    GET    /store/auth/{email}   {exists}: whether the email has an account
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import settings
from storefront.database import get_db_session
from storefront.exceptions import NotFoundError, UnauthorizedError
from storefront.models import Customer
from storefront.routes.deps import require_customer
from storefront.schemas.common import ERROR_RESPONSES
from storefront.schemas.customer import CustomerEnvelope, StoreGetAuthEmailRes, StorePostAuthReq
from storefront.schemas.user import AccessTokenResponse
from storefront.security import STORE_DOMAIN, STORE_SESSION_COOKIE, create_access_token
from storefront.services.auth_service import auth_service
from storefront.services.customer_service import customer_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Store Auth"])


def set_session_cookie(response: Response, customer_id: str) -> None:
    response.set_cookie(
        STORE_SESSION_COOKIE,
        create_access_token(subject=customer_id, domain=STORE_DOMAIN),
        max_age=settings.jwt_expires_in,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


@router.post(
    "",
    response_model=CustomerEnvelope,
    responses={401: ERROR_RESPONSES[401]},
    summary="Log in a customer",
)
async def create_session(
    body: StorePostAuthReq,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> CustomerEnvelope:
    result = await auth_service.authenticate_customer(db, body.email, body.password)
    if not result.success:
        raise UnauthorizedError(result.error)

    set_session_cookie(response, result.entity.id)
    logger.info("Store session created for customer %s", result.entity.id)
    return CustomerEnvelope(customer=result.entity)


@router.post(
    "/token",
    response_model=AccessTokenResponse,
    responses={401: ERROR_RESPONSES[401]},
    summary="Obtain a customer access token",
)
async def create_token(
    body: StorePostAuthReq,
    db: AsyncSession = Depends(get_db_session),
) -> AccessTokenResponse:
    result = await auth_service.authenticate_customer(db, body.email, body.password)
    if not result.success:
        raise UnauthorizedError(result.error)
    return AccessTokenResponse(
        access_token=create_access_token(subject=result.entity.id, domain=STORE_DOMAIN)
    )


@router.get(
    "",
    response_model=CustomerEnvelope,
    responses={401: ERROR_RESPONSES[401]},
    summary="Get the current customer",
)
async def get_session(customer: Customer = Depends(require_customer)) -> CustomerEnvelope:
    return CustomerEnvelope(customer=customer)


@router.delete("", summary="Log out the customer")
async def delete_session(response: Response) -> dict:
    response.delete_cookie(STORE_SESSION_COOKIE)
    return {}


@router.get(
    "/{email}",
    response_model=StoreGetAuthEmailRes,
    summary="Check if an email has an account",
)
async def email_exists(email: str, db: AsyncSession = Depends(get_db_session)) -> StoreGetAuthEmailRes:
    try:
        await customer_service.retrieve_registered_by_email(db, email)
    except NotFoundError:
        return StoreGetAuthEmailRes(exists=False)
    return StoreGetAuthEmailRes(exists=True)
