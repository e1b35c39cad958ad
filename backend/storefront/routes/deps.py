"""
Storefront Backend — Route Dependencies
=========================================

What:  Authentication and pagination dependencies shared by the routers.

Admin Authentication (first match wins):
    1. x-api-key header         → user with that api_token
    2. Authorization: Bearer    → JWT issued by POST /admin/auth/token
    3. Admin session cookie     → JWT set by POST /admin/auth
    Anything else → 401.

Customer Authentication:
    authenticate_customer is optional: it resolves the customer from a
    Bearer token or the store session cookie and returns None for anonymous
    (or invalid) credentials. require_customer builds on it for routes that
    need a logged-in customer.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.exceptions import NotFoundError, UnauthorizedError
from storefront.models import Customer, User
from storefront.security import (
    ADMIN_DOMAIN,
    ADMIN_SESSION_COOKIE,
    STORE_DOMAIN,
    STORE_SESSION_COOKIE,
    decode_access_token,
)
from storefront.services.customer_service import customer_service
from storefront.services.user_service import user_service

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 1000


# ── Pagination ────────────────────────────────────────────────────────────
@dataclass
class Pagination:
    limit: int
    offset: int


def admin_pagination(
    limit: int = Query(default=50, ge=1, le=MAX_PAGE_SIZE, description="Maximum number of records"),
    offset: int = Query(default=0, ge=0, description="Number of records to skip"),
) -> Pagination:
    return Pagination(limit=limit, offset=offset)


def store_pagination(
    limit: int = Query(default=100, ge=1, le=MAX_PAGE_SIZE, description="Maximum number of records"),
    offset: int = Query(default=0, ge=0, description="Number of records to skip"),
) -> Pagination:
    return Pagination(limit=limit, offset=offset)


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


# ── Admin ─────────────────────────────────────────────────────────────────
async def require_admin_user(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
    x_api_key: Optional[str] = Header(default=None, alias="x-api-key"),
    authorization: Optional[str] = Header(default=None),
) -> User:
    """
    Resolve the authenticated admin user.

    Raises:
        UnauthorizedError: no credentials, or credentials that do not
                           resolve to a live user
    """
    if x_api_key:
        try:
            user = await user_service.retrieve_by_api_token(db, x_api_key)
        except NotFoundError:
            raise UnauthorizedError()
        request.state.actor_id = user.id
        return user

    token = _bearer_token(authorization) or request.cookies.get(ADMIN_SESSION_COOKIE)
    if not token:
        raise UnauthorizedError()

    claims = decode_access_token(token, domain=ADMIN_DOMAIN)
    # Password reset tokens carry a purpose and are not access tokens
    if "purpose" in claims:
        raise UnauthorizedError("Invalid token")

    try:
        user = await user_service.retrieve(db, claims["sub"])
    except NotFoundError:
        raise UnauthorizedError()
    request.state.actor_id = user.id
    return user


# ── Store ─────────────────────────────────────────────────────────────────
async def authenticate_customer(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
    authorization: Optional[str] = Header(default=None),
) -> Optional[Customer]:
    """Attach the logged-in customer to the request, or None when anonymous."""
    token = _bearer_token(authorization) or request.cookies.get(STORE_SESSION_COOKIE)
    customer: Optional[Customer] = None
    if token:
        try:
            claims = decode_access_token(token, domain=STORE_DOMAIN)
            customer = await customer_service.retrieve(db, claims["sub"])
        except (UnauthorizedError, NotFoundError) as e:
            logger.debug("Ignoring store credentials: %s", e.message)
            customer = None
    request.state.actor_id = customer.id if customer else None
    return customer


async def require_customer(
    customer: Optional[Customer] = Depends(authenticate_customer),
) -> Customer:
    if customer is None:
        raise UnauthorizedError()
    return customer
