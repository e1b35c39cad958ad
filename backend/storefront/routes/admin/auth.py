"""
Storefront Backend — Admin Authentication Routes
==================================================

What:  Admin session management.
    POST   /admin/auth        email + password → {user} and a session cookie
    POST   /admin/auth/token  email + password → {access_token} (Bearer JWT)
    GET    /admin/auth        the logged-in user
    DELETE /admin/auth        clears the session cookie
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import settings
from storefront.database import get_db_session
from storefront.exceptions import UnauthorizedError
from storefront.models import User
from storefront.routes.deps import require_admin_user
from storefront.schemas.common import ERROR_RESPONSES
from storefront.schemas.user import AccessTokenResponse, AdminPostAuthReq, UserEnvelope
from storefront.security import ADMIN_DOMAIN, ADMIN_SESSION_COOKIE, create_access_token
from storefront.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Admin Auth"])


@router.post(
    "",
    response_model=UserEnvelope,
    responses={401: ERROR_RESPONSES[401]},
    summary="Log in an admin user",
    description="Authenticates with email and password and sets the admin session cookie.",
)
async def create_session(
    body: AdminPostAuthReq,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> UserEnvelope:
    result = await auth_service.authenticate_user(db, body.email, body.password)
    if not result.success:
        raise UnauthorizedError(result.error)

    token = create_access_token(subject=result.entity.id, domain=ADMIN_DOMAIN)
    response.set_cookie(
        ADMIN_SESSION_COOKIE,
        token,
        max_age=settings.jwt_expires_in,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    logger.info("Admin session created for user %s", result.entity.id)
    return UserEnvelope(user=result.entity)


@router.post(
    "/token",
    response_model=AccessTokenResponse,
    responses={401: ERROR_RESPONSES[401]},
    summary="Obtain an admin access token",
)
async def create_token(
    body: AdminPostAuthReq,
    db: AsyncSession = Depends(get_db_session),
) -> AccessTokenResponse:
    result = await auth_service.authenticate_user(db, body.email, body.password)
    if not result.success:
        raise UnauthorizedError(result.error)
    return AccessTokenResponse(
        access_token=create_access_token(subject=result.entity.id, domain=ADMIN_DOMAIN)
    )


@router.get(
    "",
    response_model=UserEnvelope,
    responses={401: ERROR_RESPONSES[401]},
    summary="Get the current admin user",
)
async def get_session(user: User = Depends(require_admin_user)) -> UserEnvelope:
    return UserEnvelope(user=user)


@router.delete("", summary="Log out the admin user")
async def delete_session(response: Response) -> dict:
    response.delete_cookie(ADMIN_SESSION_COOKIE)
    return {}
