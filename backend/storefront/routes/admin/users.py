"""
Storefront Backend — Admin User Routes
========================================

Route Inventory:
    POST   /admin/users/password-token     request a reset token (public, 204)
    POST   /admin/users/reset-password     set a password with a token (public)
    GET    /admin/users                    list
    POST   /admin/users                    create
    GET    /admin/users/{id}               retrieve
    POST   /admin/users/{id}               update
    DELETE /admin/users/{id}               soft delete

`public_router` must be registered before `router` so /users/password-token
is not captured by /users/{user_id}.
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.exceptions import NotFoundError
from storefront.routes.deps import Pagination, admin_pagination
from storefront.schemas.common import ERROR_RESPONSES, DeleteResponse
from storefront.schemas.user import (
    AdminCreateUserReq,
    AdminResetPasswordReq,
    AdminResetPasswordTokenReq,
    AdminUpdateUserReq,
    UserEnvelope,
    UserListResponse,
)
from storefront.services.user_service import user_service

logger = logging.getLogger(__name__)

public_router = APIRouter(prefix="/users", tags=["Admin Users"])
router = APIRouter(prefix="/users", tags=["Admin Users"])


# ── Public: password reset ────────────────────────────────────────────────
@public_router.post(
    "/password-token",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Request a password reset token",
    description=(
        "Generates a password reset token for the user with the given email. "
        "Always answers 204 so the endpoint cannot be used to probe for accounts."
    ),
)
async def request_password_token(
    body: AdminResetPasswordTokenReq,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    try:
        user = await user_service.retrieve_by_email(db, body.email)
    except NotFoundError:
        logger.info("Password reset requested for unknown email")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    # Delivery (e-mail) is not handled here; the token is never logged
    await user_service.generate_reset_password_token(db, user.id)
    logger.info("Password reset token generated for user %s", user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@public_router.post(
    "/reset-password",
    response_model=UserEnvelope,
    responses={401: ERROR_RESPONSES[401]},
    summary="Reset a password with a reset token",
)
async def reset_password(
    body: AdminResetPasswordReq,
    db: AsyncSession = Depends(get_db_session),
) -> UserEnvelope:
    user = await user_service.reset_password(db, body.token, body.password, email=body.email)
    return UserEnvelope(user=await user_service.retrieve(db, user.id))


# ── Authenticated CRUD ────────────────────────────────────────────────────
@router.get("", response_model=UserListResponse, summary="List admin users")
async def list_users(
    response: Response,
    q: str | None = Query(default=None, description="Filter by email or name"),
    page: Pagination = Depends(admin_pagination),
    db: AsyncSession = Depends(get_db_session),
) -> UserListResponse:
    users, count = await user_service.list(db, q=q, limit=page.limit, offset=page.offset)
    response.headers["X-Total-Count"] = str(count)
    return UserListResponse(users=users, count=count, offset=page.offset, limit=page.limit)


@router.post(
    "",
    response_model=UserEnvelope,
    responses={400: ERROR_RESPONSES[400], 422: ERROR_RESPONSES[422]},
    summary="Create an admin user",
)
async def create_user(
    body: AdminCreateUserReq,
    db: AsyncSession = Depends(get_db_session),
) -> UserEnvelope:
    created = await user_service.create(
        db,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role,
    )
    return UserEnvelope(user=await user_service.retrieve(db, created.id))


@router.get(
    "/{user_id}",
    response_model=UserEnvelope,
    responses={404: ERROR_RESPONSES[404]},
    summary="Get an admin user",
)
async def get_user(user_id: str, db: AsyncSession = Depends(get_db_session)) -> UserEnvelope:
    return UserEnvelope(user=await user_service.retrieve(db, user_id))


@router.post(
    "/{user_id}",
    response_model=UserEnvelope,
    responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]},
    summary="Update an admin user",
)
async def update_user(
    user_id: str,
    body: AdminUpdateUserReq,
    db: AsyncSession = Depends(get_db_session),
) -> UserEnvelope:
    await user_service.update(db, user_id, body.model_dump(exclude_unset=True))
    return UserEnvelope(user=await user_service.retrieve(db, user_id))


@router.delete("/{user_id}", response_model=DeleteResponse, summary="Delete an admin user")
async def delete_user(user_id: str, db: AsyncSession = Depends(get_db_session)) -> DeleteResponse:
    await user_service.delete(db, user_id)
    return DeleteResponse(id=user_id, object="user", deleted=True)
