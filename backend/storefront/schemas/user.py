"""Schemas for admin users and admin authentication."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from storefront.models.user import UserRole
from storefront.schemas.common import ListEnvelope, ORMModel, RequestModel, metadata_field


class UserResponse(ORMModel):
    """Admin user as exposed by the API (never includes the password hash)."""

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole
    api_token: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = metadata_field()
    created_at: datetime
    updated_at: datetime


class UserEnvelope(BaseModel):
    user: UserResponse


class UserListResponse(ListEnvelope):
    users: List[UserResponse]


class AdminCreateUserReq(RequestModel):
    email: str = Field(min_length=3, description="Email address; stored lower case")
    password: str = Field(min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole = UserRole.MEMBER


class AdminUpdateUserReq(RequestModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[UserRole] = None
    api_token: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class AdminResetPasswordTokenReq(RequestModel):
    email: str = Field(min_length=3)


class AdminResetPasswordReq(RequestModel):
    token: str = Field(min_length=1, description="Token from the password reset request")
    password: str = Field(min_length=1, description="The new password")
    email: Optional[str] = Field(
        default=None,
        description="Optional; when given it must match the token's user",
    )


class AdminPostAuthReq(RequestModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class AccessTokenResponse(BaseModel):
    access_token: str = Field(description="JWT to send as `Authorization: Bearer <token>`")
