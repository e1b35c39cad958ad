"""
Storefront Backend — User Service
===================================

What:  Admin user accounts: CRUD, password management and password reset
       tokens.
Who:   /admin/users and /admin/auth routes, AuthService, the admin
       authentication dependency (API token lookup).

Password Reset Flow:
    1. generate_reset_password_token(user_id) issues a short-lived JWT
       signed with the user's *current password hash*
    2. The token is delivered out of band (the route only logs the request)
    3. reset_password(token, password) verifies the token against the same
       hash and stores the new password
    Because the new password changes the hash, a token works at most once.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import settings
from storefront.exceptions import (
    DuplicateError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from storefront.models import User, UserRole
from storefront.models.mixins import utc_now
from storefront.security import (
    ADMIN_DOMAIN,
    create_access_token,
    decode_access_token,
    hash_password,
    read_unverified_claims,
)
from storefront.services.common import apply_fields, list_and_count, live, merge_metadata

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

RESET_PASSWORD_PURPOSE = "reset_password"

_UPDATABLE_FIELDS = ("first_name", "last_name", "role", "api_token")


def validate_email(email: str) -> str:
    """Normalize an email address to lowercase, raising ValidationError if malformed."""
    normalized = email.strip().lower()
    if not EMAIL_PATTERN.match(normalized):
        raise ValidationError(f"The email is not valid: '{email}'", field="email")
    return normalized


class UserService:
    async def list(
        self,
        db: AsyncSession,
        q: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[User], int]:
        query = live(User).order_by(User.created_at.desc(), User.id)
        if q:
            pattern = f"%{q}%"
            query = query.where(
                or_(
                    User.email.ilike(pattern),
                    User.first_name.ilike(pattern),
                    User.last_name.ilike(pattern),
                )
            )
        return await list_and_count(db, query, limit, offset)

    async def retrieve(self, db: AsyncSession, user_id: str) -> User:
        result = await db.execute(
            live(User).where(User.id == user_id).execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError(resource="User", resource_id=user_id)
        return user

    async def retrieve_by_email(self, db: AsyncSession, email: str) -> User:
        result = await db.execute(live(User).where(User.email == email.strip().lower()))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError(
                resource="User",
                message=f"User with email: {email} was not found",
            )
        return user

    async def retrieve_by_api_token(self, db: AsyncSession, api_token: str) -> User:
        result = await db.execute(live(User).where(User.api_token == api_token))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError(resource="User", message="User with api token was not found")
        return user

    async def create(
        self,
        db: AsyncSession,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        role: UserRole = UserRole.MEMBER,
        api_token: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> User:
        """
        Create an admin user.

        Raises:
            ValidationError: malformed email
            DuplicateError: a live user already uses the email or api token
        """
        email = validate_email(email)
        result = await db.execute(live(User).where(User.email == email))
        if result.scalar_one_or_none() is not None:
            raise DuplicateError(
                "A user with the same email already exists",
                context={"email": email},
            )
        if api_token:
            await self._ensure_api_token_free(db, api_token)

        user = User(
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=role,
            api_token=api_token,
            password_hash=hash_password(password),
            metadata_=metadata,
        )
        db.add(user)
        await db.flush()
        logger.info("User %s created (role=%s)", user.id, user.role.value)
        return user

    async def update(self, db: AsyncSession, user_id: str, data: Dict[str, Any]) -> User:
        """
        Update profile fields.

        Raises:
            ValidationError: `email` or `password` present in `data`; they
                             change through dedicated flows only
            DuplicateError: another live user already has `api_token`
        """
        if "email" in data:
            raise ValidationError("You are not allowed to update email", field="email")
        if "password" in data or "password_hash" in data:
            raise ValidationError(
                "Use dedicated methods, `set_password`, `reset_password` for password operations",
                field="password",
            )

        user = await self.retrieve(db, user_id)
        if data.get("api_token"):
            await self._ensure_api_token_free(db, data["api_token"], exclude_id=user.id)
        changes = {k: v for k, v in data.items() if v is not None or k != "role"}
        apply_fields(user, changes, _UPDATABLE_FIELDS)
        if "metadata" in data:
            user.metadata_ = merge_metadata(user.metadata_, data["metadata"])

        await db.flush()
        logger.info("User %s updated", user.id)
        return user

    async def delete(self, db: AsyncSession, user_id: str) -> None:
        """Soft-delete a user. Unknown or already deleted ids are a no-op."""
        user = await db.get(User, user_id)
        if user is None or user.is_deleted:
            return
        user.deleted_at = utc_now()
        user.api_token = None
        await db.flush()
        logger.info("User %s deleted", user_id)

    async def set_password(self, db: AsyncSession, user_id: str, password: str) -> User:
        user = await self.retrieve(db, user_id)
        user.password_hash = hash_password(password)
        await db.flush()
        logger.info("Password updated for user %s", user.id)
        return user

    async def generate_reset_password_token(self, db: AsyncSession, user_id: str) -> str:
        """Issue a password reset JWT valid for `settings.reset_token_expires_in` seconds."""
        user = await self.retrieve(db, user_id)
        return create_access_token(
            subject=user.id,
            domain=ADMIN_DOMAIN,
            expires_in=settings.reset_token_expires_in,
            secret=self._reset_secret(user),
            extra_claims={"email": user.email, "purpose": RESET_PASSWORD_PURPOSE},
        )

    async def reset_password(
        self,
        db: AsyncSession,
        token: str,
        password: str,
        email: Optional[str] = None,
    ) -> User:
        """
        Set a new password using a reset token.

        Raises:
            UnauthorizedError: token malformed, expired, already used, issued
                               for another purpose, or `email` does not match
                               the token's user
        """
        claims = read_unverified_claims(token)
        user_id = claims.get("sub")
        if not user_id:
            raise UnauthorizedError("Invalid token")

        try:
            user = await self.retrieve(db, user_id)
        except NotFoundError:
            raise UnauthorizedError("Invalid token")

        verified = decode_access_token(token, domain=ADMIN_DOMAIN, secret=self._reset_secret(user))
        if verified.get("purpose") != RESET_PASSWORD_PURPOSE:
            raise UnauthorizedError("Invalid token")
        if email is not None and email.strip().lower() != user.email:
            raise UnauthorizedError("Invalid token")

        return await self.set_password(db, user.id, password)

    def _reset_secret(self, user: User) -> str:
        return user.password_hash or settings.jwt_secret

    async def _ensure_api_token_free(
        self, db: AsyncSession, api_token: str, exclude_id: Optional[str] = None
    ) -> None:
        query = live(User).where(User.api_token == api_token)
        if exclude_id:
            query = query.where(User.id != exclude_id)
        result = await db.execute(query)
        if result.first() is not None:
            raise DuplicateError(
                "A user with the same api token already exists", context={"field": "api_token"}
            )


user_service = UserService()
