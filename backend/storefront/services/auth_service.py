"""
Storefront Backend — Authentication Service
=============================================

What:  Verifies email/password credentials for admin users and customers.
How:   Returns an AuthenticateResult instead of raising, so callers decide
       how to respond; the failure message never reveals whether the email
       or the password was wrong.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.exceptions import NotFoundError
from storefront.models import Customer, User
from storefront.security import verify_password
from storefront.services.customer_service import customer_service
from storefront.services.user_service import user_service

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Wrong email or password"


@dataclass
class AuthenticateResult:
    success: bool
    entity: Optional[Union[User, Customer]] = None
    error: Optional[str] = None


class AuthService:
    async def authenticate_user(
        self,
        db: AsyncSession,
        email: str,
        password: str,
    ) -> AuthenticateResult:
        try:
            user = await user_service.retrieve_by_email(db, email)
        except NotFoundError:
            logger.info("Admin login failed: unknown email")
            return AuthenticateResult(success=False, error=INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash):
            logger.info("Admin login failed for user %s", user.id)
            return AuthenticateResult(success=False, error=INVALID_CREDENTIALS)

        return AuthenticateResult(success=True, entity=user)

    async def authenticate_customer(
        self,
        db: AsyncSession,
        email: str,
        password: str,
    ) -> AuthenticateResult:
        try:
            customer = await customer_service.retrieve_registered_by_email(db, email)
        except NotFoundError:
            logger.info("Customer login failed: unknown email")
            return AuthenticateResult(success=False, error=INVALID_CREDENTIALS)

        if not verify_password(password, customer.password_hash):
            logger.info("Customer login failed for customer %s", customer.id)
            return AuthenticateResult(success=False, error=INVALID_CREDENTIALS)

        return AuthenticateResult(success=True, entity=customer)


auth_service = AuthService()
