"""
Storefront Backend — Customer Service
=======================================

What:  Registration, lookup and profile updates for storefront customers.
Who:   /store/customers and /store/auth routes, AuthService.

Guest vs Registered:
    A customer row with has_account=False is a guest (e.g. created by a
    checkout). Registering with that email upgrades the guest row in place;
    registering an email that already has an account is rejected.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.exceptions import DuplicateError, NotFoundError
from storefront.models import Customer
from storefront.security import hash_password
from storefront.services.common import apply_fields, live, merge_metadata
from storefront.services.user_service import validate_email

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("first_name", "last_name", "phone")


class CustomerService:
    async def create(
        self,
        db: AsyncSession,
        email: str,
        password: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        phone: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Customer:
        """
        Create a customer; with a password the customer gets an account.

        Raises:
            ValidationError: malformed email
            DuplicateError: a registered customer already uses the email
        """
        email = validate_email(email)
        result = await db.execute(live(Customer).where(Customer.email == email))
        existing = list(result.scalars().all())

        if password is not None and any(c.has_account for c in existing):
            raise DuplicateError(
                "A customer with the given email already has an account. Log in instead",
                context={"email": email},
            )

        guest = next((c for c in existing if not c.has_account), None)
        if password is not None and guest is not None:
            customer = guest
            logger.info("Upgrading guest customer %s to an account", customer.id)
        elif password is None and guest is not None:
            return guest
        else:
            customer = Customer(email=email)
            db.add(customer)

        customer.first_name = first_name
        customer.last_name = last_name
        customer.phone = phone
        customer.metadata_ = merge_metadata(customer.metadata_, metadata)
        if password is not None:
            customer.password_hash = hash_password(password)
            customer.has_account = True
        else:
            customer.has_account = False

        await db.flush()
        logger.info("Customer %s created (has_account=%s)", customer.id, customer.has_account)
        return customer

    async def retrieve(self, db: AsyncSession, customer_id: str) -> Customer:
        result = await db.execute(
            live(Customer)
            .where(Customer.id == customer_id)
            .execution_options(populate_existing=True)
        )
        customer = result.scalar_one_or_none()
        if customer is None:
            raise NotFoundError(resource="Customer", resource_id=customer_id)
        return customer

    async def retrieve_registered_by_email(self, db: AsyncSession, email: str) -> Customer:
        result = await db.execute(
            live(Customer).where(
                Customer.email == email.strip().lower(),
                Customer.has_account.is_(True),
            )
        )
        customer = result.scalar_one_or_none()
        if customer is None:
            raise NotFoundError(
                resource="Customer",
                message=f"Customer with email {email} was not found",
            )
        return customer

    async def update(self, db: AsyncSession, customer_id: str, data: Dict[str, Any]) -> Customer:
        customer = await self.retrieve(db, customer_id)

        apply_fields(customer, data, _UPDATABLE_FIELDS)
        if data.get("password") is not None:
            customer.password_hash = hash_password(data["password"])
        if "metadata" in data:
            customer.metadata_ = merge_metadata(customer.metadata_, data["metadata"])

        await db.flush()
        logger.info("Customer %s updated", customer.id)
        return customer


customer_service = CustomerService()
