"""
Customer model.

A customer row exists either as a guest (`has_account=False`, no password)
or as a registered account. Registering with a guest's email upgrades the
guest row instead of creating a second one.
"""

from typing import Any, Dict, Optional

from sqlalchemy import JSON, Boolean, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.database import Base, generate_entity_id
from storefront.models.mixins import SoftDeleteMixin, TimestampMixin


class Customer(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: generate_entity_id("cus"),
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    has_account: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    metadata_: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        "metadata", JSON, nullable=True, default=None
    )

    __table_args__ = (
        Index(
            "uq_customers_email_account_live",
            "email",
            "has_account",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, email='{self.email}', has_account={self.has_account})>"
