"""
Storefront Backend — Store SQLAlchemy Model
=============================================

What:  The single `stores` row holding shop-wide settings.
How:   StoreService.ensure_default_store() creates it on boot; the API only
       reads and updates it.

Table Design:
    - store_currencies: many-to-many between the store and seeded currencies
    - default_currency_code must always be one of the store currencies
      (enforced by StoreService, not by the schema)
    - default_location_id points at a stock location used as the default
      inventory source
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.database import Base, generate_entity_id
from storefront.models.currency import Currency
from storefront.models.mixins import TimestampMixin

store_currencies = Table(
    "store_currencies",
    Base.metadata,
    Column("store_id", String(64), ForeignKey("stores.id", ondelete="CASCADE"), primary_key=True),
    Column("currency_code", String(3), ForeignKey("currencies.code", ondelete="CASCADE"), primary_key=True),
)


class Store(TimestampMixin, Base):
    __tablename__ = "stores"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: generate_entity_id("store"),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="Storefront")
    default_currency_code: Mapped[str] = mapped_column(
        String(3),
        ForeignKey("currencies.code"),
        nullable=False,
        default="usd",
    )
    swap_link_template: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    payment_link_template: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    invite_link_template: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    default_location_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        ForeignKey("stock_locations.id", ondelete="SET NULL"),
        nullable=True,
    )
    metadata_: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        "metadata", JSON, nullable=True, default=None
    )

    currencies: Mapped[List[Currency]] = relationship(
        secondary=store_currencies,
        lazy="selectin",
        order_by=Currency.code,
    )
    default_currency: Mapped[Currency] = relationship(
        lazy="selectin",
        foreign_keys=[default_currency_code],
    )

    def has_currency(self, code: str) -> bool:
        return any(c.code == code for c in self.currencies)

    def __repr__(self) -> str:
        return f"<Store(id={self.id}, name='{self.name}')>"
