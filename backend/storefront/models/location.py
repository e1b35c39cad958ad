"""
Stock location models.

A stock location is a named place inventory ships from. Its address lives
in a separate row so it can be upserted independently of the location.
"""

from typing import Any, Dict, Optional

from sqlalchemy import JSON, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.database import Base, generate_entity_id
from storefront.models.mixins import SoftDeleteMixin, TimestampMixin


class StockLocationAddress(TimestampMixin, Base):
    __tablename__ = "stock_location_addresses"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: generate_entity_id("laddr"),
    )
    address_1: Mapped[str] = mapped_column(String(255), nullable=False)
    address_2: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    company: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # Lowercase ISO 3166-1 alpha-2; validated against the countries table
    country_code: Mapped[str] = mapped_column(String(2), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    province: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    postal_code: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    metadata_: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        "metadata", JSON, nullable=True, default=None
    )


class StockLocation(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "stock_locations"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: generate_entity_id("sloc"),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        ForeignKey("stock_location_addresses.id", ondelete="SET NULL"),
        nullable=True,
    )
    metadata_: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        "metadata", JSON, nullable=True, default=None
    )

    address: Mapped[Optional[StockLocationAddress]] = relationship(
        lazy="selectin",
        cascade="save-update, merge",
    )

    def __repr__(self) -> str:
        return f"<StockLocation(id={self.id}, name='{self.name}')>"
