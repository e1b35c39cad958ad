"""
Storefront Backend — Region and Country SQLAlchemy Models
==========================================================

What:  ORM models for the `regions` and `countries` tables.
Who:   Used by RegionService, StockLocationService (address validation),
       the seed helpers and Alembic.

Table Design:
    - countries is seeded reference data (ISO 3166-1); rows are never created
      or deleted through the API, only attached to / detached from regions.
    - countries.region_id is a nullable FK: a country belongs to at most one
      region at a time. RegionService enforces that a country already owned
      by another region cannot be attached.
    - regions are soft-deleted; deleting a region releases its countries.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.database import Base, generate_entity_id
from storefront.models.mixins import SoftDeleteMixin, TimestampMixin


class Country(Base):
    """
    An ISO 3166-1 country.

    Codes are stored lowercase (`iso_2="dk"`); `name` is the upper-case
    official short name and `display_name` the human-friendly variant.
    """

    __tablename__ = "countries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    iso_2: Mapped[str] = mapped_column(String(2), nullable=False, unique=True, index=True)
    iso_3: Mapped[str] = mapped_column(String(3), nullable=False)
    num_code: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    region_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        ForeignKey("regions.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Owning region; NULL when the country is unassigned",
    )

    def __repr__(self) -> str:
        return f"<Country(iso_2='{self.iso_2}', region_id={self.region_id})>"


class Region(TimestampMixin, SoftDeleteMixin, Base):
    """
    A selling region: a set of countries sharing currency and tax settings.

    Query Patterns:
        - Admin/store listing: live regions ordered by created_at DESC
        - Retrieve: by id, countries eagerly loaded (selectin) because async
          sessions cannot lazy-load on attribute access
    """

    __tablename__ = "regions"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: generate_entity_id("reg"),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    currency_code: Mapped[str] = mapped_column(
        String(3),
        ForeignKey("currencies.code"),
        nullable=False,
    )
    # Percentage, 0–100
    tax_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    tax_code: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    includes_tax: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    gift_cards_taxable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    automatic_taxes: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    metadata_: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        "metadata", JSON, nullable=True, default=None
    )

    countries: Mapped[List[Country]] = relationship(
        lazy="selectin",
        order_by=Country.iso_2,
    )

    def has_country(self, iso_2: str) -> bool:
        return any(c.iso_2 == iso_2 for c in self.countries)

    def __repr__(self) -> str:
        return f"<Region(id={self.id}, name='{self.name}', currency='{self.currency_code}')>"
