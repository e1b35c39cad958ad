"""
Shared column groups for Storefront models.

Every mutable resource carries UTC `created_at` / `updated_at`; resources
that can be removed through the API are soft-deleted through `deleted_at`.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        comment="When the row was created (UTC)",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
        comment="When the row was last modified (UTC)",
    )


class SoftDeleteMixin:
    # NULL means live; services filter on this column instead of deleting rows
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="Soft-delete marker (UTC); NULL for live rows",
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
