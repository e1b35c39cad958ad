"""Query and payload helpers shared by the resource services."""

from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


async def list_and_count(
    db: AsyncSession,
    query: Select,
    limit: int,
    offset: int,
) -> Tuple[List[Any], int]:
    """
    Run `query` with LIMIT/OFFSET and return the page plus the unpaginated count.

    The count is computed over the filtered query without ordering, so the
    X-Total-Count header and `count` field describe every matching row.
    """
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = (await db.execute(count_query)).scalar_one()

    result = await db.execute(query.limit(limit).offset(offset))
    return list(result.scalars().all()), total


def merge_metadata(
    current: Optional[Dict[str, Any]],
    update: Optional[Dict[str, Any]],
) -> Optional[Dict[str, Any]]:
    """
    Merge `update` into `current` metadata.

    Keys whose new value is an empty string are removed. A fresh dict is
    returned so SQLAlchemy detects the change on the JSON column.
    """
    if update is None:
        return current
    merged = dict(current or {})
    for key, value in update.items():
        if value == "":
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged


def apply_fields(entity: T, data: Dict[str, Any], fields: Tuple[str, ...]) -> T:
    """Copy the keys of `data` named in `fields` onto `entity`."""
    for field in fields:
        if field in data:
            setattr(entity, field, data[field])
    return entity


def live(model: Type[Any]) -> Select:
    """SELECT of `model` rows that are not soft-deleted."""
    return select(model).where(model.deleted_at.is_(None))
