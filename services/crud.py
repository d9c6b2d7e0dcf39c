"""
Shared lookups for the CRUD routers.

Core-store entities get their id as "current max id + 1"; mediamine entities
are addressed by uuid. A lookup that matches nothing raises
ResourceNotFoundError, which the API reports as a 500.
"""

from typing import Any, Optional
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from core.exceptions import ResourceNotFoundError


async def get_or_raise(session: AsyncSession, model, lookup: Any, *, column: str = "id", **filters):
    stmt = select(model).where(getattr(model, column) == lookup)
    for name, value in filters.items():
        stmt = stmt.where(getattr(model, name) == value)

    result = await session.execute(stmt)
    instance = result.scalars().first()
    if instance is None:
        raise ResourceNotFoundError(
            f"No {model.__tablename__} found for {lookup}",
            context={"entity": model.__tablename__, "lookup": lookup}
        )
    return instance


async def next_id(session: AsyncSession, model) -> int:
    result = await session.execute(select(func.coalesce(func.max(model.id), 0)))
    return int(result.scalar() or 0) + 1


def row_or_none(instance) -> Optional[dict]:
    return instance.to_dict() if instance is not None else None
