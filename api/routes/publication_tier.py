"""
Tier tags
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_core_db
from models.tag import Tag, TIER_NAMES

router = APIRouter(tags=["Publication"])


@router.get("/publication-tier")
async def list_publication_tiers(
    name: Optional[str] = Query(None, description="Case-sensitive substring; an empty value matches nothing"),
    core: AsyncSession = Depends(get_core_db)
):
    """Tags whose name is one of the five tier names"""
    if name == "":
        return {"items": [], "total": 0}

    stmt = select(Tag).where(Tag.name.in_(TIER_NAMES)).order_by(Tag.name.asc(), Tag.id.asc())
    if name is not None:
        stmt = stmt.where(Tag.name.contains(name, autoescape=True))

    result = await core.execute(stmt)
    items = [tag.to_dict() for tag in result.scalars().all()]
    return {"items": items, "total": len(items)}
