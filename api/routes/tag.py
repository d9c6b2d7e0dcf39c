"""
Tag endpoints
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_core_db
from models.tag import Tag, TagTag
from schemas.reference import TagPayload
from services.crud import get_or_raise, next_id
from services.filters import NAME_ASC, TAG_SORT_FIELDS, order_by, paginate, parse_sort
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Tag"])


@router.get("/tag")
async def list_tags(
    marker: str = Query("0"),
    limit: str = Query("100"),
    sort: Optional[str] = Query(None, description="field:direction"),
    name: str = Query("", description="Case-sensitive substring"),
    core: AsyncSession = Depends(get_core_db)
):
    sort_spec = parse_sort(sort, TAG_SORT_FIELDS, NAME_ASC)
    stmt = select(Tag).order_by(*order_by(Tag, sort_spec, "id"))
    if name:
        stmt = stmt.where(Tag.name.contains(name, autoescape=True))

    result = await core.execute(stmt)
    tags = [tag.to_dict() for tag in result.scalars().all()]
    return {
        "items": paginate(tags, marker, limit),
        "marker": marker,
        "limit": limit,
        "total": len(tags),
    }


@router.get("/tag/related/{tag_id}")
async def related_tags(tag_id: int, core: AsyncSession = Depends(get_core_db)):
    result = await core.execute(
        select(TagTag).where(TagTag.tag_id == tag_id).order_by(TagTag.related_tag_id)
    )
    items = [row.to_dict() for row in result.scalars().all()]
    return {"items": items, "total": len(items)}


@router.get("/tag/{tag_id}")
async def get_tag(tag_id: int, core: AsyncSession = Depends(get_core_db)):
    tag = await get_or_raise(core, Tag, tag_id)
    return {"tag": tag.to_dict()}


@router.post("/tag")
async def create_tag(payload: TagPayload, core: AsyncSession = Depends(get_core_db)):
    tag = Tag(id=await next_id(core, Tag), name=payload.name)
    core.add(tag)
    await core.commit()
    logger.info(f"Created tag {tag.id}")
    return {"tag": tag.to_dict()}


@router.put("/tag/{tag_id}")
async def update_tag(tag_id: int, payload: TagPayload, core: AsyncSession = Depends(get_core_db)):
    tag = await get_or_raise(core, Tag, tag_id)
    tag.name = payload.name
    await core.commit()
    return {"tag": tag.to_dict()}


@router.delete("/tag/{tag_id}")
async def delete_tag(tag_id: int, core: AsyncSession = Depends(get_core_db)):
    """Removes related-tag pairs in either direction, then the tag"""
    tag = await get_or_raise(core, Tag, tag_id)
    await core.execute(
        delete(TagTag).where(or_(TagTag.tag_id == tag_id, TagTag.related_tag_id == tag_id))
    )
    await core.execute(delete(Tag).where(Tag.id == tag_id))
    await core.commit()
    logger.info(f"Deleted tag {tag_id}")
    return {"tag": tag.to_dict()}
