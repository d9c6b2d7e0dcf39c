"""
Distinct publication mediatypes
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_core_db
from api.params import int_array_param
from models.publication import PublicationMediatype

router = APIRouter(tags=["Publication"])


@router.get("/publication-media-type")
async def list_publication_media_types(
    name: Optional[str] = Query(None, description="Case-sensitive substring; an empty value matches nothing"),
    publication_ids: Optional[List[int]] = Depends(int_array_param("publicationIds")),
    core: AsyncSession = Depends(get_core_db)
):
    if name == "":
        return {"items": [], "total": 0}

    stmt = (
        select(PublicationMediatype.mediatype)
        .where(PublicationMediatype.mediatype != "")
        .distinct()
        .order_by(PublicationMediatype.mediatype.asc())
    )
    if name is not None:
        stmt = stmt.where(PublicationMediatype.mediatype.contains(name, autoescape=True))
    if publication_ids is not None:
        stmt = stmt.where(PublicationMediatype.owner_id.in_(publication_ids))

    result = await core.execute(stmt)
    items = [{"mediatype": mediatype} for mediatype in result.scalars().all()]
    return {"items": items, "total": len(items)}
