"""
Saved journalist searches, scoped to the calling user
"""

import uuid
from fastapi import APIRouter, Depends
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_current_user, get_mediamine_db
from models.saved import JournalistSearch
from models.user import AppUser
from schemas.journalist import JournalistSearchPayload
from services.crud import get_or_raise
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Journalist Search"])


@router.get("/journalist-search")
async def list_searches(
    user: AppUser = Depends(get_current_user),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    result = await mediamine.execute(
        select(JournalistSearch)
        .where(JournalistSearch.user_id == user.id)
        .order_by(JournalistSearch.name.asc(), JournalistSearch.id.asc())
    )
    items = [search.to_dict() for search in result.scalars().all()]
    return {"items": items, "total": len(items)}


@router.get("/journalist-search/{search_uuid}")
async def get_search(
    search_uuid: str,
    user: AppUser = Depends(get_current_user),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    search = await get_or_raise(mediamine, JournalistSearch, search_uuid, column="uuid", user_id=user.id)
    return {"journalist_search": search.to_dict()}


@router.post("/journalist-search")
async def create_search(
    payload: JournalistSearchPayload,
    user: AppUser = Depends(get_current_user),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    search = JournalistSearch(uuid=str(uuid.uuid4()), user_id=user.id, **payload.model_dump())
    mediamine.add(search)
    await mediamine.commit()
    await mediamine.refresh(search)
    logger.info(f"Saved journalist search {search.uuid} for {user.username}")
    return {"journalist_search": search.to_dict()}


@router.put("/journalist-search/{search_uuid}")
async def update_search(
    search_uuid: str,
    payload: JournalistSearchPayload,
    user: AppUser = Depends(get_current_user),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    search = await get_or_raise(mediamine, JournalistSearch, search_uuid, column="uuid", user_id=user.id)
    for key, value in payload.model_dump().items():
        setattr(search, key, value)
    await mediamine.commit()
    await mediamine.refresh(search)
    return {"journalist_search": search.to_dict()}


@router.delete("/journalist-search/{search_uuid}")
async def delete_search(
    search_uuid: str,
    user: AppUser = Depends(get_current_user),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    search = await get_or_raise(mediamine, JournalistSearch, search_uuid, column="uuid", user_id=user.id)
    await mediamine.execute(delete(JournalistSearch).where(JournalistSearch.id == search.id))
    await mediamine.commit()
    logger.info(f"Deleted journalist search {search_uuid}")
    return {"journalist_search": search.to_dict()}
