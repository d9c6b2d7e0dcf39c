"""
Saved journalist selections.

A selection is a hand-picked list of journalist uuids kept in the search
column. Only the owner sees or changes it.
"""

import uuid
from fastapi import APIRouter, Depends
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_current_user, get_mediamine_db
from models.saved import JournalistSelect
from models.user import AppUser
from schemas.journalist import JournalistSelectCreate, JournalistSelectUpdate
from services.crud import get_or_raise
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Journalist Select"])


@router.get("/journalist-select")
async def list_selections(
    user: AppUser = Depends(get_current_user),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    result = await mediamine.execute(
        select(JournalistSelect)
        .where(JournalistSelect.user_id == user.id)
        .order_by(JournalistSelect.name.asc(), JournalistSelect.id.asc())
    )
    items = [selection.to_dict() for selection in result.scalars().all()]
    return {"items": items, "total": len(items)}


@router.get("/journalist-select/{select_uuid}")
async def get_selection(
    select_uuid: str,
    user: AppUser = Depends(get_current_user),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    selection = await get_or_raise(mediamine, JournalistSelect, select_uuid, column="uuid", user_id=user.id)
    return {"journalist_select": selection.to_dict()}


@router.post("/journalist-select")
async def create_selection(
    payload: JournalistSelectCreate,
    user: AppUser = Depends(get_current_user),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    # Placeholder name and description until the client renames it
    selection = JournalistSelect(
        uuid=str(uuid.uuid4()),
        name=str(uuid.uuid4()),
        description=str(uuid.uuid4()),
        user_id=user.id,
        search=list(payload.ids),
    )
    mediamine.add(selection)
    await mediamine.commit()
    await mediamine.refresh(selection)
    logger.info(f"Saved selection of {len(payload.ids)} journalists for {user.username}")
    return {"journalist_select": selection.to_dict()}


@router.put("/journalist-select/{select_uuid}")
async def update_selection(
    select_uuid: str,
    payload: JournalistSelectUpdate,
    user: AppUser = Depends(get_current_user),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    selection = await get_or_raise(mediamine, JournalistSelect, select_uuid, column="uuid", user_id=user.id)
    selection.name = payload.name
    selection.description = payload.description
    selection.search = payload.search
    await mediamine.commit()
    await mediamine.refresh(selection)
    return {"journalist_select": selection.to_dict()}


@router.delete("/journalist-select/{select_uuid}")
async def delete_selection(
    select_uuid: str,
    user: AppUser = Depends(get_current_user),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    selection = await get_or_raise(mediamine, JournalistSelect, select_uuid, column="uuid", user_id=user.id)
    await mediamine.execute(delete(JournalistSelect).where(JournalistSelect.id == selection.id))
    await mediamine.commit()
    logger.info(f"Deleted selection {select_uuid}")
    return {"journalist_select": selection.to_dict()}
