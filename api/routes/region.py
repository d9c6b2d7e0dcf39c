"""
Region endpoints.

hasJournalist restricts the list to regions linked to at least one
journalist, which needs a lookup in the mediamine store.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from api.dependencies import get_core_db, get_mediamine_db
from api.params import int_array_param
from models.geography import Country, Region
from models.journalist import JournalistRegion
from schemas.reference import RegionPayload
from services.crud import get_or_raise, next_id
from services.filters import parse_flag
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Region"])


def region_item(region: Region) -> dict:
    return {
        "id": region.id,
        "name": region.name,
        "country": {"name": region.country.name} if region.country else None,
    }


@router.get("/region")
async def list_regions(
    name: Optional[str] = Query(None, description="Case-sensitive substring; an empty value matches nothing"),
    country: str = Query("", description="Country name substring"),
    code: str = Query("NZ", description="Exact country code; empty for any"),
    has_journalist: Optional[str] = Query(None, alias="hasJournalist"),
    core: AsyncSession = Depends(get_core_db),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    if name == "":
        return {"items": [], "total": 0}

    stmt = (
        select(Region)
        .join(Country, Country.id == Region.country_id)
        .where(Region.name != "")
        .options(selectinload(Region.country))
        .order_by(Region.name.asc(), Region.id.asc())
    )
    if name is not None:
        stmt = stmt.where(Region.name.contains(name, autoescape=True))
    if country:
        stmt = stmt.where(Country.name.contains(country, autoescape=True))
    if code:
        stmt = stmt.where(Country.code == code)

    if parse_flag(has_journalist):
        linked = await mediamine.execute(select(JournalistRegion.region_id).distinct())
        stmt = stmt.where(Region.id.in_(list(linked.scalars().all())))

    result = await core.execute(stmt)
    items = [region_item(region) for region in result.scalars().all()]
    return {"items": items, "total": len(items)}


@router.get("/region/batch")
async def batch_regions(
    ids: Optional[List[int]] = Depends(int_array_param("ids")),
    core: AsyncSession = Depends(get_core_db)
):
    stmt = select(Region).options(selectinload(Region.country)).order_by(Region.id.asc())
    if ids is not None:
        stmt = stmt.where(Region.id.in_(ids))

    result = await core.execute(stmt)
    items = [region_item(region) for region in result.scalars().all()]
    return {"items": items, "total": len(items)}


@router.get("/region/{region_id}")
async def get_region(region_id: int, core: AsyncSession = Depends(get_core_db)):
    region = await get_or_raise(core, Region, region_id)
    return {"region": region.to_dict()}


@router.post("/region")
async def create_region(payload: RegionPayload, core: AsyncSession = Depends(get_core_db)):
    await get_or_raise(core, Country, payload.country_id)
    region = Region(id=await next_id(core, Region), **payload.model_dump())
    core.add(region)
    await core.commit()
    logger.info(f"Created region {region.id}")
    return {"region": region.to_dict()}


@router.put("/region/{region_id}")
async def update_region(region_id: int, payload: RegionPayload, core: AsyncSession = Depends(get_core_db)):
    region = await get_or_raise(core, Region, region_id)
    await get_or_raise(core, Country, payload.country_id)
    for key, value in payload.model_dump().items():
        setattr(region, key, value)
    await core.commit()
    return {"region": region.to_dict()}


@router.delete("/region/{region_id}")
async def delete_region(region_id: int, core: AsyncSession = Depends(get_core_db)):
    region = await get_or_raise(core, Region, region_id)
    await core.execute(delete(Region).where(Region.id == region_id))
    await core.commit()
    logger.info(f"Deleted region {region_id}")
    return {"region": region.to_dict()}
