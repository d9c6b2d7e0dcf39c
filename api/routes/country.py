"""
Country endpoints
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_core_db
from models.geography import Country
from schemas.reference import CountryPayload
from services.crud import get_or_raise, next_id
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Country"])

COUNTRY_LIST_COLUMNS = ("id", "name", "code")


@router.get("/country")
async def list_countries(
    name: Optional[str] = Query(None, description="Case-sensitive substring; an empty value matches nothing"),
    core: AsyncSession = Depends(get_core_db)
):
    """Enabled countries ordered by name"""
    if name == "":
        return {"items": [], "total": 0}

    stmt = (
        select(Country)
        .where(Country.enabled.is_(True), Country.name != "")
        .order_by(Country.name.asc())
    )
    if name is not None:
        stmt = stmt.where(Country.name.contains(name, autoescape=True))

    result = await core.execute(stmt)
    items = [country.to_dict(COUNTRY_LIST_COLUMNS) for country in result.scalars().all()]
    return {"items": items, "total": len(items)}


@router.get("/country/{country_id}")
async def get_country(country_id: int, core: AsyncSession = Depends(get_core_db)):
    country = await get_or_raise(core, Country, country_id)
    return {"country": country.to_dict()}


@router.post("/country")
async def create_country(payload: CountryPayload, core: AsyncSession = Depends(get_core_db)):
    country = Country(id=await next_id(core, Country), **payload.model_dump())
    core.add(country)
    await core.commit()
    logger.info(f"Created country {country.id}")
    return {"country": country.to_dict()}


@router.put("/country/{country_id}")
async def update_country(country_id: int, payload: CountryPayload, core: AsyncSession = Depends(get_core_db)):
    country = await get_or_raise(core, Country, country_id)
    for key, value in payload.model_dump().items():
        setattr(country, key, value)
    await core.commit()
    return {"country": country.to_dict()}


@router.delete("/country/{country_id}")
async def delete_country(country_id: int, core: AsyncSession = Depends(get_core_db)):
    country = await get_or_raise(core, Country, country_id)
    await core.execute(delete(Country).where(Country.id == country_id))
    await core.commit()
    logger.info(f"Deleted country {country_id}")
    return {"country": country.to_dict()}
