"""
Publication endpoints.

Writes keep the publication's tag, country and region links in step with
the payload: create inserts them, update deletes and re-inserts them, delete
removes them before the publication. Feeds referencing a publication are not
checked on delete.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from api.dependencies import get_core_db, get_mediamine_db
from api.params import int_array_param
from core.exceptions import ResourceNotFoundError
from models.geography import Country, Region
from models.journalist import JournalistPublication
from models.publication import (
    Publication,
    PublicationTag,
    PublicationCountry,
    PublicationRegion,
    PublicationMediatype,
)
from schemas.reference import PublicationPayload
from services.crud import get_or_raise, next_id, row_or_none
from services.filters import NAME_ASC, PUBLICATION_SORT_FIELDS, order_by, paginate, parse_flag, parse_sort
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Publication"])

PUBLICATION_COLUMNS = ("name", "url", "readership", "page_parser", "domiciled_region_id")


def publication_item(publication: Publication) -> dict:
    """List shape: name, domiciled region with country, feeds with broken_url"""
    region = publication.region
    return {
        "id": publication.id,
        "name": publication.name,
        "region": {
            "name": region.name,
            "country": {"name": region.country.name} if region.country else None,
        } if region else None,
        "feed": [{"name": feed.name, "broken_url": feed.broken_url} for feed in publication.feeds],
    }


def publication_detail(publication: Publication) -> dict:
    region = publication.region
    return {
        **publication.to_dict(),
        "region": {
            "id": region.id,
            "name": region.name,
            "country": {"id": region.country.id, "name": region.country.name} if region.country else None,
        } if region else None,
        "publication_tag": [
            {
                "publication_id": link.publication_id,
                "tag_id": link.tag_id,
                "tag": link.tag.to_dict() if link.tag else None,
            }
            for link in publication.publication_tags
        ],
    }


def _list_options():
    return (
        selectinload(Publication.region).selectinload(Region.country),
        selectinload(Publication.feeds),
    )


@router.get("/publication")
async def list_publications(
    marker: str = Query("0"),
    limit: str = Query("20"),
    sort: Optional[str] = Query("name:asc", description="field:direction"),
    name: str = Query("", description="Case-insensitive substring"),
    country: str = Query("", description="Country name substring of the domiciled region"),
    has_journalist: Optional[str] = Query(None, alias="hasJournalist"),
    core: AsyncSession = Depends(get_core_db),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    sort_spec = parse_sort(sort, PUBLICATION_SORT_FIELDS, NAME_ASC)
    stmt = select(Publication).options(*_list_options()).order_by(*order_by(Publication, sort_spec, "id"))

    if name:
        stmt = stmt.where(Publication.name.icontains(name, autoescape=True))
    if country:
        # Publications without a region only match when no country is given
        stmt = stmt.where(Publication.region.has(Region.country.has(Country.name.contains(country, autoescape=True))))
    if parse_flag(has_journalist):
        linked = await mediamine.execute(select(JournalistPublication.publication_id).distinct())
        stmt = stmt.where(Publication.id.in_(list(linked.scalars().all())))

    result = await core.execute(stmt)
    publications = [publication_item(publication) for publication in result.scalars().all()]
    return {
        "items": paginate(publications, marker, limit),
        "marker": marker,
        "limit": limit,
        "total": len(publications),
    }


@router.get("/publication/batch")
async def batch_publications(
    ids: Optional[List[int]] = Depends(int_array_param("ids")),
    core: AsyncSession = Depends(get_core_db)
):
    stmt = select(Publication).options(*_list_options()).order_by(Publication.id.asc())
    if ids is not None:
        stmt = stmt.where(Publication.id.in_(ids))

    result = await core.execute(stmt)
    items = [publication_item(publication) for publication in result.scalars().all()]
    return {"items": items, "total": len(items)}


async def _load_publication(core: AsyncSession, publication_id: int) -> Publication:
    result = await core.execute(
        select(Publication)
        .where(Publication.id == publication_id)
        .options(
            selectinload(Publication.region).selectinload(Region.country),
            selectinload(Publication.publication_tags).selectinload(PublicationTag.tag),
        )
        .execution_options(populate_existing=True)
    )
    publication = result.scalars().first()
    if publication is None:
        raise ResourceNotFoundError(
            f"No publication found for {publication_id}",
            context={"entity": "publication", "lookup": publication_id}
        )
    return publication


async def _first_link(core: AsyncSession, model, publication_id: int):
    result = await core.execute(select(model).where(model.publication_id == publication_id))
    return row_or_none(result.scalars().first())


async def _publication_response(core: AsyncSession, publication_id: int) -> dict:
    publication = await _load_publication(core, publication_id)
    return {
        "publication": publication_detail(publication),
        "publication_country": await _first_link(core, PublicationCountry, publication_id),
        "publication_region": await _first_link(core, PublicationRegion, publication_id),
    }


@router.get("/publication/{publication_id}")
async def get_publication(publication_id: int, core: AsyncSession = Depends(get_core_db)):
    return await _publication_response(core, publication_id)


async def _insert_links(core: AsyncSession, publication_id: int, payload: PublicationPayload) -> None:
    tag_ids = list(dict.fromkeys(payload.tags))
    if tag_ids:
        await core.execute(
            insert(PublicationTag),
            [{"publication_id": publication_id, "tag_id": tag_id} for tag_id in tag_ids]
        )
    if payload.country_id is not None:
        await core.execute(
            insert(PublicationCountry),
            [{"publication_id": publication_id, "country_id": payload.country_id}]
        )
    if payload.region_id is not None:
        await core.execute(
            insert(PublicationRegion),
            [{"publication_id": publication_id, "region_id": payload.region_id}]
        )


async def _delete_links(core: AsyncSession, publication_id: int) -> dict:
    counts = {}
    for key, model in (
        ("publication_country", PublicationCountry),
        ("publication_region", PublicationRegion),
        ("publication_tag", PublicationTag),
    ):
        result = await core.execute(delete(model).where(model.publication_id == publication_id))
        counts[key] = {"count": result.rowcount}
    return counts


@router.post("/publication")
async def create_publication(payload: PublicationPayload, core: AsyncSession = Depends(get_core_db)):
    publication_id = await next_id(core, Publication)
    try:
        core.add(Publication(id=publication_id, **payload.model_dump(include=set(PUBLICATION_COLUMNS))))
        await core.flush()
        await _insert_links(core, publication_id, payload)
        await core.commit()
    except Exception:
        await core.rollback()
        raise

    logger.info(f"Created publication {publication_id}")
    return await _publication_response(core, publication_id)


@router.put("/publication/{publication_id}")
async def update_publication(publication_id: int, payload: PublicationPayload, core: AsyncSession = Depends(get_core_db)):
    publication = await get_or_raise(core, Publication, publication_id)
    try:
        for key, value in payload.model_dump(include=set(PUBLICATION_COLUMNS)).items():
            setattr(publication, key, value)
        await _delete_links(core, publication_id)
        await _insert_links(core, publication_id, payload)
        await core.commit()
    except Exception:
        await core.rollback()
        raise

    logger.info(f"Updated publication {publication_id}")
    return await _publication_response(core, publication_id)


@router.delete("/publication/{publication_id}")
async def delete_publication(publication_id: int, core: AsyncSession = Depends(get_core_db)):
    publication = await get_or_raise(core, Publication, publication_id)
    try:
        counts = await _delete_links(core, publication_id)
        mediatypes = await core.execute(
            delete(PublicationMediatype).where(PublicationMediatype.owner_id == publication_id)
        )
        counts["publication_mediatype"] = {"count": mediatypes.rowcount}
        await core.execute(delete(Publication).where(Publication.id == publication_id))
        await core.commit()
    except Exception:
        await core.rollback()
        raise

    logger.info(f"Deleted publication {publication_id}")
    return {"publication": publication.to_dict(), **counts}
