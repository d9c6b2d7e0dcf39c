"""
Feed endpoints
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from api.dependencies import get_core_db
from core.exceptions import ResourceNotFoundError
from models.feed import Feed, FeedRegion, FeedTag
from models.geography import Region
from models.publication import Publication
from schemas.reference import FeedPayload
from services.crud import get_or_raise, next_id
from services.filters import FEED_SORT_FIELDS, NAME_ASC, order_by, paginate, parse_flag, parse_sort
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Feed"])

FEED_SCALARS = (
    "name", "url", "enabled", "feed_type", "breaking_news", "client_searchable",
    "complicated", "manual", "reach", "mediatype", "default_refresh_period",
    "page_parser", "broken_url", "domiciled_region_id", "publication_id",
)


def _region(region: Optional[Region]) -> Optional[dict]:
    if region is None:
        return None
    return {
        "id": region.id,
        "name": region.name,
        "country": region.country.to_dict() if region.country else None,
    }


def feed_item(feed: Feed) -> dict:
    item = feed.to_dict()
    item["region"] = _region(feed.region)
    item["publication"] = {"name": feed.publication.name} if feed.publication else None
    return item


def feed_detail(feed: Feed) -> dict:
    item = feed.to_dict()
    item["region"] = _region(feed.region)
    item["feed_region"] = [
        {"region": {"id": link.region.id, "name": link.region.name}}
        for link in feed.feed_regions if link.region is not None
    ]
    item["feed_tag"] = [
        {"tag": link.tag.to_dict()}
        for link in feed.feed_tags if link.tag is not None
    ]
    item["publication"] = (
        {"id": feed.publication.id, "name": feed.publication.name} if feed.publication else None
    )
    return item


@router.get("/feed")
async def list_feeds(
    marker: str = Query("0"),
    limit: str = Query("20"),
    sort: Optional[str] = Query(None, description="field:direction"),
    name: str = Query("", description="Case-insensitive substring"),
    publication: str = Query("", description="Case-sensitive publication name substring"),
    enabled: Optional[str] = Query(None, description="true or false"),
    broken_url: Optional[str] = Query(None, description="true for Y, anything else for N"),
    core: AsyncSession = Depends(get_core_db)
):
    sort_spec = parse_sort(sort, FEED_SORT_FIELDS, NAME_ASC)
    stmt = (
        select(Feed)
        .options(
            selectinload(Feed.region).selectinload(Region.country),
            selectinload(Feed.publication),
        )
        .order_by(*order_by(Feed, sort_spec, "id"))
    )

    if name:
        stmt = stmt.where(Feed.name.icontains(name, autoescape=True))
    if publication:
        stmt = stmt.where(Feed.publication.has(Publication.name.contains(publication, autoescape=True)))
    if enabled:
        stmt = stmt.where(Feed.enabled.is_(parse_flag(enabled)))
    if broken_url:
        stmt = stmt.where(Feed.broken_url == ("Y" if parse_flag(broken_url) else "N"))

    result = await core.execute(stmt)
    feeds = [feed_item(feed) for feed in result.scalars().all()]
    return {
        "items": paginate(feeds, marker, limit),
        "marker": marker,
        "limit": limit,
        "total": len(feeds),
    }


async def _load_feed(core: AsyncSession, feed_id: int) -> Feed:
    result = await core.execute(
        select(Feed)
        .where(Feed.id == feed_id)
        .options(
            selectinload(Feed.region).selectinload(Region.country),
            selectinload(Feed.feed_regions).selectinload(FeedRegion.region),
            selectinload(Feed.feed_tags).selectinload(FeedTag.tag),
            selectinload(Feed.publication),
        )
        .execution_options(populate_existing=True)
    )
    feed = result.scalars().first()
    if feed is None:
        raise ResourceNotFoundError(
            f"No feed found for {feed_id}",
            context={"entity": "feed", "lookup": feed_id}
        )
    return feed


@router.get("/feed/{feed_id}")
async def get_feed(feed_id: int, core: AsyncSession = Depends(get_core_db)):
    return {"feed": feed_detail(await _load_feed(core, feed_id))}


async def _insert_links(core: AsyncSession, feed_id: int, payload: FeedPayload) -> None:
    if payload.region_id is not None:
        await core.execute(insert(FeedRegion), [{"feed_id": feed_id, "region_id": payload.region_id}])
    tag_ids = list(dict.fromkeys(payload.tags))
    if tag_ids:
        await core.execute(insert(FeedTag), [{"feed_id": feed_id, "tag_id": tag_id} for tag_id in tag_ids])


async def _delete_links(core: AsyncSession, feed_id: int) -> None:
    await core.execute(delete(FeedRegion).where(FeedRegion.feed_id == feed_id))
    await core.execute(delete(FeedTag).where(FeedTag.feed_id == feed_id))


@router.post("/feed")
async def create_feed(payload: FeedPayload, core: AsyncSession = Depends(get_core_db)):
    await get_or_raise(core, Publication, payload.publication_id)
    feed_id = await next_id(core, Feed)
    try:
        core.add(Feed(id=feed_id, **payload.model_dump(include=set(FEED_SCALARS))))
        await core.flush()
        await _insert_links(core, feed_id, payload)
        await core.commit()
    except Exception:
        await core.rollback()
        raise

    logger.info(f"Created feed {feed_id}")
    return {"feed": feed_detail(await _load_feed(core, feed_id))}


@router.put("/feed/{feed_id}")
async def update_feed(feed_id: int, payload: FeedPayload, core: AsyncSession = Depends(get_core_db)):
    feed = await get_or_raise(core, Feed, feed_id)
    try:
        for key, value in payload.model_dump(include=set(FEED_SCALARS)).items():
            setattr(feed, key, value)
        await _delete_links(core, feed_id)
        await _insert_links(core, feed_id, payload)
        await core.commit()
    except Exception:
        await core.rollback()
        raise

    logger.info(f"Updated feed {feed_id}")
    return {"feed": feed_detail(await _load_feed(core, feed_id))}


@router.delete("/feed/{feed_id}")
async def delete_feed(feed_id: int, core: AsyncSession = Depends(get_core_db)):
    """Removes regions of interest and tags, then the feed"""
    feed = await get_or_raise(core, Feed, feed_id)
    try:
        await _delete_links(core, feed_id)
        await core.execute(delete(Feed).where(Feed.id == feed_id))
        await core.commit()
    except Exception:
        await core.rollback()
        raise

    logger.info(f"Deleted feed {feed_id}")
    return {"feed": feed.to_dict()}
