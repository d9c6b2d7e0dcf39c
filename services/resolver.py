"""
Cross-store relation resolver.

Journalists live in the mediamine store while their publications and regions
live in the core store, so the ORM cannot join them. For a page of
journalists the resolver issues one query per join table, one query per
referenced entity type, then stitches the nested collections back together
in memory with the pure functions below.

Every journalist comes back with format_types, news_types, role_types,
publications (each carrying mediatypes and tiers) and regions. A journalist
without links in a table gets [] for that collection. Page order is kept.
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from models.journalist import Journalist, JOURNALIST_LINK_TABLES
from models.geography import Region
from models.publication import Publication, PublicationMediatype, PublicationTag
from models.tag import Tag, TIER_NAMES
from models.taxonomy import FormatType, NewsType, RoleType
import logging

logger = logging.getLogger(__name__)

RELATION_KEYS = tuple(key for key, _, _ in JOURNALIST_LINK_TABLES)

TAXONOMY_MODELS = (
    ("format_types", FormatType),
    ("news_types", NewsType),
    ("role_types", RoleType),
)


# ============================================================================
# PURE STITCHING
# ============================================================================

def group_links(rows: Iterable[Tuple[Any, Any]]) -> Dict[Any, List[Any]]:
    """(owner, linked) pairs to {owner: [linked, ...]}, first-seen order, no repeats"""
    grouped: Dict[Any, List[Any]] = defaultdict(list)
    for owner, linked in rows:
        if linked not in grouped[owner]:
            grouped[owner].append(linked)
    return dict(grouped)


def annotate_publications(
    publications: Sequence[Dict[str, Any]],
    mediatype_rows: Iterable[Tuple[int, str]],
    tier_rows: Iterable[Tuple[int, str]],
) -> List[Dict[str, Any]]:
    """Copy each publication with its mediatypes and tier names attached"""
    mediatypes = group_links(mediatype_rows)
    tiers = group_links(tier_rows)
    return [
        {
            **publication,
            "mediatypes": list(mediatypes.get(publication["id"], [])),
            "tiers": list(tiers.get(publication["id"], [])),
        }
        for publication in publications
    ]


def attach_relations(
    journalists: Sequence[Dict[str, Any]],
    links: Dict[str, Dict[int, List[int]]],
    entities: Dict[str, Sequence[Dict[str, Any]]],
) -> List[Dict[str, Any]]:
    """
    Re-attach nested collections to each journalist.

    links maps a relation key to {journalist_id: [entity_id, ...]}; entities
    maps the same key to the fetched entity rows. Nested collections follow
    the entity order and are never None.
    """
    resolved = []
    for journalist in journalists:
        item = dict(journalist)
        for key in RELATION_KEYS:
            linked = set(links.get(key, {}).get(journalist["id"], ()))
            item[key] = [entity for entity in entities.get(key, ()) if entity["id"] in linked]
        resolved.append(item)
    return resolved


def linked_ids(grouped: Dict[int, List[int]]) -> List[int]:
    return sorted({linked for ids in grouped.values() for linked in ids})


# ============================================================================
# QUERIES
# ============================================================================

async def _fetch_link_rows(mediamine: AsyncSession, journalist_ids: List[int]) -> Dict[str, Dict[int, List[int]]]:
    links = {}
    for key, table, column in JOURNALIST_LINK_TABLES:
        result = await mediamine.execute(
            select(table.journalist_id, getattr(table, column))
            .where(table.journalist_id.in_(journalist_ids))
        )
        links[key] = group_links(result.all())
    return links


async def _fetch_rows(session: AsyncSession, stmt) -> List[Dict[str, Any]]:
    result = await session.execute(stmt)
    return [dict(row) for row in result.mappings().all()]


async def resolve_journalist_relations(
    core: AsyncSession,
    mediamine: AsyncSession,
    journalists: Sequence[Journalist],
    *,
    mediatypes: Optional[Sequence[str]] = None,
    tiers: Sequence[str] = TIER_NAMES,
) -> List[Dict[str, Any]]:
    """
    Journalist rows with their nested collections.

    mediatypes restricts the mediatypes shown on each publication; tiers is
    the set of tier names shown.
    """
    rows = [journalist.to_dict() for journalist in journalists]
    journalist_ids = [row["id"] for row in rows]
    if not journalist_ids:
        return []

    links = await _fetch_link_rows(mediamine, journalist_ids)
    entities: Dict[str, List[Dict[str, Any]]] = {}

    for key, model in TAXONOMY_MODELS:
        ids = linked_ids(links[key])
        entities[key] = await _fetch_rows(
            mediamine,
            select(model.id, model.uuid, model.name).where(model.id.in_(ids)).order_by(model.name, model.id)
        ) if ids else []

    publication_ids = linked_ids(links["publications"])
    if publication_ids:
        publications = await _fetch_rows(
            core,
            select(Publication.id, Publication.name)
            .where(Publication.id.in_(publication_ids))
            .order_by(Publication.name, Publication.id)
        )

        mediatype_stmt = (
            select(PublicationMediatype.owner_id, PublicationMediatype.mediatype)
            .where(PublicationMediatype.owner_id.in_(publication_ids))
            .order_by(PublicationMediatype.mediatype)
        )
        if mediatypes is not None:
            mediatype_stmt = mediatype_stmt.where(PublicationMediatype.mediatype.in_(list(mediatypes)))
        mediatype_rows = (await core.execute(mediatype_stmt)).all()

        tier_rows = (await core.execute(
            select(PublicationTag.publication_id, Tag.name)
            .join(Tag, Tag.id == PublicationTag.tag_id)
            .where(PublicationTag.publication_id.in_(publication_ids), Tag.name.in_(list(tiers)))
            .order_by(Tag.name)
        )).all()

        entities["publications"] = annotate_publications(publications, mediatype_rows, tier_rows)
    else:
        entities["publications"] = []

    region_ids = linked_ids(links["regions"])
    entities["regions"] = await _fetch_rows(
        core,
        select(Region.id, Region.name).where(Region.id.in_(region_ids)).order_by(Region.name, Region.id)
    ) if region_ids else []

    logger.debug(f"Resolved relations for {len(rows)} journalists")
    return attach_relations(rows, links, entities)
