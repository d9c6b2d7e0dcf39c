"""
Journalist queries across both stores.

Publication criteria (ids, mediatypes, tiers) are resolved against the core
store first into a candidate publication id set; the journalist query in the
mediamine store then requires a link to at least one candidate.
"""

import uuid
from typing import Dict, List, Optional, Sequence
from sqlalchemy import and_, delete, exists, insert, not_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from core.exceptions import InvalidRequestError, ResourceNotFoundError
from models.journalist import (
    Journalist,
    JournalistFormatType,
    JournalistNewsType,
    JournalistRoleType,
    JournalistPublication,
    JournalistRegion,
    JOURNALIST_LINK_TABLES,
)
from models.publication import Publication, PublicationMediatype, PublicationTag
from models.geography import Region
from models.tag import Tag
from models.taxonomy import FormatType, NewsType, RoleType
from services.filters import JournalistCriteria, order_by
import logging

logger = logging.getLogger(__name__)

JOURNALIST_TIEBREAKERS = ("first_name", "last_name", "id")


async def taxonomy_ids_for(session: AsyncSession, model, uuids: Optional[Sequence[str]]) -> Optional[List[int]]:
    """Translate taxonomy uuids to internal ids; unknown uuids are dropped"""
    if uuids is None:
        return None
    if not uuids:
        return []
    result = await session.execute(select(model.id).where(model.uuid.in_(list(uuids))))
    return list(result.scalars().all())


async def candidate_publication_ids(core: AsyncSession, criteria: JournalistCriteria) -> Optional[List[int]]:
    """
    Publications matching every publication criterion.

    None when no publication criterion was supplied.
    """
    if not criteria.has_publication_criteria:
        return None

    stmt = select(Publication.id)
    if criteria.publication_ids is not None:
        stmt = stmt.where(Publication.id.in_(criteria.publication_ids))
    if criteria.publication_mediatypes is not None:
        stmt = stmt.where(
            exists().where(
                PublicationMediatype.owner_id == Publication.id,
                PublicationMediatype.mediatype.in_(criteria.publication_mediatypes),
            )
        )
    if criteria.publication_tiers:
        stmt = stmt.where(
            exists().where(
                PublicationTag.publication_id == Publication.id,
                PublicationTag.tag_id == Tag.id,
                Tag.name.in_(criteria.publication_tiers),
            )
        )

    result = await core.execute(stmt)
    return list(result.scalars().all())


def _linked(table, column: str, ids: Sequence[int]):
    return exists().where(
        table.journalist_id == Journalist.id,
        getattr(table, column).in_(list(ids)),
    )


async def build_journalist_query(core: AsyncSession, mediamine: AsyncSession, criteria: JournalistCriteria):
    """SELECT for every journalist matching the criteria, sorted"""
    conditions = []

    if criteria.enabled is not None:
        conditions.append(Journalist.enabled.is_(criteria.enabled))

    if criteria.valid_email is not None:
        if criteria.strict_valid_email:
            conditions.append(Journalist.valid_email.is_(criteria.valid_email))
        elif criteria.valid_email:
            conditions.append(or_(Journalist.valid_email.is_(True), Journalist.user_approved.is_(True)))
        else:
            conditions.append(and_(not_(Journalist.valid_email), not_(Journalist.user_approved)))

    if criteria.name:
        conditions.append(or_(
            Journalist.first_name.icontains(criteria.name, autoescape=True),
            Journalist.last_name.icontains(criteria.name, autoescape=True),
        ))

    for model, table, column, uuids in (
        (FormatType, JournalistFormatType, "format_type_id", criteria.format_type_ids),
        (NewsType, JournalistNewsType, "news_type_id", criteria.news_type_ids),
        (RoleType, JournalistRoleType, "role_type_id", criteria.role_type_ids),
    ):
        ids = await taxonomy_ids_for(mediamine, model, uuids)
        if ids is not None:
            conditions.append(_linked(table, column, ids))

    if criteria.region_ids is not None:
        conditions.append(_linked(JournalistRegion, "region_id", criteria.region_ids))

    if criteria.direct_publication_ids:
        if criteria.publication_ids is not None:
            conditions.append(_linked(JournalistPublication, "publication_id", criteria.publication_ids))
        if criteria.publication_mediatypes is not None or criteria.publication_tiers:
            indirect = JournalistCriteria(
                publication_mediatypes=criteria.publication_mediatypes,
                publication_tiers=criteria.publication_tiers,
            )
            candidates = await candidate_publication_ids(core, indirect)
            conditions.append(_linked(JournalistPublication, "publication_id", candidates))
    else:
        candidates = await candidate_publication_ids(core, criteria)
        if candidates is not None:
            conditions.append(_linked(JournalistPublication, "publication_id", candidates))

    if criteria.journalist_ids is not None:
        conditions.append(Journalist.uuid.in_(list(criteria.journalist_ids)))

    stmt = select(Journalist)
    if conditions:
        stmt = stmt.where(and_(*conditions))
    return stmt.order_by(*order_by(Journalist, criteria.sort, *JOURNALIST_TIEBREAKERS))


async def find_journalists(core: AsyncSession, mediamine: AsyncSession, criteria: JournalistCriteria) -> List[Journalist]:
    """Full filtered and sorted result; callers paginate in memory"""
    stmt = await build_journalist_query(core, mediamine, criteria)
    result = await mediamine.execute(stmt)
    return list(result.scalars().all())


# ============================================================================
# SINGLE JOURNALIST
# ============================================================================

async def get_journalist(mediamine: AsyncSession, journalist_uuid: str) -> Journalist:
    result = await mediamine.execute(select(Journalist).where(Journalist.uuid == journalist_uuid))
    journalist = result.scalars().first()
    if journalist is None:
        raise ResourceNotFoundError(
            f"No journalist found for {journalist_uuid}",
            context={"entity": "journalist", "lookup": journalist_uuid}
        )
    return journalist


async def _require_core_ids(core: AsyncSession, model, ids: Sequence[int], label: str) -> None:
    wanted = set(ids)
    if not wanted:
        return
    result = await core.execute(select(model.id).where(model.id.in_(list(wanted))))
    missing = sorted(wanted - set(result.scalars().all()))
    if missing:
        raise InvalidRequestError(
            f"Unknown {label} ids: {', '.join(str(i) for i in missing)}",
            context={"entity": label, "ids": missing}
        )


async def link_ids_from_payload(core: AsyncSession, mediamine: AsyncSession, payload) -> Dict[str, List[int]]:
    """
    Internal ids for every link list in a journalist payload.

    Publication and region ids must exist in the core store.
    """
    await _require_core_ids(core, Publication, payload.publication_ids, "publication")
    await _require_core_ids(core, Region, payload.region_ids, "region")

    return {
        "format_types": await taxonomy_ids_for(mediamine, FormatType, payload.format_type_ids),
        "news_types": await taxonomy_ids_for(mediamine, NewsType, payload.news_type_ids),
        "role_types": await taxonomy_ids_for(mediamine, RoleType, payload.role_type_ids),
        "publications": list(dict.fromkeys(payload.publication_ids)),
        "regions": list(dict.fromkeys(payload.region_ids)),
    }



async def delete_links(mediamine: AsyncSession, journalist_id: int) -> None:
    for _, table, _ in JOURNALIST_LINK_TABLES:
        await mediamine.execute(delete(table).where(table.journalist_id == journalist_id))


async def insert_links(mediamine: AsyncSession, journalist_id: int, links: Dict[str, List[int]]) -> None:
    for key, table, column in JOURNALIST_LINK_TABLES:
        ids = links.get(key) or []
        if ids:
            await mediamine.execute(
                insert(table),
                [{"journalist_id": journalist_id, column: linked_id} for linked_id in dict.fromkeys(ids)]
            )


async def create_journalist(core: AsyncSession, mediamine: AsyncSession, payload) -> Journalist:
    if not payload.email:
        raise InvalidRequestError("Journalist is missing an email")

    links = await link_ids_from_payload(core, mediamine, payload)
    journalist = Journalist(uuid=str(uuid.uuid4()), **payload.scalar_fields())

    try:
        mediamine.add(journalist)
        await mediamine.flush()
        await insert_links(mediamine, journalist.id, links)
        await mediamine.commit()
    except Exception:
        await mediamine.rollback()
        raise

    await mediamine.refresh(journalist)
    logger.info(f"Created journalist {journalist.uuid}")
    return journalist


async def update_journalist(core: AsyncSession, mediamine: AsyncSession, journalist_uuid: str, payload) -> Journalist:
    """Overwrite the scalar fields the client sent and replace every link set in one transaction"""
    journalist = await get_journalist(mediamine, journalist_uuid)
    links = await link_ids_from_payload(core, mediamine, payload)

    try:
        for key, value in payload.scalar_fields(exclude_unset=True).items():
            setattr(journalist, key, value)
        await delete_links(mediamine, journalist.id)
        await insert_links(mediamine, journalist.id, links)
        await mediamine.commit()
    except Exception:
        await mediamine.rollback()
        raise

    await mediamine.refresh(journalist)
    logger.info(f"Updated journalist {journalist.uuid}")
    return journalist


async def delete_journalist(mediamine: AsyncSession, journalist_uuid: str) -> Journalist:
    journalist = await get_journalist(mediamine, journalist_uuid)

    try:
        await delete_links(mediamine, journalist.id)
        await mediamine.delete(journalist)
        await mediamine.commit()
    except Exception:
        await mediamine.rollback()
        raise

    logger.info(f"Deleted journalist {journalist_uuid}")
    return journalist
