"""
Format type, news type and role type endpoints.

The three vocabularies share one shape, so one router factory serves all of
them. Rows are addressed by uuid.
"""

import uuid
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_mediamine_db
from models.journalist import JournalistFormatType, JournalistNewsType, JournalistRoleType
from models.taxonomy import FormatType, NewsType, RoleType
from schemas.journalist import TaxonomyPayload
from services.crud import get_or_raise
from services.filters import NAME_ASC, TAXONOMY_SORT_FIELDS, order_by, paginate, parse_sort
import logging

logger = logging.getLogger(__name__)


def taxonomy_router(path: str, model, link_table, link_column: str, key: str, tag: str) -> APIRouter:
    """
    CRUD router for one taxonomy.

    Args:
        path: URL segment, e.g. "format-type"
        model: Taxonomy model
        link_table: Journalist join table referencing the taxonomy
        link_column: Taxonomy foreign key column on link_table
        key: Singular response key, e.g. "format_type"
        tag: OpenAPI tag
    """
    router = APIRouter(tags=[tag])
    plural_key = f"{key}s"

    @router.get(f"/{path}")
    async def list_items(
        marker: str = Query("0"),
        limit: str = Query("20"),
        sort: Optional[str] = Query(None, description="field:direction"),
        name: str = Query("", description="Case-insensitive substring"),
        mediamine: AsyncSession = Depends(get_mediamine_db)
    ):
        sort_spec = parse_sort(sort, TAXONOMY_SORT_FIELDS, NAME_ASC)
        stmt = select(model).order_by(*order_by(model, sort_spec, "id"))
        if name:
            stmt = stmt.where(model.name.icontains(name, autoescape=True))

        result = await mediamine.execute(stmt)
        rows = [row.to_dict() for row in result.scalars().all()]
        return {
            "items": paginate(rows, marker, limit),
            "marker": marker,
            "limit": limit,
            "total": len(rows),
        }

    @router.post(f"/{path}/batch")
    async def create_batch(payload: List[TaxonomyPayload], mediamine: AsyncSession = Depends(get_mediamine_db)):
        rows = [
            {"uuid": str(uuid.uuid4()), "name": item.name, "description": item.description}
            for item in payload
        ]
        count = 0
        if rows:
            try:
                await mediamine.execute(insert(model), rows)
                await mediamine.commit()
                count = len(rows)
            except Exception:
                await mediamine.rollback()
                raise

        logger.info(f"Created {count} {plural_key}")
        return {plural_key: {"count": count}}

    @router.get(f"/{path}/{{item_uuid}}")
    async def get_item(item_uuid: str, mediamine: AsyncSession = Depends(get_mediamine_db)):
        row = await get_or_raise(mediamine, model, item_uuid, column="uuid")
        return {key: row.to_dict()}

    @router.post(f"/{path}")
    async def create_item(payload: TaxonomyPayload, mediamine: AsyncSession = Depends(get_mediamine_db)):
        row = model(uuid=str(uuid.uuid4()), name=payload.name, description=payload.description)
        mediamine.add(row)
        await mediamine.commit()
        await mediamine.refresh(row)
        logger.info(f"Created {key} {row.uuid}")
        return {key: row.to_dict()}

    @router.put(f"/{path}/{{item_uuid}}")
    async def update_item(item_uuid: str, payload: TaxonomyPayload, mediamine: AsyncSession = Depends(get_mediamine_db)):
        row = await get_or_raise(mediamine, model, item_uuid, column="uuid")
        row.name = payload.name
        row.description = payload.description
        await mediamine.commit()
        await mediamine.refresh(row)
        return {key: row.to_dict()}

    @router.delete(f"/{path}/{{item_uuid}}")
    async def delete_item(item_uuid: str, mediamine: AsyncSession = Depends(get_mediamine_db)):
        """Unlinks the taxonomy from every journalist, then deletes it"""
        row = await get_or_raise(mediamine, model, item_uuid, column="uuid")
        try:
            await mediamine.execute(delete(link_table).where(getattr(link_table, link_column) == row.id))
            await mediamine.execute(delete(model).where(model.id == row.id))
            await mediamine.commit()
        except Exception:
            await mediamine.rollback()
            raise

        logger.info(f"Deleted {key} {item_uuid}")
        return {key: row.to_dict()}

    return router


format_type_router = taxonomy_router(
    "format-type", FormatType, JournalistFormatType, "format_type_id", "format_type", "Format Type"
)
news_type_router = taxonomy_router(
    "news-type", NewsType, JournalistNewsType, "news_type_id", "news_type", "News Type"
)
role_type_router = taxonomy_router(
    "role-type", RoleType, JournalistRoleType, "role_type_id", "role_type", "Role Type"
)
