"""
Journalist endpoints.

Lists are filtered and sorted in the mediamine store, paged in memory and
then resolved against the core store for publications and regions. Bulk
actions (export, enable/disable, validate) take a JournalistSelection body.
"""

import uuid
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_core_db, get_email_validator, get_mediamine_db
from api.params import array_param, int_array_param
from core.config import settings
from core.exceptions import InvalidRequestError
from models.base import utcnow
from models.journalist import Journalist
from schemas.journalist import (
    JournalistPayload,
    JournalistSelection,
    UserApproveRequest,
    ValidateEmailsRequest,
)
from services import journalists as journalist_service
from services.email_validation import (
    is_email_status_valid,
    persist_validation,
    validate_journalists,
)
from services.export import EXPORT_COLUMNS, LEGACY_EXPORT_COLUMNS, to_csv
from services.filters import (
    coerce_offset,
    journalist_criteria_for_legacy_export,
    journalist_criteria_from_query,
    journalist_criteria_from_selection,
    paginate,
)
from services.resolver import resolve_journalist_relations
from services.zerobounce import ZeroBounceClient, batch_results
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Journalist"])
public_router = APIRouter(tags=["Journalist"])


def _csv_response(rows, columns) -> Response:
    return Response(content=to_csv(rows, columns), media_type="text/csv")


async def _resolve_one(core: AsyncSession, mediamine: AsyncSession, journalist: Journalist) -> dict:
    resolved = await resolve_journalist_relations(core, mediamine, [journalist])
    return resolved[0]


# ============================================================================
# LISTING AND EXPORT
# ============================================================================

@router.get("/journalist")
async def list_journalists(
    marker: str = Query("0"),
    limit: str = Query("20"),
    sort: Optional[str] = Query("first_name:asc", description="field:direction"),
    name: str = Query("", description="First word matched against first or last name"),
    valid_email: Optional[str] = Query("true", alias="validEmail"),
    enabled: Optional[str] = Query("true"),
    format_type_ids: Optional[List[str]] = Depends(array_param("formatTypeIds")),
    news_type_ids: Optional[List[str]] = Depends(array_param("newsTypeIds")),
    role_type_ids: Optional[List[str]] = Depends(array_param("roleTypeIds")),
    region_ids: Optional[List[int]] = Depends(int_array_param("regionIds")),
    publication_ids: Optional[List[int]] = Depends(int_array_param("publicationIds")),
    publication_mediatypes: Optional[List[str]] = Depends(array_param("publicationMediatypes")),
    publication_tiers: Optional[List[str]] = Depends(array_param("publicationTiers")),
    journalist_ids: Optional[List[str]] = Depends(array_param("journalistIds")),
    core: AsyncSession = Depends(get_core_db),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    criteria = journalist_criteria_from_query(
        name=name,
        sort=sort,
        format_type_ids=format_type_ids,
        news_type_ids=news_type_ids,
        role_type_ids=role_type_ids,
        region_ids=region_ids,
        publication_ids=publication_ids,
        publication_mediatypes=publication_mediatypes,
        publication_tiers=publication_tiers,
        journalist_ids=journalist_ids,
        valid_email=valid_email,
        enabled=enabled,
    )
    journalists = await journalist_service.find_journalists(core, mediamine, criteria)
    page = paginate(journalists, marker, limit)

    items = await resolve_journalist_relations(
        core,
        mediamine,
        page,
        mediatypes=criteria.publication_mediatypes,
        tiers=criteria.annotation_tiers,
    )
    return {
        "items": items,
        "marker": marker,
        "limit": limit,
        "total": len(journalists),
    }


@router.get("/journalist/export/v0")
async def legacy_export(
    sort: Optional[str] = Query("first_name:asc"),
    name: str = Query(""),
    valid_email: Optional[str] = Query("true", alias="validEmail"),
    format_type_ids: Optional[List[str]] = Depends(array_param("formatTypeIds")),
    news_type_ids: Optional[List[str]] = Depends(array_param("newsTypeIds")),
    role_type_ids: Optional[List[str]] = Depends(array_param("roleTypeIds")),
    publication_ids: Optional[List[int]] = Depends(int_array_param("publicationIds")),
    publication_mediatypes: Optional[List[str]] = Depends(array_param("publicationMediatypes")),
    publication_tiers: Optional[List[str]] = Depends(array_param("publicationTiers")),
    core: AsyncSession = Depends(get_core_db),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    """Emails of every matching journalist as CSV, whole result, no paging"""
    criteria = journalist_criteria_for_legacy_export(
        name=name,
        sort=sort,
        format_type_ids=format_type_ids,
        news_type_ids=news_type_ids,
        role_type_ids=role_type_ids,
        publication_ids=publication_ids,
        publication_mediatypes=publication_mediatypes,
        publication_tiers=publication_tiers,
        valid_email=valid_email,
    )
    journalists = await journalist_service.find_journalists(core, mediamine, criteria)
    return _csv_response([j.to_dict(LEGACY_EXPORT_COLUMNS) for j in journalists], LEGACY_EXPORT_COLUMNS)


@router.post("/journalist/export")
async def export_selection(
    selection: JournalistSelection,
    core: AsyncSession = Depends(get_core_db),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    enabled = selection.enabled if selection.enabled is not None else True
    criteria = journalist_criteria_from_selection(selection, enabled=enabled)
    journalists = await journalist_service.find_journalists(core, mediamine, criteria)
    logger.info(f"Exporting {len(journalists)} journalists")
    return _csv_response([j.to_dict(EXPORT_COLUMNS) for j in journalists], EXPORT_COLUMNS)


# ============================================================================
# BULK ACTIONS
# ============================================================================

@router.post("/journalist/batch")
async def create_journalists_batch():
    """Bulk create is not supported"""
    return {"message": "not implemented"}


@router.put("/journalist/batch")
async def set_enabled_batch(
    selection: JournalistSelection,
    core: AsyncSession = Depends(get_core_db),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    """Enable or disable every selected journalist"""
    if selection.enabled is None:
        raise InvalidRequestError("enabled is required")

    criteria = journalist_criteria_from_selection(selection)
    journalists = await journalist_service.find_journalists(core, mediamine, criteria)
    ids = [journalist.id for journalist in journalists]

    count = 0
    if ids:
        try:
            result = await mediamine.execute(
                update(Journalist)
                .where(Journalist.id.in_(ids))
                .values(enabled=selection.enabled, updated_at=utcnow())
            )
            await mediamine.commit()
            count = result.rowcount
        except Exception:
            await mediamine.rollback()
            raise

    logger.info(f"Set enabled={selection.enabled} on {count} journalists")
    return {"journalists": {"count": count}}


@router.post("/journalist/validate")
async def validate_selection(
    selection: JournalistSelection,
    core: AsyncSession = Depends(get_core_db),
    mediamine: AsyncSession = Depends(get_mediamine_db),
    validator: ZeroBounceClient = Depends(get_email_validator)
):
    criteria = journalist_criteria_from_selection(selection)
    journalists = await journalist_service.find_journalists(core, mediamine, criteria)

    items = await validate_journalists(validator, journalists, settings.VALIDATE_BATCH_SIZE)
    stored = await persist_validation(mediamine, items)
    logger.info(f"Validated {len(items)} of {len(journalists)} journalists, stored {stored}")
    return {"items": items, "total": len(items)}


@router.post("/journalist/validate-all")
async def validate_all(
    limit: str = Query(str(settings.VALIDATE_ALL_BATCH_SIZE), description="Chunk size"),
    subset: str = Query(str(settings.VALIDATE_ALL_SUBSET), description="Journalists to revalidate"),
    mediamine: AsyncSession = Depends(get_mediamine_db),
    validator: ZeroBounceClient = Depends(get_email_validator)
):
    """Revalidate a subset of journalists currently marked valid"""
    chunk_size = coerce_offset(limit)
    take = coerce_offset(subset)
    if not chunk_size or take is None:
        raise InvalidRequestError("limit must be a positive integer and subset a non-negative integer")

    result = await mediamine.execute(
        select(Journalist)
        .where(Journalist.valid_email.is_(True))
        .order_by(Journalist.id.asc())
        .limit(take)
    )
    journalists = list(result.scalars().all())

    items = await validate_journalists(validator, journalists, chunk_size)
    await persist_validation(mediamine, items)
    return {"items": items, "total": len(items)}


@router.post("/journalist/user-approve")
async def user_approve(payload: UserApproveRequest, mediamine: AsyncSession = Depends(get_mediamine_db)):
    count = 0
    if payload.ids:
        try:
            result = await mediamine.execute(
                update(Journalist)
                .where(Journalist.uuid.in_(payload.ids))
                .values(user_approved=payload.is_user_approved, updated_at=utcnow())
            )
            await mediamine.commit()
            count = result.rowcount
        except Exception:
            await mediamine.rollback()
            raise

    return {"items": {"count": count}, "total": count}


@router.post("/journalist/validateEmails")
async def validate_emails(
    payload: ValidateEmailsRequest,
    validator: ZeroBounceClient = Depends(get_email_validator)
):
    """Classify addresses without touching the database"""
    response = await validator.validate_batch(payload.emails)
    items = [
        {
            "email": result.get("address"),
            "is_valid_email": is_email_status_valid(result.get("status"), result.get("sub_status")),
        }
        for result in batch_results(response)
    ]
    return {"items": items, "total": len(items)}


# ============================================================================
# SINGLE JOURNALIST
# ============================================================================

@router.post("/journalist")
async def create_journalist(
    payload: JournalistPayload,
    core: AsyncSession = Depends(get_core_db),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    journalist = await journalist_service.create_journalist(core, mediamine, payload)
    return {"journalist": await _resolve_one(core, mediamine, journalist)}


@router.get("/journalist/{journalist_uuid}")
async def get_journalist(
    journalist_uuid: str,
    core: AsyncSession = Depends(get_core_db),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    journalist = await journalist_service.get_journalist(mediamine, journalist_uuid)
    return {"journalist": await _resolve_one(core, mediamine, journalist)}


@router.put("/journalist/{journalist_uuid}")
async def update_journalist(
    journalist_uuid: str,
    payload: JournalistPayload,
    core: AsyncSession = Depends(get_core_db),
    mediamine: AsyncSession = Depends(get_mediamine_db)
):
    journalist = await journalist_service.update_journalist(core, mediamine, journalist_uuid, payload)
    return {"journalist": await _resolve_one(core, mediamine, journalist)}


@router.delete("/journalist/{journalist_uuid}")
async def delete_journalist(journalist_uuid: str, mediamine: AsyncSession = Depends(get_mediamine_db)):
    journalist = await journalist_service.delete_journalist(mediamine, journalist_uuid)
    return {"journalist": journalist.to_dict()}


async def _journalist_with_email(mediamine: AsyncSession, journalist_uuid: str) -> Journalist:
    journalist = await journalist_service.get_journalist(mediamine, journalist_uuid)
    if not journalist.email:
        raise InvalidRequestError(
            "Journalist is missing an email",
            context={"entity": "journalist", "lookup": journalist_uuid}
        )
    return journalist


@router.post("/journalist/{journalist_uuid}/validate")
async def validate_journalist(
    journalist_uuid: str,
    mediamine: AsyncSession = Depends(get_mediamine_db),
    validator: ZeroBounceClient = Depends(get_email_validator)
):
    journalist = await _journalist_with_email(mediamine, journalist_uuid)
    validation = await validator.validate(journalist.email)

    journalist.valid_email = is_email_status_valid(validation.get("status"), validation.get("sub_status"))
    journalist.validated_at = utcnow()
    await mediamine.commit()
    await mediamine.refresh(journalist)

    return {"journalist": journalist.to_dict(), "validation": validation}


@router.post("/journalist/{journalist_uuid}/user-approve")
async def user_approve_journalist(journalist_uuid: str, mediamine: AsyncSession = Depends(get_mediamine_db)):
    journalist = await _journalist_with_email(mediamine, journalist_uuid)
    journalist.user_approved = True
    await mediamine.commit()
    await mediamine.refresh(journalist)
    return {"journalist": journalist.to_dict()}


# ============================================================================
# PUBLIC
# ============================================================================

@public_router.get("/ids")
async def fresh_ids(limit: str = Query("10")):
    """Fresh uuids for clients creating rows offline"""
    count = coerce_offset(limit) or 0
    ids = [str(uuid.uuid4()) for _ in range(count)]
    return {"items": ids, "total": len(ids)}
