"""
Batch email validation for journalists.

Journalists are split into fixed-size chunks and each chunk is sent to
ZeroBounce in turn. A failed chunk is logged and skipped, so its journalists
appear neither in the result nor in the database. Results are matched back
to journalists by case-insensitive email and persisted one journalist per
commit.
"""

from typing import Any, Dict, Iterator, List, Sequence, TypeVar
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from models.base import utcnow
from models.journalist import Journalist
from services.zerobounce import batch_results
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")

VALID_STATUSES = ("valid", "catch-all", "unknown")
ROLE_BASED_SUB_STATUSES = ("role_based", "role_based_catch_all")


def is_email_status_valid(status: Any, sub_status: Any) -> bool:
    """
    ZeroBounce status to a deliverability verdict.

    valid, catch-all and unknown pass. do_not_mail passes only for role-based
    addresses. Everything else fails.
    """
    status = str(status or "")
    sub_status = str(sub_status or "")
    if status in VALID_STATUSES:
        return True
    return status == "do_not_mail" and sub_status in ROLE_BASED_SUB_STATUSES


def chunked(items: Sequence[T], size: int) -> Iterator[List[T]]:
    if size <= 0:
        raise ValueError("Chunk size must be positive")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def _email_key(email: Any) -> str:
    return str(email or "").strip().lower()


def _match_results(chunk: Sequence[Journalist], response: Any) -> List[Dict[str, Any]]:
    """Pair batch results with the chunk's journalists; the first journalist per address wins"""
    by_email: Dict[str, Journalist] = {}
    for journalist in chunk:
        by_email.setdefault(_email_key(journalist.email), journalist)

    matched = []
    for result in batch_results(response):
        journalist = by_email.get(_email_key(result.get("address")))
        if journalist is None:
            logger.warning(f"Validation result for unknown address {result.get('address')}")
            continue
        matched.append({
            **result,
            "journalist_id": journalist.id,
            "journalist_uuid": journalist.uuid,
            "is_valid_email": is_email_status_valid(result.get("status"), result.get("sub_status")),
        })
    return matched


async def validate_journalists(client, journalists: Sequence[Journalist], chunk_size: int) -> List[Dict[str, Any]]:
    """
    Validate journalists chunk by chunk.

    Returns one item per matched address: the ZeroBounce result plus
    journalist_id, journalist_uuid and is_valid_email. A chunk that fails in
    any way, including a malformed response, is logged and skipped.
    """
    items: List[Dict[str, Any]] = []

    for index, chunk in enumerate(chunked(list(journalists), chunk_size)):
        try:
            response = await client.validate_batch([journalist.email for journalist in chunk])
            items.extend(_match_results(chunk, response))
        except Exception as e:
            logger.error(f"validateBatch failed for chunk {index} ({len(chunk)} emails): {e}")

    return items


async def persist_validation(session: AsyncSession, items: Sequence[Dict[str, Any]]) -> int:
    """Write valid_email and validated_at per journalist; returns the number stored"""
    stored = 0
    for item in items:
        try:
            await session.execute(
                update(Journalist)
                .where(Journalist.id == item["journalist_id"])
                .values(valid_email=bool(item["is_valid_email"]), validated_at=utcnow())
            )
            await session.commit()
            stored += 1
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"journalist.update failed for {item.get('journalist_uuid')}: {e}")
    return stored
