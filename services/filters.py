"""
Filter, sort and page builder.

Turns raw request parameters into typed criteria. Every list endpoint
materialises its full filtered and sorted result first, then slices it with
paginate(); total is always the length of the full result.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Tuple
from models.tag import TIER_NAMES

SORT_DIRECTIONS = ("asc", "desc")

# Sortable columns per endpoint
TAG_SORT_FIELDS = ("id", "name")
PUBLICATION_SORT_FIELDS = ("id", "name", "url", "readership")
FEED_SORT_FIELDS = (
    "id", "name", "url", "enabled", "feed_type", "mediatype", "reach", "broken_url"
)
TAXONOMY_SORT_FIELDS = ("id", "name", "description", "created_at", "updated_at")
JOURNALIST_SORT_FIELDS = (
    "first_name", "last_name", "email", "valid_email", "user_approved",
    "created_at", "updated_at", "validated_at",
)


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: str = "asc"

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


NAME_ASC = SortSpec("name", "asc")
JOURNALIST_DEFAULT_SORT = SortSpec("first_name", "asc")


def parse_sort(raw: Optional[str], allowed: Sequence[str], default: SortSpec) -> SortSpec:
    """
    Parse "field:direction".

    Whitespace around either part is ignored. Direction must be exactly "asc"
    or "desc" and field must be in the allow-list; anything else yields the
    endpoint default.
    """
    if not raw or ":" not in raw:
        return default

    parts = raw.split(":")
    field_name, direction = parts[0].strip(), parts[1].strip()

    if direction not in SORT_DIRECTIONS or field_name not in allowed:
        return default
    return SortSpec(field_name, direction)


def order_by(model, sort: SortSpec, *tiebreakers):
    """ORDER BY clauses for a model column plus fixed ascending tiebreakers"""
    column = getattr(model, sort.field)
    clauses = [column.desc() if sort.descending else column.asc()]
    clauses.extend(getattr(model, name).asc() for name in tiebreakers if name != sort.field)
    return clauses


# ============================================================================
# PAGINATION
# ============================================================================

def coerce_offset(raw: Any) -> Optional[int]:
    """Decimal string or int to a non-negative int; None when unusable"""
    if raw is None:
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None

    text = str(raw).strip()
    if not text.isdigit():
        return None
    return int(text)


def paginate(items: Sequence[Any], marker: Any, limit: Any) -> List[Any]:
    """items[marker : marker + limit]; an empty page for non-numeric or negative input"""
    start = coerce_offset(marker)
    size = coerce_offset(limit)
    if start is None or size is None:
        return []
    return list(items[start:start + size])


# ============================================================================
# NAME AND FLAG FILTERS
# ============================================================================

def first_word(name: Optional[str]) -> str:
    words = (name or "").split()
    return words[0] if words else ""


def parse_flag(raw: Optional[str]) -> bool:
    """Query string booleans: only the literal "true" is true"""
    return (raw or "").strip() == "true"


def valid_tiers(names: Optional[Iterable[str]]) -> Optional[Tuple[str, ...]]:
    """
    Intersect requested tier names with TIER_NAMES.

    Unrecognised names are dropped. None means "no tier filter", which is
    also the result when nothing valid remains.
    """
    if names is None:
        return None

    kept = []
    for name in names:
        if name in TIER_NAMES and name not in kept:
            kept.append(name)
    return tuple(kept) or None


# ============================================================================
# JOURNALIST CRITERIA
# ============================================================================

@dataclass
class JournalistCriteria:
    """
    Journalist filter state for one request.

    Taxonomy ids are uuids; publication and region ids are core-store ids.
    A None list means the filter was not supplied.
    """
    name: str = ""
    format_type_ids: Optional[List[str]] = None
    news_type_ids: Optional[List[str]] = None
    role_type_ids: Optional[List[str]] = None
    region_ids: Optional[List[int]] = None
    publication_ids: Optional[List[int]] = None
    publication_mediatypes: Optional[List[str]] = None
    publication_tiers: Optional[Tuple[str, ...]] = None
    journalist_ids: Optional[List[str]] = None
    valid_email: Optional[bool] = True
    enabled: Optional[bool] = True
    sort: SortSpec = field(default_factory=lambda: JOURNALIST_DEFAULT_SORT)

    # Legacy export: valid_email compared exactly, publications matched directly
    strict_valid_email: bool = False
    direct_publication_ids: bool = False

    @property
    def has_publication_criteria(self) -> bool:
        return bool(
            self.publication_ids is not None
            or self.publication_mediatypes is not None
            or self.publication_tiers
        )

    @property
    def annotation_tiers(self) -> Tuple[str, ...]:
        """Tier names shown on resolved publications"""
        return self.publication_tiers or TIER_NAMES


def journalist_criteria_from_query(
    *,
    name: Optional[str] = None,
    sort: Optional[str] = None,
    format_type_ids: Optional[List[str]] = None,
    news_type_ids: Optional[List[str]] = None,
    role_type_ids: Optional[List[str]] = None,
    region_ids: Optional[List[int]] = None,
    publication_ids: Optional[List[int]] = None,
    publication_mediatypes: Optional[List[str]] = None,
    publication_tiers: Optional[List[str]] = None,
    journalist_ids: Optional[List[str]] = None,
    valid_email: Optional[str] = "true",
    enabled: Optional[str] = "true",
) -> JournalistCriteria:
    """Criteria for GET /v2/journalist"""
    return JournalistCriteria(
        name=first_word(name),
        format_type_ids=format_type_ids,
        news_type_ids=news_type_ids,
        role_type_ids=role_type_ids,
        region_ids=region_ids,
        publication_ids=publication_ids,
        publication_mediatypes=publication_mediatypes,
        publication_tiers=valid_tiers(publication_tiers),
        journalist_ids=journalist_ids,
        valid_email=parse_flag(valid_email if valid_email is not None else "true"),
        enabled=parse_flag(enabled if enabled is not None else "true"),
        sort=parse_sort(sort, JOURNALIST_SORT_FIELDS, JOURNALIST_DEFAULT_SORT),
    )


def journalist_criteria_for_legacy_export(
    *,
    name: Optional[str] = None,
    sort: Optional[str] = None,
    format_type_ids: Optional[List[str]] = None,
    news_type_ids: Optional[List[str]] = None,
    role_type_ids: Optional[List[str]] = None,
    publication_ids: Optional[List[int]] = None,
    publication_mediatypes: Optional[List[str]] = None,
    publication_tiers: Optional[List[str]] = None,
    valid_email: Optional[str] = "true",
) -> JournalistCriteria:
    """Criteria for GET /v2/journalist/export/v0: full name, no enabled filter"""
    return JournalistCriteria(
        name=(name or "").strip(),
        format_type_ids=format_type_ids,
        news_type_ids=news_type_ids,
        role_type_ids=role_type_ids,
        publication_ids=publication_ids,
        publication_mediatypes=publication_mediatypes,
        publication_tiers=valid_tiers(publication_tiers),
        valid_email=parse_flag(valid_email if valid_email is not None else "true"),
        enabled=None,
        sort=parse_sort(sort, JOURNALIST_SORT_FIELDS, JOURNALIST_DEFAULT_SORT),
        strict_valid_email=True,
        direct_publication_ids=True,
    )


def journalist_criteria_from_selection(selection, *, enabled: Optional[bool] = None) -> JournalistCriteria:
    """
    Criteria for bulk actions (export, enable/disable, validate).

    ids only restrict the set when selectAll is false.
    """
    return JournalistCriteria(
        name=first_word(selection.name),
        format_type_ids=selection.format_type_ids,
        news_type_ids=selection.news_type_ids,
        role_type_ids=selection.role_type_ids,
        region_ids=selection.region_ids,
        publication_ids=selection.publication_ids,
        publication_mediatypes=selection.publication_mediatypes,
        publication_tiers=valid_tiers(selection.publication_tiers),
        journalist_ids=None if selection.select_all else selection.ids,
        valid_email=selection.valid_email,
        enabled=enabled,
        sort=parse_sort(selection.sort, JOURNALIST_SORT_FIELDS, JOURNALIST_DEFAULT_SORT),
    )
