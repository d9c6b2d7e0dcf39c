from datetime import datetime, date
from typing import Any, Dict, Iterable, Optional
from sqlalchemy import inspect
from sqlalchemy.orm import DeclarativeBase


class SerializableMixin:
    """Column values as a plain dict, used for JSON responses"""

    def to_dict(self, columns: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        names = columns or [attr.key for attr in inspect(self).mapper.column_attrs]
        return {name: getattr(self, name) for name in names}


# ============================================================================
# DECLARATIVE BASES
# ============================================================================

class CoreBase(SerializableMixin, DeclarativeBase):
    """Tables in the core store (publications, feeds, regions, tags, users)"""
    pass


class MediamineBase(SerializableMixin, DeclarativeBase):
    """Tables in the mediamine store (journalists and their taxonomies)"""
    pass


def utcnow() -> datetime:
    return datetime.utcnow()


def isoformat(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value
