from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from models.base import MediamineBase, utcnow


class SavedQueryMixin:
    """
    A named, user-owned journalist query. user_id references core.app_user and
    rows are only ever returned to that user.
    """
    id = Column(Integer, primary_key=True, autoincrement=True)
    uuid = Column(String(36), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    user_id = Column(Integer, nullable=False, index=True)
    search = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class JournalistSearch(SavedQueryMixin, MediamineBase):
    """Saved filter state plus the journalists it matched"""
    __tablename__ = "journalist_search"

    journalists = Column(JSON, nullable=True)


class JournalistSelect(SavedQueryMixin, MediamineBase):
    """Saved hand-picked selection; search holds the journalist uuids"""
    __tablename__ = "journalist_select"
