from sqlalchemy import Column, Integer, String, Text, DateTime
from models.base import MediamineBase, utcnow


class TaxonomyMixin:
    """
    Shared shape of the three journalist classification vocabularies.

    uuid is the only identifier accepted in request parameters; id is the
    internal key used by the journalist join tables.
    """
    id = Column(Integer, primary_key=True, autoincrement=True)
    uuid = Column(String(36), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class FormatType(TaxonomyMixin, MediamineBase):
    __tablename__ = "format_type"


class NewsType(TaxonomyMixin, MediamineBase):
    __tablename__ = "news_type"


class RoleType(TaxonomyMixin, MediamineBase):
    __tablename__ = "role_type"
