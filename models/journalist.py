from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Index
from models.base import MediamineBase, utcnow


class Journalist(MediamineBase):
    """
    A journalist contact in the mediamine store.

    Design:
    - uuid is the externally visible identifier; id never leaves the API in
      request parameters
    - valid_email is maintained by ZeroBounce validation; user_approved lets an
      editor override a failed validation
    - publications and regions live in the core store, so their join tables
      below carry bare integer ids with no foreign key constraint
    """
    __tablename__ = "journalist"

    id = Column(Integer, primary_key=True, autoincrement=True)
    uuid = Column(String(36), unique=True, nullable=False, index=True)

    first_name = Column(String(255), nullable=True, index=True)
    last_name = Column(String(255), nullable=True, index=True)

    # Contact
    email = Column(String(320), nullable=True, index=True)
    phone = Column(String(64), nullable=True)
    ddi = Column(String(64), nullable=True)
    mobile = Column(String(64), nullable=True)
    linkedin = Column(String(2048), nullable=True)
    twitter = Column(String(255), nullable=True)

    # Status
    valid_email = Column(Boolean, nullable=False, default=False)
    user_approved = Column(Boolean, nullable=False, default=False)
    enabled = Column(Boolean, nullable=False, default=True)
    datasource = Column(String(255), nullable=True)

    # Timestamps
    validated_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("idx_journalist_name", "first_name", "last_name"),
        Index("idx_journalist_status", "enabled", "valid_email", "user_approved"),
    )


# ============================================================================
# JOIN TABLES
# ============================================================================

class JournalistFormatType(MediamineBase):
    __tablename__ = "journalist_format_type"

    journalist_id = Column(Integer, ForeignKey("journalist.id", ondelete="CASCADE"), primary_key=True)
    format_type_id = Column(Integer, ForeignKey("format_type.id", ondelete="CASCADE"), primary_key=True)


class JournalistNewsType(MediamineBase):
    __tablename__ = "journalist_news_type"

    journalist_id = Column(Integer, ForeignKey("journalist.id", ondelete="CASCADE"), primary_key=True)
    news_type_id = Column(Integer, ForeignKey("news_type.id", ondelete="CASCADE"), primary_key=True)


class JournalistRoleType(MediamineBase):
    __tablename__ = "journalist_role_type"

    journalist_id = Column(Integer, ForeignKey("journalist.id", ondelete="CASCADE"), primary_key=True)
    role_type_id = Column(Integer, ForeignKey("role_type.id", ondelete="CASCADE"), primary_key=True)


class JournalistPublication(MediamineBase):
    """publication_id references core.publication"""
    __tablename__ = "journalist_publication"

    journalist_id = Column(Integer, ForeignKey("journalist.id", ondelete="CASCADE"), primary_key=True)
    publication_id = Column(Integer, primary_key=True, index=True)


class JournalistRegion(MediamineBase):
    """region_id references core.region"""
    __tablename__ = "journalist_region"

    journalist_id = Column(Integer, ForeignKey("journalist.id", ondelete="CASCADE"), primary_key=True)
    region_id = Column(Integer, primary_key=True, index=True)


# Join table, foreign key column, in the order the resolver attaches them
JOURNALIST_LINK_TABLES = (
    ("format_types", JournalistFormatType, "format_type_id"),
    ("news_types", JournalistNewsType, "news_type_id"),
    ("role_types", JournalistRoleType, "role_type_id"),
    ("publications", JournalistPublication, "publication_id"),
    ("regions", JournalistRegion, "region_id"),
)
