from sqlalchemy import Column, Integer, String, ForeignKey
from models.base import CoreBase

# Reserved tag names that classify publication prestige
TIER_NAMES = ("Tier 1", "Tier 2", "Tier 3", "Tier 4", "Tier 5")


class Tag(CoreBase):
    """
    Generic label attached to publications and feeds.

    A tag whose name is one of TIER_NAMES is a tier tag; every other tag is a
    plain label and never acts as a tier filter.
    """
    __tablename__ = "tag"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False, index=True)


class TagTag(CoreBase):
    """Related-tag pairs"""
    __tablename__ = "tag_tag"

    tag_id = Column(Integer, ForeignKey("tag.id"), primary_key=True)
    related_tag_id = Column(Integer, ForeignKey("tag.id"), primary_key=True)
