from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from models.base import CoreBase


class Feed(CoreBase):
    """
    An RSS/HTML source belonging to exactly one publication.

    broken_url is stored as 'Y'/'N'. The domiciled region is where the feed is
    based; regions of interest live in feed_region.
    """
    __tablename__ = "feed"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(500), nullable=False, index=True)
    url = Column(String(2048), nullable=True)
    enabled = Column(Boolean, nullable=False, default=True)
    feed_type = Column(String(50), nullable=True)
    breaking_news = Column(Boolean, nullable=False, default=False)
    client_searchable = Column(Boolean, nullable=False, default=False)
    complicated = Column(Boolean, nullable=False, default=False)
    manual = Column(Boolean, nullable=False, default=False)
    reach = Column(Integer, nullable=True)
    mediatype = Column(String(255), nullable=True)
    default_refresh_period = Column(Integer, nullable=True)
    page_parser = Column(String(255), nullable=True)
    broken_url = Column(String(1), nullable=False, default="N")
    domiciled_region_id = Column(Integer, ForeignKey("region.id"), nullable=True, index=True)
    publication_id = Column(Integer, ForeignKey("publication.id"), nullable=False, index=True)

    region = relationship("Region")
    publication = relationship("Publication", back_populates="feeds")
    feed_regions = relationship("FeedRegion")
    feed_tags = relationship("FeedTag")


class FeedRegion(CoreBase):
    """Regions of interest for a feed"""
    __tablename__ = "feed_region"

    feed_id = Column(Integer, ForeignKey("feed.id"), primary_key=True)
    region_id = Column(Integer, ForeignKey("region.id"), primary_key=True)

    region = relationship("Region")


class FeedTag(CoreBase):
    __tablename__ = "feed_tag"

    feed_id = Column(Integer, ForeignKey("feed.id"), primary_key=True)
    tag_id = Column(Integer, ForeignKey("tag.id"), primary_key=True)

    tag = relationship("Tag")
