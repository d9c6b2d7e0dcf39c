from sqlalchemy import Column, Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship
from models.base import CoreBase


class Publication(CoreBase):
    """
    A news outlet.

    Identifiers are assigned by the API as "current max id + 1" rather than by
    a database sequence, matching how the feed-ingestion system populates the
    same table.
    """
    __tablename__ = "publication"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(500), nullable=False, index=True)
    url = Column(String(2048), nullable=True)
    readership = Column(Integer, nullable=True)
    page_parser = Column(String(255), nullable=True)
    domiciled_region_id = Column(Integer, ForeignKey("region.id"), nullable=True, index=True)

    region = relationship("Region")
    feeds = relationship("Feed", back_populates="publication")
    publication_tags = relationship("PublicationTag", back_populates="publication")


class PublicationTag(CoreBase):
    __tablename__ = "publication_tag"

    publication_id = Column(Integer, ForeignKey("publication.id"), primary_key=True)
    tag_id = Column(Integer, ForeignKey("tag.id"), primary_key=True)

    publication = relationship("Publication", back_populates="publication_tags")
    tag = relationship("Tag")


class PublicationCountry(CoreBase):
    __tablename__ = "publication_country"

    publication_id = Column(Integer, ForeignKey("publication.id"), primary_key=True)
    country_id = Column(Integer, ForeignKey("country.id"), primary_key=True)


class PublicationRegion(CoreBase):
    __tablename__ = "publication_region"

    publication_id = Column(Integer, ForeignKey("publication.id"), primary_key=True)
    region_id = Column(Integer, ForeignKey("region.id"), primary_key=True)


class PublicationMediatype(CoreBase):
    """Free-text media category of a publication (e.g. "Online", "Print")"""
    __tablename__ = "publication_mediatype"

    owner_id = Column(Integer, ForeignKey("publication.id"), primary_key=True)
    mediatype = Column(String(255), primary_key=True)

    __table_args__ = (
        Index("idx_publication_mediatype_mediatype", "mediatype"),
    )
