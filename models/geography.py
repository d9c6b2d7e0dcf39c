from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from models.base import CoreBase


class Country(CoreBase):
    """Country a region belongs to. Only enabled countries are listed."""
    __tablename__ = "country"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False, index=True)
    code = Column(String(8), nullable=True, index=True)
    enabled = Column(Boolean, nullable=False, default=True)

    regions = relationship("Region", back_populates="country")


class Region(CoreBase):
    __tablename__ = "region"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False, index=True)
    country_id = Column(Integer, ForeignKey("country.id"), nullable=False, index=True)

    country = relationship("Country", back_populates="regions")
