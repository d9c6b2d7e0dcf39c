"""
Request bodies for the /v1 reference data endpoints
"""

from pydantic import BaseModel, Field
from typing import Optional, List


class LoginRequest(BaseModel):
    """Both fields optional so a missing credential is a 401, not a 422"""
    username: Optional[str] = None
    password: Optional[str] = None


class CountryPayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    code: Optional[str] = Field(None, max_length=8)
    enabled: bool = True


class RegionPayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    country_id: int


class TagPayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class PublicationPayload(BaseModel):
    """
    Publication create/update body.

    country_id and region_id become the single publication_country and
    publication_region links; tags replaces every publication_tag row.
    """
    name: str = Field(..., min_length=1, max_length=500)
    url: Optional[str] = Field(None, max_length=2048)
    readership: Optional[int] = None
    page_parser: Optional[str] = None
    domiciled_region_id: Optional[int] = None
    country_id: Optional[int] = None
    region_id: Optional[int] = None
    tags: List[int] = Field(default_factory=list)


class FeedPayload(BaseModel):
    """
    Feed create/update body.

    region_id is the region of interest (feed_region); domiciled_region_id is
    where the feed is based.
    """
    name: str = Field(..., min_length=1, max_length=500)
    url: Optional[str] = Field(None, max_length=2048)
    enabled: bool = True
    feed_type: Optional[str] = None
    breaking_news: bool = False
    client_searchable: bool = False
    complicated: bool = False
    manual: bool = False
    reach: Optional[int] = None
    mediatype: Optional[str] = None
    default_refresh_period: Optional[int] = None
    page_parser: Optional[str] = None
    broken_url: str = Field("N", pattern="^[YN]$")
    domiciled_region_id: Optional[int] = None
    region_id: Optional[int] = None
    publication_id: int
    tags: List[int] = Field(default_factory=list)
