"""
SQLAlchemy ORM models for both databases.

Core store (CoreBase):
    geography: Country, Region
    tag: Tag, TagTag, TIER_NAMES
    publication: Publication and its tag/country/region/mediatype links
    feed: Feed, FeedRegion, FeedTag
    user: AppUser

Mediamine store (MediamineBase):
    journalist: Journalist and its five join tables
    taxonomy: FormatType, NewsType, RoleType
    saved: JournalistSearch, JournalistSelect

The two stores are separate databases, so no relationship() ever crosses
them. Journalist links to publications and regions hold bare integer ids that
the relation resolver looks up in the core store.

Usage:
    from models import Journalist, Publication
    from models.base import CoreBase, MediamineBase

Example:
    journalist = Journalist(uuid=str(uuid.uuid4()), first_name="Ana", email="ana@example.com")
    session.add(journalist)
    await session.commit()
"""

from models.base import CoreBase, MediamineBase
from models.geography import Country, Region
from models.tag import Tag, TagTag, TIER_NAMES
from models.publication import (
    Publication,
    PublicationTag,
    PublicationCountry,
    PublicationRegion,
    PublicationMediatype,
)
from models.feed import Feed, FeedRegion, FeedTag
from models.user import AppUser
from models.taxonomy import FormatType, NewsType, RoleType
from models.journalist import (
    Journalist,
    JournalistFormatType,
    JournalistNewsType,
    JournalistRoleType,
    JournalistPublication,
    JournalistRegion,
)
from models.saved import JournalistSearch, JournalistSelect

__all__ = [
    "CoreBase",
    "MediamineBase",
    "Country",
    "Region",
    "Tag",
    "TagTag",
    "TIER_NAMES",
    "Publication",
    "PublicationTag",
    "PublicationCountry",
    "PublicationRegion",
    "PublicationMediatype",
    "Feed",
    "FeedRegion",
    "FeedTag",
    "AppUser",
    "FormatType",
    "NewsType",
    "RoleType",
    "Journalist",
    "JournalistFormatType",
    "JournalistNewsType",
    "JournalistRoleType",
    "JournalistPublication",
    "JournalistRegion",
    "JournalistSearch",
    "JournalistSelect",
]
