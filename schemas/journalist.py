"""
Request bodies for the /v2 journalist and taxonomy endpoints.

Field aliases follow the camelCase the web client sends; snake_case names
are accepted too.
"""

from pydantic import BaseModel, Field
from typing import Any, Optional, List


JOURNALIST_SCALAR_FIELDS = (
    "first_name", "last_name", "email", "phone", "ddi",
    "mobile", "linkedin", "twitter", "datasource",
)


class JournalistPayload(BaseModel):
    """
    Journalist create/update body.

    Taxonomy ids are uuids. Publication and region ids are core-store ids and
    must exist there. Every list replaces the journalist's current links.
    """
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    email: Optional[str] = None
    phone: Optional[str] = None
    ddi: Optional[str] = None
    mobile: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    datasource: Optional[str] = None

    format_type_ids: List[str] = Field(default_factory=list, alias="formatTypeIds")
    news_type_ids: List[str] = Field(default_factory=list, alias="newsTypeIds")
    role_type_ids: List[str] = Field(default_factory=list, alias="roleTypeIds")
    publication_ids: List[int] = Field(default_factory=list, alias="publicationIds")
    region_ids: List[int] = Field(default_factory=list, alias="regionIds")

    class Config:
        populate_by_name = True

    def scalar_fields(self, exclude_unset: bool = False) -> dict:
        """Journalist columns from the body; exclude_unset keeps only fields the client sent"""
        return self.model_dump(include=set(JOURNALIST_SCALAR_FIELDS), exclude_unset=exclude_unset)


class JournalistSelection(BaseModel):
    """
    Bulk-selection body shared by export, enable/disable and validate.

    With selectAll the current filters define the set; otherwise ids does.
    validEmail left out applies no email-validity filter.
    """
    ids: Optional[List[str]] = None
    select_all: bool = Field(False, alias="selectAll")
    valid_email: Optional[bool] = Field(None, alias="validEmail")
    enabled: Optional[bool] = None
    name: Optional[str] = ""
    sort: Optional[str] = None

    format_type_ids: Optional[List[str]] = Field(None, alias="formatTypeIds")
    news_type_ids: Optional[List[str]] = Field(None, alias="newsTypeIds")
    role_type_ids: Optional[List[str]] = Field(None, alias="roleTypeIds")
    region_ids: Optional[List[int]] = Field(None, alias="regionIds")
    publication_ids: Optional[List[int]] = Field(None, alias="publicationIds")
    publication_mediatypes: Optional[List[str]] = Field(None, alias="publicationMediatypes")
    publication_tiers: Optional[List[str]] = Field(None, alias="publicationTiers")

    class Config:
        populate_by_name = True


class UserApproveRequest(BaseModel):
    ids: List[str] = Field(default_factory=list)
    is_user_approved: bool = Field(True, alias="isUserApproved")

    class Config:
        populate_by_name = True


class ValidateEmailsRequest(BaseModel):
    emails: List[str] = Field(default_factory=list)


# ============================================================================
# Taxonomies
# ============================================================================

class TaxonomyPayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


# ============================================================================
# Saved searches and selections
# ============================================================================

class JournalistSearchPayload(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    search: Optional[Any] = None
    journalists: Optional[Any] = None


class JournalistSelectCreate(BaseModel):
    ids: List[str] = Field(default_factory=list)


class JournalistSelectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    search: Optional[Any] = None
