"""
Pydantic schemas for request validation and response serialization.

Schemas:
    api: Health, login and error responses
    reference: Bodies for /v1 country, region, tag, publication and feed writes
    journalist: Bodies for /v2 journalist, taxonomy and saved search/select writes

Usage:
    from schemas.journalist import JournalistPayload, JournalistSelection
    from schemas.reference import PublicationPayload

Example:
    # camelCase from the web client and snake_case both validate
    payload = JournalistPayload(firstName="Ana", email="ana@example.com", publicationIds=[3])
    assert payload.first_name == "Ana"
    assert payload.publication_ids == [3]
"""

__all__ = [
    "HealthCheckResponse",
    "LoginResponse",
    "LoginRequest",
    "CountryPayload",
    "RegionPayload",
    "TagPayload",
    "PublicationPayload",
    "FeedPayload",
    "JournalistPayload",
    "JournalistSelection",
    "UserApproveRequest",
    "ValidateEmailsRequest",
    "TaxonomyPayload",
    "JournalistSearchPayload",
    "JournalistSelectCreate",
    "JournalistSelectUpdate",
]
