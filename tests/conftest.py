"""
Pytest configuration and fixtures
"""

import pytest
import pytest_asyncio
from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock
from httpx import ASGITransport, AsyncClient
from core.config import settings
from core.database import Store, Stores
from core.security import build_access_token, hash_password
from models import (
    AppUser,
    Country,
    CoreBase,
    Feed,
    FormatType,
    Journalist,
    JournalistFormatType,
    JournalistPublication,
    JournalistRegion,
    MediamineBase,
    NewsType,
    Publication,
    PublicationMediatype,
    PublicationTag,
    Region,
    RoleType,
    Tag,
    TagTag,
)

TEST_SIGNING_KEY = "test-signing-key-0123456789abcdef0123456789"

# Taxonomy uuids used across tests
PRINT_FORMAT_UUID = "00000000-0000-0000-0000-0000000000f1"
RADIO_FORMAT_UUID = "00000000-0000-0000-0000-0000000000f2"
POLITICS_NEWS_UUID = "00000000-0000-0000-0000-0000000000a1"
EDITOR_ROLE_UUID = "00000000-0000-0000-0000-0000000000b1"

# Journalist uuids
ANA_UUID = "00000000-0000-0000-0000-000000000001"
BEN_UUID = "00000000-0000-0000-0000-000000000002"
CARA_UUID = "00000000-0000-0000-0000-000000000003"
DAN_UUID = "00000000-0000-0000-0000-000000000004"


@pytest.fixture
def uuids():
    """Known uuids of the seeded journalists and taxonomies"""
    return SimpleNamespace(
        ana=ANA_UUID,
        ben=BEN_UUID,
        cara=CARA_UUID,
        dan=DAN_UUID,
        print_format=PRINT_FORMAT_UUID,
        radio_format=RADIO_FORMAT_UUID,
        politics_news=POLITICS_NEWS_UUID,
        editor_role=EDITOR_ROLE_UUID,
    )


@pytest.fixture(autouse=True)
def signing_key(monkeypatch):
    """Tokens are signed with a fixed key in every test"""
    monkeypatch.setattr(settings, "MEDIAMINE_API_KEY", TEST_SIGNING_KEY)
    return TEST_SIGNING_KEY


@pytest_asyncio.fixture(scope="function")
async def stores(tmp_path) -> AsyncGenerator[Stores, None]:
    """Both stores as SQLite files with every table created"""
    stores = Stores(
        core=Store("core", f"sqlite+aiosqlite:///{tmp_path / 'core.db'}"),
        mediamine=Store("mediamine", f"sqlite+aiosqlite:///{tmp_path / 'mediamine.db'}"),
    )
    stores.open()

    async with stores.core.engine.begin() as conn:
        await conn.run_sync(CoreBase.metadata.create_all)
    async with stores.mediamine.engine.begin() as conn:
        await conn.run_sync(MediamineBase.metadata.create_all)

    yield stores

    await stores.close()


@pytest_asyncio.fixture(scope="function")
async def seeded(stores):
    """
    Reference data and four journalists:

    - Ana Smith: valid email, enabled; Print format, Herald, Auckland
    - Ben Jones: invalid email but user approved, enabled; Times
    - Cara Brown: invalid and not approved, enabled
    - Dan White: valid email, disabled
    """
    async with stores.core.session() as core:
        core.add_all([
            Country(id=1, name="New Zealand", code="NZ", enabled=True),
            Country(id=2, name="Australia", code="AU", enabled=True),
            Country(id=3, name="Atlantis", code="AT", enabled=False),
        ])
        core.add_all([
            Region(id=1, name="Auckland", country_id=1),
            Region(id=2, name="Sydney", country_id=2),
        ])
        core.add_all([
            Tag(id=1, name="Tier 1"),
            Tag(id=2, name="Tier 2"),
            Tag(id=3, name="Politics"),
        ])
        await core.flush()
        core.add_all([
            Publication(id=1, name="Herald", url="https://herald.example", readership=500, domiciled_region_id=1),
            Publication(id=2, name="Times", url="https://times.example", readership=300, domiciled_region_id=2),
            Publication(id=3, name="Post", url="https://post.example", readership=100),
        ])
        await core.flush()
        core.add_all([
            PublicationTag(publication_id=1, tag_id=1),
            PublicationTag(publication_id=2, tag_id=2),
            PublicationTag(publication_id=2, tag_id=3),
            PublicationMediatype(owner_id=1, mediatype="Online"),
            PublicationMediatype(owner_id=2, mediatype="Print"),
            PublicationMediatype(owner_id=2, mediatype=""),
            TagTag(tag_id=1, related_tag_id=2),
            Feed(id=1, name="Herald Latest", url="https://herald.example/rss", publication_id=1,
                 domiciled_region_id=1, broken_url="N"),
            Feed(id=2, name="Times Politics", url="https://times.example/rss", publication_id=2,
                 enabled=False, broken_url="Y"),
            AppUser(id=1, username="editor", name="Editor", password=hash_password("secret"), editor=True),
            AppUser(id=2, username="reader", name="Reader", password=hash_password("secret"), editor=False),
        ])
        await core.commit()

    async with stores.mediamine.session() as mediamine:
        mediamine.add_all([
            FormatType(id=1, uuid=PRINT_FORMAT_UUID, name="Print"),
            FormatType(id=2, uuid=RADIO_FORMAT_UUID, name="Radio"),
            NewsType(id=1, uuid=POLITICS_NEWS_UUID, name="Politics"),
            RoleType(id=1, uuid=EDITOR_ROLE_UUID, name="Editor"),
            Journalist(id=1, uuid=ANA_UUID, first_name="Ana", last_name="Smith", email="ana@example.com",
                       valid_email=True, user_approved=False, enabled=True),
            Journalist(id=2, uuid=BEN_UUID, first_name="Ben", last_name="Jones", email="ben@example.com",
                       valid_email=False, user_approved=True, enabled=True),
            Journalist(id=3, uuid=CARA_UUID, first_name="Cara", last_name="Brown", email="cara@example.com",
                       valid_email=False, user_approved=False, enabled=True),
            Journalist(id=4, uuid=DAN_UUID, first_name="Dan", last_name="White", email="dan@example.com",
                       valid_email=True, user_approved=False, enabled=False),
        ])
        await mediamine.flush()
        mediamine.add_all([
            JournalistFormatType(journalist_id=1, format_type_id=1),
            JournalistPublication(journalist_id=1, publication_id=1),
            JournalistRegion(journalist_id=1, region_id=1),
            JournalistPublication(journalist_id=2, publication_id=2),
        ])
        await mediamine.commit()

    return stores


@pytest.fixture
def email_validator():
    """ZeroBounce stand-in that reports every address as valid"""

    async def all_valid(emails):
        return {
            "email_batch": [
                {"address": email, "status": "valid", "sub_status": ""} for email in emails
            ]
        }

    validator = AsyncMock()
    validator.validate_batch.side_effect = all_valid
    validator.validate.return_value = {"address": "", "status": "valid", "sub_status": ""}
    return validator


@pytest.fixture
def auth_headers(signing_key):
    return {"Authorization": f"Bearer {build_access_token(username='editor')}"}


@pytest_asyncio.fixture(scope="function")
async def client(seeded, email_validator, auth_headers) -> AsyncGenerator[AsyncClient, None]:
    """Authenticated client against the app wired to the SQLite stores"""
    from api.dependencies import get_email_validator
    from api.main import app

    app.state.stores = seeded
    app.dependency_overrides[get_email_validator] = lambda: email_validator

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", headers=auth_headers) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def anonymous_client(seeded) -> AsyncGenerator[AsyncClient, None]:
    from api.main import app

    app.state.stores = seeded
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
