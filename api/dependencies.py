"""
FastAPI dependencies: store sessions, the email validator and the caller's identity.
"""

from typing import AsyncIterator, Optional
from fastapi import Depends, Header, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from core.database import Stores
from core.exceptions import AuthenticationError, ResourceNotFoundError
from core.security import username_from_token
from models.user import AppUser
from services.zerobounce import ZeroBounceClient


def get_stores(request: Request) -> Stores:
    return request.app.state.stores


async def get_core_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with get_stores(request).core.session() as session:
        yield session


async def get_mediamine_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with get_stores(request).mediamine.session() as session:
        yield session


def get_email_validator(request: Request) -> ZeroBounceClient:
    return request.app.state.email_validator


# ============================================================================
# AUTH
# ============================================================================

def _extract_bearer_token(authorization: Optional[str]) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise AuthenticationError("Missing authentication")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise AuthenticationError("Bad HTTP authentication header format")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise AuthenticationError("Authorization must be: Bearer <token>")
    return token


async def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_username(token: str = Depends(get_bearer_token)) -> str:
    return username_from_token(token)


async def get_current_user(
    username: str = Depends(get_current_username),
    core: AsyncSession = Depends(get_core_db)
) -> AppUser:
    """The app_user behind the token; owner of saved searches and selections"""
    result = await core.execute(select(AppUser).where(AppUser.username == username))
    user = result.scalars().first()
    if user is None:
        raise ResourceNotFoundError(
            "Unable to find user in database",
            context={"entity": "app_user", "lookup": username}
        )
    return user
