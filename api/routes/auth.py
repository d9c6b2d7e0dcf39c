"""
Public root and login endpoints
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_core_db
from core.exceptions import AuthenticationError
from core.security import build_access_token, verify_password
from models.user import AppUser
from schemas.api import LoginResponse
from schemas.reference import LoginRequest
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Auth"])

LOGIN_FAILED = "Please enter a valid username & password"


@router.get("/", response_class=PlainTextResponse)
async def root():
    """Root endpoint"""
    return "Hello Mediamine!"


@router.post("/auth/login", response_model=LoginResponse)
async def login(payload: LoginRequest, core: AsyncSession = Depends(get_core_db)):
    """
    Exchange username and password for an access token.

    The password is compared as a hex SHA-256 digest; the token expires after
    TOKEN_TTL_SECONDS.
    """
    if not (payload.username and payload.password):
        raise AuthenticationError(LOGIN_FAILED)

    result = await core.execute(select(AppUser).where(AppUser.username == payload.username))
    user = result.scalars().first()

    if user is None or not verify_password(payload.password, user.password):
        logger.warning(f"Failed login for {payload.username}")
        raise AuthenticationError(LOGIN_FAILED)

    logger.info(f"Issued token for {user.username}")
    return LoginResponse(
        token=build_access_token(username=user.username),
        username=user.username,
        editor=user.editor
    )
