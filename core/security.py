"""
Password hashing and access token helpers.
"""

import hashlib
import hmac
import time
from typing import Any, Dict, Optional

import jwt

from core.config import settings
from core.exceptions import AuthenticationError

TOKEN_ALGORITHM = "HS256"


def now_epoch_s() -> int:
    return int(time.time())


def signing_key() -> str:
    key = (settings.MEDIAMINE_API_KEY or "").strip()
    if not key:
        raise AuthenticationError("Token signing key is not configured.")
    return key


def hash_password(plain_password: str) -> str:
    # Stored passwords are unsalted hex SHA-256 digests.
    return hashlib.sha256((plain_password or "").encode("utf-8")).hexdigest()


def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    if not plain_password or not password_hash:
        return False
    return hmac.compare_digest(hash_password(plain_password), password_hash)


def build_access_token(*, username: str, issued_at: Optional[int] = None) -> str:
    issued_at = issued_at if issued_at is not None else now_epoch_s()

    payload = {
        "data": {"username": username},
        "aud": settings.TOKEN_AUDIENCE,
        "iss": settings.TOKEN_ISSUER,
        "sub": settings.TOKEN_SUBJECT,
        "iat": issued_at,
        "exp": issued_at + settings.TOKEN_TTL_SECONDS,
    }
    return jwt.encode(payload, signing_key(), algorithm=TOKEN_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthenticationError("Access token is empty.")

    try:
        return jwt.decode(
            raw,
            signing_key(),
            algorithms=[TOKEN_ALGORITHM],
            audience=settings.TOKEN_AUDIENCE,
            issuer=settings.TOKEN_ISSUER,
            leeway=settings.TOKEN_LEEWAY_SECONDS,
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Access token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError("Invalid access token.") from exc


def username_from_token(token: str) -> str:
    payload = decode_access_token(token)
    data = payload.get("data")
    username = data.get("username") if isinstance(data, dict) else None
    if not isinstance(username, str) or not username.strip():
        raise AuthenticationError("Access token carries no username.")
    return username
