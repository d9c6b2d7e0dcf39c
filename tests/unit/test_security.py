"""
Unit tests for password hashing and access tokens
"""

import jwt
import pytest
from core.config import settings
from core.exceptions import AuthenticationError
from core.security import (
    TOKEN_ALGORITHM,
    build_access_token,
    decode_access_token,
    hash_password,
    now_epoch_s,
    username_from_token,
    verify_password,
)


class TestPasswords:

    def test_hash_is_hex_sha256(self):
        assert hash_password("secret") == "2bb80d537b1da3e38bd30361aa855686bde0eacd7162fef6a25fe97bf527a25b"

    def test_verify_password(self):
        stored = hash_password("secret")
        assert verify_password("secret", stored)
        assert not verify_password("Secret", stored)
        assert not verify_password("", stored)
        assert not verify_password("secret", None)


class TestAccessTokens:
    """HS256 tokens signed with MEDIAMINE_API_KEY"""

    def test_round_trip(self, signing_key):
        token = build_access_token(username="editor")
        payload = decode_access_token(token)

        assert payload["data"] == {"username": "editor"}
        assert payload["aud"] == settings.TOKEN_AUDIENCE
        assert payload["iss"] == settings.TOKEN_ISSUER
        assert payload["sub"] == settings.TOKEN_SUBJECT
        assert payload["exp"] - payload["iat"] == 4 * 60 * 60
        assert username_from_token(token) == "editor"

    def test_expired_token_rejected(self):
        issued_at = now_epoch_s() - settings.TOKEN_TTL_SECONDS - 60
        token = build_access_token(username="editor", issued_at=issued_at)

        with pytest.raises(AuthenticationError, match="expired"):
            decode_access_token(token)

    def test_expiry_within_leeway_accepted(self):
        issued_at = now_epoch_s() - settings.TOKEN_TTL_SECONDS - 5
        token = build_access_token(username="editor", issued_at=issued_at)

        assert username_from_token(token) == "editor"

    def test_wrong_audience_rejected(self, signing_key):
        issued_at = now_epoch_s()
        token = jwt.encode(
            {
                "data": {"username": "editor"},
                "aud": "urn:audience:other",
                "iss": settings.TOKEN_ISSUER,
                "iat": issued_at,
                "exp": issued_at + 60,
            },
            signing_key,
            algorithm=TOKEN_ALGORITHM,
        )

        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_wrong_key_rejected(self):
        token = jwt.encode(
            {"data": {"username": "editor"}, "aud": settings.TOKEN_AUDIENCE, "iss": settings.TOKEN_ISSUER,
             "iat": now_epoch_s(), "exp": now_epoch_s() + 60},
            "another-signing-key-0123456789abcdef01234567",
            algorithm=TOKEN_ALGORITHM,
        )

        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_token_without_username_rejected(self, signing_key):
        token = jwt.encode(
            {"data": {}, "aud": settings.TOKEN_AUDIENCE, "iss": settings.TOKEN_ISSUER,
             "iat": now_epoch_s(), "exp": now_epoch_s() + 60},
            signing_key,
            algorithm=TOKEN_ALGORITHM,
        )

        with pytest.raises(AuthenticationError):
            username_from_token(token)

    def test_missing_signing_key(self, monkeypatch):
        monkeypatch.setattr(settings, "MEDIAMINE_API_KEY", None)
        with pytest.raises(AuthenticationError):
            build_access_token(username="editor")
