"""
Blog Backend — Session Token Tests
===================================

What we test:
    ✅ issue → verify returns the same identity
    ✅ Tampered, foreign-secret, and garbage tokens are TokenInvalidError
    ✅ Expiry is opt-in and reported as TokenExpiredError
    ✅ Tokens without usable id/email claims are rejected
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from blog_api.services.tokens import (
    TokenClaim,
    TokenExpiredError,
    TokenInvalidError,
    TokenService,
)

SECRET = "unit-test-secret-with-at-least-32-chars"


class TestTokenService:

    def setup_method(self):
        self.tokens = TokenService(secret=SECRET)

    def test_round_trip(self):
        token = self.tokens.issue(TokenClaim(id=7, email="alice@example.com"))
        claim = self.tokens.verify(token)
        assert claim == TokenClaim(id=7, email="alice@example.com")

    def test_no_expiry_by_default(self):
        token = self.tokens.issue(TokenClaim(id=1, email="a@example.com"))
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert "exp" not in payload
        assert "iat" in payload

    def test_signed_with_other_secret(self):
        other = TokenService(secret="another-secret-also-32-characters-long")
        token = other.issue(TokenClaim(id=1, email="a@example.com"))
        with pytest.raises(TokenInvalidError) as exc_info:
            self.tokens.verify(token)
        assert exc_info.value.message == "Invalid token"

    def test_tampered_payload(self):
        token = self.tokens.issue(TokenClaim(id=1, email="a@example.com"))
        header, payload, signature = token.split(".")
        forged = jwt.encode({"id": 2, "email": "b@example.com"}, "x" * 32, algorithm="HS256")
        token = ".".join([header, forged.split(".")[1], signature])
        with pytest.raises(TokenInvalidError):
            self.tokens.verify(token)

    @pytest.mark.parametrize("garbage", ["", "abc", "a.b.c", "Bearer xyz"])
    def test_garbage(self, garbage):
        with pytest.raises(TokenInvalidError):
            self.tokens.verify(garbage)

    def test_expired_token(self):
        past = datetime.now(timezone.utc) - timedelta(minutes=5)
        token = jwt.encode(
            {"id": 1, "email": "a@example.com", "iat": past - timedelta(minutes=5), "exp": past},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(TokenExpiredError) as exc_info:
            self.tokens.verify(token)
        assert exc_info.value.message == "Token has expired"

    def test_configured_expiry_is_written(self):
        tokens = TokenService(secret=SECRET, expires_minutes=30)
        token = tokens.issue(TokenClaim(id=1, email="a@example.com"))
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == 30 * 60
        assert tokens.verify(token).id == 1

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "a@example.com"},
            {"id": "1", "email": "a@example.com"},
            {"id": True, "email": "a@example.com"},
            {"id": 1},
            {"id": 1, "email": ""},
        ],
    )
    def test_missing_or_mistyped_claims(self, payload):
        token = jwt.encode(payload, SECRET, algorithm="HS256")
        with pytest.raises(TokenInvalidError):
            self.tokens.verify(token)

    def test_algorithm_is_pinned(self):
        tokens = TokenService(secret=SECRET, algorithm="HS512")
        token = self.tokens.issue(TokenClaim(id=1, email="a@example.com"))
        with pytest.raises(TokenInvalidError):
            tokens.verify(token)
