"""
Blog Backend — Session Token Service
=====================================

What:  Issues and verifies stateless bearer tokens carrying `{id, email}`.
How:   HMAC-signed JWTs (PyJWT). The signing secret comes from Settings and
       is never mutated after the service is built.
Who:   AuthService issues tokens; the Authorization Guard verifies them.

Claims:
    id     user id (int)
    email  user email (str)
    iat    issued-at timestamp
    exp    only when an expiry is configured; an expired token fails with
           TokenExpiredError
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

logger = logging.getLogger(__name__)


class TokenError(Exception):
    """Base exception for token verification failures."""

    def __init__(self, message: str = "Invalid token"):
        self.message = message
        super().__init__(message)


class TokenInvalidError(TokenError):
    """Bad signature, malformed token, or missing/mistyped identity claims."""


class TokenExpiredError(TokenError):
    """Token carried an `exp` claim that is in the past."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


@dataclass(frozen=True)
class TokenClaim:
    """The identity a token speaks for."""
    id: int
    email: str


class TokenService:
    """
    Signs and verifies session tokens with a single process-wide secret.

    Attributes:
        algorithm:       HMAC JWT algorithm (HS256 by default)
        expires_minutes: token lifetime, or None for tokens without `exp`
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: Optional[int] = None,
    ):
        self._secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def issue(self, claim: TokenClaim) -> str:
        now = datetime.now(timezone.utc)
        payload = {"id": claim.id, "email": claim.email, "iat": now}
        if self.expires_minutes is not None:
            payload["exp"] = now + timedelta(minutes=self.expires_minutes)
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaim:
        """
        Decode `token` and return its claim.

        Raises:
            TokenExpiredError: `exp` is present and has passed
            TokenInvalidError: anything else wrong with the token
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError()
        except jwt.InvalidTokenError as e:
            logger.debug("Token rejected: %s", e)
            raise TokenInvalidError()

        user_id = payload.get("id")
        email = payload.get("email")
        # bool is an int subclass; a token claiming id=true is not an identity
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise TokenInvalidError()
        if not isinstance(email, str) or not email:
            raise TokenInvalidError()

        return TokenClaim(id=user_id, email=email)
