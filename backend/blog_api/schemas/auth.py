"""
Blog Backend — Authentication Schemas
======================================

Request bodies keep every field optional: presence and length rules are
checked by AuthService so that each failure carries its own message
("Email and password are required", "Password must be at least 6 characters").
Only type/format errors (e.g. a malformed email) are rejected by Pydantic.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, field_validator

from blog_api.schemas.common import CamelModel


class LoginRequest(CamelModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_missing(cls, v):
        # "" reaches the required-field check instead of the format check
        if isinstance(v, str) and not v.strip():
            return None
        return v


class RegisterRequest(LoginRequest):
    name: Optional[str] = None


class UserResponse(CamelModel):
    """A user as seen by clients. The password digest is never included."""
    id: int
    email: str
    name: Optional[str] = None
    created_at: datetime


class AuthResponse(CamelModel):
    """Returned by register (201) and login (200)."""
    message: str
    user: UserResponse
    token: str


class MeResponse(CamelModel):
    user: UserResponse
