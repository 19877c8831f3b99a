"""
Blog Backend — Shared Schema Pieces
====================================

What:  Base model, error body, and small payloads shared by every route.
Why:   The wire format is camelCase (`postId`, `createdAt`) while Python code
       stays snake_case; one base class applies the alias generator to all
       request and response models.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """
    What:  The only error body the API ever returns.

    Example:
        {"error": "You can only update your own posts"}
    """
    error: str = Field(description="Human-readable error description")


class MessageResponse(CamelModel):
    """Body of successful deletions."""
    message: str


class AuthorSummary(CamelModel):
    """Public projection of a user embedded in posts and comments."""
    id: int
    name: str | None = None
    email: str


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Always 'ok' when the process is serving")
    timestamp: str = Field(description="Current server time (UTC ISO 8601)")
