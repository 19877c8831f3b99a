"""
Blog Backend — Shared Request Validation
=========================================

What:  Shape checks used by every route, and the translation of framework
       validation errors into the API's single-message error contract.

Path ids arrive as strings so a non-numeric id yields "Invalid post ID"
rather than FastAPI's generic 422 payload.
"""

import re
from typing import Any, Sequence

from fastapi.exceptions import RequestValidationError

from blog_api.exceptions import BadRequestError

# Location prefixes FastAPI puts in front of the field path
_LOCATION_ROOTS = {"body", "path", "query", "header", "cookie"}

# Integer primary keys are 32-bit signed in PostgreSQL
MAX_ID = 2**31 - 1
_MAX_ID_DIGITS = len(str(MAX_ID))

_ID_PATTERN = re.compile(r"[0-9]+")


def id_in_range(value: int) -> bool:
    """True when `value` can be a stored row id (1 .. MAX_ID)."""
    return 0 < value <= MAX_ID


def parse_id(raw: str, resource: str) -> int:
    """
    Parse a numeric path parameter.

    Only plain ASCII digits are accepted; signs, whitespace, underscores and
    other Unicode digits are not.

    Raises:
        BadRequestError: "Invalid <resource> ID" for anything that is not a
                         positive integer within the id range
    """
    # Length check first: int() refuses very long digit strings
    if len(raw) > _MAX_ID_DIGITS or not _ID_PATTERN.fullmatch(raw):
        raise BadRequestError(f"Invalid {resource} ID", field=f"{resource}Id")
    value = int(raw)
    if not id_in_range(value):
        raise BadRequestError(f"Invalid {resource} ID", field=f"{resource}Id")
    return value


def _field_path(loc: Sequence[Any]) -> str:
    parts = [str(part) for part in loc]
    if parts and parts[0] in _LOCATION_ROOTS:
        parts = parts[1:]
    return ".".join(parts)


def describe_validation_error(exc: RequestValidationError) -> str:
    """
    Reduce a RequestValidationError to one field-specific message.

    Examples:
        published not a bool  → "published: Input should be a valid boolean"
        body is not JSON      → "Invalid JSON body"
        body missing entirely → "Request body is required"
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    error_type = first.get("type", "")
    field = _field_path(first.get("loc", ()))

    if error_type == "json_invalid":
        return "Invalid JSON body"
    if error_type == "missing" and not field:
        return "Request body is required"
    if error_type == "model_attributes_type" or (error_type.endswith("_type") and not field):
        return "Request body must be a JSON object"

    message = first.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message
