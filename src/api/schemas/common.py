"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel
from pydantic_core import PydanticCustomError


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    msg: str
    details: Any | None = None


class FieldError(BaseModel):
    """One failed field in a validation error response."""

    field: str
    msg: str
    type: str


class ValidationErrorResponse(BaseModel):
    """Validation error response listing every failed field."""

    error_code: str
    msg: str
    errors: list[FieldError]


class MessageResponse(BaseModel):
    """Simple message response."""

    msg: str


def require_text(value: str, label: str) -> str:
    """Strip ``value`` and reject it when nothing is left."""
    value = value.strip()
    if not value:
        raise PydanticCustomError("required", "{label} is required", {"label": label})
    return value
