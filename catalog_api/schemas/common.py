"""Error schemas shared by the API."""

from typing import Any

from pydantic import BaseModel

INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    """Machine-readable code plus human message."""

    code: str
    message: str
    detail: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Body for unhandled failures.

    Format: { "error": { "code": str, "message": str, "detail": object } }

    The catalog listing routes never use it: authors degrade to [] and
    available books answer with the plain "Status not found" string.
    """

    error: ErrorDetail

    @classmethod
    def internal(cls, message: str) -> "ErrorResponse":
        return cls(error=ErrorDetail(code=INTERNAL_ERROR, message=message))
