"""Pydantic schemas for API request/response validation."""

from catalog_api.schemas.common import ErrorDetail, ErrorResponse

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
]
