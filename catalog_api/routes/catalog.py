"""Catalog endpoints.

GET /v1/catalog/authors         - Authors by family name with life span
GET /v1/catalog/books/available - Copies with status "Available"

Routers are thin: call services for business logic.
"""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from catalog_api.services.authors import get_author_list
from catalog_api.services.books_status import show_all_books_status
from catalog_api.stores.documents import (
    Collection,
    get_author_collection,
    get_book_instance_collection,
)

router = APIRouter()


class BufferedResponse:
    """Collects the status/send pair written by a service."""

    def __init__(self) -> None:
        self.status_code = 200
        self.body: Any = None
        self.sent = False

    def status(self, code: int) -> "BufferedResponse":
        self.status_code = code
        return self

    def send(self, body: Any) -> None:
        if self.sent:
            raise RuntimeError("Response already sent")
        self.body = body
        self.sent = True

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=self.body)


@router.get("/authors", response_model=list[str])
async def list_authors(
    authors: Collection = Depends(get_author_collection),
) -> list[str]:
    """Get all authors sorted by family name.

    Returns:
        Display strings; empty list if the store is unavailable.
    """
    return await get_author_list(authors)


@router.get(
    "/books/available",
    response_model=list[str],
    responses={500: {"description": "Status not found", "content": {"application/json": {"schema": {"type": "string"}}}}},
)
async def list_available_books(
    book_instances: Collection = Depends(get_book_instance_collection),
) -> JSONResponse:
    """Get every copy with status "Available" as "<title> : <status>"."""
    response = BufferedResponse()
    await show_all_books_status(response, book_instances)
    return response.to_response()
