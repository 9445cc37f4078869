"""Available books service.

Writes the list of book copies whose status is exactly "Available":

    200 ["<title> : <status>", ...]

A copy whose book reference resolves to nothing fails the whole request, as
does any store error:

    500 "Status not found"

Missing title/status on an otherwise valid copy is not an error; the field
renders as MISSING_FIELD_MARKER.
"""

from collections.abc import Mapping
import logging
from typing import Any, Protocol

from catalog_api.models import BookInstanceStatus
from catalog_api.stores.documents import Collection

logger = logging.getLogger("uvicorn.error")

MISSING_FIELD_MARKER = "undefined"
STATUS_NOT_FOUND = "Status not found"
AVAILABLE_FILTER = {"status": {"$eq": BookInstanceStatus.AVAILABLE.value}}

_MISSING = object()


class StatusResponse(Protocol):
    """HTTP response collaborator: one status/send pair per request."""

    def status(self, code: int) -> "StatusResponse": ...

    def send(self, body: Any) -> None: ...


class MissingReference(LookupError):
    """A populated reference resolved to nothing."""


def _field(document: Any, name: str) -> Any:
    if isinstance(document, Mapping):
        return document.get(name, _MISSING)
    return getattr(document, name, _MISSING)


def _render(value: Any) -> str:
    if value is _MISSING or value is None:
        return MISSING_FIELD_MARKER
    return str(value)


def format_book_instance(instance: Any) -> str:
    """Render "<title> : <status>" for one populated copy.

    Raises:
        MissingReference: If the copy has no resolved book.
    """
    book = _field(instance, "book")
    if book is _MISSING or book is None:
        raise MissingReference(f"Book reference missing on {instance!r}")
    return f"{_render(_field(book, 'title'))} : {_render(_field(instance, 'status'))}"


async def show_all_books_status(response: StatusResponse, book_instances: Collection) -> None:
    """Send every available copy as "<title> : <status>".

    Args:
        response: Response collaborator receiving exactly one status/send pair.
        book_instances: BookInstance collection (find/populate).
    """
    try:
        instances = await book_instances.find(AVAILABLE_FILTER).populate("book")
        body = [format_book_instance(instance) for instance in instances]
    except MissingReference as e:
        logger.warning(f"Available books lookup aborted: {e}")
        response.status(500).send(STATUS_NOT_FOUND)
        return
    except Exception:
        logger.exception("Available books query failed")
        response.status(500).send(STATUS_NOT_FOUND)
        return

    response.status(200).send(body)
