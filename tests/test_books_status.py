from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from catalog_api.services.books_status import (
    MissingReference,
    format_book_instance,
    show_all_books_status,
)

AVAILABLE_FILTER = {"status": {"$eq": "Available"}}


@pytest.fixture
def res():
    """Response mock: status() chains, send() records the body."""
    response = MagicMock()
    response.status.return_value = response
    return response


def _book_instances(*, populated=None, populate_error=None, find_error=None):
    query = MagicMock()
    query.populate = AsyncMock(return_value=populated, side_effect=populate_error)
    collection = MagicMock()
    collection.find.return_value = query
    if find_error is not None:
        collection.find.side_effect = find_error
    return collection, query


def _instance(book, status="Available"):
    return SimpleNamespace(book=book, status=status)


@pytest.mark.asyncio
async def test_returns_all_available_books(res):
    collection, query = _book_instances(
        populated=[
            _instance(SimpleNamespace(title="Mock Book Title")),
            _instance(SimpleNamespace(title="Mock Book Title 2")),
        ]
    )

    await show_all_books_status(res, collection)

    collection.find.assert_called_once_with(AVAILABLE_FILTER)
    query.populate.assert_awaited_once_with("book")
    res.status.assert_called_once_with(200)
    res.send.assert_called_once_with(["Mock Book Title : Available", "Mock Book Title 2 : Available"])


@pytest.mark.asyncio
async def test_no_available_books_sends_empty_list(res):
    collection, query = _book_instances(populated=[])

    await show_all_books_status(res, collection)

    collection.find.assert_called_once_with(AVAILABLE_FILTER)
    query.populate.assert_awaited_once_with("book")
    res.status.assert_called_once_with(200)
    res.send.assert_called_once_with([])


@pytest.mark.asyncio
async def test_find_error_sends_500(res):
    collection, _ = _book_instances(find_error=RuntimeError("Database error"))

    await show_all_books_status(res, collection)

    res.status.assert_called_once_with(500)
    res.send.assert_called_once_with("Status not found")


@pytest.mark.asyncio
async def test_incomplete_instances_render_missing_marker(res):
    collection, _ = _book_instances(
        populated=[
            {"book": {}, "status": "Available"},
            {"book": {"title": "Mock Book Title"}, "status": None},
        ]
    )

    await show_all_books_status(res, collection)

    res.status.assert_called_once_with(200)
    res.send.assert_called_once_with(["undefined : Available", "Mock Book Title : undefined"])


@pytest.mark.asyncio
async def test_null_book_reference_sends_500(res):
    collection, query = _book_instances(populated=[_instance(None)])

    await show_all_books_status(res, collection)

    collection.find.assert_called_once_with(AVAILABLE_FILTER)
    query.populate.assert_awaited_once_with("book")
    res.status.assert_called_once_with(500)
    res.send.assert_called_once_with("Status not found")


@pytest.mark.asyncio
async def test_null_book_among_valid_instances_sends_500(res):
    collection, _ = _book_instances(
        populated=[
            _instance(SimpleNamespace(title="Fine")),
            _instance(None),
            _instance(SimpleNamespace(title="Also fine")),
        ]
    )

    await show_all_books_status(res, collection)

    res.status.assert_called_once_with(500)
    res.send.assert_called_once_with("Status not found")


@pytest.mark.asyncio
async def test_populate_rejection_sends_500(res):
    collection, _ = _book_instances(populate_error=RuntimeError("Populate failed"))

    await show_all_books_status(res, collection)

    collection.find.assert_called_once_with(AVAILABLE_FILTER)
    res.status.assert_called_once_with(500)
    res.send.assert_called_once_with("Status not found")


def test_format_book_instance():
    assert format_book_instance(_instance(SimpleNamespace(title="T"))) == "T : Available"
    assert format_book_instance({"book": {}, "status": "Available"}) == "undefined : Available"


def test_format_book_instance_without_book_raises():
    with pytest.raises(MissingReference):
        format_book_instance({"status": "Available"})
    with pytest.raises(MissingReference):
        format_book_instance(_instance(None))
