from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, call

import pytest

from catalog_api.models import BookInstanceStatus
from catalog_api.services.authors import format_author
from catalog_api.stores import postgres
from scripts import seed
from scripts.seed import AUTHORS, BOOK_INSTANCES, BOOKS


def test_seed_books_reference_seeded_authors():
    family_names = {a["family_name"] for a in AUTHORS}
    assert {b["author"] for b in BOOKS} <= family_names


def test_seed_instances_reference_seeded_books():
    isbns = {b["isbn"] for b in BOOKS}
    assert len(isbns) == len(BOOKS)
    assert {i["isbn"] for i in BOOK_INSTANCES} <= isbns


def test_seed_covers_every_status():
    assert {i["status"] for i in BOOK_INSTANCES} == set(BookInstanceStatus)


def test_seed_authors_render():
    rendered = [format_author(a) for a in AUTHORS]
    assert "Asimov, Isaac : 1920 - 1992" in rendered
    assert "Billings, Bob :  - " in rendered


@pytest.mark.asyncio
async def test_table_helpers_require_initialized_engine(monkeypatch):
    monkeypatch.setattr(postgres, "_engine", None)
    with pytest.raises(RuntimeError):
        await postgres.create_tables()
    with pytest.raises(RuntimeError):
        await postgres.drop_tables()


def _stub_seed_steps(monkeypatch) -> MagicMock:
    """Replace DB helpers in scripts.seed with mocks sharing one call log."""
    calls = MagicMock()
    for name in ("init_db", "close_db", "create_tables", "drop_tables"):
        calls.attach_mock(AsyncMock(), name)
        monkeypatch.setattr(seed, name, getattr(calls, name))
    monkeypatch.setattr(seed, "seed_authors", AsyncMock(return_value={}))
    monkeypatch.setattr(seed, "seed_books", AsyncMock(return_value={}))
    monkeypatch.setattr(seed, "seed_book_instances", AsyncMock())

    @asynccontextmanager
    async def fake_get_session():
        yield MagicMock()

    monkeypatch.setattr(seed, "get_session", fake_get_session)
    return calls


@pytest.mark.asyncio
async def test_seed_drop_recreates_tables_first(monkeypatch):
    calls = _stub_seed_steps(monkeypatch)

    await seed.seed_database(drop=True)

    assert calls.mock_calls == [
        call.init_db(),
        call.drop_tables(),
        call.create_tables(),
        call.close_db(),
    ]


@pytest.mark.asyncio
async def test_seed_without_flags_keeps_tables(monkeypatch):
    calls = _stub_seed_steps(monkeypatch)

    await seed.seed_database()

    calls.drop_tables.assert_not_awaited()
    calls.create_tables.assert_not_awaited()
    calls.close_db.assert_awaited_once()
