"""Document-style query layer over the ORM models.

Handlers talk to collections with find/sort/populate semantics:

    authors = Collection(Author)
    rows = await authors.find({}).sort([("family_name", "ascending")])

    instances = Collection(BookInstance)
    rows = await instances.find({"status": {"$eq": "Available"}}).populate("book")

Supported filters:
- {field: value}                plain equality
- {field: {"$eq": value}}       equality
- {field: {"$ne": value}}       inequality
- {field: {"$in": [v1, v2]}}    membership

Sort specs: [(field, direction), ...] or {field: direction}, with direction
"ascending"/"asc"/1 or "descending"/"desc"/-1.

`find` compiles the filter immediately, so a malformed filter raises before
any I/O. Database errors are re-raised as QueryFailure.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
import logging
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import RelationshipProperty, selectinload
from sqlalchemy.sql.elements import ColumnElement

from catalog_api.models import Author, BookInstance
from catalog_api.stores.postgres import Base, get_session

logger = logging.getLogger("uvicorn.error")

ASCENDING = ("ascending", "asc", 1)
DESCENDING = ("descending", "desc", -1)

SortSpec = Sequence[tuple[str, str | int]] | Mapping[str, str | int]


class QueryFailure(RuntimeError):
    """A store query could not be executed."""


class UnsupportedQuery(QueryFailure):
    """The filter, sort or populate spec does not fit the collection."""


def _column(model: type[Base], field: str) -> Any:
    column = model.__table__.columns.get(field)
    if column is None:
        raise UnsupportedQuery(f"{model.__name__} has no field {field!r}")
    return getattr(model, column.key)


def compile_filter(model: type[Base], filter: Mapping[str, Any] | None) -> list[ColumnElement[bool]]:
    """Translate a document filter into SQLAlchemy WHERE clauses."""
    clauses: list[ColumnElement[bool]] = []
    for field, condition in (filter or {}).items():
        column = _column(model, field)
        if not isinstance(condition, Mapping):
            clauses.append(column == condition)
            continue
        if not condition:
            raise UnsupportedQuery(f"Empty condition on {field!r}")
        for op, value in condition.items():
            if op == "$eq":
                clauses.append(column == value)
            elif op == "$ne":
                clauses.append(column != value)
            elif op == "$in":
                if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
                    raise UnsupportedQuery(f"$in on {field!r} expects a list")
                clauses.append(column.in_(list(value)))
            else:
                raise UnsupportedQuery(f"Unsupported operator {op!r} on {field!r}")
    return clauses


def compile_sort(model: type[Base], spec: SortSpec) -> list[ColumnElement[Any]]:
    """Translate [(field, direction), ...] or {field: direction} into ORDER BY expressions."""
    entries = spec.items() if isinstance(spec, Mapping) else spec
    order_by: list[ColumnElement[Any]] = []
    for entry in entries:
        if not isinstance(entry, (tuple, list)) or len(entry) != 2:
            raise UnsupportedQuery(f"Sort entry {entry!r} is not a (field, direction) pair")
        field, direction = entry
        column = _column(model, field)
        if direction in ASCENDING:
            order_by.append(column.asc())
        elif direction in DESCENDING:
            order_by.append(column.desc())
        else:
            raise UnsupportedQuery(f"Unsupported sort direction {direction!r} for {field!r}")
    return order_by


def _relationship(model: type[Base], field: str) -> Any:
    attr = getattr(model, field, None)
    prop = getattr(attr, "property", None)
    if not isinstance(prop, RelationshipProperty):
        raise UnsupportedQuery(f"{model.__name__}.{field} is not a reference")
    return attr


class DocumentQuery:
    """Pending query returned by Collection.find()."""

    def __init__(self, model: type[Base], where: list[ColumnElement[bool]]) -> None:
        self.model = model
        self.where = where

    def statement(self) -> Select[Any]:
        stmt = select(self.model)
        for clause in self.where:
            stmt = stmt.where(clause)
        return stmt

    async def all(self) -> list[Any]:
        """Execute without ordering or reference resolution."""
        return await self._execute(self.statement())

    async def sort(self, spec: SortSpec) -> list[Any]:
        """Execute ordered by spec, e.g. [("family_name", "ascending")]."""
        stmt = self.statement().order_by(*compile_sort(self.model, spec))
        return await self._execute(stmt)

    async def populate(self, field: str) -> list[Any]:
        """Execute and eagerly load the referenced document under `field`."""
        stmt = self.statement().options(selectinload(_relationship(self.model, field)))
        return await self._execute(stmt)

    async def _execute(self, stmt: Select[Any]) -> list[Any]:
        try:
            async with get_session() as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Query on {self.model.__tablename__} failed: {e}")
            raise QueryFailure(f"Query on {self.model.__tablename__} failed") from e


class Collection:
    """Document-style access to one ORM model."""

    def __init__(self, model: type[Base]) -> None:
        self.model = model

    def find(self, filter: Mapping[str, Any] | None = None) -> DocumentQuery:
        return DocumentQuery(self.model, compile_filter(self.model, filter))

    def __repr__(self) -> str:
        return f"<Collection {self.model.__tablename__}>"


def get_author_collection() -> Collection:
    """FastAPI dependency for the authors collection."""
    return Collection(Author)


def get_book_instance_collection() -> Collection:
    """FastAPI dependency for the book instances collection."""
    return Collection(BookInstance)
