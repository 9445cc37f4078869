#!/usr/bin/env python3
"""Seed database with a sample catalog.

Creates:
- Authors (some with partial life spans)
- Books linked to authors
- Book instances covering every lending status

Seed script is idempotent: authors are matched by name, books by ISBN and
instances by (book, imprint, status).

Usage:
    python -m scripts.seed [--create-tables] [--drop-tables]
"""

import argparse
import asyncio
import os
import sys
from datetime import date

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.models import Author, Book, BookInstance, BookInstanceStatus
from catalog_api.stores.postgres import close_db, create_tables, drop_tables, get_session, init_db

load_dotenv()

# ============================================================
# Authors
# ============================================================

AUTHORS = [
    {"first_name": "Patrick", "family_name": "Rothfuss", "date_of_birth": date(1973, 6, 6)},
    {"first_name": "Ben", "family_name": "Bova", "date_of_birth": date(1932, 11, 8), "date_of_death": date(2020, 11, 29)},
    {"first_name": "Isaac", "family_name": "Asimov", "date_of_birth": date(1920, 1, 2), "date_of_death": date(1992, 4, 6)},
    {"first_name": "Bob", "family_name": "Billings"},
    {"first_name": "Jim", "family_name": "Jones", "date_of_birth": date(1971, 12, 16)},
]

# ============================================================
# Books (author referenced by family name)
# ============================================================

BOOKS = [
    {
        "title": "The Name of the Wind (The Kingkiller Chronicle, #1)",
        "isbn": "9781473211896",
        "author": "Rothfuss",
        "summary": "The tale of Kvothe, from his childhood in a troupe of traveling players to his years at the University.",
    },
    {
        "title": "The Wise Man's Fear (The Kingkiller Chronicle, #2)",
        "isbn": "9788401352836",
        "author": "Rothfuss",
        "summary": "Kvothe continues the story of his life, picking up where The Name of the Wind left off.",
    },
    {
        "title": "Apes and Angels",
        "isbn": "9780765379528",
        "author": "Bova",
        "summary": "Humankind's first wave of interstellar exploration races a wave of deadly radiation.",
    },
    {
        "title": "Death Wave",
        "isbn": "9780765379504",
        "author": "Bova",
        "summary": "Jordan Kell warns of a gamma-ray burst heading for Earth.",
    },
    {
        "title": "Test Book 1",
        "isbn": "ISBN111111",
        "author": "Billings",
        "summary": "Summary of test book 1",
    },
]

# ============================================================
# Book instances (book referenced by ISBN)
# ============================================================

BOOK_INSTANCES = [
    {"isbn": "9781473211896", "imprint": "London Gollancz, 2014.", "status": BookInstanceStatus.AVAILABLE},
    {"isbn": "9788401352836", "imprint": "Gollancz, 2011.", "status": BookInstanceStatus.LOANED, "due_back": date(2026, 11, 2)},
    {"isbn": "9780765379528", "imprint": "Gollancz, 2015.", "status": BookInstanceStatus.MAINTENANCE},
    {"isbn": "9780765379504", "imprint": "New York Tom Doherty Associates, 2016.", "status": BookInstanceStatus.AVAILABLE},
    {"isbn": "9780765379504", "imprint": "New York Tom Doherty Associates, 2016.", "status": BookInstanceStatus.RESERVED},
    {"isbn": "ISBN111111", "imprint": "Imprint XXX2", "status": BookInstanceStatus.AVAILABLE},
    {"isbn": "ISBN111111", "imprint": "Imprint XXX3", "status": BookInstanceStatus.LOANED, "due_back": date(2026, 12, 1)},
]


async def seed_database(*, create: bool = False, drop: bool = False) -> None:
    """Seed database with the sample catalog.

    Args:
        create: Create tables from ORM metadata first.
        drop: Drop all tables first; implies create.
    """
    await init_db()
    try:
        if drop:
            print("Dropping tables...")
            await drop_tables()
        if create or drop:
            await create_tables()

        async with get_session() as session:
            print("Seeding database...")

            print("\nCreating authors...")
            author_map = await seed_authors(session)

            print("\nCreating books...")
            book_map = await seed_books(session, author_map)

            print("\nCreating book instances...")
            await seed_book_instances(session, book_map)

        print("\nDatabase seeded successfully!")
    finally:
        await close_db()


async def seed_authors(session: AsyncSession) -> dict[str, int]:
    """Seed authors and return mapping of family_name -> id."""
    author_map: dict[str, int] = {}

    for a in AUTHORS:
        result = await session.execute(
            select(Author)
            .where(Author.first_name == a["first_name"])
            .where(Author.family_name == a["family_name"])
        )
        existing = result.scalar_one_or_none()

        if existing:
            print(f"  - {a['family_name']}, {a['first_name']} (exists)")
            author_map[a["family_name"]] = existing.id
        else:
            author = Author(
                first_name=a["first_name"],
                family_name=a["family_name"],
                date_of_birth=a.get("date_of_birth"),
                date_of_death=a.get("date_of_death"),
            )
            session.add(author)
            await session.flush()
            author_map[a["family_name"]] = author.id
            print(f"  + {a['family_name']}, {a['first_name']}")

    return author_map


async def seed_books(session: AsyncSession, author_map: dict[str, int]) -> dict[str, int]:
    """Seed books and return mapping of isbn -> id."""
    book_map: dict[str, int] = {}

    for b in BOOKS:
        result = await session.execute(select(Book).where(Book.isbn == b["isbn"]))
        existing = result.scalar_one_or_none()

        if existing:
            print(f"  - {b['title']} (exists)")
            book_map[b["isbn"]] = existing.id
        else:
            book = Book(
                title=b["title"],
                isbn=b["isbn"],
                summary=b.get("summary"),
                author_id=author_map.get(b["author"]),
            )
            session.add(book)
            await session.flush()
            book_map[b["isbn"]] = book.id
            print(f"  + {b['title']}")

    return book_map


async def seed_book_instances(session: AsyncSession, book_map: dict[str, int]) -> None:
    """Seed book instances."""
    for inst in BOOK_INSTANCES:
        book_id = book_map.get(inst["isbn"])
        if not book_id:
            print(f"  ! Book not found: {inst['isbn']}")
            continue

        status = inst["status"].value
        result = await session.execute(
            select(BookInstance)
            .where(BookInstance.book_id == book_id)
            .where(BookInstance.imprint == inst["imprint"])
            .where(BookInstance.status == status)
        )
        if result.scalars().first():
            print(f"  - {inst['isbn']} {status} (exists)")
            continue

        session.add(
            BookInstance(
                book_id=book_id,
                imprint=inst["imprint"],
                status=status,
                due_back=inst.get("due_back"),
            )
        )
        print(f"  + {inst['isbn']} {status}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the library catalog")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create tables from ORM metadata before seeding (development only)",
    )
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop and recreate all tables before seeding (destroys existing data)",
    )
    args = parser.parse_args()
    asyncio.run(seed_database(create=args.create_tables, drop=args.drop_tables))


if __name__ == "__main__":
    main()
