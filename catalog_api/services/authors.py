"""Author list service.

Lists every author ordered by family name, each rendered as:

    "<family_name>, <first_name> : <birth_year> - <death_year>"

Rules:
- If either name part is blank, the name portion is dropped entirely but the
  separators stay: " : 1775 - 1817"
- Each year renders independently; a missing date renders as "" and the
  " - " separator is always present: "Austen, Jane :  - 1817"
- Any store failure degrades to an empty list
"""

from collections.abc import Mapping
import logging
from typing import Any

from catalog_api.stores.documents import Collection

logger = logging.getLogger("uvicorn.error")

AUTHOR_SORT = [("family_name", "ascending")]


def _field(document: Any, name: str) -> Any:
    if isinstance(document, Mapping):
        return document.get(name)
    return getattr(document, name, None)


def _year(value: Any) -> str:
    year = getattr(value, "year", None)
    if year is None:
        return ""
    return str(year)


def format_author(author: Any) -> str:
    """Render one author record. Never raises for missing fields."""
    first_name = _field(author, "first_name")
    family_name = _field(author, "family_name")

    name = ""
    if first_name and family_name:
        name = f"{family_name}, {first_name}"

    lifespan = f"{_year(_field(author, 'date_of_birth'))} - {_year(_field(author, 'date_of_death'))}"
    return f"{name} : {lifespan}"


async def get_author_list(authors: Collection) -> list[str]:
    """Get display strings for all authors, sorted by family name.

    Args:
        authors: Author collection (find/sort).

    Returns:
        One string per author in store order, or [] if the query fails.
    """
    try:
        records = await authors.find({}).sort(AUTHOR_SORT)
    except Exception:
        logger.exception("Author list query failed, returning empty list")
        return []

    return [format_author(author) for author in records]
