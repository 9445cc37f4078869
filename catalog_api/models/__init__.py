"""SQLAlchemy ORM models.

Models represent database tables:
- authors: Book authors with optional life span
- books: Catalog entries (title, summary, ISBN)
- book_instances: Physical copies with a lending status
"""

from catalog_api.models.author import Author
from catalog_api.models.book import Book
from catalog_api.models.book_instance import BookInstance, BookInstanceStatus

__all__ = ["Author", "Book", "BookInstance", "BookInstanceStatus"]
