"""Book model.

A Book is the catalog entry (title, summary, ISBN); physical copies are
BookInstance rows that reference it.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.stores.postgres import Base


class Book(Base):
    """Catalog entry for a title."""

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(String(300), index=True)
    summary: Mapped[str | None] = mapped_column(Text)
    isbn: Mapped[str | None] = mapped_column(String(20), unique=True)

    # Relations
    author_id: Mapped[int | None] = mapped_column(ForeignKey("authors.id", ondelete="SET NULL"), index=True)
    author: Mapped[Optional["Author"]] = relationship(back_populates="books")  # noqa: F821
    instances: Mapped[list["BookInstance"]] = relationship(back_populates="book")  # noqa: F821

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Book {self.title!r}>"
