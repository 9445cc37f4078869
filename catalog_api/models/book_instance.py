"""BookInstance model.

A physical copy of a Book with a lending status. The book reference is
nullable: copies can outlive a deleted catalog entry.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.stores.postgres import Base


class BookInstanceStatus(str, Enum):
    """Lending status values stored in book_instances.status."""

    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"


class BookInstance(Base):
    """Physical copy of a book."""

    __tablename__ = "book_instances"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Relations
    book_id: Mapped[int | None] = mapped_column(ForeignKey("books.id", ondelete="SET NULL"), index=True)
    book: Mapped[Optional["Book"]] = relationship(back_populates="instances")  # noqa: F821

    imprint: Mapped[str] = mapped_column(String(300), default="")
    status: Mapped[str] = mapped_column(
        String(20),
        default=BookInstanceStatus.MAINTENANCE.value,
        index=True,
    )
    due_back: Mapped[date | None] = mapped_column(Date)

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
        return f"<BookInstance {self.id} ({self.status})>"
