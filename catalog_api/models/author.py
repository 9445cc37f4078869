"""Author model.

Authors are listed by family name; the life span is rendered from the
optional birth and death dates.
"""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.stores.postgres import Base


class Author(Base):
    """Book author."""

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Name (either part may be blank for legacy imports)
    first_name: Mapped[str] = mapped_column(String(100), default="")
    family_name: Mapped[str] = mapped_column(String(100), default="", index=True)

    # Life span
    date_of_birth: Mapped[date | None] = mapped_column(Date)
    date_of_death: Mapped[date | None] = mapped_column(Date)

    books: Mapped[list["Book"]] = relationship(back_populates="author")  # noqa: F821

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
        return f"<Author {self.family_name}, {self.first_name}>"
