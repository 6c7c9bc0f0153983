"""
BookInstance Model

A specific physical copy of a book that can be borrowed.
"""

from datetime import date
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base
from catalog.models.base import format_date, new_id

if TYPE_CHECKING:
    from catalog.models.book import Book


class BookInstanceStatus(str, Enum):
    """
    Availability of a copy.

    Any status may be set by an update; transitions are not restricted.
    """

    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"


class BookInstance(Base):
    """
    BookInstance model representing copies of a book.

    Table: bookinstances

    due_back is informational only; it is not cleared when the status
    changes back to Available.
    """

    __tablename__ = "bookinstances"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)

    book_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("books.id"),
        index=True,
        nullable=False,
    )

    imprint: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Publisher and edition of this copy"
    )

    # Stored as the plain status string
    status: Mapped[str] = mapped_column(
        String(20),
        index=True,
        nullable=False,
        default=BookInstanceStatus.MAINTENANCE.value,
    )

    due_back: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
        comment="Date the copy is expected back"
    )

    book: Mapped["Book"] = relationship("Book", lazy="selectin")

    @property
    def url(self) -> str:
        return f"/catalog/bookinstance/{self.id}"

    @property
    def due_back_formatted(self) -> str:
        return format_date(self.due_back)

    def __repr__(self) -> str:
        return f"BookInstance(id={self.id}, status='{self.status}')"
