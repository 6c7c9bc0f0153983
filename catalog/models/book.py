"""
Book Model

The central model of the catalog.

This file also contains the book_genres association table that stores the
list of genres a book belongs to.

References are always resolved on read (lazy="selectin"): loading a book
also loads its author and its genres, the way a populated document would
look. selectin loading is performed while the query runs, so the related
objects stay readable after the session is closed.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base
from catalog.models.base import new_id

if TYPE_CHECKING:
    from catalog.models.author import Author
    from catalog.models.genre import Genre


# =============================================================================
# Association Table
# =============================================================================
# No ON DELETE CASCADE towards genres: a genre still listed by a book is
# protected by the delete guard, not by the store.
book_genres = Table(
    "book_genres",
    Base.metadata,
    Column(
        "book_id",
        String(32),
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "genre_id",
        String(32),
        ForeignKey("genres.id"),
        primary_key=True,
    ),
    comment="Genre references of each book",
)


class Book(Base):
    """
    Book model representing titles in the catalog.

    Table: books

    Fields:
    - title, summary, isbn: required text
    - author: reference to exactly one Author
    - genre: list of references to Genre (possibly empty)

    Dependents:
    - BookInstance.book references a book; a book with copies cannot be
      deleted.
    """

    __tablename__ = "books"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)

    title: Mapped[str] = mapped_column(
        Text,
        index=True,
        nullable=False,
        comment="Book title"
    )

    summary: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Book summary"
    )

    isbn: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="International Standard Book Number"
    )

    author_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("authors.id"),
        index=True,
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # References
    # -------------------------------------------------------------------------
    author: Mapped["Author"] = relationship("Author", lazy="selectin")

    genre: Mapped[list["Genre"]] = relationship(
        "Genre",
        secondary=book_genres,
        lazy="selectin",
        order_by="Genre.name",
    )

    @property
    def url(self) -> str:
        return f"/catalog/book/{self.id}"

    @property
    def genre_ids(self) -> list[str]:
        """Identifiers of the referenced genres."""
        return [genre.id for genre in self.genre]

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', isbn='{self.isbn}')"
