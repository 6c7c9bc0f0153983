"""
Genre Model

Represents a book genre/category in the catalog.

A book can belong to multiple genres (e.g., "Science Fiction" and "Fantasy").
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base
from catalog.models.base import new_id


class Genre(Base):
    """
    Genre model representing book categories.

    Table: genres

    Names are kept unique by the create flow, which reuses an existing
    genre with the same name instead of inserting a duplicate.
    """

    __tablename__ = "genres"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)

    name: Mapped[str] = mapped_column(
        Text,
        index=True,
        nullable=False,
        comment="Genre name (e.g., 'Science Fiction', 'Poetry')"
    )

    @property
    def url(self) -> str:
        return f"/catalog/genre/{self.id}"

    def __repr__(self) -> str:
        return f"Genre(id={self.id}, name='{self.name}')"
