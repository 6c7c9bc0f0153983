"""
Author Model

Represents an author in the catalog.

Display fields (name, lifespan, url, formatted dates) are derived from the
stored columns on every read and are never persisted.
"""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base
from catalog.models.base import format_date, new_id


class Author(Base):
    """
    Author model representing writers in the catalog.

    Table: authors

    Dependents:
    - Book.author references an author; an author with books cannot be
      deleted.

    Example:
        author = Author(
            first_name="Ben",
            family_name="Bova",
            date_of_birth=date(1932, 11, 8),
        )
    """

    __tablename__ = "authors"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)

    first_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        comment="Author's given name"
    )

    # Lists are sorted by family name
    family_name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Author's family name"
    )

    date_of_birth: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Date of birth"
    )

    date_of_death: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
        comment="Date of death, if any"
    )

    # -------------------------------------------------------------------------
    # Derived Fields
    # -------------------------------------------------------------------------
    @property
    def name(self) -> str:
        """
        Full display name: "family_name, first_name".

        A missing first name renders as an empty string, e.g. "Bova, ".
        """
        return f"{self.family_name}, {self.first_name or ''}"

    @property
    def lifespan(self) -> str:
        """Birth year and death year joined by a dash; unknown years are blank."""
        birth_year = self.date_of_birth.year if self.date_of_birth else ""
        death_year = self.date_of_death.year if self.date_of_death else ""
        return f"{birth_year}-{death_year}"

    @property
    def url(self) -> str:
        return f"/catalog/author/{self.id}"

    @property
    def birth_date_formatted(self) -> str:
        return format_date(self.date_of_birth)

    @property
    def death_date_formatted(self) -> str:
        return format_date(self.date_of_death)

    def __repr__(self) -> str:
        return f"Author(id={self.id}, family_name='{self.family_name}')"
