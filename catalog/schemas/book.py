"""
Book Form Schema

Schema for the book create/update form.

The "genre" field comes from a group of checkboxes: it is missing when no
box is ticked and a single value when only one is. It is always read as a
list, so a stored book's genre references are a list in every case.
"""

from typing import Any

from pydantic import field_validator

from catalog.services.validation import FormSchema, required


class BookForm(FormSchema):
    """Schema for the book form. Every field is trimmed and escaped."""

    escape_fields = ("title", "author", "summary", "isbn", "genre")
    list_fields = ("genre",)

    title: str = ""
    author: str = ""
    summary: str = ""
    isbn: str = ""
    genre: list[str] = []

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, v: Any) -> str:
        return required(v, "Title must not be empty.")

    @field_validator("author", mode="before")
    @classmethod
    def check_author(cls, v: Any) -> str:
        return required(v, "Author must not be empty.")

    @field_validator("summary", mode="before")
    @classmethod
    def check_summary(cls, v: Any) -> str:
        return required(v, "Summary must not be empty.")

    @field_validator("isbn", mode="before")
    @classmethod
    def check_isbn(cls, v: Any) -> str:
        return required(v, "ISBN must not be empty")
