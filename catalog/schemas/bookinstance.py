"""
BookInstance Form Schema

Schema for the book copy create/update form.
"""

from datetime import date
from typing import Any

from pydantic import field_validator

from catalog.models import BookInstanceStatus
from catalog.services.validation import (
    FormSchema,
    one_of,
    optional_date,
    required,
)

STATUS_CHOICES = [status.value for status in BookInstanceStatus]


class BookInstanceForm(FormSchema):
    """
    Schema for the book instance form.

    status defaults to Maintenance when left empty; due_back is optional.
    """

    escape_fields = ("book", "imprint", "status")

    book: str = ""
    imprint: str = ""
    status: str = BookInstanceStatus.MAINTENANCE.value
    due_back: date | None = None

    @field_validator("book", mode="before")
    @classmethod
    def check_book(cls, v: Any) -> str:
        return required(v, "Book must be specified")

    @field_validator("imprint", mode="before")
    @classmethod
    def check_imprint(cls, v: Any) -> str:
        return required(v, "Imprint must be specified")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v: Any) -> str:
        if not v:
            return BookInstanceStatus.MAINTENANCE.value
        return one_of(v, STATUS_CHOICES, f"Status must be one of: {', '.join(STATUS_CHOICES)}")

    @field_validator("due_back", mode="before")
    @classmethod
    def check_due_back(cls, v: Any) -> date | None:
        return optional_date(v, "Invalid date")
