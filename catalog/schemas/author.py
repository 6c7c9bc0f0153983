"""
Author Form Schema

Rules for the author create/update form.

Names are letters and digits only. The date of birth must parse as an
ISO-8601 date and must be given; the date of death is optional and an
empty value means "still alive".
"""

from datetime import date
from typing import Any

from pydantic import field_validator

from catalog.services.validation import (
    FormSchema,
    alphanumeric,
    empty_to_none,
    max_length,
    optional_date,
    required,
)


class AuthorForm(FormSchema):
    """Schema for the author form."""

    escape_fields = ("first_name", "family_name")

    first_name: str | None = None
    family_name: str = ""
    date_of_birth: date | None = None
    date_of_death: date | None = None

    @field_validator("first_name", mode="before")
    @classmethod
    def check_first_name(cls, v: Any) -> str | None:
        """First name is optional, but must be alphanumeric when given."""
        v = empty_to_none(v)
        max_length(v, 100, "First name must be at most 100 characters.")
        return alphanumeric(v, "First name has non-alphanumeric characters.")

    @field_validator("family_name", mode="before")
    @classmethod
    def check_family_name(cls, v: Any) -> str:
        required(v, "Family name must be specified.")
        max_length(v, 100, "Family name must be at most 100 characters.")
        return alphanumeric(v, "Family name has non-alphanumeric characters.")

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def check_date_of_birth(cls, v: Any) -> date:
        parsed = optional_date(v, "Invalid date of birth")
        return required(parsed, "Date of birth must be specified.")

    @field_validator("date_of_death", mode="before")
    @classmethod
    def check_date_of_death(cls, v: Any) -> date | None:
        return optional_date(v, "Invalid date of death")
