"""
Genre Form Schema

Schema for the genre create/update form.
Follows the same pattern as the author form.
"""

from typing import Any

from pydantic import field_validator

from catalog.services.validation import FormSchema, required


class GenreForm(FormSchema):
    """Schema for the genre form."""

    escape_fields = ("name",)

    name: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v: Any) -> str:
        return required(v, "Genre name required")
