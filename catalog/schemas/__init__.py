"""
Form Schemas Package

Pydantic schemas declaring the validation and sanitization rules of every
HTML form. They are applied through catalog.services.validation.validate_form,
which never raises and always returns the sanitized input for redisplay.

Schema Naming Convention:
- XxxForm: Fields and rules of the create/update form for entity Xxx
"""

from catalog.schemas.author import AuthorForm
from catalog.schemas.book import BookForm
from catalog.schemas.bookinstance import STATUS_CHOICES, BookInstanceForm
from catalog.schemas.genre import GenreForm

__all__ = [
    "AuthorForm",
    "BookForm",
    "BookInstanceForm",
    "GenreForm",
    "STATUS_CHOICES",
]
