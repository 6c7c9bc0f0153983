"""
SQLAlchemy Models Package

One model per catalog collection.

Model Relationships:
- Author 1 <-> N Book: every book references exactly one author
- Genre N <-> N Book: a book lists zero or more genres
- Book 1 <-> N BookInstance: every copy references exactly one book

The store enforces no cascades between collections: integrity between
them is checked by the application before a delete (see
catalog.services.resources).

Import all models here to:
1. Make them available as: from catalog.models import Book, Author, Genre
2. Register every table with Base.metadata before create_all() runs
"""

# The order matters for SQLAlchemy to resolve relationships
from catalog.models.base import new_id
from catalog.models.author import Author
from catalog.models.genre import Genre
from catalog.models.book import Book, book_genres
from catalog.models.bookinstance import BookInstance, BookInstanceStatus

__all__ = [
    "Author",
    "Genre",
    "Book",
    "book_genres",
    "BookInstance",
    "BookInstanceStatus",
    "new_id",
]
