"""
Routers Package

FastAPI routers for the HTML pages, one per entity kind.

Router Structure:
- home.py: / and /catalog (home page with record counts)
- authors.py: /catalog/authors, /catalog/author/*
- genres.py: /catalog/genres, /catalog/genre/*
- books.py: /catalog/books, /catalog/book/*
- bookinstances.py: /catalog/bookinstances, /catalog/bookinstance/*

Each router is imported and registered in main.py.
"""

from catalog.routers.authors import router as authors_router
from catalog.routers.bookinstances import router as bookinstances_router
from catalog.routers.books import router as books_router
from catalog.routers.genres import router as genres_router
from catalog.routers.home import router as home_router

__all__ = [
    "home_router",
    "authors_router",
    "genres_router",
    "books_router",
    "bookinstances_router",
]
