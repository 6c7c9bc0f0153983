#!/usr/bin/env python3
"""
Database Seed Script

Populates the catalog with sample data for development.

USAGE:
    # From the project root with the virtualenv activated
    python scripts/seed_data.py

    # Wipe existing records first
    python scripts/seed_data.py --clear

This script:
1. Connects to the database using the app settings
2. Creates missing tables
3. Optionally clears existing data
4. Creates sample authors, genres, books and book copies through the store
"""

import argparse
import asyncio
import sys
from datetime import date
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from catalog.database import SessionLocal, create_tables, engine
from catalog.models import Book
from catalog.services.store import CatalogStore


async def clear_data(store: CatalogStore) -> None:
    """Clear all existing data, dependents first."""
    print("Clearing existing data...")
    for collection in (store.bookinstances, store.books, store.authors, store.genres):
        for document in await collection.find():
            await collection.delete(document.id)
    print("Data cleared.")


async def create_authors(store: CatalogStore) -> dict[str, str]:
    """Create sample authors. Returns family name -> id."""
    print("Creating authors...")
    authors_data = [
        {"first_name": "Patrick", "family_name": "Rothfuss", "date_of_birth": "1973-06-06"},
        {"first_name": "Ben", "family_name": "Bova", "date_of_birth": "1932-11-08"},
        {"first_name": "Isaac", "family_name": "Asimov", "date_of_birth": "1920-01-02",
         "date_of_death": "1992-04-06"},
        {"first_name": "Bob", "family_name": "Billings", "date_of_birth": "1949-05-02"},
        {"first_name": "Jim", "family_name": "Jones", "date_of_birth": "1971-12-16"},
    ]

    authors = {}
    for data in authors_data:
        author = await store.authors.insert({
            **data,
            "date_of_birth": _date(data["date_of_birth"]),
            "date_of_death": _date(data.get("date_of_death")),
        })
        authors[data["family_name"]] = author.id

    print(f"Created {len(authors)} authors.")
    return authors


async def create_genres(store: CatalogStore) -> dict[str, str]:
    """Create sample genres. Returns name -> id."""
    print("Creating genres...")
    genres = {}
    for name in ("Fantasy", "Science Fiction", "French Poetry"):
        genre = await store.genres.insert({"name": name})
        genres[name] = genre.id

    print(f"Created {len(genres)} genres.")
    return genres


async def create_books(
    store: CatalogStore,
    authors: dict[str, str],
    genres: dict[str, str],
) -> dict[str, Book]:
    """Create sample books with author and genre references."""
    print("Creating books...")
    books_data = [
        {
            "title": "The Name of the Wind (The Kingkiller Chronicle, #1)",
            "summary": "I have stolen princesses back from sleeping barrow kings. "
                       "I burned down the town of Trebon.",
            "isbn": "9781473211896",
            "author": authors["Rothfuss"],
            "genre": [genres["Fantasy"]],
        },
        {
            "title": "The Wise Man's Fear (The Kingkiller Chronicle, #2)",
            "summary": "Picking up the tale of Kvothe Kingkiller once again.",
            "isbn": "9788401352836",
            "author": authors["Rothfuss"],
            "genre": [genres["Fantasy"]],
        },
        {
            "title": "Apes and Angels",
            "summary": "Humankind headed out to the stars not for conquest, "
                       "nor exploration, nor even for curiosity.",
            "isbn": "9780765379528",
            "author": authors["Bova"],
            "genre": [genres["Science Fiction"]],
        },
        {
            "title": "Death Wave",
            "summary": "In Ben Bova's previous novel New Earth, Jordan Kell led "
                       "the first human mission beyond the solar system.",
            "isbn": "9780765379504",
            "author": authors["Bova"],
            "genre": [genres["Science Fiction"]],
        },
        {
            "title": "Test Book 1",
            "summary": "Summary of test book 1",
            "isbn": "ISBN111111",
            "author": authors["Jones"],
            "genre": [genres["Fantasy"], genres["Science Fiction"]],
        },
        {
            "title": "Test Book 2",
            "summary": "Summary of test book 2",
            "isbn": "ISBN222222",
            "author": authors["Jones"],
            "genre": [],
        },
    ]

    books = {}
    for data in books_data:
        book = await store.books.insert(data)
        books[data["title"]] = book

    print(f"Created {len(books)} books.")
    return books


async def create_bookinstances(store: CatalogStore, books: dict[str, Book]) -> int:
    """Create copies of the sample books."""
    print("Creating book copies...")
    titles = list(books)
    copies = [
        (titles[0], "London Gollancz, 2014.", "Available", None),
        (titles[1], "Gollancz, 2011.", "Loaned", "2024-05-01"),
        (titles[2], "Gollancz, 2015.", "Available", None),
        (titles[3], "New York Tom Doherty Associates, 2016.", "Available", None),
        (titles[3], "New York Tom Doherty Associates, 2016.", "Maintenance", None),
        (titles[4], "Imprint XXX2", "Reserved", "2024-06-15"),
    ]

    for title, imprint, status, due_back in copies:
        await store.bookinstances.insert({
            "book": books[title].id,
            "imprint": imprint,
            "status": status,
            "due_back": _date(due_back),
        })

    print(f"Created {len(copies)} book copies.")
    return len(copies)


def _date(value: str | None):
    return date.fromisoformat(value) if value else None


async def main(clear: bool) -> None:
    await create_tables()
    store = CatalogStore.from_sessionmaker(SessionLocal)

    if clear:
        await clear_data(store)

    authors = await create_authors(store)
    genres = await create_genres(store)
    books = await create_books(store, authors, genres)
    await create_bookinstances(store, books)

    await engine.dispose()
    print("Seeding complete.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Populate the catalog with sample data")
    parser.add_argument("--clear", action="store_true", help="delete existing records first")
    args = parser.parse_args()

    asyncio.run(main(clear=args.clear))
