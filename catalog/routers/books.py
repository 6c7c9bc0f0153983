"""
Books Router

HTML pages for books.

This is the most involved router:
- The form needs every author and every genre, fetched concurrently
- Genre checkboxes are pre-ticked from the book's current genres (or from
  the submitted ones when the form is redisplayed with errors)
- A book cannot be deleted while copies of it exist
"""

import logging
from collections.abc import Iterable
from typing import Any

from fastapi import APIRouter, Request

from catalog.dependencies import Store
from catalog.exceptions import EntityNotFoundError
from catalog.schemas import BookForm
from catalog.services.aggregation import mark_checked, parallel
from catalog.services.resources import BOOKS
from catalog.services.store import CatalogStore
from catalog.services.validation import FieldError, validate_form
from catalog.templating import redirect, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["Books"])


# =============================================================================
# Helper Functions
# =============================================================================
def book_form_view(
    title: str,
    results: dict[str, Any],
    book: Any = None,
    selected_author: str | None = None,
    selected_genres: Iterable[str] = (),
    errors: list[FieldError] | None = None,
) -> dict[str, Any]:
    """
    Build the book form view-model from the fetched authors and genres.

    Args:
        title: Page title
        results: Output of parallel() holding "authors" and "genres"
        book: Current book, or the sanitized submission on redisplay
        selected_author: Identifier of the author to preselect
        selected_genres: Identifiers of the genres to tick
        errors: Validation errors to show
    """
    return {
        "title": title,
        "authors": results["authors"],
        "genres": mark_checked(results["genres"], selected_genres),
        "book": book,
        "selected_author": selected_author,
        "errors": errors or [],
    }


def form_choices(store: CatalogStore, **extra) -> dict[str, Any]:
    """The lookups every book form needs, plus any extra named queries."""
    return {
        "authors": store.authors.find(sort="family_name"),
        "genres": store.genres.find(sort="name"),
        **extra,
    }


# =============================================================================
# Routes
# =============================================================================
@router.get("/books", summary="List all books")
async def book_list(request: Request, store: Store):
    """List all books by title, with their authors."""
    view = await BOOKS.list_view(store)
    return render(request, "book_list.html", view)


@router.get("/book/create", summary="Book create form")
async def book_create_get(request: Request, store: Store):
    results = await parallel(**form_choices(store))
    return render(request, "book_form.html", book_form_view("Create Book", results))


@router.post("/book/create", summary="Create a book")
async def book_create_post(request: Request, store: Store):
    """
    Create a book from the submitted form.

    The genre field is always stored as a list, whether the form sent no
    genre, one genre or several.
    """
    result = validate_form(BookForm, await request.form())

    if not result.is_valid:
        results = await parallel(**form_choices(store))
        view = book_form_view(
            "Create Book",
            results,
            book=result.values,
            selected_author=result.values["author"],
            selected_genres=result.values["genre"],
            errors=result.errors,
        )
        return render(request, "book_form.html", view)

    book = await store.books.insert(result.values)
    logger.info(f"Created book {book.id} with {len(book.genre)} genre(s)")
    return redirect(book.url)


@router.get("/book/{book_id}", summary="Get a book by ID")
async def book_detail(request: Request, book_id: str, store: Store):
    """Book (with author and genres) plus all of its copies."""
    view = await BOOKS.detail_view(store, book_id)
    return render(request, "book_detail.html", view)


@router.get("/book/{book_id}/delete", summary="Book delete confirmation")
async def book_delete_get(request: Request, book_id: str, store: Store):
    view = await BOOKS.delete_view(store, book_id)
    if view is None:
        return redirect(BOOKS.list_url)

    return render(request, "book_delete.html", view)


@router.post("/book/{book_id}/delete", summary="Delete a book")
async def book_delete_post(request: Request, book_id: str, store: Store):
    """Delete the book unless copies of it exist."""
    outcome = await BOOKS.delete(store, book_id)
    if outcome.blocked:
        return render(request, "book_delete.html", outcome.view)

    return redirect(BOOKS.list_url)


@router.get("/book/{book_id}/update", summary="Book update form")
async def book_update_get(request: Request, book_id: str, store: Store):
    """Form pre-filled with the book, its author selected and genres ticked."""
    results = await parallel(**form_choices(store, book=store.books.find_by_id(book_id)))

    book = results["book"]
    if book is None:
        raise EntityNotFoundError(BOOKS.label, book_id)

    view = book_form_view(
        "Update Book",
        results,
        book=book,
        selected_author=book.author_id,
        selected_genres=book.genre_ids,
    )
    return render(request, "book_form.html", view)


@router.post("/book/{book_id}/update", summary="Update a book")
async def book_update_post(request: Request, book_id: str, store: Store):
    """Replace the book's fields, including its genre list."""
    result = validate_form(BookForm, await request.form())

    if not result.is_valid:
        results = await parallel(**form_choices(store))
        view = book_form_view(
            "Update Book",
            results,
            book=result.values,
            selected_author=result.values["author"],
            selected_genres=result.values["genre"],
            errors=result.errors,
        )
        return render(request, "book_form.html", view)

    book = await store.books.replace(book_id, result.values)
    if book is None:
        raise EntityNotFoundError(BOOKS.label, book_id)

    return redirect(book.url)
