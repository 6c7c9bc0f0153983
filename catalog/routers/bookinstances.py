"""
Book Instances Router

HTML pages for book copies.

Copies have no dependents, so deleting one is never refused; deleting a
copy that is already gone still redirects to the list.
"""

import logging
from typing import Any

from fastapi import APIRouter, Request

from catalog.dependencies import Store
from catalog.exceptions import EntityNotFoundError
from catalog.schemas import STATUS_CHOICES, BookInstanceForm
from catalog.services.aggregation import parallel
from catalog.services.resources import BOOK_INSTANCES
from catalog.services.store import CatalogStore
from catalog.services.validation import validate_form
from catalog.templating import redirect, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["Book Instances"])


def book_choices(store: CatalogStore):
    """Titles of every book, for the book selector."""
    return store.books.find(fields=("title",), sort="title")


def bookinstance_form_view(title: str, books: list, **values: Any) -> dict[str, Any]:
    return {
        "title": title,
        "book_list": books,
        "status_choices": STATUS_CHOICES,
        "bookinstance": None,
        "selected_book": None,
        "errors": [],
        **values,
    }


@router.get("/bookinstances", summary="List all book copies")
async def bookinstance_list(request: Request, store: Store):
    view = await BOOK_INSTANCES.list_view(store)
    return render(request, "bookinstance_list.html", view)


@router.get("/bookinstance/create", summary="Book copy create form")
async def bookinstance_create_get(request: Request, store: Store):
    books = await book_choices(store)
    return render(request, "bookinstance_form.html", bookinstance_form_view("Create BookInstance", books))


@router.post("/bookinstance/create", summary="Create a book copy")
async def bookinstance_create_post(request: Request, store: Store):
    result = validate_form(BookInstanceForm, await request.form())

    if not result.is_valid:
        books = await book_choices(store)
        view = bookinstance_form_view(
            "Create BookInstance",
            books,
            bookinstance=result.values,
            selected_book=result.values["book"],
            errors=result.errors,
        )
        return render(request, "bookinstance_form.html", view)

    bookinstance = await store.bookinstances.insert(result.values)
    logger.info(f"Created copy {bookinstance.id} of book {bookinstance.book_id}")
    return redirect(bookinstance.url)


@router.get("/bookinstance/{bookinstance_id}", summary="Get a book copy by ID")
async def bookinstance_detail(request: Request, bookinstance_id: str, store: Store):
    view = await BOOK_INSTANCES.detail_view(store, bookinstance_id)
    return render(request, "bookinstance_detail.html", view)


@router.get("/bookinstance/{bookinstance_id}/delete", summary="Book copy delete confirmation")
async def bookinstance_delete_get(request: Request, bookinstance_id: str, store: Store):
    view = await BOOK_INSTANCES.delete_view(store, bookinstance_id)
    if view is None:
        return redirect(BOOK_INSTANCES.list_url)

    return render(request, "bookinstance_delete.html", view)


@router.post("/bookinstance/{bookinstance_id}/delete", summary="Delete a book copy")
async def bookinstance_delete_post(request: Request, bookinstance_id: str, store: Store):
    await BOOK_INSTANCES.delete(store, bookinstance_id)
    return redirect(BOOK_INSTANCES.list_url)


@router.get("/bookinstance/{bookinstance_id}/update", summary="Book copy update form")
async def bookinstance_update_get(request: Request, bookinstance_id: str, store: Store):
    results = await parallel(
        bookinstance=store.bookinstances.find_by_id(bookinstance_id),
        books=book_choices(store),
    )

    bookinstance = results["bookinstance"]
    if bookinstance is None:
        raise EntityNotFoundError(BOOK_INSTANCES.label, bookinstance_id)

    view = bookinstance_form_view(
        "Update Book Instance",
        results["books"],
        bookinstance=bookinstance,
        selected_book=bookinstance.book_id,
    )
    return render(request, "bookinstance_form.html", view)


@router.post("/bookinstance/{bookinstance_id}/update", summary="Update a book copy")
async def bookinstance_update_post(request: Request, bookinstance_id: str, store: Store):
    """Replace the copy's fields; any status may be set."""
    result = validate_form(BookInstanceForm, await request.form())

    if not result.is_valid:
        books = await book_choices(store)
        view = bookinstance_form_view(
            "Update Book Instance",
            books,
            bookinstance=result.values,
            selected_book=result.values["book"],
            errors=result.errors,
        )
        return render(request, "bookinstance_form.html", view)

    bookinstance = await store.bookinstances.replace(bookinstance_id, result.values)
    if bookinstance is None:
        raise EntityNotFoundError(BOOK_INSTANCES.label, bookinstance_id)

    return redirect(bookinstance.url)
