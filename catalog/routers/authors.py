"""
Authors Router

HTML pages for authors: list, detail, create, update and guarded delete.

An author cannot be deleted while any book references it; the delete page
lists those books instead.
"""

import logging

from fastapi import APIRouter, Request

from catalog.dependencies import Store
from catalog.exceptions import EntityNotFoundError
from catalog.schemas import AuthorForm
from catalog.services.resources import AUTHORS
from catalog.services.validation import validate_form
from catalog.templating import redirect, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["Authors"])


@router.get("/authors", summary="List all authors")
async def author_list(request: Request, store: Store):
    """List all authors, sorted by family name."""
    view = await AUTHORS.list_view(store)
    return render(request, "author_list.html", view)


# Create routes come before /author/{author_id} so "create" is not an id
@router.get("/author/create", summary="Author create form")
async def author_create_get(request: Request):
    return render(request, "author_form.html", {"title": "Create Author", "author": None})


@router.post("/author/create", summary="Create an author")
async def author_create_post(request: Request, store: Store):
    """
    Create an author from the submitted form.

    Redirects to the new author's page, or redisplays the form with the
    sanitized input and the validation errors.
    """
    result = validate_form(AuthorForm, await request.form())

    if not result.is_valid:
        return render(
            request,
            "author_form.html",
            {"title": "Create Author", "author": result.values, "errors": result.errors},
        )

    author = await store.authors.insert(result.values)
    logger.info(f"Created author {author.id}")
    return redirect(author.url)


@router.get("/author/{author_id}", summary="Get an author by ID")
async def author_detail(request: Request, author_id: str, store: Store):
    """Author plus every book by that author."""
    view = await AUTHORS.detail_view(store, author_id)
    return render(request, "author_detail.html", view)


@router.get("/author/{author_id}/delete", summary="Author delete confirmation")
async def author_delete_get(request: Request, author_id: str, store: Store):
    view = await AUTHORS.delete_view(store, author_id)
    if view is None:
        return redirect(AUTHORS.list_url)

    return render(request, "author_delete.html", view)


@router.post("/author/{author_id}/delete", summary="Delete an author")
async def author_delete_post(request: Request, author_id: str, store: Store):
    """Delete the author unless books still reference it."""
    outcome = await AUTHORS.delete(store, author_id)
    if outcome.blocked:
        return render(request, "author_delete.html", outcome.view)

    return redirect(AUTHORS.list_url)


@router.get("/author/{author_id}/update", summary="Author update form")
async def author_update_get(request: Request, author_id: str, store: Store):
    author = await store.authors.find_by_id(author_id)
    if author is None:
        raise EntityNotFoundError(AUTHORS.label, author_id)

    return render(request, "author_form.html", {"title": "Update Author", "author": author})


@router.post("/author/{author_id}/update", summary="Update an author")
async def author_update_post(request: Request, author_id: str, store: Store):
    """Replace the author's fields with the submitted form."""
    result = validate_form(AuthorForm, await request.form())

    if not result.is_valid:
        return render(
            request,
            "author_form.html",
            {"title": "Update Author", "author": result.values, "errors": result.errors},
        )

    author = await store.authors.replace(author_id, result.values)
    if author is None:
        raise EntityNotFoundError(AUTHORS.label, author_id)

    return redirect(author.url)
