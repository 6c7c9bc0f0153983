"""
Genres Router

HTML pages for genres.
Follows the same patterns as the authors router.

Genre names are kept unique: creating a genre whose name already exists
redirects to the existing genre instead of inserting a duplicate.
"""

import logging

from fastapi import APIRouter, Request

from catalog.dependencies import Store
from catalog.exceptions import EntityNotFoundError
from catalog.schemas import GenreForm
from catalog.services.resources import GENRES
from catalog.services.validation import FieldError, validate_form
from catalog.templating import redirect, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["Genres"])


@router.get("/genres", summary="List all genres")
async def genre_list(request: Request, store: Store):
    view = await GENRES.list_view(store)
    return render(request, "genre_list.html", view)


@router.get("/genre/create", summary="Genre create form")
async def genre_create_get(request: Request):
    return render(request, "genre_form.html", {"title": "Create Genre", "genre": None})


@router.post("/genre/create", summary="Create a genre")
async def genre_create_post(request: Request, store: Store):
    """
    Create a genre, or reuse the existing one with the same name.

    Either way the response redirects to the genre's page.
    """
    result = validate_form(GenreForm, await request.form())

    if not result.is_valid:
        return render(
            request,
            "genre_form.html",
            {"title": "Create Genre", "genre": result.values, "errors": result.errors},
        )

    found = await store.genres.find_one({"name": result.values["name"]})
    if found is not None:
        logger.info(f"Genre '{found.name}' already exists as {found.id}")
        return redirect(found.url)

    genre = await store.genres.insert(result.values)
    return redirect(genre.url)


@router.get("/genre/{genre_id}", summary="Get a genre by ID")
async def genre_detail(request: Request, genre_id: str, store: Store):
    """Genre plus every book listing it."""
    view = await GENRES.detail_view(store, genre_id)
    return render(request, "genre_detail.html", view)


@router.get("/genre/{genre_id}/delete", summary="Genre delete confirmation")
async def genre_delete_get(request: Request, genre_id: str, store: Store):
    view = await GENRES.delete_view(store, genre_id)
    if view is None:
        return redirect(GENRES.list_url)

    return render(request, "genre_delete.html", view)


@router.post("/genre/{genre_id}/delete", summary="Delete a genre")
async def genre_delete_post(request: Request, genre_id: str, store: Store):
    """Delete the genre unless books still list it."""
    outcome = await GENRES.delete(store, genre_id)
    if outcome.blocked:
        return render(request, "genre_delete.html", outcome.view)

    return redirect(GENRES.list_url)


@router.get("/genre/{genre_id}/update", summary="Genre update form")
async def genre_update_get(request: Request, genre_id: str, store: Store):
    genre = await store.genres.find_by_id(genre_id)
    if genre is None:
        raise EntityNotFoundError(GENRES.label, genre_id)

    return render(request, "genre_form.html", {"title": "Update Genre", "genre": genre})


@router.post("/genre/{genre_id}/update", summary="Update a genre")
async def genre_update_post(request: Request, genre_id: str, store: Store):
    """
    Rename a genre.

    Renaming to the name of another existing genre is refused, so names
    stay unique.
    """
    result = validate_form(GenreForm, await request.form())
    errors = list(result.errors)

    if result.is_valid:
        found = await store.genres.find_one({"name": result.values["name"]})
        if found is not None and found.id != genre_id:
            errors.append(
                FieldError("name", "A genre with this name already exists.", result.values["name"])
            )

    if errors:
        return render(
            request,
            "genre_form.html",
            {"title": "Update Genre", "genre": result.values, "errors": errors},
        )

    genre = await store.genres.replace(genre_id, result.values)
    if genre is None:
        raise EntityNotFoundError(GENRES.label, genre_id)

    return redirect(genre.url)
