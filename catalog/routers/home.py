"""
Home Router

The catalog home page: how many books, copies, authors and genres the
library holds. The five counts are independent and fetched concurrently.
"""

import logging

from fastapi import APIRouter, Request
from sqlalchemy.exc import SQLAlchemyError

from catalog.dependencies import Store
from catalog.models import BookInstanceStatus
from catalog.services.aggregation import parallel
from catalog.templating import redirect, render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Home"])


@router.get("/", include_in_schema=False)
async def root():
    return redirect("/catalog")


@router.get("/catalog", summary="Catalog home page")
async def index(request: Request, store: Store):
    """
    Site home page with record counts.

    A store failure does not fail the page: the counts are replaced by
    an error notice.
    """
    data = None
    error = None

    try:
        data = await parallel(
            book_count=store.books.count(),
            book_instance_count=store.bookinstances.count(),
            book_instance_available_count=store.bookinstances.count(
                {"status": BookInstanceStatus.AVAILABLE.value}
            ),
            author_count=store.authors.count(),
            genre_count=store.genres.count(),
        )
    except SQLAlchemyError as exc:
        logger.error(f"Could not count catalog records: {exc}")
        error = "Could not load the catalog counts."

    return render(
        request,
        "index.html",
        {"title": "Local Library Home", "data": data, "error": error},
    )
