"""
View Aggregation Service

Fan-out/fan-in of independent store lookups.

A detail page usually needs more than one query: an author and the books
that author wrote, a book and its copies. The queries do not depend on each
other, so parallel() schedules them all at once and resumes the request when
every one of them has finished.

Failure policy:
- The whole operation fails if any query fails
- The error raised is the first one to occur (in completion order)
- Results of the other queries are discarded; no partial view is built
"""

import asyncio
import logging
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


async def parallel(**queries: Awaitable[Any]) -> dict[str, Any]:
    """
    Run named, independent awaitables concurrently.

    Usage:
        results = await parallel(
            author=store.authors.find_by_id(author_id),
            author_books=store.books.find({"author": author_id}),
        )
        results["author"], results["author_books"]

    Args:
        **queries: Awaitables keyed by the name their result is stored under

    Returns:
        Mapping from name to result, once every query has succeeded

    Raises:
        The first exception raised by any query, after all have finished
    """
    tasks = {name: asyncio.ensure_future(query) for name, query in queries.items()}
    first_error: BaseException | None = None

    try:
        for finished in asyncio.as_completed(list(tasks.values())):
            try:
                await finished
            except Exception as exc:
                if first_error is None:
                    first_error = exc
                else:
                    logger.debug(f"Discarding additional query error: {exc!r}")
    except BaseException:
        # Cancelled while waiting: don't leave orphaned queries running
        for task in tasks.values():
            task.cancel()
        await asyncio.gather(*tasks.values(), return_exceptions=True)
        raise

    if first_error is not None:
        failed = [name for name, task in tasks.items() if task.exception() is first_error]
        logger.error(f"Parallel fetch failed in {failed}: {first_error!r}")
        raise first_error

    return {name: task.result() for name, task in tasks.items()}


# =============================================================================
# Checked-state Annotation
# =============================================================================
@dataclass(frozen=True)
class GenreChoice:
    """A candidate genre on the book form, with its checkbox state."""

    genre: Any
    checked: bool = False

    @property
    def id(self) -> str:
        return self.genre.id

    @property
    def name(self) -> str:
        return self.genre.name


def mark_checked(genres: Iterable[Any], selected_ids: Iterable[str]) -> list[GenreChoice]:
    """
    Annotate every candidate genre with whether the book references it.

    The annotation is computed for rendering only and never persisted.
    """
    selected = {str(genre_id) for genre_id in selected_ids}
    return [GenreChoice(genre=genre, checked=genre.id in selected) for genre in genres]
