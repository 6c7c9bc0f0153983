"""
Catalog Resources

One generic component implements the read and delete flows shared by every
entity kind: list, detail, delete confirmation and the guarded delete.

A Resource is parameterized by:
- the collection it reads (e.g. "authors")
- the sort key of its list page (e.g. "family_name")
- its dependents: the collection and reference field of documents that
  point at it (e.g. books whose "author" is this author)

Delete guard
============
1. Fetch the target and its dependents concurrently
2. Target missing    -> MISSING (already deleted; caller redirects to list)
3. Dependents exist  -> BLOCKED, with the confirmation view-model
4. Otherwise delete  -> DELETED (a document already gone also counts)

The dependents are fetched again on every POST, not trusted from the
confirmation page. Check and delete are not atomic: a dependent inserted
between them is not detected.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from catalog.exceptions import EntityNotFoundError
from catalog.services.aggregation import parallel
from catalog.services.store import CatalogStore, Collection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dependents:
    """Documents in another collection that reference a resource."""

    collection: str          # e.g. "books"
    field: str               # reference field on the dependent, e.g. "author"
    key: str                 # view-model key, e.g. "author_books"
    fields: Sequence[str] | None = None  # projection for detail pages


class DeleteStatus(str, Enum):
    DELETED = "deleted"
    MISSING = "missing"
    BLOCKED = "blocked"


@dataclass
class DeleteOutcome:
    """Result of a guarded delete; view is set only when BLOCKED."""

    status: DeleteStatus
    view: dict[str, Any] | None = None

    @property
    def blocked(self) -> bool:
        return self.status is DeleteStatus.BLOCKED


@dataclass(frozen=True)
class Resource:
    """
    Read/delete flows for one entity kind.

    Example:
        AUTHORS = Resource(
            kind="author",
            label="Author",
            collection="authors",
            sort="family_name",
            dependents=Dependents("books", "author", "author_books"),
        )
        view = await AUTHORS.detail_view(store, author_id)
    """

    kind: str
    label: str
    collection: str
    sort: str | None = None
    list_fields: Sequence[str] | None = None
    dependents: Dependents | None = field(default=None)

    @property
    def list_url(self) -> str:
        return f"/catalog/{self.kind}s"

    def documents(self, store: CatalogStore) -> Collection:
        return store.collection(self.collection)

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------
    async def list_view(self, store: CatalogStore) -> dict[str, Any]:
        """All documents sorted by display key; an empty list is valid."""
        documents = await self.documents(store).find(
            fields=self.list_fields,
            sort=self.sort,
        )
        return {"title": f"{self.label} List", f"{self.kind}_list": documents}

    async def fetch(
        self,
        store: CatalogStore,
        entity_id: str,
        projected: bool = False,
    ) -> dict[str, Any]:
        """
        Fetch a document and its dependents concurrently.

        Returns:
            {kind: document or None, dependents.key: [...]}
        """
        queries = {self.kind: self.documents(store).find_by_id(entity_id)}

        if self.dependents is not None:
            queries[self.dependents.key] = store.collection(self.dependents.collection).find(
                {self.dependents.field: entity_id},
                fields=self.dependents.fields if projected else None,
            )

        return await parallel(**queries)

    async def detail_view(self, store: CatalogStore, entity_id: str) -> dict[str, Any]:
        """
        Detail view-model.

        Raises:
            EntityNotFoundError: If the identifier does not resolve
        """
        results = await self.fetch(store, entity_id, projected=True)
        if results[self.kind] is None:
            raise EntityNotFoundError(self.label, entity_id)

        return {"title": f"{self.label} Detail", **results}

    async def delete_view(self, store: CatalogStore, entity_id: str) -> dict[str, Any] | None:
        """Confirmation view-model, or None when the document is already gone."""
        results = await self.fetch(store, entity_id)
        if results[self.kind] is None:
            return None

        return {"title": f"Delete {self.label}", **results}

    # -------------------------------------------------------------------------
    # Guarded Delete
    # -------------------------------------------------------------------------
    async def delete(self, store: CatalogStore, entity_id: str) -> DeleteOutcome:
        """Delete a document unless other documents still reference it."""
        view = await self.delete_view(store, entity_id)
        if view is None:
            return DeleteOutcome(DeleteStatus.MISSING)

        if self.dependents is not None and view[self.dependents.key]:
            logger.info(
                f"Refusing to delete {self.kind} {entity_id}: "
                f"{len(view[self.dependents.key])} {self.dependents.collection} reference it"
            )
            return DeleteOutcome(DeleteStatus.BLOCKED, view)

        await self.documents(store).delete(entity_id)
        return DeleteOutcome(DeleteStatus.DELETED)


# =============================================================================
# Catalog Resources
# =============================================================================
AUTHORS = Resource(
    kind="author",
    label="Author",
    collection="authors",
    sort="family_name",
    dependents=Dependents(
        collection="books",
        field="author",
        key="author_books",
        fields=("title", "summary"),
    ),
)

GENRES = Resource(
    kind="genre",
    label="Genre",
    collection="genres",
    sort="name",
    dependents=Dependents(collection="books", field="genre", key="genre_books"),
)

BOOKS = Resource(
    kind="book",
    label="Book",
    collection="books",
    sort="title",
    list_fields=("title",),
    dependents=Dependents(collection="bookinstances", field="book", key="book_instances"),
)

BOOK_INSTANCES = Resource(
    kind="bookinstance",
    label="Book Instance",
    collection="bookinstances",
)
