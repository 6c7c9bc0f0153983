"""
Entity Store Service

Document-store style access to the four catalog collections.

Each Collection wraps one model and offers the operations the rest of the
application relies on:

    find_by_id(id)                       -> document or None
    find(filters, fields=..., sort=...)  -> list of documents
    find_one(filters)                    -> document or None
    count(filters)                       -> int
    insert(data)                         -> new document
    replace(id, data)                    -> replaced document or None
    delete(id)                           -> True if a document was removed

Filters are equality filters keyed by field name. On a reference field the
value is the referenced identifier; on a list of references (Book.genre)
equality means "the list contains this identifier".

Every operation runs in its own AsyncSession, so independent operations can
be awaited concurrently (see catalog.services.aggregation.parallel).
Store errors (SQLAlchemyError) are not caught here; they propagate to the
application's exception handlers.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import load_only

from catalog.database import Base
from catalog.models import Author, Book, BookInstance, Genre

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

Filters = Mapping[str, Any]


class Collection(Generic[ModelT]):
    """
    One collection of documents backed by a SQLAlchemy model.

    Usage:
        authors = Collection(Author, SessionLocal)
        author = await authors.find_by_id(author_id)
        books = await Collection(Book, SessionLocal).find({"author": author_id})
    """

    def __init__(self, model: type[ModelT], sessions: async_sessionmaker) -> None:
        self.model = model
        self._sessions = sessions
        self._mapper = inspect(model)

    @property
    def name(self) -> str:
        return self.model.__tablename__

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    async def find_by_id(self, entity_id: str) -> ModelT | None:
        """Get one document by identifier, or None if it does not exist."""
        async with self._sessions() as session:
            return await session.get(self.model, entity_id)

    async def find(
        self,
        filters: Filters | None = None,
        fields: Sequence[str] | None = None,
        sort: str | Sequence[str] | None = None,
    ) -> list[ModelT]:
        """
        Get all documents matching the filters.

        Args:
            filters: Equality filters by field name
            fields: Optional projection; only these columns are loaded
                (the identifier and references are always available)
            sort: Field name, or list of names, to sort by ascending;
                prefix a name with "-" for descending order

        Returns:
            List of documents, empty when nothing matches
        """
        stmt = self._filtered(select(self.model), filters)

        if fields:
            stmt = stmt.options(load_only(*self._projection(fields)))

        for key in _sort_keys(sort):
            if key.startswith("-"):
                stmt = stmt.order_by(getattr(self.model, key[1:]).desc())
            else:
                stmt = stmt.order_by(getattr(self.model, key).asc())

        async with self._sessions() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def find_one(self, filters: Filters) -> ModelT | None:
        """Get the first document matching the filters, or None."""
        stmt = self._filtered(select(self.model), filters).limit(1)

        async with self._sessions() as session:
            result = await session.execute(stmt)
            return result.scalars().first()

    async def count(self, filters: Filters | None = None) -> int:
        """Count documents matching the filters."""
        stmt = self._filtered(select(func.count()).select_from(self.model), filters)

        async with self._sessions() as session:
            result = await session.execute(stmt)
            return result.scalar() or 0

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    async def insert(self, data: Mapping[str, Any]) -> ModelT:
        """
        Insert a new document and return it with its assigned identifier.

        Reference fields take identifiers; they are resolved to the stored
        documents before saving.
        """
        async with self._sessions() as session:
            document = self.model()
            await self._assign(session, document, data)
            session.add(document)
            await session.commit()

        logger.info(f"Inserted {self.name} document {document.id}")
        return document

    async def replace(self, entity_id: str, data: Mapping[str, Any]) -> ModelT | None:
        """
        Replace the fields of an existing document.

        Returns:
            The updated document, or None if no document has this identifier
        """
        async with self._sessions() as session:
            document = await session.get(self.model, entity_id)
            if document is None:
                return None

            await self._assign(session, document, data)
            await session.commit()

        logger.info(f"Replaced {self.name} document {entity_id}")
        return document

    async def delete(self, entity_id: str) -> bool:
        """
        Delete a document by identifier.

        A document that is already gone is not an error.

        Returns:
            True if a document was removed, False if none existed
        """
        async with self._sessions() as session:
            document = await session.get(self.model, entity_id)
            if document is None:
                logger.info(f"{self.name} document {entity_id} already deleted")
                return False

            await session.delete(document)
            await session.commit()

        logger.info(f"Deleted {self.name} document {entity_id}")
        return True

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    def _filtered(self, stmt: Select, filters: Filters | None) -> Select:
        """Apply equality filters, translating reference fields to their keys."""
        for field, value in (filters or {}).items():
            relationship = self._mapper.relationships.get(field)

            if relationship is None:
                stmt = stmt.where(getattr(self.model, field) == value)
            elif relationship.uselist:
                # List of references: match documents whose list contains value
                stmt = stmt.where(getattr(self.model, field).any(id=value))
            else:
                (column,) = relationship.local_columns
                stmt = stmt.where(column == value)

        return stmt

    def _projection(self, fields: Sequence[str]) -> list[Any]:
        """Column attributes for a projection, plus the keys references need."""
        keys = [field for field in fields if field in self._mapper.column_attrs]
        for relationship in self._mapper.relationships:
            for column in relationship.local_columns:
                key = self._mapper.get_property_by_column(column).key
                if key not in keys:
                    keys.append(key)
        return [getattr(self.model, key) for key in keys]

    async def _assign(
        self,
        session: AsyncSession,
        document: ModelT,
        data: Mapping[str, Any],
    ) -> None:
        """Copy data onto a document, resolving reference identifiers."""
        for field, value in data.items():
            relationship = self._mapper.relationships.get(field)

            if relationship is None:
                setattr(document, field, value)
                continue

            target = relationship.mapper.class_
            if relationship.uselist:
                ids = list(value or [])
                result = await session.execute(select(target).where(target.id.in_(ids)))
                setattr(document, field, list(result.scalars().all()))
            else:
                referenced = await session.get(target, value) if value else None
                setattr(document, field, referenced)


def _sort_keys(sort: str | Sequence[str] | None) -> Iterable[str]:
    if sort is None:
        return ()
    if isinstance(sort, str):
        return (sort,)
    return sort


@dataclass(frozen=True)
class CatalogStore:
    """
    The four catalog collections.

    Built once per process from the session factory and handed to route
    handlers through the get_store dependency.
    """

    authors: Collection[Author]
    genres: Collection[Genre]
    books: Collection[Book]
    bookinstances: Collection[BookInstance]

    @classmethod
    def from_sessionmaker(cls, sessions: async_sessionmaker) -> "CatalogStore":
        return cls(
            authors=Collection(Author, sessions),
            genres=Collection(Genre, sessions),
            books=Collection(Book, sessions),
            bookinstances=Collection(BookInstance, sessions),
        )

    def collection(self, name: str) -> Collection:
        """Look up a collection by attribute name (e.g. "books")."""
        return getattr(self, name)
