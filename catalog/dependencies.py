"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.

Instead of writing:
    async def author_list(store: CatalogStore = Depends(get_store)):

Route handlers write:
    async def author_list(store: Store):

Tests replace the store with one bound to a throwaway database through
app.dependency_overrides[get_store].
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from catalog.database import SessionLocal
from catalog.services.store import CatalogStore


@lru_cache
def get_store() -> CatalogStore:
    """The process-wide catalog store bound to the configured database."""
    return CatalogStore.from_sessionmaker(SessionLocal)


Store = Annotated[CatalogStore, Depends(get_store)]
