"""
Catalog Exceptions

Domain errors raised by the services layer. They carry no HTTP details;
catalog.main registers exception handlers that turn them into responses:

- EntityNotFoundError -> 404 error page
- SQLAlchemyError (store failure, not defined here) -> 500 error page
"""


class CatalogError(Exception):
    """Base class for catalog domain errors."""


class EntityNotFoundError(CatalogError):
    """The requested identifier has no matching document."""

    def __init__(self, kind: str, entity_id: str) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found")
