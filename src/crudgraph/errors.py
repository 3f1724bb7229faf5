"""
Exception hierarchy shared by the data-access layer and the GraphQL resolvers.

Resolvers raise these plainly; the GraphQL engine catches them and reports
them in the ``errors`` array of the response.
"""


class CrudGraphError(Exception):
    """Base class for all crudgraph errors."""


class ValidationError(CrudGraphError):
    """Raised when a mutation payload violates a domain rule."""


class InvalidScalarError(CrudGraphError, ValueError):
    """Raised when a scalar value cannot be parsed."""


class RecordNotFoundError(CrudGraphError, LookupError):
    """Raised when an update or delete targets a row that does not exist."""

    def __init__(self, entity: str, key: dict):
        self.entity = entity
        self.key = key
        keys = ", ".join(f"{k}={v}" for k, v in key.items())
        super().__init__(f"{entity} not found ({keys})")


class UniqueConstraintError(CrudGraphError):
    """Raised when a write would duplicate a unique key."""

    def __init__(self, entity: str, detail: str | None = None):
        self.entity = entity
        message = f"Unique constraint failed on {entity}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ForeignKeyError(CrudGraphError):
    """Raised when a write references a row that does not exist."""

    def __init__(self, entity: str, detail: str | None = None):
        self.entity = entity
        message = f"Foreign key constraint failed on {entity}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
