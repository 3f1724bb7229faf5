"""
Data-access contract consumed by the GraphQL resolvers.

The resolvers only ever talk to a ``DataSource``: one repository per entity,
each exposing the same five operations. The SQLAlchemy implementation lives
in ``crudgraph.datasource.sql``; tests substitute an in-memory one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

RowT = TypeVar("RowT")


class Repository(Protocol[RowT]):
    """Persistence operations for a single entity.

    Filter and key arguments use the ORM attribute names (``author_id``, not
    ``authorId``). A list, tuple or set filter value means "column IN values".
    """

    entity: str

    async def find_many(self, **filters: Any) -> list[RowT]: ...

    async def find_unique(self, **key: Any) -> RowT | None: ...

    async def create(self, data: dict[str, Any]) -> RowT: ...

    async def update(self, key: dict[str, Any], data: dict[str, Any]) -> RowT:
        """Apply ``data`` to the row matching ``key``; raises RecordNotFoundError."""
        ...

    async def delete(self, **key: Any) -> None:
        """Delete the row matching ``key``; raises RecordNotFoundError."""
        ...


@dataclass
class DataSource:
    """The per-request data-access handle threaded through GraphQL context."""

    users: Repository[Any]
    profiles: Repository[Any]
    posts: Repository[Any]
    member_types: Repository[Any]
    subscriptions: Repository[Any]
