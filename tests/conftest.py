"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
import strawberry
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("CRUDGRAPH_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("CRUDGRAPH_DEBUG", "false")

from crudgraph.datasource import DataSource  # noqa: E402
from crudgraph.errors import RecordNotFoundError, UniqueConstraintError  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"

MEMBER_TYPE_ROWS = (
    {"id": "BASIC", "discount": 2.3, "posts_limit_per_month": 20.0},
    {"id": "BUSINESS", "discount": 7.7, "posts_limit_per_month": 100.0},
)


class InMemoryRepository:
    """Dict-free stand-in for SqlRepository, keeping rows in a list.

    Every call is appended to ``calls`` so tests can assert on the exact
    sequence of data-access round trips.
    """

    def __init__(
        self,
        entity: str,
        primary_key: tuple[str, ...] = ("id",),
        unique: tuple[tuple[str, ...], ...] = (),
        generate_id: bool = True,
    ):
        self.entity = entity
        self.rows: list[SimpleNamespace] = []
        self.unique = (primary_key, *unique)
        self.generate_id = generate_id
        self.calls: list[tuple[str, dict[str, Any]]] = []

    @staticmethod
    def _matches(row: SimpleNamespace, filters: dict[str, Any]) -> bool:
        for name, value in filters.items():
            current = getattr(row, name)
            if isinstance(value, (list, tuple, set, frozenset)):
                if current not in value:
                    return False
            elif current != value:
                return False
        return True

    def _find(self, key: dict[str, Any]) -> SimpleNamespace | None:
        return next((row for row in self.rows if self._matches(row, key)), None)

    async def find_many(self, **filters: Any) -> list[SimpleNamespace]:
        self.calls.append(("find_many", filters))
        return [row for row in self.rows if self._matches(row, filters)]

    async def find_unique(self, **key: Any) -> SimpleNamespace | None:
        self.calls.append(("find_unique", key))
        return self._find(key)

    async def create(self, data: dict[str, Any]) -> SimpleNamespace:
        self.calls.append(("create", data))
        values = dict(data)
        if self.generate_id:
            values.setdefault("id", uuid4())
        row = SimpleNamespace(**values)

        for columns in self.unique:
            if any(
                all(getattr(existing, c) == getattr(row, c) for c in columns)
                for existing in self.rows
            ):
                raise UniqueConstraintError(self.entity, ", ".join(columns))

        self.rows.append(row)
        return row

    async def update(self, key: dict[str, Any], data: dict[str, Any]) -> SimpleNamespace:
        self.calls.append(("update", {"key": key, "data": data}))
        row = self._find(key)
        if row is None:
            raise RecordNotFoundError(self.entity, key)
        for name, value in data.items():
            setattr(row, name, value)
        return row

    async def delete(self, **key: Any) -> None:
        self.calls.append(("delete", key))
        row = self._find(key)
        if row is None:
            raise RecordNotFoundError(self.entity, key)
        self.rows.remove(row)


def make_memory_datasource() -> DataSource:
    """Build an in-memory DataSource seeded with the member types."""
    datasource = DataSource(
        users=InMemoryRepository("users"),
        profiles=InMemoryRepository("profiles", unique=(("user_id",),)),
        posts=InMemoryRepository("posts"),
        member_types=InMemoryRepository("member_types", generate_id=False),
        subscriptions=InMemoryRepository(
            "subscribers_on_authors",
            primary_key=("subscriber_id", "author_id"),
            generate_id=False,
        ),
    )
    datasource.member_types.rows.extend(SimpleNamespace(**row) for row in MEMBER_TYPE_ROWS)
    return datasource


@pytest.fixture
def memory_datasource() -> DataSource:
    """In-memory data source with the member types already present."""
    return make_memory_datasource()


@pytest.fixture
def mock_info(memory_datasource: DataSource):
    """Create a mock GraphQL info object whose context carries the data source."""
    info = MagicMock(spec=strawberry.Info)
    info.context = {"request": MagicMock(), "db": memory_datasource}
    return info


@pytest_asyncio.fixture
async def sql_datasource() -> AsyncGenerator[DataSource, None]:
    """SQL data source over a fresh in-memory SQLite database."""
    from crudgraph.database.connection import (
        create_schema,
        dispose_database,
        get_async_session,
        get_session_factory,
        init_database,
    )
    from crudgraph.database.seed_data import seed_initial_data
    from crudgraph.datasource import create_sql_datasource

    init_database(TEST_DATABASE_URL, force_reinit=True)
    await create_schema()
    async with get_async_session() as session:
        await seed_initial_data(session)

    yield create_sql_datasource(get_session_factory())

    await dispose_database()


@pytest_asyncio.fixture
async def client(sql_datasource: DataSource) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the FastAPI app backed by the SQLite data source."""
    from crudgraph.api.app import create_app

    app = create_app(datasource_factory=lambda: sql_datasource)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
