"""
SQLAlchemy implementation of the data-access contract.

Every operation runs in its own short-lived session and commits on its own,
so each create/update/delete is atomic and nothing spans two calls.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..dbmodels import Base, MemberTypes, Posts, Profiles, SubscribersOnAuthors, Users
from ..errors import (
    CrudGraphError,
    ForeignKeyError,
    RecordNotFoundError,
    UniqueConstraintError,
)
from ..logging import get_logger
from .base import DataSource

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

_UNIQUE_VIOLATION = "23505"
_FOREIGN_KEY_VIOLATION = "23503"


def translate_integrity_error(entity: str, exc: IntegrityError) -> CrudGraphError:
    """Map a driver integrity error onto the crudgraph error hierarchy."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    message = str(orig)

    if (
        code == _UNIQUE_VIOLATION
        or "UNIQUE constraint failed" in message
        or "duplicate key value" in message
    ):
        return UniqueConstraintError(entity, message)
    if (
        code == _FOREIGN_KEY_VIOLATION
        or "FOREIGN KEY constraint failed" in message
        or "violates foreign key constraint" in message
    ):
        return ForeignKeyError(entity, message)
    return CrudGraphError(f"Integrity error on {entity}: {message}")


class SqlRepository(Generic[ModelT]):
    """Repository over one ORM model."""

    def __init__(self, model: type[ModelT], session_factory: async_sessionmaker[AsyncSession]):
        self.model = model
        self.entity = model.__tablename__
        self._session_factory = session_factory

    def _clauses(self, filters: dict[str, Any]) -> list[Any]:
        clauses = []
        for name, value in filters.items():
            column = getattr(self.model, name)
            if isinstance(value, (list, tuple, set, frozenset)):
                clauses.append(column.in_(list(value)))
            else:
                clauses.append(column == value)
        return clauses

    async def find_many(self, **filters: Any) -> list[ModelT]:
        stmt = select(self.model)
        if filters:
            stmt = stmt.where(*self._clauses(filters))

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def find_unique(self, **key: Any) -> ModelT | None:
        stmt = select(self.model).where(*self._clauses(key))

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def create(self, data: dict[str, Any]) -> ModelT:
        row = self.model(**data)

        async with self._session_factory() as session:
            session.add(row)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise translate_integrity_error(self.entity, exc) from exc
            await session.refresh(row)

        logger.debug("Row created", entity=self.entity)
        return row

    async def update(self, key: dict[str, Any], data: dict[str, Any]) -> ModelT:
        stmt = select(self.model).where(*self._clauses(key))

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            row = result.scalar_one_or_none()
            if row is None:
                raise RecordNotFoundError(self.entity, key)

            for field, value in data.items():
                setattr(row, field, value)

            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise translate_integrity_error(self.entity, exc) from exc
            await session.refresh(row)

        logger.debug("Row updated", entity=self.entity, fields=sorted(data))
        return row

    async def delete(self, **key: Any) -> None:
        stmt = delete(self.model).where(*self._clauses(key))

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            if result.rowcount == 0:
                await session.rollback()
                raise RecordNotFoundError(self.entity, key)
            await session.commit()

        logger.debug("Row deleted", entity=self.entity)


def create_sql_datasource(session_factory: async_sessionmaker[AsyncSession]) -> DataSource:
    """Build a DataSource whose repositories share one session factory."""
    return DataSource(
        users=SqlRepository(Users, session_factory),
        profiles=SqlRepository(Profiles, session_factory),
        posts=SqlRepository(Posts, session_factory),
        member_types=SqlRepository(MemberTypes, session_factory),
        subscriptions=SqlRepository(SubscribersOnAuthors, session_factory),
    )
