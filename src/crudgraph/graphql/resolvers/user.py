from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

import strawberry

from ...logging import get_logger
from . import OK, get_datasource_from_info, input_to_data
from .post import to_post
from .profile import to_profile

if TYPE_CHECKING:
    from ..mutations.root import ChangeUserInput, CreateUserInput
    from ..types.post import Post
    from ..types.profile import Profile
    from ..types.user import User

logger = get_logger(__name__)


def to_user(row: Any) -> User:
    from ..types.user import User as UserType

    return UserType(id=row.id, name=row.name, balance=row.balance)


# Query resolvers
async def resolve_users(info: strawberry.Info) -> list[User]:
    db = get_datasource_from_info(info)
    rows = await db.users.find_many()
    return [to_user(row) for row in rows]


async def resolve_user_by_id(info: strawberry.Info, id: UUID) -> User | None:
    db = get_datasource_from_info(info)
    row = await db.users.find_unique(id=id)
    return to_user(row) if row else None


# Field resolvers
async def resolve_user_profile(user: User, info: strawberry.Info) -> Profile | None:
    db = get_datasource_from_info(info)
    row = await db.profiles.find_unique(user_id=user.id)
    return to_profile(row) if row else None


async def resolve_user_posts(user: User, info: strawberry.Info) -> list[Post]:
    db = get_datasource_from_info(info)
    rows = await db.posts.find_many(author_id=user.id)
    return [to_post(row) for row in rows]


async def resolve_user_subscribed_to(user: User, info: strawberry.Info) -> list[User]:
    """Resolve the authors ``user`` follows."""
    db = get_datasource_from_info(info)
    subscriptions = await db.subscriptions.find_many(subscriber_id=user.id)
    rows = await db.users.find_many(id=[sub.author_id for sub in subscriptions])
    return [to_user(row) for row in rows]


async def resolve_subscribed_to_user(user: User, info: strawberry.Info) -> list[User]:
    """Resolve the subscribers following ``user``."""
    db = get_datasource_from_info(info)
    subscriptions = await db.subscriptions.find_many(author_id=user.id)
    rows = await db.users.find_many(id=[sub.subscriber_id for sub in subscriptions])
    return [to_user(row) for row in rows]


# Mutation resolvers
async def create_user(info: strawberry.Info, dto: CreateUserInput) -> User:
    db = get_datasource_from_info(info)
    row = await db.users.create(input_to_data(dto))

    logger.info("User created", user_id=str(row.id))
    return to_user(row)


async def change_user(info: strawberry.Info, id: UUID, dto: ChangeUserInput) -> User:
    """
    Apply a partial update to a user.

    Only the fields present in ``dto`` are written; the rest keep their
    stored values.
    """
    db = get_datasource_from_info(info)
    data = input_to_data(dto)
    row = await db.users.update({"id": id}, data)

    logger.info("User updated", user_id=str(id), updated_fields=sorted(data))
    return to_user(row)


async def delete_user(info: strawberry.Info, id: UUID) -> str:
    db = get_datasource_from_info(info)
    await db.users.delete(id=id)

    logger.info("User deleted", user_id=str(id))
    return OK
