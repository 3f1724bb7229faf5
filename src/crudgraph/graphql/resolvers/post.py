from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

import strawberry

from ...logging import get_logger
from . import OK, get_datasource_from_info, input_to_data

if TYPE_CHECKING:
    from ..mutations.root import ChangePostInput, CreatePostInput
    from ..types.post import Post

logger = get_logger(__name__)


def to_post(row: Any) -> Post:
    from ..types.post import Post as PostType

    return PostType(
        id=row.id,
        title=row.title,
        content=row.content,
        author_id=row.author_id,
    )


# Query resolvers
async def resolve_posts(info: strawberry.Info) -> list[Post]:
    db = get_datasource_from_info(info)
    rows = await db.posts.find_many()
    return [to_post(row) for row in rows]


async def resolve_post_by_id(info: strawberry.Info, id: UUID) -> Post | None:
    db = get_datasource_from_info(info)
    row = await db.posts.find_unique(id=id)
    return to_post(row) if row else None


# Mutation resolvers
async def create_post(info: strawberry.Info, dto: CreatePostInput) -> Post:
    db = get_datasource_from_info(info)
    row = await db.posts.create(input_to_data(dto))

    logger.info("Post created", post_id=str(row.id), author_id=str(row.author_id))
    return to_post(row)


async def change_post(info: strawberry.Info, id: UUID, dto: ChangePostInput) -> Post:
    db = get_datasource_from_info(info)
    data = input_to_data(dto)
    row = await db.posts.update({"id": id}, data)

    logger.info("Post updated", post_id=str(id), updated_fields=sorted(data))
    return to_post(row)


async def delete_post(info: strawberry.Info, id: UUID) -> str:
    db = get_datasource_from_info(info)
    await db.posts.delete(id=id)

    logger.info("Post deleted", post_id=str(id))
    return OK
