from __future__ import annotations

from uuid import UUID

import strawberry

from ...logging import get_logger
from . import OK, get_datasource_from_info

logger = get_logger(__name__)


async def subscribe_to(info: strawberry.Info, user_id: UUID, author_id: UUID) -> str:
    """
    Subscribe ``user_id`` to ``author_id``.

    A pair can exist only once; a repeated call fails with the data source's
    UniqueConstraintError.
    """
    db = get_datasource_from_info(info)
    await db.subscriptions.create({"subscriber_id": user_id, "author_id": author_id})

    logger.info("Subscription created", subscriber_id=str(user_id), author_id=str(author_id))
    return OK


async def unsubscribe_from(info: strawberry.Info, user_id: UUID, author_id: UUID) -> str:
    db = get_datasource_from_info(info)
    await db.subscriptions.delete(subscriber_id=user_id, author_id=author_id)

    logger.info("Subscription removed", subscriber_id=str(user_id), author_id=str(author_id))
    return OK
