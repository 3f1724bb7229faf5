"""
Post GraphQL type definitions
"""

import strawberry

from ..scalars import UUID


@strawberry.type
class Post:
    """Post type for GraphQL API."""

    id: UUID
    title: str
    content: str
    author_id: UUID
