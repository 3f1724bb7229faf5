"""
Reusable seed data functions for database initialization.

Member types are static reference rows; every other entity is created
through the GraphQL mutations.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import MemberTypes
from ..logging import get_logger

logger = get_logger(__name__)

DEFAULT_MEMBER_TYPES: tuple[dict[str, object], ...] = (
    {"id": "BASIC", "discount": 2.3, "posts_limit_per_month": 20},
    {"id": "BUSINESS", "discount": 7.7, "posts_limit_per_month": 100},
)


async def ensure_member_type(
    db: AsyncSession,
    *,
    member_type_id: str,
    discount: float,
    posts_limit_per_month: float,
) -> MemberTypes:
    """
    Ensure a member type exists in the database.

    Existing rows are returned untouched so operator edits survive reseeding.
    """
    stmt = select(MemberTypes).where(MemberTypes.id == member_type_id)
    result = await db.execute(stmt)
    existing = result.scalar_one_or_none()

    if existing:
        logger.debug("Member type already exists", member_type_id=member_type_id)
        return existing

    member_type = MemberTypes(
        id=member_type_id,
        discount=discount,
        posts_limit_per_month=posts_limit_per_month,
    )
    db.add(member_type)
    await db.commit()

    logger.info(
        "Created member type",
        member_type_id=member_type_id,
        discount=discount,
        posts_limit_per_month=posts_limit_per_month,
    )
    return member_type


async def seed_initial_data(db: AsyncSession) -> None:
    """Seed all reference data required for the application."""
    logger.info("Starting database seeding")

    for member_type in DEFAULT_MEMBER_TYPES:
        await ensure_member_type(
            db,
            member_type_id=str(member_type["id"]),
            discount=float(member_type["discount"]),  # type: ignore[arg-type]
            posts_limit_per_month=float(member_type["posts_limit_per_month"]),  # type: ignore[arg-type]
        )

    logger.info("Database seeding completed")
