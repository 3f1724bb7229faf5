from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

import strawberry

from ...errors import ValidationError
from ...logging import get_logger
from . import OK, get_datasource_from_info, input_to_data

if TYPE_CHECKING:
    from ..mutations.root import ChangeProfileInput, CreateProfileInput
    from ..types.profile import Profile

logger = get_logger(__name__)

MIN_YEAR_OF_BIRTH = 1900
MAX_YEAR_OF_BIRTH = 2023


def to_profile(row: Any) -> Profile:
    from ..types.member_type import MemberTypeId
    from ..types.profile import Profile as ProfileType

    return ProfileType(
        id=row.id,
        is_male=row.is_male,
        year_of_birth=row.year_of_birth,
        user_id=row.user_id,
        member_type_id=MemberTypeId(row.member_type_id),
    )


def validate_year_of_birth(year_of_birth: int) -> None:
    if year_of_birth < MIN_YEAR_OF_BIRTH or year_of_birth > MAX_YEAR_OF_BIRTH:
        raise ValidationError("Invalid yearOfBirth")


# Query resolvers
async def resolve_profiles(info: strawberry.Info) -> list[Profile]:
    db = get_datasource_from_info(info)
    rows = await db.profiles.find_many()
    return [to_profile(row) for row in rows]


async def resolve_profile_by_id(info: strawberry.Info, id: UUID) -> Profile | None:
    db = get_datasource_from_info(info)
    row = await db.profiles.find_unique(id=id)
    return to_profile(row) if row else None


# Mutation resolvers
async def create_profile(info: strawberry.Info, dto: CreateProfileInput) -> Profile:
    """
    Create a profile for an existing user.

    The year of birth range is only checked here; changeProfile does not
    re-validate it.
    """
    validate_year_of_birth(dto.year_of_birth)

    db = get_datasource_from_info(info)
    row = await db.profiles.create(input_to_data(dto))

    logger.info("Profile created", profile_id=str(row.id), user_id=str(row.user_id))
    return to_profile(row)


async def change_profile(info: strawberry.Info, id: UUID, dto: ChangeProfileInput) -> Profile:
    db = get_datasource_from_info(info)
    data = input_to_data(dto)
    row = await db.profiles.update({"id": id}, data)

    logger.info("Profile updated", profile_id=str(id), updated_fields=sorted(data))
    return to_profile(row)


async def delete_profile(info: strawberry.Info, id: UUID) -> str:
    db = get_datasource_from_info(info)
    await db.profiles.delete(id=id)

    logger.info("Profile deleted", profile_id=str(id))
    return OK
