from __future__ import annotations

from typing import TYPE_CHECKING, Any

import strawberry

from . import get_datasource_from_info

if TYPE_CHECKING:
    from ..types.member_type import MemberType, MemberTypeId
    from ..types.profile import Profile


def to_member_type(row: Any) -> MemberType:
    from ..types.member_type import MemberType as MemberTypeType
    from ..types.member_type import MemberTypeId as MemberTypeIdEnum

    return MemberTypeType(
        id=MemberTypeIdEnum(row.id),
        discount=row.discount,
        posts_limit_per_month=row.posts_limit_per_month,
    )


async def resolve_member_types(info: strawberry.Info) -> list[MemberType]:
    db = get_datasource_from_info(info)
    rows = await db.member_types.find_many()
    return [to_member_type(row) for row in rows]


async def resolve_member_type_by_id(info: strawberry.Info, id: MemberTypeId) -> MemberType | None:
    db = get_datasource_from_info(info)
    row = await db.member_types.find_unique(id=id.value)
    return to_member_type(row) if row else None


async def resolve_profile_member_type(profile: Profile, info: strawberry.Info) -> MemberType | None:
    db = get_datasource_from_info(info)
    row = await db.member_types.find_unique(id=profile.member_type_id.value)
    return to_member_type(row) if row else None
