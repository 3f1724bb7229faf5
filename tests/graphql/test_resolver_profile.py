"""
Unit tests for profile and member type resolvers
"""

import uuid

import pytest
import pytest_asyncio

from crudgraph.errors import RecordNotFoundError, UniqueConstraintError, ValidationError
from crudgraph.graphql.mutations.root import ChangeProfileInput, CreateProfileInput
from crudgraph.graphql.resolvers.member_type import (
    resolve_member_type_by_id,
    resolve_member_types,
    resolve_profile_member_type,
)
from crudgraph.graphql.resolvers.profile import (
    change_profile,
    create_profile,
    delete_profile,
    resolve_profile_by_id,
    resolve_profiles,
)
from crudgraph.graphql.types.member_type import MemberTypeId


@pytest_asyncio.fixture
async def user_id(memory_datasource):
    row = await memory_datasource.users.create({"name": "Ann", "balance": 0.0})
    return row.id


def profile_input(user_id, year_of_birth=1990, member_type_id=MemberTypeId.BASIC):
    return CreateProfileInput(
        is_male=True,
        year_of_birth=year_of_birth,
        user_id=user_id,
        member_type_id=member_type_id,
    )


class TestMemberTypes:
    """Tests for member type resolvers."""

    @pytest.mark.asyncio
    async def test_resolve_member_types(self, mock_info):
        member_types = await resolve_member_types(mock_info)

        by_id = {mt.id: mt for mt in member_types}
        assert set(by_id) == {MemberTypeId.BASIC, MemberTypeId.BUSINESS}
        assert by_id[MemberTypeId.BASIC].discount == 2.3
        assert by_id[MemberTypeId.BUSINESS].posts_limit_per_month == 100.0

    @pytest.mark.asyncio
    async def test_resolve_member_type_by_id(self, mock_info):
        member_type = await resolve_member_type_by_id(mock_info, MemberTypeId.BUSINESS)

        assert member_type is not None
        assert member_type.discount == 7.7


class TestCreateProfile:
    """Tests for create_profile."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("year", [1900, 1990, 2023])
    async def test_accepts_years_in_range(self, mock_info, user_id, year):
        profile = await create_profile(mock_info, profile_input(user_id, year_of_birth=year))

        assert profile.year_of_birth == year
        assert profile.user_id == user_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("year", [1899, 2024, 0])
    async def test_rejects_years_out_of_range(self, mock_info, memory_datasource, year):
        with pytest.raises(ValidationError, match="Invalid yearOfBirth"):
            await create_profile(mock_info, profile_input(uuid.uuid4(), year_of_birth=year))

        assert memory_datasource.profiles.calls == []

    @pytest.mark.asyncio
    async def test_one_profile_per_user(self, mock_info, user_id):
        await create_profile(mock_info, profile_input(user_id))

        with pytest.raises(UniqueConstraintError):
            await create_profile(mock_info, profile_input(user_id))

    @pytest.mark.asyncio
    async def test_member_type_field(self, mock_info, user_id):
        profile = await create_profile(
            mock_info, profile_input(user_id, member_type_id=MemberTypeId.BUSINESS)
        )

        member_type = await resolve_profile_member_type(profile, mock_info)

        assert member_type is not None
        assert member_type.id == MemberTypeId.BUSINESS


class TestProfileQueriesAndChanges:
    """Tests for profile queries, changes and deletes."""

    @pytest.mark.asyncio
    async def test_queries(self, mock_info, user_id):
        profile = await create_profile(mock_info, profile_input(user_id))

        assert [p.id for p in await resolve_profiles(mock_info)] == [profile.id]
        found = await resolve_profile_by_id(mock_info, profile.id)
        assert found is not None and found.id == profile.id
        assert await resolve_profile_by_id(mock_info, uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_change_profile_keeps_other_fields(self, mock_info, user_id):
        profile = await create_profile(mock_info, profile_input(user_id))

        changed = await change_profile(
            mock_info, profile.id, ChangeProfileInput(member_type_id=MemberTypeId.BUSINESS)
        )

        assert changed.member_type_id == MemberTypeId.BUSINESS
        assert changed.year_of_birth == 1990
        assert changed.is_male is True

    @pytest.mark.asyncio
    async def test_change_profile_does_not_check_year(self, mock_info, user_id):
        profile = await create_profile(mock_info, profile_input(user_id))

        changed = await change_profile(mock_info, profile.id, ChangeProfileInput(year_of_birth=1800))

        assert changed.year_of_birth == 1800

    @pytest.mark.asyncio
    async def test_delete_profile(self, mock_info, user_id):
        profile = await create_profile(mock_info, profile_input(user_id))

        assert await delete_profile(mock_info, profile.id) == "OK"
        with pytest.raises(RecordNotFoundError):
            await delete_profile(mock_info, profile.id)
