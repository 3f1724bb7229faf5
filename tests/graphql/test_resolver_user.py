"""
Unit tests for user resolvers
"""

import uuid
from unittest.mock import MagicMock

import pytest
import strawberry

from crudgraph.errors import RecordNotFoundError
from crudgraph.graphql.mutations.root import ChangeUserInput, CreateUserInput
from crudgraph.graphql.resolvers import get_datasource_from_info, input_to_data
from crudgraph.graphql.resolvers.user import (
    change_user,
    create_user,
    delete_user,
    resolve_subscribed_to_user,
    resolve_user_by_id,
    resolve_user_posts,
    resolve_user_profile,
    resolve_user_subscribed_to,
    resolve_users,
)
from crudgraph.graphql.types.member_type import MemberTypeId


class TestContextHelpers:
    """Tests for the shared resolver helpers."""

    def test_datasource_from_dict_context(self, mock_info, memory_datasource):
        assert get_datasource_from_info(mock_info) is memory_datasource

    def test_missing_datasource_raises(self):
        info = MagicMock(spec=strawberry.Info)
        info.context = {"request": MagicMock()}

        with pytest.raises(RuntimeError, match="data source"):
            get_datasource_from_info(info)

    def test_input_to_data_skips_absent_fields(self):
        assert input_to_data(ChangeUserInput(balance=50.0)) == {"balance": 50.0}

    def test_input_to_data_converts_enums(self):
        from crudgraph.graphql.mutations.root import ChangeProfileInput

        data = input_to_data(ChangeProfileInput(member_type_id=MemberTypeId.BUSINESS))
        assert data == {"member_type_id": "BUSINESS"}


class TestUserQueries:
    """Tests for user query resolvers."""

    @pytest.mark.asyncio
    async def test_resolve_users_empty(self, mock_info):
        assert await resolve_users(mock_info) == []

    @pytest.mark.asyncio
    async def test_resolve_user_by_id_found(self, mock_info):
        created = await create_user(mock_info, CreateUserInput(name="Ann", balance=10.0))

        result = await resolve_user_by_id(mock_info, created.id)

        assert result is not None
        assert result.id == created.id
        assert result.name == "Ann"
        assert result.balance == 10.0

    @pytest.mark.asyncio
    async def test_resolve_user_by_id_missing_returns_none(self, mock_info):
        assert await resolve_user_by_id(mock_info, uuid.uuid4()) is None


class TestUserFieldResolvers:
    """Tests for User's nested fields."""

    @pytest.mark.asyncio
    async def test_profile_absent(self, mock_info):
        user = await create_user(mock_info, CreateUserInput(name="Ann", balance=0.0))
        assert await resolve_user_profile(user, mock_info) is None

    @pytest.mark.asyncio
    async def test_profile_present(self, mock_info, memory_datasource):
        user = await create_user(mock_info, CreateUserInput(name="Ann", balance=0.0))
        await memory_datasource.profiles.create(
            {
                "is_male": False,
                "year_of_birth": 1990,
                "user_id": user.id,
                "member_type_id": "BASIC",
            }
        )

        profile = await resolve_user_profile(user, mock_info)

        assert profile is not None
        assert profile.user_id == user.id
        assert profile.member_type_id == MemberTypeId.BASIC

    @pytest.mark.asyncio
    async def test_posts_only_for_author(self, mock_info, memory_datasource):
        ann = await create_user(mock_info, CreateUserInput(name="Ann", balance=0.0))
        bob = await create_user(mock_info, CreateUserInput(name="Bob", balance=0.0))
        await memory_datasource.posts.create({"title": "a", "content": "x", "author_id": ann.id})
        await memory_datasource.posts.create({"title": "b", "content": "y", "author_id": ann.id})
        await memory_datasource.posts.create({"title": "c", "content": "z", "author_id": bob.id})

        posts = await resolve_user_posts(ann, mock_info)

        assert {post.title for post in posts} == {"a", "b"}

    @pytest.mark.asyncio
    async def test_subscription_lists(self, mock_info, memory_datasource):
        ann = await create_user(mock_info, CreateUserInput(name="Ann", balance=0.0))
        bob = await create_user(mock_info, CreateUserInput(name="Bob", balance=0.0))
        eve = await create_user(mock_info, CreateUserInput(name="Eve", balance=0.0))
        subscriptions = memory_datasource.subscriptions
        await subscriptions.create({"subscriber_id": ann.id, "author_id": bob.id})
        await subscriptions.create({"subscriber_id": ann.id, "author_id": eve.id})
        await subscriptions.create({"subscriber_id": eve.id, "author_id": bob.id})

        followed = await resolve_user_subscribed_to(ann, mock_info)
        followers = await resolve_subscribed_to_user(bob, mock_info)

        assert {user.id for user in followed} == {bob.id, eve.id}
        assert {user.id for user in followers} == {ann.id, eve.id}

    @pytest.mark.asyncio
    async def test_subscribed_to_uses_two_lookups(self, mock_info, memory_datasource):
        ann = await create_user(mock_info, CreateUserInput(name="Ann", balance=0.0))
        memory_datasource.users.calls.clear()

        assert await resolve_user_subscribed_to(ann, mock_info) == []

        assert memory_datasource.subscriptions.calls == [
            ("find_many", {"subscriber_id": ann.id})
        ]
        assert memory_datasource.users.calls == [("find_many", {"id": []})]


class TestUserMutations:
    """Tests for user mutation resolvers."""

    @pytest.mark.asyncio
    async def test_create_user(self, mock_info, memory_datasource):
        user = await create_user(mock_info, CreateUserInput(name="Ann", balance=12.5))

        assert isinstance(user.id, uuid.UUID)
        assert user.name == "Ann"
        assert user.balance == 12.5
        assert len(memory_datasource.users.rows) == 1

    @pytest.mark.asyncio
    async def test_change_user_partial_update(self, mock_info):
        user = await create_user(mock_info, CreateUserInput(name="Ann", balance=10.0))

        changed = await change_user(mock_info, user.id, ChangeUserInput(balance=50.0))

        assert changed.name == "Ann"
        assert changed.balance == 50.0

    @pytest.mark.asyncio
    async def test_change_user_missing(self, mock_info):
        with pytest.raises(RecordNotFoundError):
            await change_user(mock_info, uuid.uuid4(), ChangeUserInput(name="X"))

    @pytest.mark.asyncio
    async def test_delete_user(self, mock_info, memory_datasource):
        user = await create_user(mock_info, CreateUserInput(name="Ann", balance=10.0))

        assert await delete_user(mock_info, user.id) == "OK"
        assert memory_datasource.users.rows == []

    @pytest.mark.asyncio
    async def test_delete_user_missing(self, mock_info):
        with pytest.raises(RecordNotFoundError):
            await delete_user(mock_info, uuid.uuid4())
