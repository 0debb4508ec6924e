"""
Shared fixtures for relaynode tests.

The test schema models a small blog:
- User writes Posts and Likes
- Post has Comments (one-to-many) and Likes
- Post and Tag are linked through Tagging edges carrying attributes
"""

from unittest.mock import AsyncMock

import pytest

from sdk.relaynode_sdk.config import get_settings
from sdk.relaynode_sdk.context import MutationInfo, RequestContext
from sdk.relaynode_sdk.crud import CrudAdapter
from sdk.relaynode_sdk.global_id import type_from_global_id
from sdk.relaynode_sdk.registry import SchemaModel
from sdk.relaynode_sdk.schema import NodeTypeDef, field, relation


def build_schema() -> SchemaModel:
    """Build and freeze the blog test schema."""
    User = NodeTypeDef(
        name="User",
        fields=(
            field("id", "id"),
            field("handle", "str", required=True),
        ),
        relations=(
            relation("posts", "Post", "author"),
            relation("likes", "Like", "likedBy"),
        ),
    )
    Post = NodeTypeDef(
        name="Post",
        fields=(
            field("id", "id"),
            field("text", "str"),
            field("createdAt", "timestamp"),
        ),
        relations=(
            relation("author", "User", "posts"),
            relation("comments", "Comment", "commentOn"),
            relation("likes", "Like", "likeOn"),
            relation("tags", "Tag", "posts", edge_type="Tagging"),
        ),
    )
    Comment = NodeTypeDef(
        name="Comment",
        fields=(field("id", "id"), field("text", "str")),
        relations=(relation("commentOn", "Post", "comments"),),
    )
    Like = NodeTypeDef(
        name="Like",
        fields=(field("id", "id"),),
        relations=(
            relation("likeOn", "Post", "likes"),
            relation("likedBy", "User", "likes"),
        ),
    )
    Tag = NodeTypeDef(
        name="Tag",
        fields=(field("id", "id"), field("label", "str")),
        relations=(relation("posts", "Post", "tags", edge_type="Tagging"),),
    )

    schema = SchemaModel([User, Post, Comment, Like, Tag])
    schema.freeze()
    return schema


def fake_crud() -> AsyncMock:
    """CRUD adapter whose four operations are async mocks."""
    return AsyncMock(spec=CrudAdapter)


@pytest.fixture
def schema() -> SchemaModel:
    """Frozen blog schema."""
    return build_schema()


@pytest.fixture
def mutation() -> MutationInfo:
    """Mutation metadata used by test contexts."""
    return MutationInfo(name="test", client_mutation_id="a", global_ids=())


@pytest.fixture
def make_context(schema, mutation):
    """Factory building a context with a fresh fake adapter for a global id."""

    def _make(global_id, crud=None):
        return RequestContext(
            schema=schema,
            crud=crud if crud is not None else fake_crud(),
            mutation=mutation,
            type=type_from_global_id(global_id),
            id=global_id,
        )

    return _make


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings from the environment in every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
