"""
Unit tests for MutationInfo and RequestContext.
"""

import dataclasses

import pytest

from sdk.relaynode_sdk.context import MutationInfo, RequestContext
from sdk.relaynode_sdk.errors import MalformedIdError
from sdk.relaynode_sdk.global_id import encode


class TestMutationInfo:
    """Tests for MutationInfo."""

    def test_hashable(self):
        """Mutation metadata hashes even when it carries extra data."""
        info = MutationInfo(name="likePost", extra={"source": "web"})

        assert hash(info) == hash(MutationInfo(name="likePost", extra={"source": "web"}))
        assert info == MutationInfo(name="likePost", extra={"source": "web"})

    def test_extra_read_only(self):
        """extra cannot be changed after construction."""
        source = {"source": "web"}
        info = MutationInfo(name="likePost", extra=source)

        with pytest.raises(TypeError):
            info.extra["source"] = "cli"

        source["source"] = "cli"
        assert info.extra["source"] == "web"

    def test_frozen(self):
        info = MutationInfo(name="likePost")

        with pytest.raises(dataclasses.FrozenInstanceError):
            info.name = "other"


class TestRequestContext:
    """Tests for RequestContext."""

    def test_hashable(self, make_context):
        """Contexts can be hashed, e.g. to key per-request caches."""
        context = make_context(encode("Post", "1"))

        assert hash(context) == hash(context)

    def test_for_global_id(self, schema, mutation):
        """The type is read from the id."""
        post_id = encode("Post", "1")

        context = RequestContext.for_global_id(schema, None, mutation, post_id)

        assert context.type == "Post"
        assert context.id == post_id

    def test_for_global_id_malformed(self, schema, mutation):
        with pytest.raises(MalformedIdError):
            RequestContext.for_global_id(schema, None, mutation, "not an id")
