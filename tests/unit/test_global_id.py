"""
Unit tests for the global id codec.

Tests cover:
- Encode/decode round trip
- Type projection
- Malformed id rejection
- Invalid encode input
"""

import base64

import pytest

from sdk.relaynode_sdk.errors import MalformedIdError
from sdk.relaynode_sdk.global_id import (
    DecodedGlobalId,
    decode,
    encode,
    is_global_id,
    new_global_id,
    type_from_global_id,
)


def raw_id(text: str) -> str:
    """Encode arbitrary text the way global ids are encoded."""
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")


class TestRoundTrip:
    """Tests for encode/decode."""

    @pytest.mark.parametrize(
        "type_name,key",
        [
            ("Post", "1"),
            ("Post", ""),
            ("User", "f3b1c2d4e5f60718293a4b5c6d7e8f90"),
            ("_Internal", "key:with:colons"),
            ("Comment2", "ünïcødé ✓"),
            ("T", "a" * 500),
        ],
    )
    def test_decode_inverts_encode(self, type_name, key):
        """decode(encode(type, key)) gives back the pair."""
        decoded = decode(encode(type_name, key))

        assert decoded == (type_name, key)
        assert decoded.type == type_name
        assert decoded.key == key

    def test_decoded_unpacks(self):
        """Decoded ids unpack like tuples."""
        type_name, key = decode(encode("Post", "42"))

        assert type_name == "Post"
        assert key == "42"

    def test_decoded_equality(self):
        """Decoded ids compare equal to each other and hash alike."""
        a = decode(encode("Post", "42"))
        b = DecodedGlobalId(type="Post", key="42")

        assert a == b
        assert hash(a) == hash(b)
        assert a != DecodedGlobalId(type="Post", key="43")

    def test_encoding_is_opaque_and_url_safe(self):
        """Encoded ids hide the pair and use URL-safe characters only."""
        gid = encode("Post", "??>>~~")

        assert "Post" not in gid
        assert "=" not in gid
        assert "+" not in gid
        assert "/" not in gid

    def test_distinct_pairs_distinct_ids(self):
        """Pairs that concatenate alike still encode differently."""
        assert encode("Post", "1") != encode("Post", "10")
        assert encode("Po", "st:1") != encode("Post", "1")

    def test_type_from_global_id(self):
        """Type projection agrees with decode."""
        gid = encode("Comment", "7")

        assert type_from_global_id(gid) == "Comment"
        assert type_from_global_id(gid) == decode(gid).type

    def test_new_global_id(self):
        """New ids carry the type and a fresh key."""
        a = new_global_id("Post")
        b = new_global_id("Post")

        assert a != b
        assert type_from_global_id(a) == "Post"
        assert len(decode(a).key) == 32


class TestMalformed:
    """Tests for decoding invalid ids."""

    @pytest.mark.parametrize(
        "value",
        [
            None,
            123,
            "",
            "!!!not-base64!!!",
            "a",
            raw_id("no separator"),
            raw_id(":missingType"),
            raw_id("Bad Type:1"),
            raw_id("9Post:1"),
        ],
    )
    def test_decode_rejects(self, value):
        """Values that are not a type/key pair raise MalformedIdError."""
        with pytest.raises(MalformedIdError) as exc_info:
            decode(value)

        assert exc_info.value.code == "MALFORMED_ID"
        assert exc_info.value.global_id == value

    def test_decode_rejects_non_utf8(self):
        """Ids that are not UTF-8 text are rejected."""
        gid = base64.urlsafe_b64encode(b"\xff\xfe:1").decode("ascii").rstrip("=")

        with pytest.raises(MalformedIdError):
            decode(gid)

    def test_decode_rejects_padded_spelling(self):
        """Only the canonical unpadded spelling is accepted."""
        gid = base64.urlsafe_b64encode(b"Post:12").decode("ascii")
        assert gid.endswith("=")

        with pytest.raises(MalformedIdError, match="canonically"):
            decode(gid)

    def test_decode_rejects_standard_alphabet(self):
        """Ids using '+' or '/' instead of '-' or '_' are rejected."""
        gid = encode("Post", "??>>")
        assert "-" in gid or "_" in gid
        standard = gid.replace("-", "+").replace("_", "/")

        with pytest.raises(MalformedIdError):
            decode(standard)

    def test_is_global_id(self):
        """is_global_id mirrors decode success."""
        assert is_global_id(encode("Post", "1"))
        assert not is_global_id("garbage!")
        assert not is_global_id(None)


class TestEncodeInput:
    """Tests for encode input checks."""

    @pytest.mark.parametrize("type_name", ["", "Has Space", "Post:1", "1Post", None])
    def test_invalid_type_name(self, type_name):
        """Type names must be identifier tokens."""
        with pytest.raises(ValueError, match="Invalid type name"):
            encode(type_name, "1")

    def test_empty_key(self):
        """The empty key is a key like any other."""
        gid = encode("Post", "")

        assert gid == raw_id("Post:")
        assert decode(gid) == ("Post", "")
        assert gid != encode("Post", "0")

    def test_non_string_key(self):
        """Keys must be strings."""
        with pytest.raises(TypeError, match="must be a string"):
            encode("Post", 1)
