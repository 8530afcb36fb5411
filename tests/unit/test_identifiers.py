"""Unit tests for ObjectId parsing."""

import pytest
from bson import ObjectId

from api.src.errors import InvalidIdentifier
from api.src.utils.identifiers import parse_object_id


def test_parses_valid_hex():
    """Test a 24 character hex string parses into the same ObjectId"""
    object_id = ObjectId()

    assert parse_object_id(str(object_id)) == object_id


@pytest.mark.parametrize("text", [
    "not-an-id",
    "",
    "123",
    "zzzzzzzzzzzzzzzzzzzzzzzz",
    "507f1f77bcf86cd79943901",
    "507f1f77bcf86cd7994390111",
    "abcdefghijkl",
])
def test_rejects_malformed(text):
    """Test malformed identifiers raise InvalidIdentifier"""
    with pytest.raises(InvalidIdentifier) as exc_info:
        parse_object_id(text, field="owner")

    assert exc_info.value.field == "owner"
    assert "owner" in str(exc_info.value)


def test_rejects_non_string():
    """Test raw bytes are not accepted as identifier text"""
    with pytest.raises(InvalidIdentifier):
        parse_object_id(b"abcdefghijkl")
