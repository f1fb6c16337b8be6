"""Tests for response parsing and type-coerced JSON accessors."""

import pytest

from gamejolt_api.api.errors import DecodeError
from gamejolt_api.api.json_reader import JsonObject, parse_body
from gamejolt_api.api.values import TrophyDifficulty


class TestParseBody:
    """Body parsing and envelope unwrapping."""

    def test_unwraps_response(self):
        """The top-level response envelope is removed."""
        assert parse_body('{"response": {"success": "true"}}') == {"success": "true"}

    def test_bare_object(self):
        """An object without envelope is returned as is."""
        assert parse_body('{"success": true}') == {"success": True}

    def test_invalid_json(self):
        """Non-JSON bodies raise DecodeError."""
        with pytest.raises(DecodeError):
            parse_body("<html>")

    def test_not_an_object(self):
        """A JSON array at the top level raises DecodeError."""
        with pytest.raises(DecodeError):
            parse_body("[1, 2]")


class TestAccessors:
    """Scalars accepted in native and string form."""

    def test_bool_string(self):
        """'true'/'false' strings decode to booleans, case-insensitively."""
        obj = JsonObject({"a": "true", "b": "FALSE", "c": True})
        assert obj.get_bool("a") is True
        assert obj.get_bool("b") is False
        assert obj.get_bool("c") is True

    def test_bool_invalid(self):
        """Other strings are not booleans."""
        with pytest.raises(DecodeError):
            JsonObject({"a": "yes"}).get_bool("a")

    def test_int_string(self):
        """Numeric strings decode to integers."""
        obj = JsonObject({"a": "42", "b": 7})
        assert obj.get_int("a") == 42
        assert obj.get_int("b") == 7

    def test_int_invalid(self):
        """Non-numeric values and booleans raise DecodeError."""
        with pytest.raises(DecodeError):
            JsonObject({"a": "abc"}).get_int("a")
        with pytest.raises(DecodeError):
            JsonObject({"a": True}).get_int("a")

    def test_str_from_number(self):
        """Numbers are read as their text form."""
        assert JsonObject({"a": 100}).get_str("a") == "100"

    def test_str_rejects_containers(self):
        """Objects and arrays are not strings."""
        with pytest.raises(DecodeError):
            JsonObject({"a": [1]}).get_str("a")

    def test_missing_mandatory(self):
        """Missing field without default raises DecodeError."""
        with pytest.raises(DecodeError, match="success"):
            JsonObject({}).get_bool("success")

    def test_null_uses_default(self):
        """A null field falls back to the default."""
        obj = JsonObject({"a": None})
        assert obj.get_str("a", "x") == "x"
        assert obj.get_int("a", 0) == 0
        assert not obj.has("a")

    def test_enum_case_insensitive(self):
        """Enum names match regardless of case."""
        assert JsonObject({"d": "BRONZE"}).get_enum("d", TrophyDifficulty) is TrophyDifficulty.BRONZE
        assert JsonObject({"d": "bronze"}).get_enum("d", TrophyDifficulty) is TrophyDifficulty.BRONZE

    def test_enum_unknown(self):
        """Unknown enum names raise DecodeError."""
        with pytest.raises(DecodeError):
            JsonObject({"d": "Diamond"}).get_enum("d", TrophyDifficulty)


class TestChildren:
    """Child object arrays."""

    def test_absent_is_empty(self):
        """An absent array yields nothing."""
        assert list(JsonObject({}).children("scores")) == []

    def test_items(self):
        """Each item is wrapped in a JsonObject."""
        children = list(JsonObject({"keys": [{"key": "a"}, {"key": "b"}]}).children("keys"))
        assert [c.get_str("key") for c in children] == ["a", "b"]

    def test_not_array(self):
        """A non-array field raises DecodeError."""
        with pytest.raises(DecodeError):
            list(JsonObject({"keys": "a"}).children("keys"))

    def test_non_object_item(self):
        """Non-object items raise DecodeError."""
        with pytest.raises(DecodeError):
            list(JsonObject({"keys": ["a"]}).children("keys"))
