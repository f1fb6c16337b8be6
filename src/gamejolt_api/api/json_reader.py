"""Minimal reader over parsed JSON objects with type-coerced accessors.

The Game Jolt server sends most scalars as strings ("true", "42"), so every accessor
accepts both the native JSON type and its string form. Accessors without a default
raise DecodeError when the field is missing.
"""

import json
from collections.abc import Iterator
from enum import Enum
from typing import Any, TypeVar

from gamejolt_api.api.errors import DecodeError

_MISSING: Any = object()

E = TypeVar("E", bound=Enum)


def parse_body(body: str) -> dict[str, Any]:
    """Parse a response body and unwrap the top-level ``response`` envelope when present.

    Raises:
        DecodeError: The body is not JSON or not a JSON object.

    """
    try:
        obj = json.loads(body)
    except ValueError as e:
        raise DecodeError(f"Response is not valid JSON: {body[:200]!r}") from e
    if not isinstance(obj, dict):
        raise DecodeError(f"Response is not a JSON object: {body[:200]!r}")
    inner = obj.get("response")
    if isinstance(inner, dict):
        return inner
    return obj


class JsonObject:
    """Read-only view of one JSON object."""

    def __init__(self, data: dict[str, Any]) -> None:
        """Wrap a parsed JSON object.

        Args:
            data: The decoded JSON object.

        """
        self.data = data

    def has(self, name: str) -> bool:
        """Check if a field is present and not null."""
        return self.data.get(name) is not None

    def _get(self, name: str, default: Any) -> Any:
        value = self.data.get(name)
        if value is None:
            if default is _MISSING:
                raise DecodeError(f"Missing field '{name}'.")
            return default
        return value

    def get_bool(self, name: str, default: bool = _MISSING) -> bool:
        """Read a boolean; accepts true/false and their string forms."""
        value = self._get(name, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        raise DecodeError(f"Field '{name}' is not a boolean: {value!r}")

    def get_int(self, name: str, default: int = _MISSING) -> int:
        """Read an integer; accepts numbers and numeric strings."""
        value = self._get(name, default)
        if isinstance(value, bool):
            raise DecodeError(f"Field '{name}' is not an integer: {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Field '{name}' is not an integer: {value!r}") from e

    def get_str(self, name: str, default: Any = _MISSING) -> Any:
        """Read a string; numbers are converted to their text form."""
        value = self._get(name, default)
        if value is default:
            return value
        if isinstance(value, (dict, list)):
            raise DecodeError(f"Field '{name}' is not a string: {value!r}")
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def get_enum(self, name: str, enum_type: type[E]) -> E:
        """Read an enum by its protocol name, case-insensitively."""
        raw = self.get_str(name).lower()
        for member in enum_type:
            if str(member.value).lower() == raw:
                return member
        raise DecodeError(f"Field '{name}' has unknown {enum_type.__name__} value: {raw!r}")

    def children(self, name: str) -> Iterator["JsonObject"]:
        """Iterate the objects of a child array; an absent array yields nothing."""
        value = self.data.get(name)
        if value is None:
            return
        if not isinstance(value, list):
            raise DecodeError(f"Field '{name}' is not an array: {value!r}")
        for item in value:
            if not isinstance(item, dict):
                raise DecodeError(f"Array '{name}' contains a non-object item: {item!r}")
            yield JsonObject(item)
