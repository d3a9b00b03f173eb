# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Accessors and depth-first search helpers over decoded JSON trees.

Resolved Flight payloads are plain JSON values, so pulling a field out of a
rendered component tree usually means walking nested lists/dicts looking for
the first object with a given key.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

JsonObject = dict[str, Any]


def primitive_text(value: Any) -> str:
    """
    Return the textual content of a JSON primitive.

    Strings are returned as-is; numbers, booleans and null use their JSON spelling.
    Containers raise TypeError.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        raise TypeError(f"expected a JSON primitive, got {type(value).__name__}")
    return json.dumps(value)


def as_object_or_none(value: Any) -> JsonObject | None:
    return value if isinstance(value, dict) else None


def as_array_or_none(value: Any) -> list[Any] | None:
    return value if isinstance(value, list) else None


def as_string_or_none(value: Any) -> str | None:
    """Text of a primitive; None for null and containers."""
    if value is None or isinstance(value, (dict, list)):
        return None
    return primitive_text(value)


def as_int_or_none(value: Any) -> int | None:
    """Integer value of a number or numeric string; None otherwise (including 1.5)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def as_float_or_none(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def safe_string(obj: JsonObject, key: str) -> str | None:
    return as_string_or_none(obj.get(key))


def safe_int(obj: JsonObject, key: str) -> int | None:
    return as_int_or_none(obj.get(key))


def safe_float(obj: JsonObject, key: str) -> float | None:
    return as_float_or_none(obj.get(key))


def find_all_objects(
    root: Any,
    predicate: Callable[[JsonObject], bool],
    out: list[JsonObject] | None = None,
) -> list[JsonObject]:
    """Collect every object in the tree matching `predicate` (depth-first, document order)."""
    if out is None:
        out = []
    if isinstance(root, dict):
        if predicate(root):
            out.append(root)
        for value in root.values():
            find_all_objects(value, predicate, out)
    elif isinstance(root, list):
        for item in root:
            find_all_objects(item, predicate, out)
    return out


def find_first_object(root: Any, predicate: Callable[[JsonObject], bool]) -> JsonObject | None:
    """Return the first object matching `predicate` in a depth-first walk."""
    if isinstance(root, dict):
        if predicate(root):
            return root
        children = root.values()
    elif isinstance(root, list):
        children = root
    else:
        return None
    for child in children:
        found = find_first_object(child, predicate)
        if found is not None:
            return found
    return None


def find_object_with_key(root: Any, key: str) -> JsonObject | None:
    return find_first_object(root, lambda obj: key in obj)


def find_primitive_by_key(root: Any, key: str) -> Any | None:
    """
    Return the first primitive value stored under `key` anywhere in the tree.

    Objects mapping `key` to a container are skipped and the search continues
    into their children. A JSON null counts as a primitive and is returned as None.
    """
    if isinstance(root, dict):
        if key in root and not isinstance(root[key], (dict, list)):
            return root[key]
        children = root.values()
    elif isinstance(root, list):
        children = root
    else:
        return None
    for child in children:
        found = find_primitive_by_key(child, key)
        if found is not None:
            return found
    return None


__all__ = [
    "JsonObject",
    "as_array_or_none",
    "as_float_or_none",
    "as_int_or_none",
    "as_object_or_none",
    "as_string_or_none",
    "find_all_objects",
    "find_first_object",
    "find_object_with_key",
    "find_primitive_by_key",
    "primitive_text",
    "safe_float",
    "safe_int",
    "safe_string",
]
