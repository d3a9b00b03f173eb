# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Reference resolution over a decoded row map.

Flight models point at other rows through `$`-prefixed strings:

- `$L<id>` lazy, `$@<id>` promise, `$Q<id>` map, `$W<id>` set, `$<hex>` direct:
  replaced by the referenced row's value, resolved recursively
- `$Z<id>` error: the error message when the row is an `E` row
- `$F`, `$B`, `$K`, `$i`, `$D`, `$n`, `$S`: opaque, rendered as placeholders
- `$$...` escaped dollar; `$undefined`, `$Infinity`, `$-Infinity`, `$NaN`, `$-0` literals

Every step into a container or through a reference costs one unit of depth; past
`max_depth` a sentinel string is returned instead, which bounds cyclic graphs.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from ..config import DEFAULT_MAX_DEPTH, clamp_max_depth
from .handlers import is_hex
from .types import DebugInfo, Hint, JsonValue, Model, Module, RowValue, ServerError, Text, Unknown

logger = logging.getLogger(__name__)

MAX_DEPTH_SENTINEL = "[Max depth exceeded]"

# Row-backed references and the placeholder used when the row is missing.
_ROW_REFERENCES: dict[str, str] = {
    "L": "$L{ref} [not found]",
    "@": "$@{ref} [not found]",
    "Q": "[Map: $Q{ref} not found]",
    "W": "[Set: $W{ref} not found]",
}

# References that are never dereferenced.
_OPAQUE_REFERENCES: dict[str, str] = {
    "F": "[Server Function: $F{ref}]",
    "B": "[Blob: $B{ref}]",
    "K": "[FormData: $K{ref}]",
    "i": "[Iterator: $i{ref}]",
    "D": "[Date: {ref}]",
    "n": "[BigInt: {ref}]",
    "S": "[Symbol: {ref}]",
}

_SPECIAL_LITERALS: dict[str, JsonValue] = {
    "$undefined": None,
    "$Infinity": math.inf,
    "$-Infinity": -math.inf,
    "$NaN": math.nan,
    "$-0": -0.0,
}


def row_value_to_json(value: RowValue) -> JsonValue:
    """JSON stand-in for a row: models and text pass through, the rest become placeholders."""
    if isinstance(value, Model):
        return value.json
    if isinstance(value, Text):
        return value.value
    if isinstance(value, Module):
        return f"[Module: {value.path}]"
    if isinstance(value, ServerError):
        return f"[Error: {value.message}]"
    if isinstance(value, Hint):
        return f"[Hint: {value.code}]"
    if isinstance(value, DebugInfo):
        return "[DebugInfo]"
    if isinstance(value, Unknown):
        return f"[Unknown: {value.tag}]"
    raise TypeError(f"not a row value: {type(value).__name__}")


class ReferenceResolver:
    """Rewrites reference strings in a JSON value using a fixed row map. Never mutates the rows."""

    def __init__(self, rows: Mapping[str, RowValue], max_depth: int = DEFAULT_MAX_DEPTH):
        self.rows = rows
        self.max_depth = clamp_max_depth(max_depth)

    def resolve(self, value: JsonValue, depth: int = 0) -> JsonValue:
        if depth > self.max_depth:
            logger.debug("Reference depth limit %d reached", self.max_depth)
            return MAX_DEPTH_SENTINEL
        if isinstance(value, str):
            return self._resolve_string(value, depth)
        if isinstance(value, list):
            return [self.resolve(item, depth + 1) for item in value]
        if isinstance(value, dict):
            return {key: self.resolve(item, depth + 1) for key, item in value.items()}
        return value

    def _resolve_string(self, value: str, depth: int) -> JsonValue:
        if not value.startswith("$"):
            return value

        if len(value) >= 2:
            marker, ref = value[1], value[2:]
            if marker == "$":
                return value[1:]
            if marker in _ROW_REFERENCES:
                return self._resolve_row(ref, depth, missing=_ROW_REFERENCES[marker].format(ref=ref))
            if marker == "Z":
                return self._resolve_error(ref, depth)
            if marker in _OPAQUE_REFERENCES:
                return _OPAQUE_REFERENCES[marker].format(ref=ref)

        if value in _SPECIAL_LITERALS:
            return _SPECIAL_LITERALS[value]

        row_id = value[1:]
        if is_hex(row_id):
            return self._resolve_row(row_id, depth, missing=f"${row_id} [not found]")
        return value

    def _resolve_row(self, row_id: str, depth: int, *, missing: str) -> JsonValue:
        row = self.rows.get(row_id)
        if row is None:
            return missing
        return self.resolve(row_value_to_json(row), depth + 1)

    def _resolve_error(self, row_id: str, depth: int) -> JsonValue:
        row = self.rows.get(row_id)
        if row is None:
            return f"[Error: $Z{row_id} not found]"
        if isinstance(row, ServerError):
            return f"[Error: {row.message}]"
        return self.resolve(row_value_to_json(row), depth + 1)


def resolve_references(rows: Mapping[str, RowValue], value: JsonValue, *, max_depth: int = DEFAULT_MAX_DEPTH) -> JsonValue:
    """Convenience wrapper over `ReferenceResolver(rows, max_depth).resolve(value)`."""
    return ReferenceResolver(rows, max_depth).resolve(value)


__all__ = [
    "MAX_DEPTH_SENTINEL",
    "ReferenceResolver",
    "resolve_references",
    "row_value_to_json",
]
