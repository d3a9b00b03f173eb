# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Row and value types for the RSC Flight decoder.

`RowValue` is a closed union: every consumer handles each variant explicitly and
treats `Unknown` as the catch-all for tags nobody could decode.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Union

JsonValue = Any
"""A value in the standard JSON data model (None, bool, int, float, str, list, dict)."""

Chunk = tuple[int, str]
"""One unit of the input stream: (type code, payload string)."""

ROW_DATA_CHUNK_TYPE = 1


@dataclass(frozen=True)
class ParsedRow:
    """A tokenized `id:[tag]data` record."""

    id: str
    tag: str | None
    data: str


@dataclass(frozen=True)
class Model:
    """JSON model data (React elements, objects, arrays)."""

    json: JsonValue


@dataclass(frozen=True)
class Module:
    """Client module import descriptor (`I` rows)."""

    path: str
    exports: list[str] = field(default_factory=list)
    name: str = ""


@dataclass(frozen=True)
class Hint:
    """Preload/prefetch directive (`H` rows)."""

    code: str
    model: JsonValue


@dataclass(frozen=True)
class ServerError:
    """Server-side error descriptor (`E` rows)."""

    message: str
    stack: str | None = None
    digest: str | None = None


@dataclass(frozen=True)
class Text:
    """A long string, possibly delivered in the chunk after its row header."""

    value: str


@dataclass(frozen=True)
class DebugInfo:
    """Opaque debug metadata (`D` rows)."""

    data: JsonValue


@dataclass(frozen=True)
class Unknown:
    """A row whose tag has no handler, or whose data could not be decoded."""

    tag: str
    raw_data: str


RowValue = Union[Model, Module, Hint, ServerError, Text, DebugInfo, Unknown]
ROW_VALUE_TYPES: tuple[type, ...] = (Model, Module, Hint, ServerError, Text, DebugInfo, Unknown)

TagHandler = Callable[[str], RowValue]
"""Decoder for a single tag: row data in, typed row value out."""


def is_row_value(value: object) -> bool:
    return isinstance(value, ROW_VALUE_TYPES)


__all__ = [
    "Chunk",
    "DebugInfo",
    "Hint",
    "JsonValue",
    "Model",
    "Module",
    "ParsedRow",
    "ROW_DATA_CHUNK_TYPE",
    "ROW_VALUE_TYPES",
    "RowValue",
    "ServerError",
    "TagHandler",
    "Text",
    "Unknown",
    "is_row_value",
]
