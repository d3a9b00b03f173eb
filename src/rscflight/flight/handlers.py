# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Built-in tag decoders.

Each decoder maps a row's data string to a `RowValue` and never raises:
malformed input degrades to `Unknown` (or, for `E` rows, to a `ServerError`
describing the parse failure).
"""

from __future__ import annotations

import json
import logging
import string

from ..utils.json_tree import primitive_text
from .types import DebugInfo, Hint, JsonValue, Model, Module, RowValue, ServerError, TagHandler, Text, Unknown

logger = logging.getLogger(__name__)

MODULE_TAG = "I"
HINT_TAG = "H"
ERROR_TAG = "E"
TEXT_TAG = "T"
DEBUG_INFO_TAG = "D"
UNTAGGED_MODEL_TAG = "?"

_HEX_DIGITS = frozenset(string.hexdigits)
_JSON_ERRORS = (ValueError, RecursionError)
_DECODE_ERRORS = (*_JSON_ERRORS, TypeError, IndexError)


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def _loads(data: str) -> JsonValue:
    """Strict JSON: `NaN` and `Infinity` are rejected like any other non-JSON token."""
    return json.loads(data, parse_constant=_reject_constant)


def is_hex(text: str) -> bool:
    return bool(text) and all(char in _HEX_DIGITS for char in text)


def _optional_text(value: object) -> str | None:
    return None if value is None else primitive_text(value)


def decode_model(data: str) -> RowValue:
    """Untagged rows: the data is a JSON model."""
    try:
        return Model(_loads(data))
    except _JSON_ERRORS:
        logger.debug("Untagged row is not JSON (%d chars)", len(data))
        return Unknown(UNTAGGED_MODEL_TAG, data)


def decode_module(data: str) -> RowValue:
    """`I["path",["export",...],"name"]`; the name is optional."""
    try:
        parsed = _loads(data)
        if not isinstance(parsed, list):
            raise TypeError("module row is not an array")
        exports = parsed[1]
        if not isinstance(exports, list):
            raise TypeError("module exports are not an array")
        name = parsed[2] if len(parsed) > 2 else None
        return Module(
            path=primitive_text(parsed[0]),
            exports=[primitive_text(item) for item in exports],
            name="" if name is None else primitive_text(name),
        )
    except _DECODE_ERRORS as exc:
        logger.debug("Module row could not be decoded: %s", exc)
        return Unknown(MODULE_TAG, data)


def decode_hint(data: str) -> RowValue:
    """
    Preload hints: either a JSON array whose first element is the code, or a
    one-character code followed by a JSON model (`L["/style.css","style"]`).
    """
    try:
        parsed = _loads(data)
        if not isinstance(parsed, list):
            raise TypeError("hint row is not an array")
        code = parsed[0] if parsed else None
        return Hint(code="unknown" if code is None else primitive_text(code), model=parsed)
    except _DECODE_ERRORS:
        pass

    if not data:
        return Unknown(HINT_TAG, data)
    rest = data[1:] or "{}"
    try:
        return Hint(code=data[0], model=_loads(rest))
    except _JSON_ERRORS:
        logger.debug("Hint row could not be decoded (%d chars)", len(data))
        return Unknown(HINT_TAG, data)


def decode_error(data: str) -> RowValue:
    """`E{"message":...,"stack":...,"digest":...}`; parse failures become the message."""
    try:
        parsed = _loads(data)
        if not isinstance(parsed, dict):
            raise TypeError("error row is not an object")
        message = parsed.get("message")
        return ServerError(
            message="Unknown error" if message is None else primitive_text(message),
            stack=_optional_text(parsed.get("stack")),
            digest=_optional_text(parsed.get("digest")),
        )
    except _DECODE_ERRORS as exc:
        return ServerError(message=f"Failed to parse error: {exc}")


def decode_text(data: str) -> RowValue:
    """
    Text rows, optionally length-prefixed: `T<hexlen>,<text>`.

    The hex length is informational only; the text is everything after the
    first comma. Without a hex prefix the whole data is the text.
    """
    comma = data.find(",")
    if comma > 0 and is_hex(data[:comma]):
        return Text(data[comma + 1 :])
    return Text(data)


def decode_debug_info(data: str) -> RowValue:
    try:
        return DebugInfo(_loads(data))
    except _JSON_ERRORS:
        logger.debug("Debug info row is not JSON (%d chars)", len(data))
        return Unknown(DEBUG_INFO_TAG, data)


BUILTIN_TAG_HANDLERS: dict[str, TagHandler] = {
    MODULE_TAG: decode_module,
    HINT_TAG: decode_hint,
    ERROR_TAG: decode_error,
    TEXT_TAG: decode_text,
    DEBUG_INFO_TAG: decode_debug_info,
}


__all__ = [
    "BUILTIN_TAG_HANDLERS",
    "DEBUG_INFO_TAG",
    "ERROR_TAG",
    "HINT_TAG",
    "MODULE_TAG",
    "TEXT_TAG",
    "UNTAGGED_MODEL_TAG",
    "decode_debug_info",
    "decode_error",
    "decode_hint",
    "decode_model",
    "decode_module",
    "decode_text",
    "is_hex",
]
