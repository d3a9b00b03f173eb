# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""RSC Flight payload decoding: tokenizer, tag handlers, row store and reference resolver."""

from .chunks import chunks_from_json, chunks_from_stream, normalize_chunk, normalize_chunks
from .diagnostics import RowIssue, classify_row, collect_issues, summarize_row_value
from .handlers import (
    BUILTIN_TAG_HANDLERS,
    decode_debug_info,
    decode_error,
    decode_hint,
    decode_model,
    decode_module,
    decode_text,
)
from .heuristics import detect_input_format, looks_like_flight_payload
from .payload import ROOT_ROW_ID, FlightPayloadResolver, resolve_flight
from .registry import TagHandlerRegistry, default_tag_registry
from .resolver import MAX_DEPTH_SENTINEL, ReferenceResolver, resolve_references, row_value_to_json
from .store import RowStore
from .tokenizer import extract_tag_and_data, parse_row, parse_rows
from .types import (
    Chunk,
    DebugInfo,
    Hint,
    JsonValue,
    Model,
    Module,
    ParsedRow,
    RowValue,
    ServerError,
    TagHandler,
    Text,
    Unknown,
)

__all__ = [
    "BUILTIN_TAG_HANDLERS",
    "Chunk",
    "DebugInfo",
    "FlightPayloadResolver",
    "Hint",
    "JsonValue",
    "MAX_DEPTH_SENTINEL",
    "Model",
    "Module",
    "ParsedRow",
    "ROOT_ROW_ID",
    "ReferenceResolver",
    "RowIssue",
    "RowStore",
    "RowValue",
    "ServerError",
    "TagHandler",
    "TagHandlerRegistry",
    "Text",
    "Unknown",
    "chunks_from_json",
    "chunks_from_stream",
    "classify_row",
    "collect_issues",
    "decode_debug_info",
    "decode_error",
    "decode_hint",
    "decode_model",
    "decode_module",
    "decode_text",
    "default_tag_registry",
    "detect_input_format",
    "extract_tag_and_data",
    "looks_like_flight_payload",
    "normalize_chunk",
    "normalize_chunks",
    "parse_row",
    "parse_rows",
    "resolve_flight",
    "resolve_references",
    "row_value_to_json",
    "summarize_row_value",
]
