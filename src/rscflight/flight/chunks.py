# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Chunk input normalisation and loaders.

Captured `self.__next_f.push(...)` calls arrive as a JSON array of pushes such as
`[[0], [1, "0:\\"$L1\\"\\n"], [1, "1:[...]\\n"]]`. The decoder only needs
`(type, payload)` pairs, so anything else is dropped here.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Sequence

from ..errors import ChunkFormatError
from .types import ROW_DATA_CHUNK_TYPE, Chunk

logger = logging.getLogger(__name__)


def _coerce_type_code(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def normalize_chunk(entry: object) -> Chunk | None:
    """Return `(type, payload)` for a well-formed push entry, else None."""
    if isinstance(entry, (str, bytes)) or not isinstance(entry, Sequence) or not entry:
        return None
    chunk_type = _coerce_type_code(entry[0])
    if chunk_type is None:
        return None
    if len(entry) < 2:
        # `[0]`-style bootstrap pushes carry no payload.
        return None
    payload = entry[1]
    if not isinstance(payload, str):
        return None
    return chunk_type, payload


def iter_chunks(pushes: Iterable[object]) -> Iterator[Chunk]:
    for index, entry in enumerate(pushes):
        chunk = normalize_chunk(entry)
        if chunk is None:
            logger.debug("Skipping malformed push entry #%d", index)
            continue
        yield chunk


def normalize_chunks(pushes: Iterable[object]) -> list[Chunk]:
    """Drop malformed push entries, keeping the order of the rest."""
    return list(iter_chunks(pushes))


def chunks_from_json(text: str) -> list[Chunk]:
    """Parse a JSON document holding a push list."""
    try:
        parsed = json.loads(text)
    except ValueError as exc:
        raise ChunkFormatError(f"push list is not valid JSON: {exc}") from exc
    if not isinstance(parsed, list):
        raise ChunkFormatError(f"push list must be a JSON array, got {type(parsed).__name__}")
    return normalize_chunks(parsed)


def chunks_from_stream(text: str) -> list[Chunk]:
    """Wrap a raw Flight response body (`text/x-component`) as a single row-data chunk."""
    return [(ROW_DATA_CHUNK_TYPE, text)]


__all__ = [
    "chunks_from_json",
    "chunks_from_stream",
    "iter_chunks",
    "normalize_chunk",
    "normalize_chunks",
]
