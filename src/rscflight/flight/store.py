# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Row store: the stateful side of Flight decoding.

Chunks must be ingested in the order they were produced. A text row written as
`id:T<hexlen>,` with nothing after the comma announces that the *next* chunk's
whole payload is that row's text, so the store carries that one pending row id
from chunk to chunk.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .handlers import TEXT_TAG, decode_model
from .registry import TagHandlerRegistry
from .tokenizer import parse_rows
from .chunks import iter_chunks
from .types import ROW_DATA_CHUNK_TYPE, ParsedRow, RowValue, Text

logger = logging.getLogger(__name__)


class RowStore:
    """Row id -> decoded value, plus the cross-chunk text continuation state."""

    def __init__(self, registry: TagHandlerRegistry | None = None):
        self.registry = registry if registry is not None else TagHandlerRegistry()
        self._rows: dict[str, RowValue] = {}
        self._pending_text_row_id: str | None = None

    @property
    def pending_text_row_id(self) -> str | None:
        return self._pending_text_row_id

    @property
    def rows(self) -> Mapping[str, RowValue]:
        """Read-only live view of the row map."""
        return MappingProxyType(self._rows)

    def snapshot(self) -> dict[str, RowValue]:
        return dict(self._rows)

    def get(self, row_id: str) -> RowValue | None:
        return self._rows.get(row_id)

    def __contains__(self, row_id: object) -> bool:
        return row_id in self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def ingest(self, chunks: Iterable[object]) -> None:
        """
        Consume chunks in order; chunks whose type is not 1 are ignored.

        Entries that are not `(type, payload)` pairs are skipped rather than raised on.
        """
        for chunk_type, payload in iter_chunks(chunks):
            if chunk_type != ROW_DATA_CHUNK_TYPE:
                logger.debug("Ignoring chunk of type %r", chunk_type)
                continue
            self.ingest_payload(payload)

    def ingest_payload(self, payload: str) -> None:
        """Consume one type-1 payload string."""
        if self._pending_text_row_id is not None:
            row_id = self._pending_text_row_id
            self._rows[row_id] = Text(payload)
            self._pending_text_row_id = None
            logger.debug("Row %r text completed from continuation chunk (%d chars)", row_id, len(payload))
            return

        for row in parse_rows(payload):
            value = self.decode_row(row)
            self._rows[row.id] = value
            if row.tag == TEXT_TAG and isinstance(value, Text) and not value.value:
                self._pending_text_row_id = row.id
                logger.debug("Row %r awaits its text in the next chunk", row.id)

    def decode_row(self, row: ParsedRow) -> RowValue:
        if row.tag is not None:
            return self.registry.decode(row.tag, row.data)
        return decode_model(row.data)

    def clear(self) -> None:
        self._rows.clear()
        self._pending_text_row_id = None


__all__ = ["RowStore"]
