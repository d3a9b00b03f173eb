# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade: one instance decodes one Flight session."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from ..config import DEFAULT_MAX_DEPTH, clamp_max_depth
from .diagnostics import RowIssue, collect_issues
from .registry import TagHandlerRegistry
from .resolver import ReferenceResolver, row_value_to_json
from .store import RowStore
from .types import JsonValue, Model, RowValue, TagHandler, Text

ROOT_ROW_ID = "0"


class FlightPayloadResolver:
    """
    Ingest Flight chunks and read back the resolved JSON graph.

    Ingestion is order-sensitive and must not run concurrently with anything else
    on the same instance. Resolution only reads the row map.

    Example:
        resolver = FlightPayloadResolver()
        resolver.ingest([(1, '0:"$L1"\\n1:["$","p",null,{"children":"Hello"}]\\n')])
        resolver.get_resolved_root()  # ["$", "p", None, {"children": "Hello"}]
    """

    def __init__(self, registry: TagHandlerRegistry | None = None, *, max_depth: int = DEFAULT_MAX_DEPTH):
        self._store = RowStore(registry if registry is not None else TagHandlerRegistry())
        self.max_depth = clamp_max_depth(max_depth)

    @property
    def registry(self) -> TagHandlerRegistry:
        return self._store.registry

    @property
    def pending_text_row_id(self) -> str | None:
        return self._store.pending_text_row_id

    def ingest(self, chunks: Iterable[object]) -> None:
        """Accumulate rows from `(type, payload)` chunks; safe to call repeatedly."""
        self._store.ingest(chunks)

    def resolve(self, value: JsonValue) -> JsonValue:
        return ReferenceResolver(self._store.rows, self.max_depth).resolve(value)

    def has_row(self, row_id: str) -> bool:
        return row_id in self._store

    def get_resolved_root(self) -> JsonValue | None:
        """
        Resolve row "0". Returns None when the row is absent; check `has_row("0")`
        to tell that apart from a root that resolves to null.
        """
        root = self._store.get(ROOT_ROW_ID)
        if root is None:
            return None
        return self.resolve(row_value_to_json(root))

    def get_resolved_row(self, row_id: str) -> JsonValue | None:
        """Resolve a model or text row; other row kinds (and missing rows) give None."""
        row = self._store.get(row_id)
        if not isinstance(row, (Model, Text)):
            return None
        return self.resolve(row_value_to_json(row))

    def get_all_rows(self) -> Mapping[str, RowValue]:
        """Read-only snapshot of the raw, unresolved rows."""
        return MappingProxyType(self._store.snapshot())

    def issues(self) -> list[RowIssue]:
        return collect_issues(self._store.rows, self.registry, self.pending_text_row_id)

    def register_tag_handler(self, tag: str, handler: TagHandler) -> None:
        self.registry.register(tag, handler)

    def clear(self) -> None:
        self._store.clear()


def resolve_flight(
    chunks: Iterable[object],
    *,
    registry: TagHandlerRegistry | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> JsonValue | None:
    """Decode a complete chunk sequence and return its resolved root (None without row "0")."""
    resolver = FlightPayloadResolver(registry, max_depth=max_depth)
    resolver.ingest(chunks)
    return resolver.get_resolved_root()


__all__ = ["ROOT_ROW_ID", "FlightPayloadResolver", "resolve_flight"]
