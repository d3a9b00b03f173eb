# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tag handler registry: tag character -> row decoder."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .handlers import BUILTIN_TAG_HANDLERS
from .types import RowValue, TagHandler, Unknown, is_row_value

logger = logging.getLogger(__name__)


class TagHandlerRegistry:
    """
    Mapping from a single tag character to its decoder.

    Seeded with the built-in handlers unless `include_builtins=False`. Registering
    a tag that already has a handler replaces it. Use `with_handler` to derive a
    new registry without touching a registry that other sessions share.
    """

    def __init__(self, handlers: Mapping[str, TagHandler] | None = None, *, include_builtins: bool = True):
        self._handlers: dict[str, TagHandler] = {}
        if include_builtins:
            self._handlers.update(BUILTIN_TAG_HANDLERS)
        for tag, handler in (handlers or {}).items():
            self.register(tag, handler)

    def register(self, tag: str, handler: TagHandler) -> TagHandlerRegistry:
        if not isinstance(tag, str) or len(tag) != 1:
            raise ValueError(f"tag must be a single character, got {tag!r}")
        if not callable(handler):
            raise TypeError("handler must be callable")
        self._handlers[tag] = handler
        return self

    def with_handler(self, tag: str, handler: TagHandler) -> TagHandlerRegistry:
        """Return a copy of this registry with `tag` mapped to `handler`."""
        return self.copy().register(tag, handler)

    def copy(self) -> TagHandlerRegistry:
        return TagHandlerRegistry(self._handlers, include_builtins=False)

    def get_handler(self, tag: str) -> TagHandler | None:
        return self._handlers.get(tag)

    def tags(self) -> list[str]:
        return sorted(self._handlers)

    def __contains__(self, tag: object) -> bool:
        return tag in self._handlers

    def decode(self, tag: str, data: str) -> RowValue:
        """Decode `data` with the handler for `tag`; never raises."""
        handler = self._handlers.get(tag)
        if handler is None:
            return Unknown(tag, data)
        try:
            value = handler(data)
        except Exception as exc:
            logger.debug("Handler for tag %r failed: %s", tag, exc)
            return Unknown(tag, data)
        if not is_row_value(value):
            logger.debug("Handler for tag %r returned %s, not a row value", tag, type(value).__name__)
            return Unknown(tag, data)
        return value

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"TagHandlerRegistry({self.tags()!r})"


def default_tag_registry() -> TagHandlerRegistry:
    """A fresh registry holding only the built-in handlers."""
    return TagHandlerRegistry()


__all__ = ["TagHandlerRegistry", "default_tag_registry"]
