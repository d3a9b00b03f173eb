# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
rscflight package entrypoint.

This package decodes the React Server Components "Flight" wire format (as pushed
through `self.__next_f` by Next.js, or served as `text/x-component`) into the
resolved JSON value graph the server intended the client to see. Row values are
modeled as a closed set of dataclasses, and decoding degrades instead of raising.
"""

from .config import DecoderSettings, load_decoder_settings
from .errors import ChunkFormatError, DecodeIssue
from .flight import (
    DebugInfo,
    FlightPayloadResolver,
    Hint,
    Model,
    Module,
    ReferenceResolver,
    RowStore,
    RowValue,
    ServerError,
    TagHandlerRegistry,
    Text,
    Unknown,
    chunks_from_json,
    chunks_from_stream,
    parse_rows,
    resolve_flight,
)
from .log import setup_logging
from .version import __version__

__all__ = [
    "ChunkFormatError",
    "DebugInfo",
    "DecodeIssue",
    "DecoderSettings",
    "FlightPayloadResolver",
    "Hint",
    "Model",
    "Module",
    "ReferenceResolver",
    "RowStore",
    "RowValue",
    "ServerError",
    "TagHandlerRegistry",
    "Text",
    "Unknown",
    "chunks_from_json",
    "chunks_from_stream",
    "load_decoder_settings",
    "parse_rows",
    "resolve_flight",
    "setup_logging",
    "__version__",
]
