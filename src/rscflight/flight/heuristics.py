# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Lightweight sniffing of Flight text and captured push lists."""

from __future__ import annotations

import json
import re

FLIGHT_LINE_RE = re.compile(r"^[0-9a-fA-F]+:(?:I\[|H[A-Z\[]|\[|\{|\"|T[0-9a-fA-F]+,)", re.MULTILINE)
FLIGHT_LREF_RE = re.compile(r'^\s*0:"\\?\$L', re.MULTILINE)

INPUT_FORMAT_CHUNKS = "chunks"
INPUT_FORMAT_STREAM = "stream"


def looks_like_flight_payload(body: str | None) -> bool:
    """Return True when the text contains Flight-like rows."""
    if not body:
        return False
    text = str(body)
    return bool(FLIGHT_LINE_RE.search(text) or FLIGHT_LREF_RE.search(text))


def looks_like_push_list(text: str | None) -> bool:
    """Return True when the text is a JSON array (a captured `__next_f` push list)."""
    if not text or not text.lstrip().startswith("["):
        return False
    try:
        return isinstance(json.loads(text), list)
    except ValueError:
        return False


def detect_input_format(text: str | None) -> str:
    return INPUT_FORMAT_CHUNKS if looks_like_push_list(text) else INPUT_FORMAT_STREAM


__all__ = [
    "FLIGHT_LINE_RE",
    "FLIGHT_LREF_RE",
    "INPUT_FORMAT_CHUNKS",
    "INPUT_FORMAT_STREAM",
    "detect_input_format",
    "looks_like_flight_payload",
    "looks_like_push_list",
]
