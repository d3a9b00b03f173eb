# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Row tokenizer for Flight payload strings.

A payload holds newline-separated rows of the form `id:[tag]data`. The tag is a
single uppercase ASCII letter and is recognised heuristically:

- `1:I["path",[]]`  -> tag "I", data `["path",[]]`
- `2:H:{"k":"v"}`   -> tag "H", data `{"k":"v"}`
- `0:"$L1"`         -> no tag, data `"$L1"`
- `0:Testing data`  -> no tag (an uppercase letter followed by lowercase is a word)
"""

from __future__ import annotations

from .types import ParsedRow


def _is_tag_char(char: str) -> bool:
    return "A" <= char <= "Z"


def extract_tag_and_data(rest: str) -> tuple[str | None, str]:
    """Split the text after the row id into (tag, data)."""
    if not rest:
        return None, ""

    first = rest[0]
    if not _is_tag_char(first):
        return None, rest

    if len(rest) == 1:
        return first, ""

    second = rest[1]
    if second == ":":
        return first, rest[2:]
    if second.islower():
        return None, rest
    return first, rest[1:]


def parse_row(line: str) -> ParsedRow | None:
    """Parse one line; blank lines and lines without a colon yield None."""
    if not line or line.isspace():
        return None

    colon = line.find(":")
    if colon == -1:
        return None

    tag, data = extract_tag_and_data(line[colon + 1 :])
    return ParsedRow(id=line[:colon], tag=tag, data=data)


def parse_rows(payload: str) -> list[ParsedRow]:
    """Tokenize a payload into rows, in order, skipping anything unparsable."""
    rows: list[ParsedRow] = []
    for line in payload.split("\n"):
        row = parse_row(line)
        if row is not None:
            rows.append(row)
    return rows


__all__ = ["extract_tag_and_data", "parse_row", "parse_rows"]
