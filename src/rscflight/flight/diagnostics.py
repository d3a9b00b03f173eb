# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Reporting helpers for rows that decoded in degraded form."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from ..errors import DecodeIssue, issue_to_reason
from .handlers import UNTAGGED_MODEL_TAG
from .registry import TagHandlerRegistry
from .types import DebugInfo, Hint, Model, Module, RowValue, ServerError, Text, Unknown

DETAIL_PREVIEW_CHARS = 80


@dataclass(frozen=True)
class RowIssue:
    row_id: str
    issue: DecodeIssue
    detail: str = ""

    @property
    def reason(self) -> str:
        return issue_to_reason(self.issue)

    def to_dict(self) -> dict[str, str]:
        return {"row_id": self.row_id, "issue": self.issue.value, "reason": self.reason, "detail": self.detail}


def _preview(text: str, limit: int = DETAIL_PREVIEW_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def classify_row(value: RowValue, registry: TagHandlerRegistry | None = None) -> DecodeIssue:
    if isinstance(value, ServerError):
        return DecodeIssue.SERVER_ERROR
    if not isinstance(value, Unknown):
        return DecodeIssue.NONE
    if value.tag == UNTAGGED_MODEL_TAG:
        return DecodeIssue.MALFORMED_MODEL
    if registry is not None and value.tag in registry:
        return DecodeIssue.TAG_DECODE_FAILED
    return DecodeIssue.UNKNOWN_TAG


def collect_issues(
    rows: Mapping[str, RowValue],
    registry: TagHandlerRegistry | None = None,
    pending_text_row_id: str | None = None,
) -> list[RowIssue]:
    """List degraded rows (sorted by row id), plus a dangling text continuation if any."""
    issues: list[RowIssue] = []
    for row_id in sorted(rows):
        value = rows[row_id]
        issue = classify_row(value, registry)
        if issue is DecodeIssue.NONE:
            continue
        if isinstance(value, ServerError):
            detail = value.message if not value.digest else f"{value.message} (digest {value.digest})"
        else:
            detail = f"{value.tag}: {_preview(value.raw_data)}"
        issues.append(RowIssue(row_id=row_id, issue=issue, detail=detail))
    if pending_text_row_id is not None:
        issues.append(RowIssue(row_id=pending_text_row_id, issue=DecodeIssue.PENDING_TEXT))
    return issues


def summarize_row_value(value: RowValue) -> str:
    """One-line description of a raw row, for listings."""
    if isinstance(value, Model):
        body = value.json
        if isinstance(body, list):
            return f"Model array[{len(body)}]"
        if isinstance(body, dict):
            return f"Model object{{{len(body)}}}"
        return f"Model {_preview(repr(body))}"
    if isinstance(value, Module):
        exports = ",".join(value.exports)
        suffix = f" as {value.name}" if value.name else ""
        return f"Module {value.path} [{exports}]{suffix}"
    if isinstance(value, Hint):
        return f"Hint {value.code}"
    if isinstance(value, ServerError):
        return f"ServerError {_preview(value.message)}"
    if isinstance(value, Text):
        return f"Text ({len(value.value)} chars)"
    if isinstance(value, DebugInfo):
        return "DebugInfo"
    return f"Unknown {value.tag} ({len(value.raw_data)} chars)"


__all__ = ["RowIssue", "classify_row", "collect_issues", "summarize_row_value"]
