# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Degradation taxonomy and exception helpers."""

from enum import Enum
from typing import Optional


class DecodeIssue(str, Enum):
    MALFORMED_MODEL = "MALFORMED_MODEL"
    UNKNOWN_TAG = "UNKNOWN_TAG"
    TAG_DECODE_FAILED = "TAG_DECODE_FAILED"
    SERVER_ERROR = "SERVER_ERROR"
    PENDING_TEXT = "PENDING_TEXT"
    NONE = "NONE"


class ChunkFormatError(ValueError):
    """Raised by chunk loaders when input cannot be read as a push list."""


def issue_to_reason(issue: Optional[DecodeIssue]) -> str:
    """User-facing reason string."""
    mapping = {
        DecodeIssue.MALFORMED_MODEL: "Untagged row is not valid JSON",
        DecodeIssue.UNKNOWN_TAG: "No handler registered for row tag",
        DecodeIssue.TAG_DECODE_FAILED: "Tagged row could not be decoded",
        DecodeIssue.SERVER_ERROR: "Server sent an error row",
        DecodeIssue.PENDING_TEXT: "Text row is still waiting for its continuation chunk",
        DecodeIssue.NONE: "",
        None: "",
    }
    return mapping.get(issue, "Row decoded in degraded form")


__all__ = ["ChunkFormatError", "DecodeIssue", "issue_to_reason"]
