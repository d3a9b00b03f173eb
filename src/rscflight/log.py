# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for rscflight."""

from __future__ import annotations

import logging
import os

PACKAGE_LOGGER = "rscflight"
DEFAULT_LOG_LEVEL = os.getenv("RSCFLIGHT_LOG_LEVEL", "WARNING").upper()


def resolve_log_level(level: str | int | None) -> int:
    """Map a level name ("debug"), number ("10") or None to a logging level; unknown names give WARNING."""
    if level is None:
        level = DEFAULT_LOG_LEVEL
    if isinstance(level, int):
        return level
    text = level.strip()
    if text.isdigit():
        return int(text)
    value = logging.getLevelName(text.upper())
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | int | None = None) -> None:
    """
    Configure standard logging for CLI/library use.

    The level is also applied to the package logger, so decoder debug output
    follows it even when the host application already configured the root logger.
    """
    effective_level = resolve_log_level(level)
    logging.basicConfig(
        level=effective_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(effective_level)


__all__ = ["PACKAGE_LOGGER", "resolve_log_level", "setup_logging"]
