# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for rscflight."""

import os
from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 100
# Each resolution level costs a few interpreter frames; stay well under the default recursion limit.
MAX_DEPTH_LIMIT = 200


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _non_negative_int_env(name: str, default: int) -> int:
    value = _int_env(name, default)
    return value if value >= 0 else default


def clamp_max_depth(value: int) -> int:
    """Bound a depth budget to [0, MAX_DEPTH_LIMIT]."""
    return max(0, min(int(value), MAX_DEPTH_LIMIT))


@dataclass
class DecoderSettings:
    """Decoder and CLI defaults."""

    max_depth: int = DEFAULT_MAX_DEPTH
    cli_text_truncation_bytes: int = 4096
    indent: int = 2

    @classmethod
    def from_env(cls) -> "DecoderSettings":
        """Create settings from environment variables (evaluated at call time)."""
        truncation = _int_env("RSCFLIGHT_CLI_TRUNCATION_BYTES", cls.cli_text_truncation_bytes)
        if truncation <= 0:
            truncation = cls.cli_text_truncation_bytes
        return cls(
            max_depth=clamp_max_depth(_non_negative_int_env("RSCFLIGHT_MAX_DEPTH", cls.max_depth)),
            cli_text_truncation_bytes=truncation,
            indent=_non_negative_int_env("RSCFLIGHT_JSON_INDENT", cls.indent),
        )


def load_decoder_settings() -> DecoderSettings:
    """Load decoder settings from environment with sensible defaults."""
    return DecoderSettings.from_env()


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_LIMIT",
    "DecoderSettings",
    "clamp_max_depth",
    "load_decoder_settings",
]
