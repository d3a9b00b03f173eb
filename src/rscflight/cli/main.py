# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""rscflight CLI."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from ..config import DecoderSettings, clamp_max_depth, load_decoder_settings
from ..errors import ChunkFormatError
from ..flight import (
    Chunk,
    ROOT_ROW_ID,
    FlightPayloadResolver,
    Model,
    Text,
    chunks_from_json,
    chunks_from_stream,
    detect_input_format,
    looks_like_flight_payload,
    summarize_row_value,
)
from ..flight.handlers import is_hex
from ..flight.heuristics import INPUT_FORMAT_CHUNKS, INPUT_FORMAT_STREAM
from ..log import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rscflight",
        description="Decode a React Server Components Flight payload into resolved JSON",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Captured __next_f push list (JSON) or raw Flight stream; '-' reads stdin",
    )
    parser.add_argument(
        "--format",
        choices=("auto", INPUT_FORMAT_CHUNKS, INPUT_FORMAT_STREAM),
        default="auto",
        help="Input format (default: sniff the input)",
    )
    parser.add_argument("--row", help="Resolve this row id instead of the root row")
    parser.add_argument("--rows", action="store_true", help="List raw decoded rows instead of resolving")
    parser.add_argument("--issues", action="store_true", help="Report rows that decoded in degraded form")
    parser.add_argument("--max-depth", type=int, default=None, help="Reference resolution depth budget")
    parser.add_argument("--compact", action="store_true", help="Emit single-line JSON")
    parser.add_argument("--log-level", default=None, help="Logging level (default: RSCFLIGHT_LOG_LEVEL or WARNING)")
    return parser


def _utf8(text: str) -> bytes:
    # Flight JSON may carry lone surrogates (`"\ud800"`); measure them instead of failing.
    return text.encode("utf-8", errors="surrogatepass")


def _truncate_text_bytes(text: str, max_bytes: int) -> str:
    raw = _utf8(text)
    if len(raw) <= max_bytes:
        return text
    suffix = "...[truncated]"
    suffix_bytes = suffix.encode("utf-8")
    keep = max_bytes - len(suffix_bytes)
    if keep <= 0:
        return suffix_bytes[:max_bytes].decode("utf-8", errors="ignore")
    prefix = raw[:keep].decode("utf-8", errors="ignore")
    return prefix + suffix


def _truncate_for_cli(value: Any, *, max_bytes: int) -> Any:
    """Truncate long strings in a resolved tree (resolved trees are acyclic)."""
    if isinstance(value, str):
        return _truncate_text_bytes(value, max_bytes)
    if isinstance(value, dict):
        return {k: _truncate_for_cli(v, max_bytes=max_bytes) for k, v in value.items()}
    if isinstance(value, list):
        return [_truncate_for_cli(v, max_bytes=max_bytes) for v in value]
    return value


def _print_json(data: Any, settings: DecoderSettings, *, compact: bool = False) -> None:
    payload = _truncate_for_cli(data, max_bytes=settings.cli_text_truncation_bytes)
    indent = None if compact else settings.indent
    text = json.dumps(payload, indent=indent, ensure_ascii=False)
    # Lone surrogates cannot be written as UTF-8; emit them as JSON escapes.
    sys.stdout.write(text.encode("utf-8", errors="backslashreplace").decode("utf-8") + "\n")


def _row_sort_key(row_id: str) -> tuple[int, int, str]:
    if is_hex(row_id):
        return (0, int(row_id, 16), row_id)
    return (1, 0, row_id)


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as handle:
        return handle.read()


def load_chunks(text: str, input_format: str = "auto") -> list[Chunk]:
    """Turn CLI input text into chunks according to `input_format`."""
    if input_format == "auto":
        input_format = detect_input_format(text)
        logger.debug("Detected input format: %s", input_format)
    if input_format == INPUT_FORMAT_CHUNKS:
        return chunks_from_json(text)
    if not looks_like_flight_payload(text):
        logger.info("Input does not look like a Flight payload; decoding anyway")
    return chunks_from_stream(text)


def _print_rows(resolver: FlightPayloadResolver) -> None:
    rows = resolver.get_all_rows()
    for row_id in sorted(rows, key=_row_sort_key):
        print(f"{row_id}\t{summarize_row_value(rows[row_id])}")
    if resolver.pending_text_row_id is not None:
        print(f"# row {resolver.pending_text_row_id} is waiting for its text chunk")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings = load_decoder_settings()
    if args.max_depth is not None:
        settings.max_depth = clamp_max_depth(args.max_depth)

    try:
        text = _read_input(args.input)
        chunks = load_chunks(text, args.format)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"rscflight: cannot read {args.input}: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except ChunkFormatError as exc:
        print(f"rscflight: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    resolver = FlightPayloadResolver(max_depth=settings.max_depth)
    resolver.ingest(chunks)

    if args.rows:
        _print_rows(resolver)
        return EXIT_OK

    if args.issues:
        _print_json([issue.to_dict() for issue in resolver.issues()], settings, compact=args.compact)
        return EXIT_OK

    if args.row is not None:
        row = resolver.get_all_rows().get(args.row)
        if row is None:
            print(f"rscflight: row {args.row!r} not found", file=sys.stderr)
            return EXIT_NOT_FOUND
        if not isinstance(row, (Model, Text)):
            print(f"rscflight: row {args.row!r} is not a model or text row", file=sys.stderr)
            return EXIT_NOT_FOUND
        value = resolver.get_resolved_row(args.row)
    else:
        if not resolver.has_row(ROOT_ROW_ID):
            print("rscflight: payload has no root row", file=sys.stderr)
            return EXIT_NOT_FOUND
        value = resolver.get_resolved_root()

    _print_json(value, settings, compact=args.compact)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
