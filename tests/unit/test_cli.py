# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io
import json
import logging

import pytest

from rscflight.cli import main as cli_main
from rscflight.flight.resolver import MAX_DEPTH_SENTINEL

STREAM = '0:"$L1"\n1:["$","p",null,{"children":"Hello"}]\n'


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("RSCFLIGHT_MAX_DEPTH", "RSCFLIGHT_CLI_TRUNCATION_BYTES", "RSCFLIGHT_JSON_INDENT"):
        monkeypatch.delenv(name, raising=False)


def _write(tmp_path, text, name="flight.txt"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_build_parser_defaults():
    args = cli_main.build_parser().parse_args([])
    assert args.input == "-"
    assert args.format == "auto"
    assert args.rows is False
    assert args.max_depth is None


def test_cli_resolves_stream_file(tmp_path, capsys):
    exit_code = cli_main.main([_write(tmp_path, STREAM), "--compact"])
    out = capsys.readouterr().out
    assert exit_code == 0
    assert json.loads(out) == ["$", "p", None, {"children": "Hello"}]
    assert out.count("\n") == 1


def test_cli_reads_push_list_from_stdin(monkeypatch, capsys):
    pushes = [[0], [1, '0:{"title":"$1"}\n1:T5,\n'], [1, "Héllo"]]
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(pushes)))

    exit_code = cli_main.main([])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert json.loads(out) == {"title": "Héllo"}
    assert "Héllo" in out


def test_cli_lists_rows(tmp_path, capsys):
    payload = '0:"$L1"\n1:I["app/page",["default"],"Page"]\nd2:T3,\n'
    exit_code = cli_main.main([_write(tmp_path, payload), "--rows"])
    lines = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert lines == [
        "0\tModel '$L1'",
        "1\tModule app/page [default] as Page",
        "d2\tText (0 chars)",
        "# row d2 is waiting for its text chunk",
    ]


def test_cli_reports_issues(tmp_path, capsys):
    payload = '0:oops\n1:E{"message":"boom"}\n'
    exit_code = cli_main.main([_write(tmp_path, payload), "--issues"])
    issues = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert [(item["row_id"], item["issue"]) for item in issues] == [
        ("0", "MALFORMED_MODEL"),
        ("1", "SERVER_ERROR"),
    ]
    assert issues[1]["detail"] == "boom"


def test_cli_resolves_single_row(tmp_path, capsys):
    payload = '0:"$L1"\n1:{"a":"$L2"}\n2:"leaf"\n3:I["m",[]]\n'
    path = _write(tmp_path, payload)

    assert cli_main.main([path, "--row", "1", "--compact"]) == 0
    assert json.loads(capsys.readouterr().out) == {"a": "leaf"}

    assert cli_main.main([path, "--row", "3"]) == 1
    assert "not a model or text row" in capsys.readouterr().err

    assert cli_main.main([path, "--row", "ff"]) == 1
    assert "not found" in capsys.readouterr().err


def test_cli_without_root_row(tmp_path, capsys):
    assert cli_main.main([_write(tmp_path, '1:"orphan"\n')]) == 1
    assert "no root row" in capsys.readouterr().err


def test_cli_null_root_is_printed(tmp_path, capsys):
    assert cli_main.main([_write(tmp_path, '0:"$undefined"\n')]) == 0
    assert capsys.readouterr().out.strip() == "null"


def test_cli_bad_inputs(tmp_path, capsys):
    assert cli_main.main([str(tmp_path / "missing.txt")]) == 2
    assert "cannot read" in capsys.readouterr().err

    assert cli_main.main([_write(tmp_path, "not json"), "--format", "chunks"]) == 2
    assert "not valid JSON" in capsys.readouterr().err


def test_cli_max_depth_flag(tmp_path, capsys):
    payload = '0:{"a":"$L1"}\n1:"x"\n'
    assert cli_main.main([_write(tmp_path, payload), "--max-depth", "0", "--compact"]) == 0
    assert json.loads(capsys.readouterr().out) == {"a": MAX_DEPTH_SENTINEL}


def test_cli_truncates_long_strings(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("RSCFLIGHT_CLI_TRUNCATION_BYTES", "32")
    payload = "0:T" + "A" * 200 + "\n"
    assert cli_main.main([_write(tmp_path, payload), "--compact"]) == 0
    value = json.loads(capsys.readouterr().out)
    assert value.endswith("...[truncated]")
    assert len(value.encode("utf-8")) <= 32


def test_truncate_text_bytes_respects_utf8_boundaries():
    text = "é" * 40
    truncated = cli_main._truncate_text_bytes(text, 21)
    assert truncated.endswith("...[truncated]")
    assert len(truncated.encode("utf-8")) <= 21
    assert cli_main._truncate_text_bytes("short", 21) == "short"
    assert cli_main._truncate_text_bytes("x" * 50, 4) == "...["


def test_truncate_for_cli_walks_containers():
    value = {"a": ["x" * 100, 1, None], "b": "ok"}
    truncated = cli_main._truncate_for_cli(value, max_bytes=20)
    assert truncated["a"][0].endswith("...[truncated]")
    assert truncated["a"][1:] == [1, None]
    assert truncated["b"] == "ok"


def test_load_chunks_detects_format():
    assert cli_main.load_chunks('[[1,"0:1\\n"]]') == [(1, "0:1\n")]
    assert cli_main.load_chunks(STREAM) == [(1, STREAM)]
    assert cli_main.load_chunks("[1]", "stream") == [(1, "[1]")]


def test_row_sort_key_orders_hex_ids_numerically():
    ids = ["a", "10", "2", "zz", "0"]
    assert sorted(ids, key=cli_main._row_sort_key) == ["0", "2", "a", "10", "zz"]


def test_cli_escapes_lone_surrogates(tmp_path, capsys):
    path = _write(tmp_path, '0:{"a":"\\ud800","b":"ok"}\n')
    assert cli_main.main([path, "--compact"]) == 0
    out = capsys.readouterr().out
    assert "\\ud800" in out
    assert json.loads(out) == {"a": "\ud800", "b": "ok"}


def test_truncate_text_bytes_measures_lone_surrogates():
    assert cli_main._truncate_text_bytes("\ud800", 21) == "\ud800"
    truncated = cli_main._truncate_text_bytes("\ud800" * 20, 21)
    assert truncated.endswith("...[truncated]")


def test_load_chunks_logs_only_when_input_is_not_flight(caplog):
    caplog.set_level(logging.INFO, logger="rscflight")
    assert cli_main.load_chunks(STREAM) == [(1, STREAM)]
    assert [record.getMessage() for record in caplog.records if record.levelno >= logging.INFO] == []

    cli_main.load_chunks("plain words\n")
    assert [record.getMessage() for record in caplog.records if record.levelno >= logging.INFO] == [
        "Input does not look like a Flight payload; decoding anyway"
    ]
