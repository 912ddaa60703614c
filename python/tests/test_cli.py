"""Command-line entry point and key mapping."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

import main
from frontend.cli.input_handler import _decode, _resolve

runner = CliRunner()


def test_list_boards() -> None:
    result = runner.invoke(main.app, ["--list-boards"])
    assert result.exit_code == 0
    for slug in ("default", "horizontal", "vertical", "largegap", "twinlarge"):
        assert slug in result.output


def test_unknown_board_is_rejected() -> None:
    result = runner.invoke(main.app, ["--board", "nope"])
    assert result.exit_code == 2


def test_scores_with_no_results(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(main, "DATA_DIR", tmp_path)
    result = runner.invoke(main.app, ["--scores"])
    assert result.exit_code == 0
    assert "No results yet" in result.output


def test_key_mapping() -> None:
    assert _resolve("w") == "up"
    assert _resolve("\t") == "cycle"
    assert _resolve("u") == "undo"
    assert _resolve("x") == "shuffle"
    assert _resolve("9") == "9"


def _feed(*chars: str):
    pending = iter(chars)
    return lambda: next(pending, "")


@pytest.mark.parametrize(
    "first, rest, action",
    [
        ("\x1b", ("[", "A"), "up"),
        ("\x1b", ("[", "D"), "left"),
        ("\x1b", (), "quit"),
        ("\x1b", ("x",), "quit"),
        ("\x1b", ("[",), ""),
        ("g", (), "cycle"),
        ("\x01", (), ""),
    ],
    ids=["arrow-up", "arrow-left", "bare-escape", "alt-key", "cut-short", "plain", "control"],
)
def test_escape_sequences_decode(first: str, rest: tuple[str, ...], action: str) -> None:
    assert _decode(first, _feed(*rest)) == action
