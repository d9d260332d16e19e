# topmark:header:start
#
#   project      : Bark
#   file         : test_cli_blocks.py
#   file_relpath : tests/cli/test_cli_blocks.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: `blocks` lists the parsed structure of a document."""

from __future__ import annotations

from tests.cli.conftest import assert_DATA_ERROR, assert_SUCCESS, run_cli
from tests.conftest import bark, mark_cli

DOC: str = bark("hello", "`:styleA", "world", "again", "`+", "`:")


@mark_cli
def test_blocks_listing() -> None:
    result = run_cli(["--no-color", "blocks"], input_text=DOC)

    assert_SUCCESS(result)
    assert result.output.splitlines() == [
        f"   0  {':-':<20}  1 line(s)",
        f"   1  {':styleA':<20}  2 line(s)",
        f"   2  {'+-':<20}  0 line(s)",
        f"   3  {':-':<20}  0 line(s)",
        "4 block(s)",
    ]


@mark_cli
def test_blocks_verbose_shows_lines() -> None:
    result = run_cli(["--no-color", "-v", "blocks"], input_text=DOC)

    assert_SUCCESS(result)
    lines = result.output.splitlines()
    assert lines[1] == "      | hello"
    assert lines[3:5] == ["      | world", "      | again"]


@mark_cli
def test_blocks_quiet_omits_summary() -> None:
    result = run_cli(["-q", "blocks"], input_text=DOC)

    assert_SUCCESS(result)
    assert "block(s)" not in result.output
    assert len(result.output.splitlines()) == 4


@mark_cli
def test_blocks_empty_document() -> None:
    result = run_cli(["blocks"], input_text=bark())

    assert_SUCCESS(result)
    assert result.output == "0 block(s)\n"


@mark_cli
def test_blocks_reports_line_number() -> None:
    result = run_cli(["blocks"], input_text=bark("ok", "`:bad name"))

    assert_DATA_ERROR(result)
    assert "line 3" in result.output
