# topmark:header:start
#
#   project      : Bark
#   file         : test_cli_pack_echo.py
#   file_relpath : tests/cli/test_cli_pack_echo.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: `pack` into MIME or directory envelopes, and `echo` back out."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bark.envelope.footer import is_footer
from tests.cli.conftest import (
    assert_DATA_ERROR,
    assert_FILE_NOT_FOUND,
    assert_SUCCESS,
    assert_USAGE_ERROR,
    run_cli,
    run_cli_in,
)
from tests.conftest import bark, mark_cli, parametrize

if TYPE_CHECKING:
    from pathlib import Path

DOC: str = bark("hello", "`:styleA", "world", "`+", "!")
RENDERED: str = "hello\nworld!\n"


@mark_cli
def test_pack_stdin_to_stdout_then_echo_stdin() -> None:
    packed = run_cli(["pack"], input_text=DOC)
    assert_SUCCESS(packed)
    assert b"multipart/mixed" in packed.stdout_bytes

    echoed = run_cli(["echo"], input_text=packed.stdout_bytes)
    assert_SUCCESS(echoed)
    assert echoed.stdout == RENDERED


@mark_cli
def test_pack_to_file_and_extract_style(tmp_path: Path) -> None:
    (tmp_path / "doc.bark").write_text(DOC, encoding="utf-8")

    assert_SUCCESS(run_cli_in(tmp_path, ["pack", "doc.bark", "-o", "env.mime"]))
    assert (tmp_path / "env.mime").is_file()

    rendered = run_cli_in(tmp_path, ["echo", "env.mime"])
    assert_SUCCESS(rendered)
    assert rendered.stdout == RENDERED

    stream = run_cli_in(tmp_path, ["echo", "env.mime", "--style", "styleA"])
    assert_SUCCESS(stream)
    lines = stream.stdout.splitlines()
    assert len(lines) == 3
    assert is_footer(lines[0])
    assert lines == [lines[0], "world", lines[0]]

    default = run_cli_in(tmp_path, ["echo", "env.mime", "--style", "-"])
    assert_SUCCESS(default)
    assert default.stdout.splitlines() == [lines[0], "hello", lines[0], "!", lines[0]]


@mark_cli
def test_echo_style_to_output_file(tmp_path: Path) -> None:
    (tmp_path / "doc.bark").write_text(DOC, encoding="utf-8")
    assert_SUCCESS(run_cli_in(tmp_path, ["pack", "doc.bark", "-o", "env.mime"]))

    result = run_cli_in(tmp_path, ["echo", "env.mime", "--style", "absent", "-o", "s.txt"])
    assert_SUCCESS(result)
    assert result.stdout == ""
    # A style without blocks yields a single footer line.
    text = (tmp_path / "s.txt").read_text(encoding="utf-8")
    assert text.count("\n") == 1
    assert is_footer(text.rstrip("\n"))


@mark_cli
def test_pack_dir(tmp_path: Path) -> None:
    (tmp_path / "doc.bark").write_text(DOC, encoding="utf-8")

    result = run_cli_in(tmp_path, ["-v", "pack", "doc.bark", "--dir", "-o", "parts"])
    assert_SUCCESS(result)
    assert "Packed 3 block(s) into parts" in result.output

    names = sorted(p.name for p in (tmp_path / "parts").iterdir())
    assert names == ["part-00000.txt", "part-00001.txt", "part-00002.txt"]
    header = (tmp_path / "parts" / "part-00001.txt").read_text(encoding="utf-8")
    assert header.splitlines()[1] == ":styleA"

    echoed = run_cli_in(tmp_path, ["echo", "parts"])
    assert_SUCCESS(echoed)
    assert echoed.stdout == RENDERED


@mark_cli
def test_pack_dir_replaces_previous_parts(tmp_path: Path) -> None:
    (tmp_path / "long.bark").write_text(DOC, encoding="utf-8")
    (tmp_path / "short.bark").write_text(bark("only"), encoding="utf-8")

    assert_SUCCESS(run_cli_in(tmp_path, ["pack", "long.bark", "--dir", "-o", "parts"]))
    assert_SUCCESS(run_cli_in(tmp_path, ["pack", "short.bark", "--dir", "-o", "parts"]))

    assert [p.name for p in (tmp_path / "parts").iterdir()] == ["part-00000.txt"]
    echoed = run_cli_in(tmp_path, ["echo", "parts"])
    assert echoed.stdout == "only\n"


@mark_cli
def test_pack_base64(tmp_path: Path) -> None:
    doc = bark("caf\u00e9 \u2603")
    (tmp_path / "doc.bark").write_bytes(doc.encode("utf-8"))

    assert_SUCCESS(run_cli_in(tmp_path, ["pack", "doc.bark", "--base64", "-o", "env.mime"]))
    assert b"Content-Transfer-Encoding: base64" in (tmp_path / "env.mime").read_bytes()

    echoed = run_cli_in(tmp_path, ["echo", "env.mime"])
    assert_SUCCESS(echoed)
    assert echoed.stdout_bytes == "caf\u00e9 \u2603\n".encode()


@mark_cli
def test_pack_option_conflicts(tmp_path: Path) -> None:
    (tmp_path / "doc.bark").write_text(DOC, encoding="utf-8")

    assert_USAGE_ERROR(run_cli_in(tmp_path, ["pack", "doc.bark", "--dir"]))
    assert_USAGE_ERROR(run_cli_in(tmp_path, ["pack", "doc.bark", "--dir", "--base64", "-o", "d"]))
    assert not (tmp_path / "d").exists()


@mark_cli
def test_pack_malformed_document_leaves_output_alone(tmp_path: Path) -> None:
    (tmp_path / "bad.bark").write_text("not a bark file\n", encoding="utf-8")

    result = run_cli_in(tmp_path, ["pack", "bad.bark", "-o", "env.mime"])
    assert_DATA_ERROR(result)
    assert "Error:" in result.output
    assert not (tmp_path / "env.mime").exists()


@mark_cli
def test_pack_missing_input(tmp_path: Path) -> None:
    assert_FILE_NOT_FOUND(run_cli_in(tmp_path, ["pack", "missing.bark"]))


@mark_cli
def test_echo_rejects_non_mime_input() -> None:
    assert_DATA_ERROR(run_cli(["echo"], input_text="plain text\n"))


@mark_cli
@parametrize("doc", [bark(), bark("` only a comment")])
def test_pack_document_without_blocks(tmp_path: Path, doc: str) -> None:
    (tmp_path / "empty.bark").write_text(doc, encoding="utf-8")
    assert_SUCCESS(run_cli_in(tmp_path, ["pack", "empty.bark", "-o", "env.mime"]))

    rendered = run_cli_in(tmp_path, ["echo", "env.mime"])
    assert_SUCCESS(rendered)
    assert rendered.stdout == ""

    stream = run_cli_in(tmp_path, ["echo", "env.mime", "--style", "a", "-o", "s.txt"])
    assert_SUCCESS(stream)
    lines = (tmp_path / "s.txt").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert is_footer(lines[0])

    applied = run_cli_in(tmp_path, ["apply", "env.mime", "s.txt", "--style", "a"])
    assert_SUCCESS(applied)
    assert_SUCCESS(run_cli_in(tmp_path, ["echo", "env.mime"]))
