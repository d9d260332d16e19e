# topmark:header:start
#
#   project      : Bark
#   file         : test_classifier.py
#   file_relpath : tests/parsing/test_classifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the Bark line classifier."""

from __future__ import annotations

import pytest

from bark.core.errors import (
    CommandSyntaxError,
    InvalidLineError,
    SignatureError,
    StrayLineBreakError,
)
from bark.core.model import Connector
from bark.parsing.classifier import (
    CommentLine,
    DataLine,
    EscapeLine,
    JoinLine,
    SectionLine,
    check_payload,
    check_signature,
    classify_line,
    classify_text,
    iter_physical_lines,
    strip_terminator,
)
from tests.conftest import parametrize


@parametrize(
    "line",
    ["`%bark\n", "`%bark", "`%bark  \t\r\n", "\ufeff`%bark\n"],
)
def test_signature_accepted(line: str) -> None:
    check_signature(line)


@parametrize(
    "line",
    ["%bark\n", "`%barks\n", " `%bark\n", "`%bark x\n", "\ufeff\ufeff`%bark\n", ""],
)
def test_signature_rejected(line: str) -> None:
    with pytest.raises(SignatureError):
        check_signature(line)


def test_empty_input_has_no_signature() -> None:
    with pytest.raises(SignatureError, match="Failed to read signature"):
        list(classify_text(""))


@parametrize(
    "line, expected",
    [
        ("hello\n", DataLine("hello")),
        ("\n", DataLine("")),
        ("", DataLine("")),
        ("  `indented\n", DataLine("  `indented")),
        ("crlf\r\n", DataLine("crlf")),
        ("``x\n", EscapeLine("`x")),
        ("```x\n", EscapeLine("``x")),
        ("``\n", EscapeLine("`")),
        ("`\n", CommentLine()),
        ("`", CommentLine()),
        ("` a comment\n", CommentLine()),
        ("`\ttab comment\n", CommentLine()),
        ("`\r\n", CommentLine()),
        ("`:\n", SectionLine(None)),
        ("`:styleA\n", SectionLine("styleA")),
        ("`: \tstyle_1 \n", SectionLine("style_1")),
        ("`+\n", JoinLine(None)),
        ("`+b\r\n", JoinLine("b")),
    ],
)
def test_classify_line(line: str, expected: object) -> None:
    assert classify_line(line) == expected


def test_commands_carry_connectors() -> None:
    assert SectionLine(None).connector is Connector.SECTION
    assert JoinLine(None).connector is Connector.JOIN


@parametrize("line", ["`:bad-name\n", "`:a b\n", "`+a!\n", "`:-\n"])
def test_malformed_commands(line: str) -> None:
    with pytest.raises(CommandSyntaxError, match="line 7"):
        classify_line(line, 7)


@parametrize("line", ["`x\n", "`%bark\n", "`-\n"])
def test_invalid_grave_lines(line: str) -> None:
    with pytest.raises(InvalidLineError, match="Invalid text line"):
        classify_line(line, 3)


def test_classify_text_numbers_lines_after_signature() -> None:
    lines = list(classify_text("`%bark\nhello\n`:a\n` c\n"))
    assert lines == [DataLine("hello", 2), SectionLine("a", 3), CommentLine(4)]


def test_error_reports_physical_line_number() -> None:
    with pytest.raises(InvalidLineError) as excinfo:
        list(classify_text("`%bark\nok\n`?\n"))
    assert excinfo.value.line_no == 3
    assert str(excinfo.value).startswith("line 3: ")


def test_physical_lines_keep_terminators() -> None:
    assert list(iter_physical_lines("a\r\nb\n\nc")) == ["a\r\n", "b\n", "\n", "c"]
    assert list(iter_physical_lines("")) == []


def test_unicode_separators_are_content() -> None:
    assert list(iter_physical_lines("a\u2028b\n")) == ["a\u2028b\n"]


@parametrize(
    "raw, expected",
    [("a\n", "a"), ("a\r\n", "a"), ("a\r", "a\r"), ("a", "a"), ("\n", "")],
)
def test_strip_terminator(raw: str, expected: str) -> None:
    assert strip_terminator(raw) == expected


@parametrize("line", ["foo\r", "foo\r\r\n", "a\rb\n", "``x\r", "``x\ry\n", "\r"])
def test_stray_carriage_return_is_fatal(line: str) -> None:
    with pytest.raises(StrayLineBreakError, match="line 2: Stray line break"):
        classify_line(line, 2)


def test_stray_carriage_return_in_text() -> None:
    with pytest.raises(StrayLineBreakError) as excinfo:
        list(classify_text("`%bark\r\nok\r\nbad\r\r\n"))
    assert excinfo.value.line_no == 3


def test_comment_may_hold_carriage_return() -> None:
    assert classify_line("` note\rmore\n") == CommentLine()


def test_check_payload() -> None:
    assert check_payload("plain \u2028 text") == "plain \u2028 text"
    with pytest.raises(StrayLineBreakError):
        check_payload("a\nb")
