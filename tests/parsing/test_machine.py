# topmark:header:start
#
#   project      : Bark
#   file         : test_machine.py
#   file_relpath : tests/parsing/test_machine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the section state machine and `parse_document`."""

from __future__ import annotations

import pytest

from bark.core.errors import FooterCollisionError, InvalidLineError
from bark.core.model import Block, Connector
from bark.parsing.classifier import CommentLine, DataLine, SectionLine
from bark.parsing.machine import SectionStateMachine, iter_blocks, parse_document
from tests.conftest import bark, parametrize

S = Connector.SECTION
J = Connector.JOIN


def blocks_of(text: str) -> list[Block]:
    return list(parse_document(text))


def test_default_block_then_styled_section() -> None:
    assert blocks_of(bark("hello", "`:styleA", "world")) == [
        Block(None, S, ("hello",)),
        Block("styleA", S, ("world",)),
    ]


def test_section_then_join() -> None:
    assert blocks_of(bark("`:a", "foo", "`+b", "bar")) == [
        Block("a", S, ("foo",)),
        Block("b", J, ("bar",)),
    ]


def test_signature_only_is_empty_document() -> None:
    assert blocks_of("`%bark\n") == []
    assert blocks_of("`%bark") == []


def test_commands_always_yield_blocks() -> None:
    assert blocks_of(bark("`:a", "`+", "`:b")) == [
        Block("a", S),
        Block(None, J),
        Block("b", S),
    ]


def test_bare_command_selects_default_style() -> None:
    assert blocks_of(bark("`:a", "x", "`:", "y")) == [
        Block("a", S, ("x",)),
        Block(None, S, ("y",)),
    ]


@parametrize("graves", [2, 3, 5])
def test_escape_drops_one_grave(graves: int) -> None:
    (block,) = blocks_of(bark("`" * graves + "x"))
    assert block.lines == ("`" * (graves - 1) + "x",)


def test_comments_are_transparent() -> None:
    plain = bark("a", "`:s", "b", "`+", "c")
    commented = bark("` head", "a", "`", "`:s", "`\tnote", "b", "`+", "c", "` tail")
    assert blocks_of(commented) == blocks_of(plain)


def test_blank_lines_are_content() -> None:
    assert blocks_of(bark("", "x", "")) == [Block(None, S, ("", "x", ""))]


def test_crlf_input() -> None:
    assert blocks_of("`%bark\r\nx\r\n`+s\r\ny\r\n") == [
        Block(None, S, ("x",)),
        Block("s", J, ("y",)),
    ]


def test_missing_final_newline() -> None:
    assert blocks_of("`%bark\nx\n`:a\ny") == [Block(None, S, ("x",)), Block("a", S, ("y",))]


def test_invalid_line_aborts() -> None:
    with pytest.raises(InvalidLineError):
        blocks_of(bark("ok", "`!"))


def test_footer_collision_is_reported_with_line() -> None:
    footer = "<?bark_AAAAAAAAAAA?>"
    with pytest.raises(FooterCollisionError, match="line 3: Footer collision"):
        parse_document(bark("fine", footer), footer=footer)


def test_footer_lookalike_without_footer_is_content() -> None:
    footer = "<?bark_AAAAAAAAAAA?>"
    assert blocks_of(bark(footer)) == [Block(None, S, (footer,))]


def test_escaped_footer_payload_collides() -> None:
    footer = "`<?bark_AAAAAAAAAAA?>"
    with pytest.raises(FooterCollisionError):
        parse_document(bark("`" + footer), footer=footer)


def test_state_machine_tracks_active_style() -> None:
    machine = SectionStateMachine()
    assert machine.active_style is None
    assert machine.feed(DataLine("x")) is None
    closed = machine.feed(SectionLine("s"))
    assert closed == Block(None, S, ("x",))
    assert machine.active_style == "s"
    assert machine.feed(CommentLine()) is None
    assert machine.finish() == Block("s", S)


def test_feed_after_finish_is_an_error() -> None:
    machine = SectionStateMachine()
    machine.finish()
    with pytest.raises(RuntimeError):
        machine.feed(DataLine("x"))


def test_iter_blocks_is_lazy() -> None:
    lines = iter([SectionLine("a"), DataLine("1"), SectionLine("b")])
    blocks = iter_blocks(lines)
    assert next(blocks) == Block("a", S, ("1",))
    assert next(blocks) == Block("b", S)
    assert next(blocks, None) is None
