# topmark:header:start
#
#   project      : Bark
#   file         : test_parsing_properties.py
#   file_relpath : tests/parsing/test_parsing_properties.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests for parsing, serializing and rendering documents."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from bark.core.model import Document
from bark.parsing.classifier import iter_physical_lines
from bark.parsing.machine import parse_document
from bark.parsing.writer import format_document
from bark.router.render import render_text
from tests.strategies_bark import data_lines, documents


@settings(max_examples=80, deadline=None)
@given(doc=documents, newline=st.sampled_from(["\n", "\r\n"]))
def test_format_then_parse_roundtrip(doc: Document, newline: str) -> None:
    assert parse_document(format_document(doc, newline=newline)) == doc


@settings(max_examples=80, deadline=None)
@given(body=st.lists(data_lines, max_size=8), newline=st.sampled_from(["\n", "\r\n"]))
def test_command_free_document_renders_to_itself(body: list[str], newline: str) -> None:
    text = "`%bark" + newline + "".join(line + newline for line in body)
    assert render_text(parse_document(text)) == "".join(line + "\n" for line in body)


@settings(max_examples=60, deadline=None)
@given(doc=documents, data=st.data())
def test_comment_lines_never_change_blocks(doc: Document, data: st.DataObject) -> None:
    lines = list(iter_physical_lines(format_document(doc)))
    comment = data.draw(st.sampled_from(["`\n", "` note\n", "`\ttab\n"]))
    position = data.draw(st.integers(min_value=1, max_value=len(lines)))
    lines.insert(position, comment)
    assert parse_document("".join(lines)) == doc


@settings(max_examples=60, deadline=None)
@given(doc=documents)
def test_rendered_output_ends_with_single_break(doc: Document) -> None:
    rendered = render_text(doc)
    assert rendered == "" or rendered.endswith("\n")
    assert not rendered.endswith("\n\n") or any(
        line == "" for block in doc for line in block.lines
    )
