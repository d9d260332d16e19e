# topmark:header:start
#
#   project      : Bark
#   file         : __init__.py
#   file_relpath : src/bark/parsing/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark text format: line classification, block building and serialization."""

from __future__ import annotations

from bark.parsing.classifier import (
    ClassifiedLine,
    CommentLine,
    DataLine,
    EscapeLine,
    JoinLine,
    SectionLine,
    check_payload,
    check_signature,
    classify_line,
    classify_lines,
    classify_text,
    iter_physical_lines,
    strip_terminator,
)
from bark.parsing.machine import SectionStateMachine, iter_blocks, parse_document
from bark.parsing.writer import format_document

__all__ = [
    "ClassifiedLine",
    "CommentLine",
    "DataLine",
    "EscapeLine",
    "JoinLine",
    "SectionLine",
    "SectionStateMachine",
    "check_payload",
    "check_signature",
    "classify_line",
    "classify_lines",
    "classify_text",
    "format_document",
    "iter_blocks",
    "iter_physical_lines",
    "parse_document",
    "strip_terminator",
]
