# topmark:header:start
#
#   project      : Bark
#   file         : codec.py
#   file_relpath : src/bark/envelope/codec.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Partitioned envelope codec.

Every block of a document becomes one *part*::

    <footer>\n
    <connector><style-or-"-">\n
    <content line>\n        (zero or more)
    <footer>\n
    <blank padding>         (zero or more whitespace-only lines, decode only)

All parts of one envelope share the same footer. The trailing padding region
tolerates whatever a transport container (e.g. quoted-printable MIME) appends
after the closing footer; it is ignored, never treated as content.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from bark.core.errors import (
    FooterCollisionError,
    FooterMismatchError,
    InvalidFooterError,
    MissingFooterError,
    PartHeaderError,
    TrailingDataError,
)
from bark.core.model import Block, Connector, parse_style_token
from bark.envelope.footer import is_footer
from bark.parsing.classifier import check_payload, iter_physical_lines, strip_terminator

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from bark.core.model import Document

_HEADER_RE: Final[re.Pattern[str]] = re.compile(r"(?P<connector>[+:])(?P<style>[A-Za-z0-9_]+|-)\s*")


@dataclass(frozen=True)
class Part:
    """A decoded envelope part.

    Attributes:
        footer (str): The footer that delimits this part.
        block (Block): The block carried by this part.
    """

    footer: str
    block: Block


def is_blank(line: str) -> bool:
    """Return True if ``line`` is empty or whitespace-only padding."""
    return line.strip(" \t\r\n") == ""


def check_collisions(lines: Iterable[str], footer: str) -> None:
    """Raise `FooterCollisionError` if any of ``lines`` equals ``footer``."""
    for line in lines:
        if line == footer:
            raise FooterCollisionError("Footer collision")


def encode_part(block: Block, footer: str) -> str:
    """Serialize one block as an envelope part.

    Args:
        block (Block): The block to encode.
        footer (str): The footer of the envelope.

    Returns:
        str: The part text, ending with the closing footer line.

    Raises:
        FooterCollisionError: If a content line equals ``footer``.
        StrayLineBreakError: If a content line contains a line break character.
    """
    for line in block.lines:
        check_payload(line)
    check_collisions(block.lines, footer)
    out: list[str] = [footer, f"{block.connector.value}{block.style_token}", *block.lines, footer]
    return "\n".join(out) + "\n"


def encode_document(document: Document, footer: str) -> list[str]:
    """Serialize every block of ``document`` into its own part."""
    return [encode_part(block, footer) for block in document]


def decode_part(
    text: str,
    *,
    expected_footer: str | None = None,
    part_index: int | None = None,
) -> Part:
    """Parse one envelope part.

    Args:
        text (str): The part text.
        expected_footer (str | None): Footer shared by the previous parts, if any.
        part_index (int | None): Index of the part, used in error messages.

    Returns:
        Part: The decoded part.

    Raises:
        InvalidFooterError: If the first line is missing or is not a footer.
        FooterMismatchError: If the footer differs from ``expected_footer``.
        PartHeaderError: If the header line is missing or malformed.
        MissingFooterError: If the closing footer is missing.
        TrailingDataError: If non-blank data follows the closing footer.
    """
    lines = iter_physical_lines(text)

    first = next(lines, None)
    if first is None:
        raise InvalidFooterError("Failed to read initial footer", part_index=part_index)
    footer = strip_terminator(first)
    if not is_footer(footer):
        raise InvalidFooterError(f"Invalid footer line '{footer}'", part_index=part_index)
    if expected_footer is not None and footer != expected_footer:
        raise FooterMismatchError("Footer changes between parts", part_index=part_index)

    header_line = next(lines, None)
    if header_line is None:
        raise PartHeaderError("Failed to read part header line", part_index=part_index)
    match = _HEADER_RE.fullmatch(strip_terminator(header_line))
    if match is None:
        raise PartHeaderError("Part header line in invalid format", part_index=part_index)

    content: list[str] = []
    for raw in lines:
        line = strip_terminator(raw)
        if line == footer:
            break
        content.append(line)
    else:
        raise MissingFooterError("Part missing footer", part_index=part_index)

    for raw in lines:
        if not is_blank(raw):
            raise TrailingDataError("Part contains data after footer", part_index=part_index)

    block = Block(
        style=parse_style_token(match.group("style")),
        connector=Connector(match.group("connector")),
        lines=tuple(content),
    )
    return Part(footer=footer, block=block)


def decode_parts(texts: Iterable[str]) -> Iterator[Part]:
    """Decode parts in order, checking that they all share one footer."""
    footer: str | None = None
    for index, text in enumerate(texts):
        part = decode_part(text, expected_footer=footer, part_index=index)
        footer = part.footer
        yield part
