# topmark:header:start
#
#   project      : Bark
#   file         : classifier.py
#   file_relpath : src/bark/parsing/classifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Line classifier for Bark text files.

Each physical line of a Bark text file (after the signature line) is classified
into exactly one tagged variant:

- `DataLine`: an empty line, or a line not starting with a grave accent.
- `EscapeLine`: two or more leading grave accents; the payload drops one.
- `CommentLine`: one grave accent followed by end-of-line, space or tab.
- `SectionLine`: `` `: `` with an optional style name.
- `JoinLine`: `` `+ `` with an optional style name.

Any other grave-accent-led line is an error. The classifier is stateless; the
block structure is built by `bark.parsing.machine`.

Line terminators:
    Lines are split on ``\n`` only; ``\r\n`` and ``\n`` are both accepted and
    never part of a payload. Other Unicode line separators are ordinary
    characters. A last line without a terminator is treated as if it had one.
    A carriage return left in a content payload once the terminator is removed
    is a `StrayLineBreakError`: it could not survive a line-oriented envelope.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from bark.constants import GRAVE, STYLE_NAME_PATTERN, UTF8_BOM
from bark.core.errors import (
    CommandSyntaxError,
    InvalidLineError,
    SignatureError,
    StrayLineBreakError,
)
from bark.core.model import Connector

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from bark.core.model import StyleId

_SIGNATURE_RE: Final[re.Pattern[str]] = re.compile(r"`%bark[ \t\r\n]*")

_COMMAND_RE: Final[re.Pattern[str]] = re.compile(
    rf"`(?P<kind>[:+])[ \t]*(?P<name>{STYLE_NAME_PATTERN})?[ \t\r\n]*"
)

# Characters that turn a single grave accent into a comment line.
_COMMENT_FOLLOWERS: Final[str] = " \t\r\n"


@dataclass(frozen=True)
class DataLine:
    """Plain content line (terminator removed)."""

    text: str
    line_no: int = 0


@dataclass(frozen=True)
class EscapeLine:
    """Escaped content line; ``text`` already has one leading grave accent removed."""

    text: str
    line_no: int = 0


@dataclass(frozen=True)
class CommentLine:
    """Comment line; contributes nothing to the document."""

    line_no: int = 0


@dataclass(frozen=True)
class SectionLine:
    """Section command: start a new block on a new output line."""

    style: StyleId
    line_no: int = 0

    connector = Connector.SECTION


@dataclass(frozen=True)
class JoinLine:
    """Join command: start a new block on the same output line."""

    style: StyleId
    line_no: int = 0

    connector = Connector.JOIN


ClassifiedLine = DataLine | EscapeLine | CommentLine | SectionLine | JoinLine
CommandLine = SectionLine | JoinLine


def iter_physical_lines(text: str) -> Iterator[str]:
    r"""Yield the physical lines of ``text``, each with its terminator (if any).

    Only ``\n`` ends a line; a ``\r`` before it stays part of the yielded line.
    """
    start = 0
    size = len(text)
    while start < size:
        end = text.find("\n", start)
        if end < 0:
            yield text[start:]
            return
        yield text[start : end + 1]
        start = end + 1


def strip_terminator(line: str) -> str:
    r"""Remove one trailing ``\r\n`` or ``\n`` from ``line``."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def check_payload(text: str, line_no: int | None = None) -> str:
    r"""Return ``text`` unchanged if it holds no ``\r`` or ``\n`` character.

    Raises:
        StrayLineBreakError: If ``text`` contains a line break character.
    """
    if "\r" in text or "\n" in text:
        raise StrayLineBreakError("Stray line break characters", line_no=line_no)
    return text


def check_signature(line: str | None) -> None:
    """Validate the first line of a Bark text file.

    A single leading UTF-8 BOM is accepted on this line only.

    Args:
        line (str | None): The first physical line, or None if the input is empty.

    Raises:
        SignatureError: If the line is missing or is not a Bark signature line.
    """
    if line is None:
        raise SignatureError("Failed to read signature")
    if line.startswith(UTF8_BOM):
        line = line[len(UTF8_BOM) :]
    if _SIGNATURE_RE.fullmatch(line) is None:
        raise SignatureError("Bark signature line missing", line_no=1)


def _classify_command(line: str, line_no: int) -> CommandLine:
    match = _COMMAND_RE.fullmatch(line)
    kind: str = line[1]
    if match is None:
        what = "section" if kind == Connector.SECTION.value else "join"
        raise CommandSyntaxError(
            f"Invalid {what} command '{strip_terminator(line)}'", line_no=line_no
        )
    style: StyleId = match.group("name")
    if kind == Connector.SECTION.value:
        return SectionLine(style=style, line_no=line_no)
    return JoinLine(style=style, line_no=line_no)


def classify_line(line: str, line_no: int = 0) -> ClassifiedLine:
    """Classify one physical line (with its terminator, if any).

    Args:
        line (str): The raw line.
        line_no (int): 1-based line number, used in error messages.

    Returns:
        ClassifiedLine: The tagged line.

    Raises:
        CommandSyntaxError: If a section/join command has malformed trailing content.
        InvalidLineError: If a grave-accent-led line is not a known Bark line.
        StrayLineBreakError: If a content payload keeps a carriage return.
    """
    if not line.startswith(GRAVE):
        return DataLine(text=check_payload(strip_terminator(line), line_no), line_no=line_no)

    if line.startswith(GRAVE * 2):
        payload = check_payload(strip_terminator(line)[1:], line_no)
        return EscapeLine(text=payload, line_no=line_no)

    if len(line) == 1 or line[1] in _COMMENT_FOLLOWERS:
        return CommentLine(line_no=line_no)

    if line[1] in (Connector.SECTION.value, Connector.JOIN.value):
        return _classify_command(line, line_no)

    raise InvalidLineError(f"Invalid text line '{strip_terminator(line)}'", line_no=line_no)


def classify_lines(lines: Iterable[str]) -> Iterator[ClassifiedLine]:
    """Validate the signature and classify every following line.

    Args:
        lines (Iterable[str]): Physical lines, each with its terminator (if any).

    Yields:
        ClassifiedLine: One tagged line per physical line after the signature.

    Raises:
        SignatureError: If the first line is missing or invalid.
    """
    it = iter(lines)
    check_signature(next(it, None))
    for line_no, line in enumerate(it, start=2):
        yield classify_line(line, line_no)


def classify_text(text: str) -> Iterator[ClassifiedLine]:
    """Classify a whole Bark text file held in memory."""
    return classify_lines(iter_physical_lines(text))
