# topmark:header:start
#
#   project      : Bark
#   file         : machine.py
#   file_relpath : src/bark/parsing/machine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Section state machine: turn classified lines into blocks.

The machine has a single piece of state, the currently open block (style,
connector and the lines collected so far):

- Data/Escape lines append their payload to the open block, opening a
  default-style `Connector.SECTION` block if none is open yet.
- Section/Join commands close the open block (even an empty one) and open a new
  block with the command's style and connector. A command therefore always
  yields a block, which lets an external pipeline inject content into an
  otherwise empty slot.
- Comment lines have no effect.
- End of input closes the open block.

When the footer of the current run is known, a content line equal to it is a
`FooterCollisionError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bark.config.logging import get_logger
from bark.core.errors import FooterCollisionError
from bark.core.model import DEFAULT_STYLE, Block, Connector, Document
from bark.parsing.classifier import (
    CommentLine,
    DataLine,
    EscapeLine,
    JoinLine,
    SectionLine,
    classify_text,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from bark.config.logging import BarkLogger
    from bark.core.model import StyleId
    from bark.parsing.classifier import ClassifiedLine

logger: BarkLogger = get_logger(__name__)


class SectionStateMachine:
    """Incremental block builder.

    Feed classified lines with `feed()`; it returns a closed `Block` whenever a
    command closes the open one. Call `finish()` once at end of input to close
    the last block.

    Args:
        footer (str | None): Footer of the current run; when given, content lines
            equal to it are rejected.
    """

    def __init__(self, *, footer: str | None = None) -> None:
        self.footer = footer
        self._open = False
        self._style: StyleId = DEFAULT_STYLE
        self._connector: Connector = Connector.SECTION
        self._lines: list[str] = []
        self._finished = False

    @property
    def active_style(self) -> StyleId:
        """Style of the open block (default style before any command)."""
        return self._style

    def _close(self) -> Block | None:
        if not self._open:
            return None
        block = Block(style=self._style, connector=self._connector, lines=tuple(self._lines))
        self._open = False
        self._lines = []
        logger.trace(
            "Closed block %s%s with %d line(s)",
            block.connector.value,
            block.style_token,
            len(block.lines),
        )
        return block

    def _append(self, text: str, line_no: int) -> None:
        if self.footer is not None and text == self.footer:
            raise FooterCollisionError("Footer collision", line_no=line_no)
        if not self._open:
            self._open = True
            self._style = DEFAULT_STYLE
            self._connector = Connector.SECTION
        self._lines.append(text)

    def feed(self, line: ClassifiedLine) -> Block | None:
        """Consume one classified line.

        Args:
            line (ClassifiedLine): The next line of the document.

        Returns:
            Block | None: The block closed by this line, if any.
        """
        if self._finished:
            raise RuntimeError("SectionStateMachine.feed() called after finish()")

        if isinstance(line, (DataLine, EscapeLine)):
            self._append(line.text, line.line_no)
            return None
        if isinstance(line, CommentLine):
            return None
        if isinstance(line, (SectionLine, JoinLine)):
            closed = self._close()
            self._open = True
            self._style = line.style
            self._connector = line.connector
            return closed
        raise TypeError(f"Unsupported classified line: {line!r}")

    def finish(self) -> Block | None:
        """Close the open block at end of input and return it (if any)."""
        self._finished = True
        return self._close()


def iter_blocks(lines: Iterable[ClassifiedLine], *, footer: str | None = None) -> Iterator[Block]:
    """Yield blocks lazily from a classified line stream.

    Args:
        lines (Iterable[ClassifiedLine]): Output of the classifier.
        footer (str | None): Footer to check content lines against.

    Yields:
        Block: Each block as soon as it is closed.
    """
    machine = SectionStateMachine(footer=footer)
    for line in lines:
        block = machine.feed(line)
        if block is not None:
            yield block
    last = machine.finish()
    if last is not None:
        yield last


def parse_document(text: str, *, footer: str | None = None) -> Document:
    """Parse a Bark text file held in memory.

    Args:
        text (str): The whole file, decoded from UTF-8.
        footer (str | None): Footer to check content lines against.

    Returns:
        Document: The parsed block sequence.
    """
    doc = Document(blocks=tuple(iter_blocks(classify_text(text), footer=footer)))
    logger.debug("Parsed document with %d block(s)", len(doc))
    return doc
