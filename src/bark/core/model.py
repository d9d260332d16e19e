# topmark:header:start
#
#   project      : Bark
#   file         : model.py
#   file_relpath : src/bark/core/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark data model: styles, connectors, blocks and documents.

A *document* is an ordered sequence of *blocks*. Each block carries the style that
was active when it was opened (``None`` for the default style), the connector
that relates it to the previous block, and its content lines (without line
terminators).

Connector semantics:
    - `Connector.SECTION`: the block's first line starts on a new output line.
    - `Connector.JOIN`: the block's first line continues the previous output line.

The connector of the first block of a document has no observable effect.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from yachalk import chalk

from bark.constants import DEFAULT_STYLE_TOKEN, STYLE_NAME_PATTERN
from bark.core.errors import InvalidStyleNameError
from bark.rendering.colored_enum import ColoredStrEnum

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

# Style identifier: ``None`` is the default style, otherwise a name.
StyleId = str | None

DEFAULT_STYLE: Final[None] = None

_STYLE_NAME_RE: Final[re.Pattern[str]] = re.compile(STYLE_NAME_PATTERN)


class Connector(ColoredStrEnum):
    """Relationship of a block to the block before it.

    The value is the character used in envelope part headers.
    """

    SECTION = (":", chalk.green)
    JOIN = ("+", chalk.magenta)


def is_valid_style_name(name: str) -> bool:
    """Return True if ``name`` is a valid (non-default) style name."""
    return _STYLE_NAME_RE.fullmatch(name) is not None


def parse_style_token(token: str) -> StyleId:
    """Convert a textual style token into a `StyleId`.

    Args:
        token (str): A style name, or ``-`` for the default style.

    Returns:
        StyleId: ``None`` for ``-``, otherwise the validated name.

    Raises:
        InvalidStyleNameError: If ``token`` is neither ``-`` nor a valid style name.
    """
    if token == DEFAULT_STYLE_TOKEN:
        return DEFAULT_STYLE
    if not is_valid_style_name(token):
        raise InvalidStyleNameError(f"Invalid style name '{token}'")
    return token


def style_token(style: StyleId) -> str:
    """Return the textual token for ``style`` (``-`` for the default style)."""
    return DEFAULT_STYLE_TOKEN if style is None else style


@dataclass(frozen=True)
class Block:
    """One contiguous run of content under one style and one connector.

    Attributes:
        style (StyleId): Active style, ``None`` for the default style.
        connector (Connector): Relationship to the previous block.
        lines (tuple[str, ...]): Content lines without terminators; may be empty.
    """

    style: StyleId
    connector: Connector
    lines: tuple[str, ...] = ()

    @property
    def style_token(self) -> str:
        """Textual style token (``-`` for the default style)."""
        return style_token(self.style)

    def with_lines(self, lines: Iterable[str]) -> Block:
        """Return a copy of this block with its content replaced."""
        return Block(style=self.style, connector=self.connector, lines=tuple(lines))


@dataclass(frozen=True)
class Document:
    """An ordered, read-only sequence of blocks."""

    blocks: tuple[Block, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def styles(self) -> list[str]:
        """Return the non-default styles used, in order of first appearance."""
        seen: dict[str, None] = {}
        for block in self.blocks:
            if block.style is not None:
                seen.setdefault(block.style, None)
        return list(seen)

    def blocks_for(self, style: StyleId) -> list[Block]:
        """Return the blocks whose style is ``style``, in document order."""
        return [b for b in self.blocks if b.style == style]
