# topmark:header:start
#
#   project      : Bark
#   file         : render.py
#   file_relpath : src/bark/router/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Whole-document rendering.

Blocks are rendered in order through a `LineBuffer`: each block first applies its
connector (break before a Section, none before a Join), then emits its lines.
Non-empty output always ends with exactly one line break.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bark.router.linebuf import LineBuffer

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import TextIO

    from bark.core.model import Block


def render_block(block: Block, buffer: LineBuffer) -> None:
    """Apply ``block``'s connector and emit its lines into ``buffer``."""
    buffer.connect(block.connector)
    for line in block.lines:
        buffer.emit(line)


def render_blocks(blocks: Iterable[Block], out: TextIO) -> None:
    """Render ``blocks`` as final text onto the stream ``out``."""
    buffer = LineBuffer(out)
    for block in blocks:
        render_block(block, buffer)
    buffer.close()


def render_text(blocks: Iterable[Block]) -> str:
    """Render ``blocks`` into a string."""
    buffer = LineBuffer()
    for block in blocks:
        render_block(block, buffer)
    buffer.close()
    return buffer.getvalue()
