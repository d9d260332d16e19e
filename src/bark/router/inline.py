# topmark:header:start
#
#   project      : Bark
#   file         : inline.py
#   file_relpath : src/bark/router/inline.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Inline single-pass rendering.

The inline router reads a Bark text file once, without building an envelope.
Every block of a non-default style (a *style activation*) is piped through its
own invocation of the style's command, even when the block is empty, and the
command's output lines take the place of the block's lines in the lookahead
buffer. Default-style content passes through unchanged.

For the same input and style map the result is identical to the
store-and-forward mode (`bark.router.passes`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bark.config.logging import get_logger
from bark.parsing.classifier import JoinLine, SectionLine, classify_text
from bark.parsing.machine import SectionStateMachine
from bark.router.linebuf import LineBuffer
from bark.router.pipeline import PipelineRunner

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import TextIO

    from bark.config.logging import BarkLogger
    from bark.config.stylemap import StyleMap
    from bark.core.model import Block
    from bark.parsing.classifier import ClassifiedLine

logger: BarkLogger = get_logger(__name__)


class InlineRouter:
    """Render a classified line stream, running style pipelines block by block.

    Args:
        styles (StyleMap): Style name to pipeline command.
        out (TextIO | None): Output stream; in-memory if None (see `run_text`).
        runner (PipelineRunner | None): Pipeline runner; a default one if None.
    """

    def __init__(
        self,
        styles: StyleMap,
        *,
        out: TextIO | None = None,
        runner: PipelineRunner | None = None,
    ) -> None:
        self.styles = styles
        self.runner = runner or PipelineRunner()
        self._buffer = LineBuffer(out)
        self._activations = 0

    @property
    def activations(self) -> int:
        """Number of pipeline invocations so far."""
        return self._activations

    def _render(self, block: Block) -> None:
        self._buffer.connect(block.connector)
        if block.style is None:
            lines: Iterable[str] = block.lines
        else:
            command = self.styles.command_for(block.style)
            lines = self.runner.run(command, block.lines)
            self._activations += 1
        for line in lines:
            self._buffer.emit(line)

    def run(self, lines: Iterable[ClassifiedLine]) -> None:
        """Consume ``lines`` and write the rendered document.

        Unknown styles are reported at the command that references them, before
        any pipeline of that block runs.

        Raises:
            UnknownStyleError: If a command references a style missing from the map.
            PipelineError: If a pipeline fails.
        """
        machine = SectionStateMachine()
        for line in lines:
            if isinstance(line, (SectionLine, JoinLine)) and line.style is not None:
                self.styles.command_for(line.style, line_no=line.line_no)
            block = machine.feed(line)
            if block is not None:
                self._render(block)
        last = machine.finish()
        if last is not None:
            self._render(last)
        self._buffer.close()
        logger.debug("Inline render finished after %d pipeline run(s)", self._activations)

    def run_text(self, text: str) -> str:
        """Render Bark text held in memory and return the result.

        Only valid for routers created without an explicit output stream.
        """
        self.run(classify_text(text))
        return self._buffer.getvalue()
