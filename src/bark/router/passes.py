# topmark:header:start
#
#   project      : Bark
#   file         : passes.py
#   file_relpath : src/bark/router/passes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Store-and-forward processing of an envelope.

For every style used in the envelope (in order of first appearance) one pass
runs: extract the style stream, transform it, merge it back. Passes are strictly
sequential and each merge is committed before the next pass reads the envelope.

Two transformation modes:

- per segment (default): the style's command runs once per block, on that
  block's lines only, exactly like the inline router. Ordinary line filters
  (``tr``, ``sed``, ...) therefore give the same final output in both modes.
- whole stream: the complete footer-delimited stream goes through a single
  invocation. The command must preserve the footer lines.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bark.config.logging import get_logger
from bark.parsing.classifier import check_payload, iter_physical_lines, strip_terminator
from bark.router.pipeline import PipelineRunner
from bark.router.styles import extract, format_style_stream, merge, parse_style_stream

if TYPE_CHECKING:
    from bark.config.logging import BarkLogger
    from bark.config.stylemap import StyleMap
    from bark.envelope.envelope import Envelope

logger: BarkLogger = get_logger(__name__)


def transform_stream(
    stream: str,
    command: str,
    runner: PipelineRunner,
    *,
    whole_stream: bool = False,
) -> str:
    """Run ``command`` over a style stream and return the transformed stream."""
    if whole_stream:
        lines = [strip_terminator(raw) for raw in iter_physical_lines(stream)]
        return "".join(check_payload(line) + "\n" for line in runner.run(command, lines))

    footer, segments = parse_style_stream(stream)
    return format_style_stream((runner.run(command, seg) for seg in segments), footer)


def process_envelope(
    envelope: Envelope,
    styles: StyleMap,
    *,
    runner: PipelineRunner | None = None,
    whole_stream: bool = False,
) -> list[str]:
    """Run every style pass over ``envelope``.

    All styles used in the envelope are checked against ``styles`` before any
    pipeline runs.

    Args:
        envelope (Envelope): Envelope to update in place.
        styles (StyleMap): Style name to pipeline command.
        runner (PipelineRunner | None): Pipeline runner; a default one if None.
        whole_stream (bool): Pipe each style stream through a single invocation.

    Returns:
        list[str]: The styles processed, in pass order.

    Raises:
        UnknownStyleError: If a style used in the envelope is not mapped.
        PipelineError: If a pipeline fails.
    """
    runner = runner or PipelineRunner()
    used = envelope.document().styles()
    commands = {style: styles.command_for(style) for style in used}

    for style in used:
        logger.info("Pass for style %s: '%s'", style, commands[style])
        stream = extract(envelope, style)
        transformed = transform_stream(stream, commands[style], runner, whole_stream=whole_stream)
        merge(envelope, style, transformed)
    return used
