# topmark:header:start
#
#   project      : Bark
#   file         : styles.py
#   file_relpath : src/bark/router/styles.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Style-filtered extraction and merge.

A *style stream* carries the content of every block of one style, in document
order, delimited by the envelope footer::

    <footer>
    <lines of the 1st matching block>
    <footer>
    <lines of the 2nd matching block>
    ...
    <footer>

With N matching blocks the stream has N+1 footer lines; a style absent from the
document yields a single footer line. `merge` reads a stream of the same shape
(typically the output of an external pipeline) and writes the Nth segment back
into the Nth matching block, leaving all other parts byte-identical.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bark.config.logging import get_logger
from bark.core.errors import (
    FooterMismatchError,
    InvalidFooterError,
    MissingFooterError,
    SegmentCountError,
)
from bark.envelope.codec import check_collisions, is_blank
from bark.envelope.footer import generate_footer, is_footer
from bark.parsing.classifier import check_payload, iter_physical_lines, strip_terminator

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from bark.config.logging import BarkLogger
    from bark.core.model import StyleId
    from bark.envelope.envelope import Envelope

logger: BarkLogger = get_logger(__name__)


def iter_style_stream(envelope: Envelope, style: StyleId) -> Iterator[str]:
    """Yield the lines (without terminators) of the style stream for ``style``.

    Args:
        envelope (Envelope): Envelope to read.
        style (StyleId): Style to extract; ``None`` selects default-style blocks.

    Yields:
        str: Footer and content lines in stream order.
    """
    footer: str | None = None
    for part in envelope.parts():
        footer = part.footer
        if part.block.style != style:
            continue
        check_collisions(part.block.lines, footer)
        yield footer
        yield from part.block.lines
    if footer is None:
        # Empty envelope: any footer delimits an empty stream.
        footer = envelope.footer or generate_footer()
    yield footer


def extract(envelope: Envelope, style: StyleId) -> str:
    """Return the style stream for ``style`` as text (LF-terminated lines)."""
    return "".join(line + "\n" for line in iter_style_stream(envelope, style))


def format_style_stream(segments: Iterable[Sequence[str]], footer: str) -> str:
    """Build a style stream from per-block segments.

    Raises:
        FooterCollisionError: If a segment line equals ``footer``.
        StrayLineBreakError: If a segment line holds a line break character.
    """
    out: list[str] = []
    for segment in segments:
        for line in segment:
            check_payload(line)
        check_collisions(segment, footer)
        out.append(footer)
        out.extend(segment)
    out.append(footer)
    return "".join(line + "\n" for line in out)


def parse_style_stream(text: str, *, footer: str | None = None) -> tuple[str, list[list[str]]]:
    """Split a style stream into its footer and segments.

    Blank lines after the last footer are tolerated; anything else there means the
    closing footer is missing.

    Args:
        text (str): The stream text (LF or CRLF terminated lines).
        footer (str | None): Expected footer; when None, the first line defines it.

    Returns:
        tuple[str, list[list[str]]]: The footer and the content of each segment.

    Raises:
        InvalidFooterError: If the stream does not start with a footer line.
        FooterMismatchError: If the stream footer differs from ``footer``.
        MissingFooterError: If non-blank content follows the last footer.
    """
    lines = [strip_terminator(raw) for raw in iter_physical_lines(text)]
    if not lines or not is_footer(lines[0]):
        raise InvalidFooterError("Style stream does not start with a footer line")
    stream_footer = lines[0]
    if footer is not None and stream_footer != footer:
        raise FooterMismatchError("Style stream footer differs from envelope footer")

    segments: list[list[str]] = []
    current: list[str] = []
    for line in lines[1:]:
        if line == stream_footer:
            segments.append(current)
            current = []
        else:
            current.append(line)

    if any(not is_blank(line) for line in current):
        raise MissingFooterError("Style stream missing closing footer")
    return stream_footer, segments


def matching_parts(envelope: Envelope, style: StyleId) -> tuple[str | None, list[int]]:
    """Return the envelope footer and the indexes of the parts of ``style``."""
    footer: str | None = envelope.footer
    indexes: list[int] = []
    for index, part in enumerate(envelope.parts()):
        if part.block.style == style:
            indexes.append(index)
    return footer, indexes


def merge(envelope: Envelope, style: StyleId, stream: str) -> int:
    """Write a transformed style stream back into ``envelope``.

    The Nth segment replaces the content of the Nth block of ``style``; style and
    connector are kept. Other parts are not touched. The envelope is committed
    only after every segment has been validated and written.

    Args:
        envelope (Envelope): Envelope to update in place.
        style (StyleId): Style the stream belongs to.
        stream (str): Footer-delimited stream.

    Returns:
        int: Number of parts whose content changed.

    Raises:
        SegmentCountError: If the number of segments differs from the number of
            matching blocks.
    """
    footer, indexes = matching_parts(envelope, style)
    stream_footer, segments = parse_style_stream(stream, footer=footer)
    if len(segments) != len(indexes):
        raise SegmentCountError(
            f"Style stream has {len(segments)} segment(s) "
            f"but the envelope has {len(indexes)} matching block(s)"
        )

    changed = 0
    for index, segment in zip(indexes, segments):
        if envelope.replace_lines(index, segment, footer=footer or stream_footer):
            changed += 1
    if changed:
        envelope.commit()
    logger.info(
        "Merged %d segment(s) of style %s (%d part(s) changed)",
        len(segments),
        style or "-",
        changed,
    )
    return changed
