# topmark:header:start
#
#   project      : Bark
#   file         : __init__.py
#   file_relpath : src/bark/api/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public Bark API (stable surface).

This module exposes a small, typed API for programs that want to run Bark
without going through the CLI. Internal modules remain private.

Notes:
-----
- Functions here are thin wrappers around `bark.parsing`, `bark.envelope` and
  `bark.router`; they perform no I/O beyond what their storage does.
- Styles are given either as a `StyleMap` or as a plain mapping of style name to
  shell command; plain mappings are validated on the way in.
- A style argument accepts a style name, ``"-"`` or ``None`` (both meaning the
  default style).

```python
from bark import api

text = "`%bark\\n`:upper\\nhello\\n`+\\n world\\n"
api.run_inline(text, {"upper": "tr a-z A-Z"})  # 'HELLO world\\n'
api.process(text, {"upper": "tr a-z A-Z"})     # same result via an envelope
```
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from bark.config.logging import get_logger
from bark.config.stylemap import StyleMap
from bark.core.model import Document, parse_style_token
from bark.envelope.envelope import Envelope
from bark.parsing.machine import parse_document
from bark.router.inline import InlineRouter
from bark.router.passes import process_envelope
from bark.router.pipeline import PipelineRunner
from bark.router.render import render_text as _render_blocks_text
from bark.router.styles import extract, merge

if TYPE_CHECKING:
    import random

    from bark.config.logging import BarkLogger
    from bark.core.model import StyleId
    from bark.envelope.storage import PartStorage

logger: BarkLogger = get_logger(__name__)

__all__ = [
    "apply",
    "pack",
    "parse",
    "process",
    "render",
    "render_style",
    "render_text",
    "run_inline",
]


def _as_style_map(styles: Mapping[str, str]) -> StyleMap:
    return styles if isinstance(styles, StyleMap) else StyleMap(styles)


def _as_style_id(style: str | None) -> StyleId:
    return None if style is None else parse_style_token(style)


def parse(text: str) -> Document:
    """Parse Bark text into a `Document`.

    Raises:
        BarkFormatError: If the text is malformed.
        InvalidStyleNameError: If a command carries an invalid style name.
    """
    return parse_document(text)


def pack(
    source: str | Document,
    *,
    storage: PartStorage | None = None,
    rng: random.Random | None = None,
) -> Envelope:
    """Pack Bark text (or an already parsed document) into an envelope.

    Args:
        source (str | Document): Bark text or parsed document.
        storage (PartStorage | None): Target storage; in memory if None.
        rng (random.Random | None): Random source for the footer.

    Returns:
        Envelope: The committed envelope.

    Raises:
        FooterCollisionError: If a content line equals the generated footer.
        StrayLineBreakError: If a content line holds a line break character.
    """
    if isinstance(source, Document):
        return Envelope.from_document(source, rng=rng, storage=storage)
    return Envelope.from_text(source, rng=rng, storage=storage)


def render(source: Envelope | Document) -> str:
    """Render all blocks of an envelope or document as plain text."""
    blocks = source.blocks() if isinstance(source, Envelope) else iter(source)
    return _render_blocks_text(blocks)


def render_text(text: str) -> str:
    """Parse Bark text and render it without running any pipeline."""
    return _render_blocks_text(parse_document(text))


def render_style(envelope: Envelope, style: str | None) -> str:
    """Return the footer-delimited stream of the blocks of ``style``."""
    return extract(envelope, _as_style_id(style))


def apply(envelope: Envelope, style: str | None, stream: str) -> Envelope:
    """Merge a transformed style stream back into ``envelope`` and return it.

    Raises:
        SegmentCountError: If the stream and the envelope disagree on the number
            of blocks of ``style``.
        FooterMismatchError: If the stream uses another footer.
    """
    merge(envelope, _as_style_id(style), stream)
    return envelope


def run_inline(
    text: str,
    styles: Mapping[str, str],
    *,
    timeout: float | None = None,
) -> str:
    """Render Bark text in a single pass, running one pipeline per styled block."""
    router = InlineRouter(_as_style_map(styles), runner=PipelineRunner(timeout=timeout))
    return router.run_text(text)


def process(
    text: str,
    styles: Mapping[str, str],
    *,
    storage: PartStorage | None = None,
    timeout: float | None = None,
    whole_stream: bool = False,
    rng: random.Random | None = None,
) -> str:
    """Render Bark text through an envelope, one pass per style.

    Args:
        text (str): Bark text.
        styles (Mapping[str, str]): Style name to shell command.
        storage (PartStorage | None): Envelope storage; in memory if None.
        timeout (float | None): Per-invocation pipeline timeout in seconds.
        whole_stream (bool): Pipe each style stream through a single invocation.
        rng (random.Random | None): Random source for the footer.

    Returns:
        str: The rendered document.
    """
    style_map = _as_style_map(styles)
    envelope = pack(text, storage=storage, rng=rng)
    process_envelope(
        envelope,
        style_map,
        runner=PipelineRunner(timeout=timeout),
        whole_stream=whole_stream,
    )
    return render(envelope)
