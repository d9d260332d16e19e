# topmark:header:start
#
#   project      : Bark
#   file         : __init__.py
#   file_relpath : src/bark/router/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Style router and merge engine.

- `linebuf`: the single-line lookahead output buffer.
- `render`: whole-document rendering.
- `styles`: style-filtered extraction and merge.
- `pipeline`: external pipeline invocation.
- `inline`: single-pass rendering without an envelope.
- `passes`: store-and-forward processing of an envelope.
"""

from __future__ import annotations

from bark.router.inline import InlineRouter
from bark.router.linebuf import LineBuffer
from bark.router.passes import process_envelope, transform_stream
from bark.router.pipeline import PipelineRunner
from bark.router.render import render_block, render_blocks, render_text
from bark.router.styles import (
    extract,
    format_style_stream,
    iter_style_stream,
    merge,
    parse_style_stream,
)

__all__ = [
    "InlineRouter",
    "LineBuffer",
    "PipelineRunner",
    "extract",
    "format_style_stream",
    "iter_style_stream",
    "merge",
    "parse_style_stream",
    "process_envelope",
    "render_block",
    "render_blocks",
    "render_text",
    "transform_stream",
]
