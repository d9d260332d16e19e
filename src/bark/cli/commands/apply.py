# topmark:header:start
#
#   project      : Bark
#   file         : apply.py
#   file_relpath : src/bark/cli/commands/apply.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark `apply` command.

Merges a transformed style stream back into an envelope, in place. Only the
parts of the given style are rewritten.
"""

from __future__ import annotations

from pathlib import Path

import click

from bark.cli.console import get_console
from bark.cli.errors import CliUsageError, translate_errors
from bark.cli.io import STDIO, read_text
from bark.cli.options import get_effective_verbosity
from bark.core.model import parse_style_token
from bark.envelope.envelope import Envelope
from bark.envelope.storage import open_storage
from bark.router.styles import merge


@click.command(
    name="apply",
    help="Merge a transformed style stream into an envelope (in place).",
)
@click.argument("envelope_path", metavar="ENVELOPE")
@click.argument("stream_path", metavar="[STREAM]", default=STDIO, required=False)
@click.option(
    "--style",
    required=True,
    help="Style the stream belongs to ('-' for the default style).",
)
def apply_command(*, envelope_path: str, stream_path: str, style: str) -> None:
    """Merge a style stream into an envelope file or directory."""
    ctx = click.get_current_context()
    console = get_console(ctx)

    if envelope_path == STDIO:
        raise CliUsageError("ENVELOPE must be a file or directory; it is updated in place")

    with translate_errors():
        style_id = parse_style_token(style)
        envelope = Envelope(open_storage(Path(envelope_path)))
        stream = read_text(stream_path)
        changed = merge(envelope, style_id, stream)

    if get_effective_verbosity(ctx) > 0:
        console.print(f"{changed} part(s) of style {style} updated in {envelope_path}")
