# topmark:header:start
#
#   project      : Bark
#   file         : echo.py
#   file_relpath : src/bark/cli/commands/echo.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark `echo` command.

Renders an envelope as plain text or, with ``--style``, writes the
footer-delimited stream of one style.
"""

from __future__ import annotations

import click

from bark import api
from bark.cli.errors import translate_errors
from bark.cli.io import STDIO, open_envelope_storage, write_text
from bark.cli.options import output_option
from bark.envelope.envelope import Envelope


@click.command(
    name="echo",
    help="Render an envelope, or extract the stream of one style.",
)
@click.argument("envelope_path", metavar="[ENVELOPE]", default=STDIO, required=False)
@click.option(
    "--style",
    default=None,
    help="Extract the footer-delimited stream of this style ('-' for the default style).",
)
@output_option
def echo_command(*, envelope_path: str, style: str | None, output: str) -> None:
    """Render an envelope or extract one style stream."""
    with translate_errors():
        envelope = Envelope(open_envelope_storage(envelope_path))
        if style is None:
            text = api.render(envelope)
        else:
            text = api.render_style(envelope, style)
        write_text(output, text)
