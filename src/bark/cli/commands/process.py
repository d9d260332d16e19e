# topmark:header:start
#
#   project      : Bark
#   file         : process.py
#   file_relpath : src/bark/cli/commands/process.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark `process` command.

Store-and-forward rendering: pack the document into an envelope, run one pass
per style (extract, transform, merge), then render the envelope.

With ``--keep`` the envelope is a MIME file that is committed after every pass,
so an aborted run leaves the last completed pass on disk for inspection.
"""

from __future__ import annotations

from pathlib import Path

import click

from bark import api
from bark.cli.console import get_console
from bark.cli.errors import translate_errors
from bark.cli.io import STDIO, read_text, resolve_style_config, write_text
from bark.cli.options import get_effective_verbosity, output_option, style_sheet_options
from bark.envelope.storage import MemoryStorage, MimeStorage, PartStorage
from bark.router.passes import process_envelope
from bark.router.pipeline import PipelineRunner


@click.command(
    name="process",
    help="Render a Bark document through an envelope, one pass per style.",
)
@click.argument("input_path", metavar="[INPUT]", default=STDIO, required=False)
@style_sheet_options
@click.option(
    "--keep",
    "keep_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Keep the envelope in this MIME file.",
)
@click.option(
    "--whole-stream",
    is_flag=True,
    default=False,
    help="Pipe each style stream, footers included, through a single invocation.",
)
@output_option
def process_command(
    *,
    input_path: str,
    styles_path: str | None,
    timeout: float | None,
    keep_path: str | None,
    whole_stream: bool,
    output: str,
) -> None:
    """Render a Bark document in store-and-forward mode."""
    ctx = click.get_current_context()
    console = get_console(ctx)

    with translate_errors():
        config = resolve_style_config(styles_path, timeout)
        text = read_text(input_path)
        storage: PartStorage = MimeStorage(path=Path(keep_path)) if keep_path else MemoryStorage()
        envelope = api.pack(text, storage=storage)
        passes = process_envelope(
            envelope,
            config.styles,
            runner=PipelineRunner(timeout=config.timeout),
            whole_stream=whole_stream,
        )
        write_text(output, api.render(envelope))

    if get_effective_verbosity(ctx) > 0 and output != STDIO:
        console.print(f"Rendered {input_path} in {len(passes)} pass(es)")
