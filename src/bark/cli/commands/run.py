# topmark:header:start
#
#   project      : Bark
#   file         : run.py
#   file_relpath : src/bark/cli/commands/run.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark `run` command.

Renders a Bark document in a single pass, piping every styled block through its
style's command as it is reached (inline mode).
"""

from __future__ import annotations

import click

from bark.cli.console import get_console
from bark.cli.errors import translate_errors
from bark.cli.io import STDIO, read_text, resolve_style_config, write_text
from bark.cli.options import get_effective_verbosity, output_option, style_sheet_options
from bark.config.logging import get_logger
from bark.router.inline import InlineRouter
from bark.router.pipeline import PipelineRunner

logger = get_logger(__name__)


@click.command(
    name="run",
    help="Render a Bark document, running style pipelines inline.",
)
@click.argument("input_path", metavar="[INPUT]", default=STDIO, required=False)
@style_sheet_options
@output_option
def run_command(
    *,
    input_path: str,
    styles_path: str | None,
    timeout: float | None,
    output: str,
) -> None:
    """Render a Bark document in inline mode."""
    ctx = click.get_current_context()
    console = get_console(ctx)

    with translate_errors():
        config = resolve_style_config(styles_path, timeout)
        router = InlineRouter(config.styles, runner=PipelineRunner(timeout=config.timeout))
        rendered = router.run_text(read_text(input_path))
        write_text(output, rendered)

    if get_effective_verbosity(ctx) > 0 and output != STDIO:
        console.print(f"Rendered {input_path} with {router.activations} pipeline run(s)")
