# topmark:header:start
#
#   project      : Bark
#   file         : main.py
#   file_relpath : src/bark/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark command line entry point.

Group-level options are initialized once and placed into ``ctx.obj``:

- ``console``: the `ClickConsole` for user-facing messages;
- ``verbosity_level``: program-output verbosity from ``-v`` / ``-q``;
- ``log_level``: internal logging level from ``BARK_LOG_LEVEL``;
- ``color_enabled``: whether program output may be colored.
"""

from __future__ import annotations

import click

from bark.cli.commands.apply import apply_command
from bark.cli.commands.blocks import blocks_command
from bark.cli.commands.echo import echo_command
from bark.cli.commands.pack import pack_command
from bark.cli.commands.process import process_command
from bark.cli.commands.run import run_command
from bark.cli.commands.version import version_command
from bark.cli.console import ClickConsole, ConsoleLike
from bark.cli.options import (
    common_color_options,
    common_verbose_options,
    resolve_color,
    resolve_verbosity,
)
from bark.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging and color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    enable_color = resolve_color(no_color)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Bark: render styled text documents through external pipelines.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: int, no_color: bool) -> None:
    """Entry point for the Bark CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet, no_color=no_color)
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'bark run --styles FILE [INPUT]' to render a document.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(pack_command)

cli.add_command(echo_command)

cli.add_command(apply_command)

cli.add_command(run_command)

cli.add_command(process_command)

cli.add_command(blocks_command)

if __name__ == "__main__":
    cli()
