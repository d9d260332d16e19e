# topmark:header:start
#
#   project      : Bark
#   file         : version.py
#   file_relpath : src/bark/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark `version` command.

Prints the current Bark version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from bark.cli.console import get_console
from bark.cli.options import get_effective_verbosity
from bark.constants import BARK_VERSION


@click.command(
    name="version",
    help="Show the current version of Bark.",
)
def version_command() -> None:
    """Show the current version of Bark."""
    ctx = click.get_current_context()
    console = get_console(ctx)

    if get_effective_verbosity(ctx) > 0:
        console.print(console.styled("Bark version:", bold=True, underline=True))
        console.print(f"    {console.styled(BARK_VERSION, bold=True)}")
    else:
        console.print(console.styled(BARK_VERSION, bold=True))
