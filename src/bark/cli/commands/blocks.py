# topmark:header:start
#
#   project      : Bark
#   file         : blocks.py
#   file_relpath : src/bark/cli/commands/blocks.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark `blocks` command.

Lists the blocks of a Bark document: index, connector, style and line count,
followed by the content lines with ``-v``.
"""

from __future__ import annotations

import click

from bark.cli.console import get_console
from bark.cli.errors import translate_errors
from bark.cli.io import STDIO, read_text
from bark.cli.options import get_effective_verbosity
from bark.parsing.machine import parse_document


@click.command(
    name="blocks",
    help="List the blocks of a Bark document.",
)
@click.argument("input_path", metavar="[INPUT]", default=STDIO, required=False)
def blocks_command(*, input_path: str) -> None:
    """Print one line per block of the parsed document."""
    ctx = click.get_current_context()
    console = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)
    color = bool(ctx.obj and ctx.obj.get("color_enabled"))

    with translate_errors():
        document = parse_document(read_text(input_path))

    for index, block in enumerate(document):
        header = f"{block.connector.value}{block.style_token}".ljust(20)
        if color:
            header = block.connector.color(header)
        console.print(f"{index:4d}  {header}  {len(block.lines)} line(s)")
        if vlevel > 0:
            for line in block.lines:
                console.print(f"      | {line}")

    if vlevel >= 0:
        console.print(console.styled(f"{len(document)} block(s)", bold=True))
