# topmark:header:start
#
#   project      : Bark
#   file         : pack.py
#   file_relpath : src/bark/cli/commands/pack.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark `pack` command.

Parses a Bark document and writes it as an envelope: a MIME message (default)
or, with ``--dir``, a directory holding one file per part.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from bark.cli.console import get_console
from bark.cli.errors import CliUsageError, translate_errors
from bark.cli.io import STDIO, read_text, write_bytes
from bark.cli.options import get_effective_verbosity, output_option
from bark.envelope.envelope import Envelope
from bark.envelope.footer import generate_footer
from bark.envelope.storage import DirectoryStorage, MimeStorage, TransferEncoding
from bark.parsing.machine import parse_document

if TYPE_CHECKING:
    from bark.envelope.storage import PartStorage


@click.command(
    name="pack",
    help="Convert a Bark document into an envelope (MIME by default).",
)
@click.argument("input_path", metavar="[INPUT]", default=STDIO, required=False)
@output_option
@click.option(
    "--dir",
    "as_dir",
    is_flag=True,
    default=False,
    help="Write one file per part into the OUTPUT directory instead of a MIME message.",
)
@click.option(
    "--base64",
    "use_base64",
    is_flag=True,
    default=False,
    help="Encode MIME parts as base64 instead of quoted-printable.",
)
def pack_command(*, input_path: str, output: str, as_dir: bool, use_base64: bool) -> None:
    """Pack a Bark document into an envelope."""
    ctx = click.get_current_context()
    console = get_console(ctx)

    if as_dir and output == STDIO:
        raise CliUsageError("--dir needs an output directory (-o DIR)")
    if as_dir and use_base64:
        raise CliUsageError("--base64 applies to MIME envelopes only")

    with translate_errors():
        text = read_text(input_path)
        # Parse before touching the output so a malformed document leaves it intact.
        footer = generate_footer()
        document = parse_document(text, footer=footer)

        storage: PartStorage
        if as_dir:
            storage = DirectoryStorage(Path(output))
            storage.clear()
        else:
            encoding = TransferEncoding.BASE64 if use_base64 else TransferEncoding.QUOTED_PRINTABLE
            target = None if output == STDIO else Path(output)
            storage = MimeStorage(path=target, encoding=encoding)

        Envelope.from_document(document, footer=footer, storage=storage)
        if isinstance(storage, MimeStorage) and storage.path is None:
            write_bytes(STDIO, storage.to_bytes())

    if get_effective_verbosity(ctx) > 0 and output != STDIO:
        console.print(f"Packed {len(document)} block(s) into {output}")
