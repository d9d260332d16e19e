# topmark:header:start
#
#   project      : Bark
#   file         : io.py
#   file_relpath : src/bark/cli/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Input/output plumbing shared by the CLI commands.

Documents, envelopes and style streams are handled as raw bytes and decoded as
UTF-8 here, so that neither the platform encoding nor Click's ANSI stripping can
alter them. ``-`` stands for stdin or stdout.

Output is only written once a command has fully succeeded; files are replaced
atomically.
"""

from __future__ import annotations

from pathlib import Path

import click

from bark.cli.errors import CliConfigError
from bark.config.logging import get_logger
from bark.config.stylemap import StyleConfig, find_style_config, load_style_config
from bark.envelope.storage import MimeStorage, PartStorage, atomic_write_bytes, open_storage

logger = get_logger(__name__)

STDIO = "-"


def read_bytes(source: str) -> bytes:
    """Return the bytes of ``source`` (a path, or ``-`` for stdin)."""
    if source == STDIO:
        return click.get_binary_stream("stdin").read()
    return Path(source).read_bytes()


def read_text(source: str) -> str:
    """Return the UTF-8 text of ``source`` (a path, or ``-`` for stdin)."""
    return read_bytes(source).decode("utf-8")


def write_bytes(target: str, data: bytes) -> None:
    """Write ``data`` to ``target`` (a path, or ``-`` for stdout)."""
    if target == STDIO:
        stream = click.get_binary_stream("stdout")
        stream.write(data)
        stream.flush()
        return
    atomic_write_bytes(Path(target), data)
    logger.debug("Wrote %d byte(s) to %s", len(data), target)


def write_text(target: str, text: str) -> None:
    """Write ``text`` as UTF-8 to ``target`` (a path, or ``-`` for stdout)."""
    write_bytes(target, text.encode("utf-8"))


def open_envelope_storage(source: str) -> PartStorage:
    """Open an envelope: a part directory, a MIME file, or MIME on stdin."""
    if source == STDIO:
        return MimeStorage.from_bytes(read_bytes(STDIO))
    return open_storage(Path(source))


def resolve_style_config(styles_path: str | None, timeout: float | None) -> StyleConfig:
    """Load the style sheet given on the command line, or discover one.

    Raises:
        CliConfigError: If no style sheet is given and none is found.
        BarkConfigError: If the style sheet is malformed.
    """
    path: Path | None = Path(styles_path) if styles_path else find_style_config()
    if path is None:
        raise CliConfigError(
            "No style sheet given (use --styles) and none found in the current directory"
        )
    return load_style_config(path).with_timeout(timeout)
