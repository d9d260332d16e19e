# topmark:header:start
#
#   project      : Bark
#   file         : errors.py
#   file_relpath : src/bark/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the Bark CLI.

Usage:
    Commands run their work inside `translate_errors()`, which turns core
    `BarkError`s and filesystem errors into the Click exceptions below. Click
    then prints the message and exits with the exception's `exit_code`.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any

import click

from bark.cli.exit_codes import ExitCode
from bark.config.logging import get_logger
from bark.core.errors import (
    BarkConfigError,
    BarkError,
    PipelineError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = get_logger(__name__)


class BarkCliError(click.ClickException):
    """Base class for all Bark CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized later by `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class CliUsageError(BarkCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class CliDataError(BarkCliError):
    """Error for malformed documents, envelopes, style streams or encodings."""

    exit_code = ExitCode.DATA_ERROR


class CliFileNotFoundError(BarkCliError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class CliPipelineError(BarkCliError):
    """Error for failing or timed-out external style pipelines."""

    exit_code = ExitCode.PIPELINE_ERROR


class CliIOError(BarkCliError):
    """Error for I/O errors reading or writing files."""

    exit_code = ExitCode.IO_ERROR


class CliPermissionDeniedError(BarkCliError):
    """Error for insufficient permissions (read/write)."""

    exit_code = ExitCode.PERMISSION_DENIED


class CliConfigError(BarkCliError):
    """Error for style sheet errors (missing/invalid/malformed)."""

    exit_code = ExitCode.CONFIG_ERROR


def to_cli_error(exc: BaseException) -> BarkCliError:
    """Map a core or filesystem exception to the matching CLI error."""
    message = str(exc)
    if isinstance(exc, BarkConfigError):
        return CliConfigError(message)
    if isinstance(exc, PipelineError):
        return CliPipelineError(message)
    if isinstance(exc, BarkError):
        return CliDataError(message)
    if isinstance(exc, UnicodeError):
        return CliDataError(f"Input is not valid UTF-8: {message}")
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
        return CliFileNotFoundError(f"{exc.strerror or 'No such file'}: {exc.filename}")
    if isinstance(exc, PermissionError):
        return CliPermissionDeniedError(f"{exc.strerror or 'Permission denied'}: {exc.filename}")
    if isinstance(exc, OSError):
        return CliIOError(message)
    return BarkCliError(message)


@contextmanager
def translate_errors() -> Iterator[None]:
    """Re-raise Bark and filesystem errors as `BarkCliError`s."""
    try:
        yield
    except (BarkError, UnicodeError, OSError) as exc:
        logger.debug("Command failed: %r", exc)
        raise to_cli_error(exc) from exc
