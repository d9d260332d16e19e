# topmark:header:start
#
#   project      : Bark
#   file         : errors.py
#   file_relpath : src/bark/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the Bark core.

All malformations detected by Bark are fatal: the operation in progress is
aborted and nothing is retried. These exceptions are framework-agnostic; the CLI
translates them into Click exceptions with sysexits-aligned exit codes (see
`bark.cli.errors`).

Hierarchy:
    - `BarkError`
        - `BarkFormatError`: malformed Bark text (signature, commands, lines,
          stray line breaks, footer collision).
        - `EnvelopeError`: structural problems in an envelope or a
          footer-delimited style stream.
        - `StyleError`: invalid or unknown style names.
        - `PipelineError`: an external pipeline failed or timed out.
        - `BarkConfigError`: invalid style sheet configuration.
"""

from __future__ import annotations


class BarkError(Exception):
    """Base class for all Bark errors."""


# --- Bark text format ---


class BarkFormatError(BarkError):
    """Malformed Bark text.

    Attributes:
        line_no (int | None): 1-based line number of the offending line, if known.
    """

    def __init__(self, message: str, *, line_no: int | None = None) -> None:
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class SignatureError(BarkFormatError):
    """The first line is not a Bark signature line."""


class CommandSyntaxError(BarkFormatError):
    """A section or join command has malformed trailing content."""


class InvalidLineError(BarkFormatError):
    """A grave-accent-led line is neither a command, a comment nor an escape."""


class FooterCollisionError(BarkFormatError):
    """A content line is identical to the footer of the current run."""


class StrayLineBreakError(BarkFormatError):
    """A content line carries a carriage return or line feed of its own."""


# --- Envelope and style streams ---


class EnvelopeError(BarkError):
    """Structural error in an envelope part or a footer-delimited stream.

    Attributes:
        part_index (int | None): 0-based index of the offending part, if known.
    """

    def __init__(self, message: str, *, part_index: int | None = None) -> None:
        self.part_index = part_index
        if part_index is not None:
            message = f"part {part_index}: {message}"
        super().__init__(message)


class InvalidFooterError(EnvelopeError):
    """The first line of a part or stream is not a footer line."""


class FooterMismatchError(EnvelopeError):
    """Parts of one envelope (or a stream and its envelope) use different footers."""


class PartHeaderError(EnvelopeError):
    """The header line of a part is malformed."""


class MissingFooterError(EnvelopeError):
    """Input ended before the closing footer line."""


class TrailingDataError(EnvelopeError):
    """Non-blank data follows the closing footer line."""


class ContainerError(EnvelopeError):
    """The storage container itself has the wrong shape (e.g. not multipart MIME)."""


class SegmentCountError(EnvelopeError):
    """A transformed stream has a different number of segments than matching blocks."""


# --- Styles ---


class StyleError(BarkError):
    """Base class for style name errors."""


class InvalidStyleNameError(StyleError):
    """A style name does not match the style name grammar."""


class UnknownStyleError(StyleError):
    """A command references a style that is absent from the style map."""

    def __init__(self, style: str, *, line_no: int | None = None) -> None:
        self.style = style
        self.line_no = line_no
        message = f"Can't find style '{style}' in style sheet"
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


# --- External pipelines ---


class PipelineError(BarkError):
    """An external pipeline exited with a non-zero status.

    Attributes:
        command (str): The shell command that failed.
        returncode (int | None): Exit status, or ``None`` when the process never finished.
    """

    def __init__(self, command: str, returncode: int | None, *, message: str | None = None) -> None:
        self.command = command
        self.returncode = returncode
        if message is None:
            message = f"Pipeline failed with status {returncode}: '{command}'"
        super().__init__(message)


class PipelineTimeoutError(PipelineError):
    """An external pipeline did not finish within the configured timeout."""

    def __init__(self, command: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(
            command,
            None,
            message=f"Pipeline timed out after {timeout:g}s: '{command}'",
        )


# --- Configuration ---


class BarkConfigError(BarkError):
    """The style sheet configuration is missing, unreadable or malformed."""
