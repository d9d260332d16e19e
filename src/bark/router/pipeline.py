# topmark:header:start
#
#   project      : Bark
#   file         : pipeline.py
#   file_relpath : src/bark/router/pipeline.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run external style pipelines.

A pipeline is a shell command. Its input lines are written to the child's
standard input (UTF-8, one LF per line), and its standard output is read to
completion and split back into lines. The child's standard error is inherited.
A non-zero exit status is fatal for the whole run.

The optional timeout is an extension: by default a hung pipeline blocks the run
indefinitely.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

from bark.config.logging import get_logger
from bark.core.errors import PipelineError, PipelineTimeoutError
from bark.parsing.classifier import iter_physical_lines, strip_terminator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bark.config.logging import BarkLogger

logger: BarkLogger = get_logger(__name__)


@dataclass(frozen=True)
class PipelineRunner:
    """Blocking runner for shell pipelines.

    Attributes:
        timeout (float | None): Seconds to wait for each invocation, or None.
    """

    timeout: float | None = None

    def run(self, command: str, lines: Sequence[str]) -> list[str]:
        """Pipe ``lines`` through ``command`` and return its output lines.

        Args:
            command (str): Shell command line.
            lines (Sequence[str]): Input lines without terminators.

        Returns:
            list[str]: Output lines with their terminators removed.

        Raises:
            PipelineError: If the command exits with a non-zero status or writes
                invalid UTF-8.
            PipelineTimeoutError: If the timeout expires.
        """
        data = "".join(line + "\n" for line in lines).encode("utf-8")
        logger.debug("Running pipeline '%s' on %d line(s)", command, len(lines))
        try:
            proc = subprocess.run(
                command,
                shell=True,
                input=data,
                stdout=subprocess.PIPE,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            assert self.timeout is not None
            raise PipelineTimeoutError(command, self.timeout) from exc
        except OSError as exc:
            raise PipelineError(
                command, None, message=f"Failed to open pipeline '{command}': {exc}"
            ) from exc

        if proc.returncode != 0:
            raise PipelineError(command, proc.returncode)

        try:
            text = proc.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PipelineError(
                command,
                proc.returncode,
                message=f"Pipeline wrote invalid UTF-8: '{command}': {exc}",
            ) from exc

        out = [strip_terminator(line) for line in iter_physical_lines(text)]
        logger.trace("Pipeline '%s' produced %d line(s)", command, len(out))
        return out
