# topmark:header:start
#
#   project      : Bark
#   file         : logging.py
#   file_relpath : src/bark/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark logging: a TRACE level below DEBUG and chalk-colored records on stderr.

``stdout`` carries rendered documents and style streams, so log records never
go there.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from bark.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

logging.addLevelName(TRACE_LEVEL, "TRACE")


class BarkLogger(logging.Logger):
    """Logger with a `trace()` method."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` at TRACE level."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


logging.setLoggerClass(BarkLogger)


LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"

# First threshold at or below the record level wins.
_LEVEL_COLORS: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class ChalkFormatter(logging.Formatter):
    """Formatter that colors whole log records according to their severity."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for threshold, color in _LEVEL_COLORS:
            if record.levelno >= threshold:
                return color(message)
        return chalk.dim(message)


def resolve_env_log_level() -> int | None:
    """Return the level named by ``BARK_LOG_LEVEL`` (a name or a number), if valid."""
    value = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value) if value else None
    return level if isinstance(level, int) else None


def setup_logging(level: int | None = None) -> None:
    """Configure the root logger: one colored stderr handler.

    If ``level`` is None, `resolve_env_log_level` decides; CRITICAL otherwise.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT))
    root_logger.addHandler(handler)


def get_logger(name: str) -> BarkLogger:
    """Return the `BarkLogger` called ``name``."""
    return cast("BarkLogger", logging.getLogger(name))
