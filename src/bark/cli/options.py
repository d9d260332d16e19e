# topmark:header:start
#
#   project      : Bark
#   file         : options.py
#   file_relpath : src/bark/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color, style sheet) and
their resolution logic, so commands and groups can stay thin.
"""

from __future__ import annotations

import os
import sys
from typing import Callable, ParamSpec, TypeVar

import click

from bark.cli.errors import CliUsageError

P = ParamSpec("P")
R = TypeVar("R")

#: Environment variable that disables color when set (https://no-color.org).
NO_COLOR_ENV_VAR = "NO_COLOR"


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve program-output verbosity from the ``-v`` / ``-q`` counts.

    Returns:
        int: ``-1`` when quiet, ``0`` by default, otherwise the ``-v`` count.

    Raises:
        CliUsageError: If both verbose and quiet flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise CliUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return verbose_count


def resolve_color(no_color: bool) -> bool:
    """Return True when program output should be colored."""
    if no_color or os.environ.get(NO_COLOR_ENV_VAR):
        return False
    return sys.stdout.isatty()


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` counting options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress informational output.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the ``--no-color`` flag."""
    return click.option(
        "--no-color",
        is_flag=True,
        default=False,
        help="Disable ANSI colors in program output.",
    )(f)


def style_sheet_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--styles`` and ``--timeout`` to commands that run pipelines."""
    f = click.option(
        "--timeout",
        type=click.FloatRange(min=0, min_open=True),
        default=None,
        help="Seconds to wait for each pipeline invocation (overrides the style sheet).",
    )(f)
    f = click.option(
        "-s",
        "--styles",
        "styles_path",
        type=click.Path(dir_okay=False),
        default=None,
        help="Style sheet (TOML or JSON). Default: bark.toml, bark.json or "
        "[tool.bark] in pyproject.toml in the current directory.",
    )(f)
    return f


def output_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-o/--output`` (``-`` for stdout)."""
    return click.option(
        "-o",
        "--output",
        "output",
        default="-",
        show_default=True,
        help="Output file, or '-' for stdout.",
    )(f)


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity stored on the context (0 if unset)."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    return int(obj.get("verbosity_level", 0))
