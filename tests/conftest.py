# topmark:header:start
#
#   project      : Bark
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the Bark test suite.

This file sets up global fixtures, typed mark helpers and the logging
configuration for test runs.

Notes:
    External pipelines used by tests are Python one-liners run with the current
    interpreter (see `py_filter`), so the suite does not depend on ``tr`` or
    ``sed`` being installed.
"""

from __future__ import annotations

import random
import shlex
import sys
from collections.abc import Callable
from typing import Any, TypeVar, cast

import pytest

from bark.config import logging

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type."""

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def bark(*lines: str) -> str:
    """Build a Bark text file: signature line plus ``lines``, LF-terminated."""
    return "".join(line + "\n" for line in ("`%bark", *lines))


def py_filter(code: str) -> str:
    """Return a shell command running ``code`` with the current interpreter.

    ``code`` sees ``sys`` imported; typical use::

        py_filter("sys.stdout.write(sys.stdin.read().upper())")
    """
    return f"{shlex.quote(sys.executable)} -c {shlex.quote('import sys; ' + code)}"


#: Upper-cases its input.
UPPER: str = py_filter("sys.stdout.write(sys.stdin.read().upper())")

#: Wraps every input line in square brackets.
BRACKET: str = py_filter("sys.stdout.writelines('[' + l.rstrip('\\n') + ']\\n' for l in sys.stdin)")

#: Ignores its input and prints a fixed line.
INJECT: str = py_filter("sys.stdin.read(); print('injected')")

#: Fails with exit status 3.
FAIL: str = py_filter("sys.stdin.read(); sys.exit(3)")


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source for footer generation."""
    return random.Random(1234)


@pytest.fixture(autouse=True)
def silence_bark_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure Bark's runtime log level is not forced via env during tests."""
    monkeypatch.delenv("BARK_LOG_LEVEL", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so log output is captured in full."""
    logging.setup_logging(level=logging.TRACE_LEVEL)
