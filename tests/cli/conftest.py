# topmark:header:start
#
#   project      : Bark
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running Bark in a controlled working directory.

`run_cli_in()` changes the process working directory to the given `tmp_path`
before invoking the Click CLI, so that relative paths and style sheet discovery
(``bark.toml``, ``bark.json``, ``pyproject.toml``) resolve against the temporary
test directory.

Rendered documents and envelopes are written to stdout as raw bytes; use
``result.stdout`` / ``result.stdout_bytes`` for data and ``result.output`` for
messages.
"""

from __future__ import annotations

import json
import os
from typing import IO, TYPE_CHECKING, Any, Sequence

from click.testing import CliRunner, Result

from bark.cli.exit_codes import ExitCode
from bark.cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path


def run_cli_in(
    tmp_path: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Pytest-provided temporary directory used as the CWD for the
            command invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["run", "doc.bark"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv, input=input_text)
    finally:
        os.chdir(cwd)


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory.

    Use this helper when the test does not rely on style sheet discovery or on
    relative paths (e.g. ``version``, or commands given absolute paths).

    Args:
        argv (str | Sequence[str] | None): CLI argument vector.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text)


def write_style_sheet(
    tmp_path: Path,
    styles: dict[str, str],
    *,
    timeout: float | None = None,
    name: str = "bark.toml",
) -> Path:
    """Write a style sheet into ``tmp_path`` and return its path.

    ``name`` selects the format: ``bark.json`` is written as JSON, anything else
    as TOML (with the tables under ``[tool.bark]`` for ``pyproject.toml``).
    """
    path = tmp_path / name
    if name.endswith(".json"):
        path.write_text(json.dumps(styles), encoding="utf-8")
        return path

    prefix = "tool.bark" if name == "pyproject.toml" else ""
    settings_tbl = prefix or "bark"
    styles_tbl = f"{prefix}.styles" if prefix else "styles"
    lines: list[str] = []
    if timeout is not None:
        lines += [f"[{settings_tbl}]", f"timeout = {timeout}", ""]
    lines.append(f"[{styles_tbl}]")
    # JSON string escapes are valid in TOML basic strings.
    lines += [f"{style} = {json.dumps(command)}" for style, command in styles.items()]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64)."""
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_DATA_ERROR(result: Result) -> None:
    """Assert that the command exited with DATA_ERROR (code 65)."""
    assert result.exit_code == ExitCode.DATA_ERROR, result.output


def assert_FILE_NOT_FOUND(result: Result) -> None:
    """Assert that the command exited with FILE_NOT_FOUND (code 66)."""
    assert result.exit_code == ExitCode.FILE_NOT_FOUND, result.output


def assert_PIPELINE_ERROR(result: Result) -> None:
    """Assert that the command exited with PIPELINE_ERROR (code 70)."""
    assert result.exit_code == ExitCode.PIPELINE_ERROR, result.output


def assert_CONFIG_ERROR(result: Result) -> None:
    """Assert that the command exited with CONFIG_ERROR (code 78)."""
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output
