# topmark:header:start
#
#   project      : Bark
#   file         : stylemap.py
#   file_relpath : src/bark/config/stylemap.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load Bark style sheets.

A style sheet maps style names to the shell command of the external pipeline
that renders that style. Two on-disk formats are supported:

- TOML (parsed with `tomlkit`)::

      [bark]
      timeout = 30          # optional, seconds

      [styles]
      upper = "tr a-z A-Z"
      spell = "aspell list"

  In ``pyproject.toml`` the same tables live under ``[tool.bark]`` and
  ``[tool.bark.styles]``.

- JSON: a flat object mapping style names to command strings::

      {"upper": "tr a-z A-Z"}

Style names must match ``[A-Za-z0-9_]+``. The default style marker ``-`` is never
a valid key: default content is always passed through untouched.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from bark.constants import DEFAULT_STYLE_TOKEN, STYLE_CONFIG_NAMES
from bark.config.logging import get_logger
from bark.core.errors import BarkConfigError, UnknownStyleError
from bark.core.model import is_valid_style_name

if TYPE_CHECKING:
    from bark.config.logging import BarkLogger

logger: BarkLogger = get_logger(__name__)


class StyleMap(Mapping[str, str]):
    """Read-only mapping from style name to pipeline command."""

    def __init__(self, commands: Mapping[str, str] | None = None) -> None:
        data: dict[str, str] = {}
        for name, command in (commands or {}).items():
            validate_style_key(name)
            if not isinstance(command, str):
                raise BarkConfigError(f"Invalid value for style '{name}' in style sheet")
            data[name] = command
        self._data: Mapping[str, str] = MappingProxyType(data)

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"StyleMap({dict(self._data)!r})"

    def command_for(self, style: str, *, line_no: int | None = None) -> str:
        """Return the command for ``style``.

        Raises:
            UnknownStyleError: If ``style`` is not in the style sheet.
        """
        try:
            return self._data[style]
        except KeyError:
            raise UnknownStyleError(style, line_no=line_no) from None


def validate_style_key(name: object) -> None:
    """Validate a style sheet key.

    Raises:
        BarkConfigError: If ``name`` is ``-`` or not a valid style name.
    """
    if name == DEFAULT_STYLE_TOKEN:
        raise BarkConfigError(
            f"'{DEFAULT_STYLE_TOKEN}' is reserved for the default style "
            "and cannot be mapped in a style sheet"
        )
    if not isinstance(name, str) or not is_valid_style_name(name):
        raise BarkConfigError(f"Invalid style name {name!r} in style sheet")


@dataclass(frozen=True)
class StyleConfig:
    """Resolved style sheet.

    Attributes:
        styles (StyleMap): Style name to shell command.
        timeout (float | None): Per-invocation pipeline timeout in seconds, or None.
        source (Path | None): File the configuration was loaded from, if any.
    """

    styles: StyleMap = field(default_factory=StyleMap)
    timeout: float | None = None
    source: Path | None = None

    def with_timeout(self, timeout: float | None) -> StyleConfig:
        """Return a copy with ``timeout`` overridden (None keeps the current value)."""
        if timeout is None:
            return self
        return StyleConfig(styles=self.styles, timeout=timeout, source=self.source)


def _coerce_timeout(value: Any, source: Path) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BarkConfigError(f"{source}: 'timeout' must be a number of seconds")
    if value <= 0:
        raise BarkConfigError(f"{source}: 'timeout' must be positive")
    return float(value)


def _from_toml_text(text: str, path: Path) -> StyleConfig:
    try:
        doc: dict[str, Any] = tomlkit.parse(text).unwrap()
    except TomlkitParseError as exc:
        raise BarkConfigError(f"{path}: invalid TOML: {exc}") from exc

    if path.name == "pyproject.toml":
        doc = doc.get("tool", {}).get("bark", {})
        styles_tbl: Any = doc.get("styles", {})
        settings_tbl: Any = doc
    else:
        styles_tbl = doc.get("styles", {})
        settings_tbl = doc.get("bark", {})

    if not isinstance(styles_tbl, dict):
        raise BarkConfigError(f"{path}: 'styles' must be a table")
    if not isinstance(settings_tbl, dict):
        raise BarkConfigError(f"{path}: 'bark' must be a table")

    return StyleConfig(
        styles=StyleMap(styles_tbl),
        timeout=_coerce_timeout(settings_tbl.get("timeout"), path),
        source=path,
    )


def _from_json_text(text: str, path: Path) -> StyleConfig:
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BarkConfigError(f"{path}: invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise BarkConfigError("JSON style file has invalid format")
    return StyleConfig(styles=StyleMap(data), source=path)


def load_style_config(path: Path | str) -> StyleConfig:
    """Load a style sheet from ``path``.

    The format is chosen by suffix: ``.json`` is parsed as JSON, anything else as
    TOML.

    Args:
        path (Path | str): Style sheet file.

    Returns:
        StyleConfig: The resolved configuration.

    Raises:
        BarkConfigError: If the file cannot be read or is malformed.
    """
    path = Path(path)
    try:
        text: str = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise BarkConfigError(f"Can't find style file '{path}'") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise BarkConfigError(f"Failed to read style file '{path}': {exc}") from exc

    if path.suffix.lower() == ".json":
        config = _from_json_text(text, path)
    else:
        config = _from_toml_text(text, path)

    logger.debug("Loaded %d style(s) from %s", len(config.styles), path)
    logger.trace("Style map: %r", config.styles)
    return config


def find_style_config(start: Path | None = None) -> Path | None:
    """Return the first style sheet found in ``start`` (default: CWD), or None.

    Looks for `bark.toml`, then `bark.json`, then a ``pyproject.toml`` that
    contains a ``[tool.bark]`` table.
    """
    base: Path = start or Path.cwd()
    for name in STYLE_CONFIG_NAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate

    pyproject = base / "pyproject.toml"
    if pyproject.is_file():
        try:
            doc: dict[str, Any] = tomlkit.parse(pyproject.read_text(encoding="utf-8")).unwrap()
        except (OSError, UnicodeDecodeError, TomlkitParseError) as exc:
            logger.warning("Ignoring unreadable %s: %s", pyproject, exc)
            return None
        if "bark" in doc.get("tool", {}):
            return pyproject
    return None
