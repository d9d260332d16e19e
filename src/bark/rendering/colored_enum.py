# topmark:header:start
#
#   project      : Bark
#   file         : colored_enum.py
#   file_relpath : src/bark/rendering/colored_enum.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Color-aware enum primitive for human-facing rendering.

`ColoredStrEnum` stores a plain textual value and, separately, a colorizer (any
callable compatible with `yachalk.ChalkBuilder.__call__`). The enum `.value`
stays a plain string, so lookups such as ``Connector(":")`` keep working, while
listings can call ``member.color(text)``.

Example:
    ```python
    from yachalk import chalk

    class Connector(ColoredStrEnum):
        SECTION = (":", chalk.green)
        JOIN = ("+", chalk.magenta)

    Connector(":") is Connector.SECTION   # True
    print(Connector.JOIN.color("+b"))      # magenta "+b"
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class Colorizer(Protocol):
    """Callable that decorates a string for display."""

    def __call__(self, *args: object, sep: str = " ") -> str:
        """Colorize and join the given objects into a display string."""
        ...


class ColoredStrEnum(str, Enum):
    """Enum whose *value* is a string and that carries an associated colorizer."""

    _value_: str
    _color: Colorizer

    def __new__(cls, text: str, color: Colorizer) -> ColoredStrEnum:
        """Construct a colored enum member.

        Args:
            text (str): The textual value for the enum member (stored in `_value_`).
            color (Colorizer): A callable used to colorize text for display.

        Returns:
            ColoredStrEnum: The newly constructed enum member.
        """
        obj: ColoredStrEnum = str.__new__(cls, text)
        obj._value_ = text
        obj._color = color
        return obj

    @property
    def value(self) -> str:
        """Return the textual value of the enum member."""
        return self._value_

    @property
    def color(self) -> Colorizer:
        """Return the colorizer associated with this member."""
        return self._color

    def __str__(self) -> str:
        return self._value_
