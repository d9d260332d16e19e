# topmark:header:start
#
#   project      : Bark
#   file         : linebuf.py
#   file_relpath : src/bark/router/linebuf.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Single-line lookahead output buffer.

Whether a line break follows an output line is only known once the next line,
or the next block boundary, is seen. `LineBuffer` therefore holds at most one
*pending* line:

- `emit(line)`: write the pending line followed by a break; ``line`` becomes pending.
- `flush_with_break()`: write the pending line followed by a break (Section
  boundary).
- `flush_without_break()`: write the pending line without a break (Join boundary).
- `close()`: end of document.

This is what makes a Join continue the previous output line and a Section start a
new one.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from bark.core.errors import StrayLineBreakError
from bark.core.model import Connector

if TYPE_CHECKING:
    from typing import TextIO


class LineBuffer:
    """Lookahead buffer writing to a text stream.

    Args:
        out (TextIO | None): Destination stream; an in-memory buffer if None
            (read it back with `getvalue()`).
    """

    def __init__(self, out: TextIO | None = None) -> None:
        self._out: TextIO = out if out is not None else io.StringIO()
        self._pending: str | None = None
        self._written = False
        self._at_line_start = True
        self._closed = False

    def _write(self, text: str) -> None:
        if text:
            self._out.write(text)
            self._written = True
            self._at_line_start = text.endswith("\n")

    def emit(self, line: str) -> None:
        """Queue ``line`` (no terminator), writing the previously pending line first.

        Raises:
            StrayLineBreakError: If ``line`` contains a carriage return or line feed.
        """
        if "\r" in line or "\n" in line:
            raise StrayLineBreakError(f"Stray line break characters in output line {line!r}")
        if self._pending is not None:
            self._write(self._pending + "\n")
        self._pending = line

    def flush_with_break(self) -> None:
        """Write the pending line (if any) followed by a line break."""
        if self._pending is not None:
            self._write(self._pending + "\n")
            self._pending = None

    def flush_without_break(self) -> None:
        """Write the pending line (if any) without a line break."""
        if self._pending is not None:
            self._write(self._pending)
            self._pending = None

    def connect(self, connector: Connector) -> None:
        """Apply a block boundary with the given connector."""
        if connector is Connector.JOIN:
            self.flush_without_break()
        else:
            self.flush_with_break()

    def close(self) -> None:
        """Finish the output.

        Flushes the pending line with a break and makes sure non-empty output ends
        with exactly one trailing line break, even after a final Join boundary.
        """
        if self._closed:
            return
        self.flush_with_break()
        if self._written and not self._at_line_start:
            self._write("\n")
        self._closed = True

    def getvalue(self) -> str:
        """Return everything written so far (in-memory buffers only)."""
        if not isinstance(self._out, io.StringIO):
            raise TypeError("getvalue() requires an in-memory LineBuffer")
        return self._out.getvalue()
