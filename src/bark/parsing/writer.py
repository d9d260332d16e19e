# topmark:header:start
#
#   project      : Bark
#   file         : writer.py
#   file_relpath : src/bark/parsing/writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Serialize a `Document` back into Bark text.

Every block is written with an explicit command line, and content lines that
start with a grave accent are escaped with one extra grave accent, so that
parsing the result yields the same block sequence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bark.constants import GRAVE, SIGNATURE

if TYPE_CHECKING:
    from bark.core.model import Block, Document


def escape_content_line(text: str) -> str:
    """Return ``text`` as it must appear in Bark text to parse back to ``text``."""
    if text.startswith(GRAVE):
        return GRAVE + text
    return text


def format_command(block: Block) -> str:
    """Return the command line (without terminator) that opens ``block``."""
    return f"{GRAVE}{block.connector.value}{block.style or ''}"


def format_document(document: Document, *, newline: str = "\n") -> str:
    r"""Return Bark text for ``document``.

    Args:
        document (Document): The block sequence to serialize.
        newline (str): Line terminator to use (``\n`` or ``\r\n``).

    Returns:
        str: A Bark text file, signature line included.
    """
    out: list[str] = [SIGNATURE + newline]
    for block in document:
        out.append(format_command(block) + newline)
        out.extend(escape_content_line(line) + newline for line in block.lines)
    return "".join(out)
