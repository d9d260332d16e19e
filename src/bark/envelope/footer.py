# topmark:header:start
#
#   project      : Bark
#   file         : footer.py
#   file_relpath : src/bark/envelope/footer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Footer (sentinel) generation and recognition.

A footer looks like ``<?bark_XXXXXXXXXXX?>``: eleven characters drawn uniformly
from ``[A-Za-z0-9]`` inside a fixed wrapper. One footer is generated per run and
bounds every envelope part and every style stream of that run.

The random source is injectable so tests can obtain deterministic footers
without hard-coding one.
"""

from __future__ import annotations

import random
import re
from typing import Final

from bark.constants import FOOTER_ALPHABET, FOOTER_PREFIX, FOOTER_RANDOM_LENGTH, FOOTER_SUFFIX

FOOTER_RE: Final[re.Pattern[str]] = re.compile(
    rf"{re.escape(FOOTER_PREFIX)}[A-Za-z0-9]{{{FOOTER_RANDOM_LENGTH}}}{re.escape(FOOTER_SUFFIX)}"
)


def generate_footer(rng: random.Random | None = None) -> str:
    """Return a fresh footer line (without terminator).

    Args:
        rng (random.Random | None): Random source; a new `random.Random` if None.

    Returns:
        str: The footer, e.g. ``<?bark_q3ZrT0pLm9a?>``.
    """
    source = rng or random.Random()
    token = "".join(source.choice(FOOTER_ALPHABET) for _ in range(FOOTER_RANDOM_LENGTH))
    return f"{FOOTER_PREFIX}{token}{FOOTER_SUFFIX}"


def is_footer(text: str) -> bool:
    """Return True if ``text`` has the shape of a footer line."""
    return FOOTER_RE.fullmatch(text) is not None
