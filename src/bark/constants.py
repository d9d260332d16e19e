# topmark:header:start
#
#   project      : Bark
#   file         : constants.py
#   file_relpath : src/bark/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark Constants."""

from __future__ import annotations

import string
from importlib.metadata import version as get_version

BARK_VERSION: str = get_version("bark-text")

# Leading character of every command, comment and escape line.
GRAVE: str = "`"

# Signature token expected on the first line of a Bark text file.
SIGNATURE: str = "`%bark"

UTF8_BOM: str = "\ufeff"

# Textual form of the default style (envelope headers, CLI arguments).
DEFAULT_STYLE_TOKEN: str = "-"

STYLE_NAME_PATTERN: str = r"[A-Za-z0-9_]+"

# Footer (sentinel) shape: <?bark_XXXXXXXXXXX?>
FOOTER_PREFIX: str = "<?bark_"
FOOTER_SUFFIX: str = "?>"
FOOTER_RANDOM_LENGTH: int = 11
FOOTER_ALPHABET: str = string.ascii_uppercase + string.ascii_lowercase + string.digits

# Environment variable consulted by bark.config.logging.
LOG_LEVEL_ENV_VAR: str = "BARK_LOG_LEVEL"

# Default names of the style sheet when looked up in a project directory.
STYLE_CONFIG_NAMES: tuple[str, ...] = ("bark.toml", "bark.json")

# MIME container metadata (kept from the original barkmime tool).
MIME_FROM: str = "author@example.com"
MIME_TO: str = "publisher@example.com"
MIME_SUBJECT: str = "bark"

# Number of envelope parts carried by a MIME message.
MIME_PARTS_HEADER: str = "X-Bark-Parts"
