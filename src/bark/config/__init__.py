# topmark:header:start
#
#   project      : Bark
#   file         : __init__.py
#   file_relpath : src/bark/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark configuration: logging setup and style sheet loading."""

from __future__ import annotations

from bark.config.stylemap import StyleConfig, StyleMap, find_style_config, load_style_config

__all__ = [
    "StyleConfig",
    "StyleMap",
    "find_style_config",
    "load_style_config",
]
