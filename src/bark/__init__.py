# topmark:header:start
#
#   project      : Bark
#   file         : __init__.py
#   file_relpath : src/bark/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark package.

Bark lets one text document carry several *styles* of content. Each style can be
routed through its own external pipeline, and the results are reassembled into a
single output document. Bark exposes both a CLI and a small typed API.
"""

from __future__ import annotations
