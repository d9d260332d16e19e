# topmark:header:start
#
#   project      : Bark
#   file         : __init__.py
#   file_relpath : src/bark/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bark CLI subcommands."""
