# topmark:header:start
#
#   project      : Bark
#   file         : __init__.py
#   file_relpath : src/bark/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command line interface for Bark."""
