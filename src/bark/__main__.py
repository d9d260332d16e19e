# topmark:header:start
#
#   project      : Bark
#   file         : __main__.py
#   file_relpath : src/bark/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running Bark via ``python -m bark``.

This delegates directly to :func:`bark.cli.main.cli`, so the module interface and
the ``bark`` console script share a single entry point.

Examples:
    Render a Bark text file through a style sheet::

        python -m bark run --styles styles.toml input.btf
"""

from __future__ import annotations

from bark.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
