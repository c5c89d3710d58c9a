# topmark:header:start
#
#   project      : Polyrun
#   file         : __main__.py
#   file_relpath : src/polyrun/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for ``python -m polyrun``.

Examples:
    List the supported languages::

        python -m polyrun languages
"""

from __future__ import annotations

from polyrun.cli.main import cli

if __name__ == "__main__":
    cli()
