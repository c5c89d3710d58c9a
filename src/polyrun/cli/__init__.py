# topmark:header:start
#
#   project      : Polyrun
#   file         : __init__.py
#   file_relpath : src/polyrun/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command-line interface for Polyrun."""
