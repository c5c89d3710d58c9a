# topmark:header:start
#
#   project      : Polyrun
#   file         : __init__.py
#   file_relpath : src/polyrun/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Polyrun CLI subcommands."""
