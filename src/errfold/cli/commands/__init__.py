# topmark:header:start
#
#   project      : ErrFold
#   file         : __init__.py
#   file_relpath : src/errfold/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Subcommands of the ``errfold`` CLI group."""
