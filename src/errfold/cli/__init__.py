# topmark:header:start
#
#   project      : ErrFold
#   file         : __init__.py
#   file_relpath : src/errfold/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ErrFold command-line interface.

The CLI is a Click group (see `errfold.cli.main`) with the ``scan``, ``config``
and ``version`` subcommands. Program output goes through a console object kept
on the Click context; internal diagnostics go through `logging`.
"""
