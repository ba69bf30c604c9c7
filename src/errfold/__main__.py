# topmark:header:start
#
#   project      : ErrFold
#   file         : __main__.py
#   file_relpath : src/errfold/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point so ``python -m errfold`` runs the CLI."""

from errfold.cli.main import cli

if __name__ == "__main__":
    cli()
