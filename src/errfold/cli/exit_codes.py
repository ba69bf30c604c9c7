# topmark:header:start
#
#   project      : ErrFold
#   file         : exit_codes.py
#   file_relpath : src/errfold/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the ErrFold CLI.

ErrFold aligns with the BSD `sysexits` convention where practical. The one
deliberate divergence is `BLOCKS_FOUND=2`, returned by ``errfold scan --check``
when at least one foldable block was found. Click also uses 2 for its own usage
errors, which print a ``Usage:`` line; a ``--check`` result never does.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the ErrFold CLI.

    Attributes:
        SUCCESS: Successful execution.
        FAILURE: Generic failure.
        BLOCKS_FOUND: ``--check`` mode found foldable blocks.
        USAGE_ERROR: Invalid flags or arguments. Mirrors ``EX_USAGE (64)``.
        ENCODING_ERROR: Input is not valid UTF-8. Mirrors ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors ``EX_NOINPUT (66)``.
        IO_ERROR: I/O error while reading input. Mirrors ``EX_IOERR (74)``.
        CONFIG_ERROR: Missing or unusable configuration. Mirrors ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Last-resort bucket for unknown failures.
    """

    SUCCESS = 0
    FAILURE = 1
    BLOCKS_FOUND = 2  # deliberate divergence from sysexits; see module docstring

    USAGE_ERROR = 64  # EX_USAGE
    ENCODING_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
