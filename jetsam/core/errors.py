"""Exit codes for jetsam commands.

Only two codes are produced by jetsam itself. A failed external command
propagates its own exit status instead, so callers should treat any
non-zero value as failure.
"""

from enum import IntEnum

__all__ = ["ErrorCode", "exit_status"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: Failure (precondition violated, user declined, indeterminate error)
    """

    OK = 0
    FAILURE = 1


def exit_status(returncode: int) -> int:
    """Status to exit with after a child process failed with ``returncode``.

    A negative value (the child was killed by a signal) or 0 carries no usable
    failure status and becomes ``FAILURE``.
    """
    if returncode > 0:
        return returncode
    return int(ErrorCode.FAILURE)
