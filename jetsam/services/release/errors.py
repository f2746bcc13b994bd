"""Error types for the release workflow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from jetsam.core.errors import ErrorCode, exit_status

ReleaseErrorKind = Literal["precondition", "command_failed", "declined"]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Why a release run stopped.

    ``precondition`` and ``declined`` always exit with 1. ``command_failed``
    carries the exit status of the external command that failed. ``hint``
    is a corrective command for the operator when the repository was left
    part way through a mutation.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
    returncode: int = int(ErrorCode.FAILURE)

    @property
    def is_declined(self) -> bool:
        return self.kind == "declined"


def precondition(message: str) -> ReleaseError:
    return ReleaseError(kind="precondition", message=message)


def declined() -> ReleaseError:
    return ReleaseError(kind="declined", message="Aborting release procedure")


def command_failed(message: str, *, returncode: int, hint: str | None = None) -> ReleaseError:
    return ReleaseError(
        kind="command_failed",
        message=message,
        hint=hint,
        returncode=exit_status(returncode),
    )
