from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

ReleaseBump = Literal["major", "minor", "patch"]
NextRelease = Literal["major", "minor", "patch", "none"]

NEXT_RELEASE_CHOICES: tuple[NextRelease, ...] = ("major", "minor", "patch", "none")
DEFAULT_NEXT_RELEASE: NextRelease = "minor"

_RELEASE_BRANCH_RE = re.compile(r"^release/v(\d+\.\d+\.\d+)$")


@dataclass(frozen=True, slots=True)
class ReleaseBranch:
    """A ``release/vX.Y.Z`` branch and the version it stands for."""

    name: str
    version: str

    @property
    def tag(self) -> str:
        return version_tag(self.version)


def version_tag(version: str) -> str:
    return f"v{version}"


def release_branch_name(version: str) -> str:
    return f"release/{version_tag(version)}"


def parse_release_branch(name: str) -> ReleaseBranch | None:
    m = _RELEASE_BRANCH_RE.fullmatch(name)
    if m is None:
        return None
    return ReleaseBranch(name=name, version=m.group(1))
