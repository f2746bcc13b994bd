from __future__ import annotations

import re
from pathlib import Path

from jetsam.core.result import Err, Ok, Result
from jetsam.platform.process import run as run_process
from jetsam.services.release.errors import ReleaseError, precondition
from jetsam.services.release.model import ReleaseBump

_VERSION_RE = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")


def is_plain_version(text: str) -> bool:
    """True for ``MAJOR.MINOR.PATCH`` with no prefix or pre-release suffix."""
    return _VERSION_RE.match(text) is not None


def next_version(
    *,
    version: str,
    bump: ReleaseBump,
    semver_cmd: str,
    project_root: Path,
) -> Result[str, ReleaseError]:
    """Ask the external semver tool for ``version`` incremented by ``bump``."""
    result = run_process([semver_cmd, "-i", bump, version], cwd=project_root)
    if isinstance(result, Err):
        return Err(
            precondition(f"Failed to calculate the next release's number: {result.error}")
        )

    value = result.value.strip()
    if not is_plain_version(value):
        return Err(precondition(f"Failed to calculate the next release's number: got {value!r}"))
    return Ok(value)
