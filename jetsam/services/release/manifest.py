"""Cross-checks between the release branch and the project's files.

The manifest (``package.json``) and changelog must both agree with the version
implied by the release branch before anything is merged.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from jetsam.core.result import Err, Ok, Result
from jetsam.core.structured import as_str_dict
from jetsam.platform.process import run_live
from jetsam.services.release.errors import ReleaseError, command_failed, precondition


def read_manifest_version(path: Path) -> Result[object, ReleaseError]:
    """Return the manifest's ``version`` field, whatever its JSON type."""
    try:
        data_obj: object = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        return Err(precondition(f"Failed to read {path.name}: {e}"))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(precondition(f"Failed to read {path.name}: root must be a JSON object"))
    return Ok(data.get("version"))


def check_manifest_version(path: Path, version: str) -> Result[None, ReleaseError]:
    declared = read_manifest_version(path)
    if isinstance(declared, Err):
        return declared

    if declared.value != version:
        return Err(
            precondition(
                f"Version in {path.name} does not match that being released: "
                f"{declared.value} != {version}"
            )
        )
    return Ok(None)


def changelog_has_entry(text: str, version: str) -> bool:
    """True if a markdown heading is exactly ``version`` (e.g. ``## 1.2.3``)."""
    pattern = re.compile(rf"^#+ +{re.escape(version)}$", re.MULTILINE)
    return pattern.search(text) is not None


def check_changelog(path: Path, version: str) -> Result[None, ReleaseError]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(precondition(f"Failed to read {path.name}: {e}"))

    if not changelog_has_entry(text, version):
        return Err(precondition(f"{path.name} does not contain an entry for version {version}"))
    return Ok(None)


def bump_manifest_version(
    *, project_root: Path, package_manager: str, version: str
) -> Result[None, ReleaseError]:
    """Set the manifest version through the package manager.

    No git tag is created and no commit hooks run; committing the manifest is
    left to the caller.
    """
    cmd = [
        package_manager,
        "version",
        "--no-git-tag-version",
        "--no-commit-hooks",
        "--new-version",
        version,
    ]
    result = run_live(cmd, cwd=project_root)
    match result:
        case Ok(0):
            return Ok(None)
        case Ok(status):
            return Err(
                command_failed(f"Failed to update package version to {version}", returncode=status)
            )
        case Err(e):
            return Err(
                command_failed(
                    f"Failed to update package version to {version}: {e}",
                    returncode=1,
                )
            )
