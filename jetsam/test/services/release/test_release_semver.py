from __future__ import annotations

from pathlib import Path

import pytest

from jetsam.core.result import Err, Ok, Result
from jetsam.platform.process import ProcessError
from jetsam.services.release import semver as semver_mod
from jetsam.services.release.semver import is_plain_version, next_version


def test_is_plain_version() -> None:
    assert is_plain_version("1.2.3") is True
    assert is_plain_version("0.0.0") is True
    assert is_plain_version("v1.2.3") is False
    assert is_plain_version("1.2.3-beta.0") is False
    assert is_plain_version("01.2.3") is False


def test_next_version_invokes_semver(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: list[list[str]] = []

    def fake_run(cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
        seen.append(cmd)
        return Ok("1.3.0")

    monkeypatch.setattr(semver_mod, "run_process", fake_run)

    result = next_version(version="1.2.3", bump="minor", semver_cmd="semver", project_root=tmp_path)
    assert result == Ok("1.3.0")
    assert seen == [["semver", "-i", "minor", "1.2.3"]]


def test_next_version_command_failure(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_run(cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr="not found"))

    monkeypatch.setattr(semver_mod, "run_process", fake_run)

    result = next_version(version="1.2.3", bump="patch", semver_cmd="semver", project_root=tmp_path)
    assert isinstance(result, Err)
    assert result.error.message.startswith("Failed to calculate the next release's number")


def test_next_version_rejects_garbage(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(semver_mod, "run_process", lambda cmd, cwd: Ok("Usage: semver ..."))

    result = next_version(version="1.2.3", bump="major", semver_cmd="semver", project_root=tmp_path)
    assert isinstance(result, Err)
