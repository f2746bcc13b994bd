from __future__ import annotations

from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from jetsam import __version__
from jetsam.cli.app import app, main
from jetsam.cli.context import PROJECT_ENV, CLIContext, build_context, project_root
from jetsam.core.config import CONFIG_FILENAME, JetsamConfig
from jetsam.core.result import Err, Ok
from jetsam.output.console import MockConsole
from jetsam.services.release.errors import command_failed, declined, precondition

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_project_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # --project writes the variable; setenv first so teardown restores it
    monkeypatch.setenv(PROJECT_ENV, "")
    monkeypatch.delenv(PROJECT_ENV)


def _context(root: Path, console: MockConsole) -> CLIContext:
    return CLIContext(project_root=root, config=JetsamConfig(), console=console)


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in ("audit", "build-dist", "release"):
        assert name in result.output


def test_project_must_be_a_directory(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--project", str(tmp_path / "missing"), "build-dist"])
    assert result.exit_code == 1


def test_build_dist_through_project_option(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text('{"main": "dist/index.js"}', encoding="utf-8")
    (tmp_path / "src" / "bin").mkdir(parents=True)
    (tmp_path / "src" / "bin" / "start.sh").write_text("#!/bin/sh\n", encoding="utf-8")

    result = runner.invoke(app, ["--project", str(tmp_path), "build-dist", "-o", "out"])

    assert result.exit_code == 0
    assert (tmp_path / "out" / "package.json").read_text(encoding="utf-8") == (
        '{"main": "index.js"}'
    )
    assert (tmp_path / "out" / "bin" / "start").exists()


def test_main_reports_unreadable_manifest(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "package.json").write_bytes(b"\xff\xfe{\x00")
    monkeypatch.setattr("sys.argv", ["jetsam", "--project", str(tmp_path), "build-dist"])

    with pytest.raises(SystemExit) as excinfo:
        main()

    assert excinfo.value.code == 1
    assert "Error: Failed to execute jetsam command:" in capsys.readouterr().err


def test_project_root_defaults_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert project_root() == tmp_path


def test_build_context_rejects_bad_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("[release\n", encoding="utf-8")
    monkeypatch.setenv(PROJECT_ENV, str(tmp_path))

    with pytest.raises(typer.Exit) as excinfo:
        build_context()

    assert excinfo.value.exit_code == 1


# =============================================================================
# release command
# =============================================================================


def test_report_declined_is_not_an_error() -> None:
    import jetsam.cli.commands.release_cmd as release_cmd

    console = MockConsole()
    release_cmd.report_release_error(declined(), console)

    assert console.messages == ["Aborting release procedure"]
    assert not console.has_error()


def test_report_failure_with_hint() -> None:
    import jetsam.cli.commands.release_cmd as release_cmd

    console = MockConsole()
    error = command_failed("Failed to merge", returncode=2, hint="Issue a reset")
    release_cmd.report_release_error(error, console)

    assert console.errors == ["Error: Failed to merge", "Error: Issue a reset"]


def test_release_exits_with_error_status(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import jetsam.cli.commands.release_cmd as release_cmd

    console = MockConsole()
    monkeypatch.setattr(release_cmd, "build_context", lambda: _context(tmp_path, console))

    class FailingWorkflow:
        def __init__(self, **_: object) -> None:
            pass

        def run(self) -> Err[object]:
            return Err(precondition("The release tag \"v1.0.0\" already exists"))

    monkeypatch.setattr(release_cmd, "ReleaseWorkflow", FailingWorkflow)

    with pytest.raises(typer.Exit) as excinfo:
        release_cmd.release(dry_run=False, ignore_changelog=False)

    assert excinfo.value.exit_code == 1
    assert console.errors == ['Error: The release tag "v1.0.0" already exists']


def test_release_passes_options(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import jetsam.cli.commands.release_cmd as release_cmd

    console = MockConsole()
    monkeypatch.setattr(release_cmd, "build_context", lambda: _context(tmp_path, console))
    seen: dict[str, object] = {}

    class RecordingWorkflow:
        def __init__(self, **kwargs: object) -> None:
            seen.update(kwargs)

        def run(self) -> Ok[str]:
            return Ok("v1.0.0")

    monkeypatch.setattr(release_cmd, "ReleaseWorkflow", RecordingWorkflow)

    release_cmd.release(dry_run=True, ignore_changelog=True)

    options = seen["options"]
    assert getattr(options, "dry_run") is True
    assert getattr(options, "ignore_changelog") is True
    assert seen["project_root"] == tmp_path


# =============================================================================
# audit command
# =============================================================================


def test_audit_exit_status(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import jetsam.cli.commands.audit_cmd as audit_cmd

    console = MockConsole()
    monkeypatch.setattr(audit_cmd, "build_context", lambda: _context(tmp_path, console))
    monkeypatch.setattr(audit_cmd, "run_audit", lambda **_: 9)

    with pytest.raises(typer.Exit) as excinfo:
        audit_cmd.audit(level=None, json_output=False, minimum=None)

    assert excinfo.value.exit_code == 9


def test_audit_success_does_not_exit(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import jetsam.cli.commands.audit_cmd as audit_cmd

    console = MockConsole()
    monkeypatch.setattr(audit_cmd, "build_context", lambda: _context(tmp_path, console))
    monkeypatch.setattr(audit_cmd, "run_audit", lambda **_: 0)

    audit_cmd.audit(level=None, json_output=False, minimum=None)
