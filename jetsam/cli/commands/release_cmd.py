from __future__ import annotations

import typer

from jetsam.cli.context import build_context
from jetsam.core.result import Err
from jetsam.output.console import ConsoleProtocol
from jetsam.services.release import ReleaseError, ReleaseOptions, ReleaseWorkflow


def release(
    dry_run: bool = typer.Option(
        False, "--dry-run", "-d", help="Perform a dry-run of the release"
    ),
    ignore_changelog: bool = typer.Option(
        False,
        "--ignore-changelog",
        help="Do not enforce an entry for the version in the CHANGELOG",
    ),
) -> None:
    """Creates a release for the package."""
    ctx = build_context()
    workflow = ReleaseWorkflow(
        project_root=ctx.project_root,
        config=ctx.config,
        console=ctx.console,
        options=ReleaseOptions(dry_run=dry_run, ignore_changelog=ignore_changelog),
    )

    result = workflow.run()
    if isinstance(result, Err):
        report_release_error(result.error, ctx.console)
        raise typer.Exit(code=result.error.returncode)


def report_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    if error.is_declined:
        console.print(error.message)
        return

    console.error(error.message)
    if error.hint:
        console.error(error.hint)
