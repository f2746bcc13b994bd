from __future__ import annotations

import typer

from jetsam.cli.context import build_context
from jetsam.services.audit import Severity, run_audit


def audit(
    level: Severity | None = typer.Option(
        None, "--level", "-l", help="Only issues at this severity or higher are shown"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output issues as JSON"),
    minimum: Severity | None = typer.Option(
        None,
        "--minimum",
        "-m",
        help="The audit only fails for issues at this severity or higher",
    ),
) -> None:
    """Perform an audit of the package dependencies."""
    ctx = build_context()
    status = run_audit(
        project_root=ctx.project_root,
        package_manager=ctx.config.tools.package_manager,
        console=ctx.console,
        level=level,
        json_output=json_output,
        minimum=minimum,
    )
    if status != 0:
        raise typer.Exit(code=status)
