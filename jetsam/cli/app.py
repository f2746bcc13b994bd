from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import typer

from jetsam import __version__
from jetsam.cli.commands.audit_cmd import audit
from jetsam.cli.commands.build_dist import build_dist
from jetsam.cli.commands.release_cmd import release
from jetsam.cli.context import PROJECT_ENV
from jetsam.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Command name -> handler. Help comes from the handler's docstring and the
# options from its signature.
COMMANDS: dict[str, Callable[..., None]] = {
    "audit": audit,
    "build-dist": build_dist,
    "release": release,
}

for _name, _handler in COMMANDS.items():
    app.command(_name)(_handler)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True, help="Show version and exit."
    ),
    project: Path | None = typer.Option(
        None,
        "--project",
        help="Project root (defaults to the current directory)",
    ),
) -> None:
    del version
    if project is not None:
        root = project.expanduser().resolve()
        if not root.is_dir():
            typer.echo(f"Error: --project '{root}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.FAILURE))
        os.environ[PROJECT_ENV] = str(root)


def main() -> None:
    try:
        app()
    except Exception as e:  # noqa: BLE001
        typer.echo(f"Error: Failed to execute jetsam command: {e}", err=True)
        raise SystemExit(int(ErrorCode.FAILURE)) from e
