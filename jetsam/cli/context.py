from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from jetsam.core.config import JetsamConfig, load_project_config
from jetsam.core.errors import ErrorCode
from jetsam.core.result import Err
from jetsam.output.console import ConsoleProtocol, RichConsole

PROJECT_ENV = "JETSAM_PROJECT"


@dataclass(frozen=True, slots=True)
class CLIContext:
    project_root: Path
    config: JetsamConfig
    console: ConsoleProtocol


def project_root() -> Path:
    """Directory commands operate on: ``--project`` if given, else the cwd."""
    env = os.environ.get(PROJECT_ENV)
    if env:
        return Path(env)
    return Path.cwd()


def build_context() -> CLIContext:
    root = project_root()
    config = load_project_config(root)
    if isinstance(config, Err):
        typer.echo(f"Error: {config.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    return CLIContext(
        project_root=root,
        config=config.value,
        console=RichConsole(),
    )
