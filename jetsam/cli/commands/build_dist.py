from __future__ import annotations

from pathlib import Path

import typer

from jetsam.cli.context import build_context
from jetsam.output.console import Style
from jetsam.services.dist import build_distribution


def build_dist(
    out: Path = typer.Option(
        Path("dist"), "--out", "-o", help="The output directory to copy files to"
    ),
    files: list[Path] = typer.Option(
        [], "--files", "-f", help="Files to copy in addition to the standard files (repeatable)"
    ),
    src: Path = typer.Option(
        Path("src"), "--src", "-s", help="Directory containing the source files"
    ),
) -> None:
    """Copy auxiliary files into the build area."""
    ctx = build_context()
    written = build_distribution(
        project_root=ctx.project_root,
        src_dir=src,
        out_dir=out,
        manifest=ctx.config.release.manifest,
        extra_files=files,
        config=ctx.config.dist,
    )
    for p in written:
        ctx.console.print(str(p), Style.DIM)
