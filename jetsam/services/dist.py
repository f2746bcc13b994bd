"""Distribution assembly.

Copies the files a published package needs alongside its compiled output:

- the manifest, with ``dist/`` path prefixes removed since it will sit at the
  root of the distribution
- auxiliary files (changelog, license, readme, ...) plus any extras
- ``<src>/config/**`` mirrored to ``<out>/config/**``
- ``<src>/bin/**/*.sh`` flattened into ``<out>/bin/`` without the ``.sh``
  suffix so the scripts can be invoked by name

Missing optional inputs are skipped. Filesystem errors are raised.
"""

from __future__ import annotations

import shutil
from collections.abc import Iterable
from pathlib import Path

from jetsam.core.config import DistConfig

SCRIPT_SUFFIX = ".sh"


def strip_dist_prefix(text: str) -> str:
    return text.replace("dist/", "")


def _copy(src: Path, dst: Path) -> Path:
    dst.parent.mkdir(parents=True, exist_ok=True)
    if src.is_dir():
        shutil.copytree(src, dst, dirs_exist_ok=True)
    else:
        shutil.copy2(src, dst)
    return dst


def copy_manifest(*, manifest: Path, out_dir: Path) -> Path:
    dst = out_dir / manifest.name
    dst.write_text(strip_dist_prefix(manifest.read_text(encoding="utf-8")), encoding="utf-8")
    return dst


def copy_auxiliary_files(*, files: Iterable[Path], out_dir: Path) -> list[Path]:
    copied: list[Path] = []
    for src in files:
        if not src.exists():
            continue
        copied.append(_copy(src, out_dir / src.name))
    return copied


def copy_config_tree(*, src_dir: Path, out_dir: Path) -> list[Path]:
    config_dir = src_dir / "config"
    if not config_dir.is_dir():
        return []

    copied: list[Path] = []
    for src in sorted(config_dir.rglob("*")):
        if not src.is_file():
            continue
        rel = src.relative_to(config_dir)
        copied.append(_copy(src, out_dir / "config" / rel))
    return copied


def copy_scripts(*, src_dir: Path, out_dir: Path) -> list[Path]:
    bin_dir = src_dir / "bin"
    if not bin_dir.is_dir():
        return []

    scripts = [p for p in sorted(bin_dir.rglob(f"*{SCRIPT_SUFFIX}")) if p.is_file()]
    copied: list[Path] = []
    for src in scripts:
        copied.append(_copy(src, out_dir / "bin" / src.name.removesuffix(SCRIPT_SUFFIX)))
    return copied


def build_distribution(
    *,
    project_root: Path,
    src_dir: Path,
    out_dir: Path,
    manifest: str,
    extra_files: Iterable[Path] = (),
    config: DistConfig | None = None,
) -> list[Path]:
    """Assemble the distribution directory.

    Relative paths are resolved against ``project_root``.

    Returns:
        Every file or directory written, in copy order.
    """
    config = config or DistConfig()
    src_dir = project_root / src_dir
    out_dir = project_root / out_dir
    out_dir.mkdir(parents=True, exist_ok=True)

    files = [project_root / f for f in extra_files]
    files += [project_root / name for name in config.standard_files]

    written = [copy_manifest(manifest=project_root / manifest, out_dir=out_dir)]
    written += copy_auxiliary_files(files=files, out_dir=out_dir)
    written += copy_config_tree(src_dir=src_dir, out_dir=out_dir)
    written += copy_scripts(src_dir=src_dir, out_dir=out_dir)
    return written
