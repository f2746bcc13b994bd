from __future__ import annotations

import json
import os
from pathlib import Path

from jetsam.core.config import DistConfig
from jetsam.services.dist import build_distribution, copy_scripts, strip_dist_prefix


def _write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _manifest(root: Path) -> None:
    data = {
        "name": "pkg",
        "version": "1.0.0",
        "main": "dist/index.js",
        "types": "dist/index.d.ts",
    }
    _write(root / "package.json", json.dumps(data, indent=2))


def test_strip_dist_prefix_removes_every_occurrence() -> None:
    assert strip_dist_prefix('"main": "dist/index.js", "bin": "dist/bin/x"') == (
        '"main": "index.js", "bin": "bin/x"'
    )


def test_manifest_paths_are_rebased(tmp_path: Path) -> None:
    _manifest(tmp_path)

    build_distribution(
        project_root=tmp_path, src_dir=Path("src"), out_dir=Path("dist"), manifest="package.json"
    )

    copied = json.loads((tmp_path / "dist" / "package.json").read_text(encoding="utf-8"))
    assert copied["main"] == "index.js"
    assert copied["types"] == "index.d.ts"


def test_scripts_lose_suffix_and_other_files_are_ignored(tmp_path: Path) -> None:
    _manifest(tmp_path)
    _write(tmp_path / "src" / "bin" / "start.sh", "#!/bin/sh\n")
    _write(tmp_path / "src" / "bin" / "README.txt", "notes")

    build_distribution(
        project_root=tmp_path, src_dir=Path("src"), out_dir=Path("dist"), manifest="package.json"
    )

    out = tmp_path / "dist"
    assert sorted(p.name for p in (out / "bin").iterdir()) == ["start"]
    assert not (out / "config").exists()


def test_nested_scripts_are_flattened(tmp_path: Path) -> None:
    _write(tmp_path / "src" / "bin" / "tools" / "migrate.sh", "#!/bin/sh\n")

    written = copy_scripts(src_dir=tmp_path / "src", out_dir=tmp_path / "out")

    assert written == [tmp_path / "out" / "bin" / "migrate"]


def test_config_tree_is_mirrored(tmp_path: Path) -> None:
    _manifest(tmp_path)
    _write(tmp_path / "src" / "config" / "default.json", "{}")
    _write(tmp_path / "src" / "config" / "env" / "prod.json", '{"a": 1}')

    build_distribution(
        project_root=tmp_path, src_dir=Path("src"), out_dir=Path("dist"), manifest="package.json"
    )

    out = tmp_path / "dist" / "config"
    assert (out / "default.json").read_text(encoding="utf-8") == "{}"
    assert (out / "env" / "prod.json").read_text(encoding="utf-8") == '{"a": 1}'


def test_missing_standard_files_are_skipped(tmp_path: Path) -> None:
    _manifest(tmp_path)
    _write(tmp_path / "LICENSE", "MIT")

    written = build_distribution(
        project_root=tmp_path, src_dir=Path("src"), out_dir=Path("dist"), manifest="package.json"
    )

    out = tmp_path / "dist"
    assert written == [out / "package.json", out / "LICENSE"]
    assert not (out / "README.md").exists()


def test_extra_files_are_copied_with_timestamps(tmp_path: Path) -> None:
    _manifest(tmp_path)
    extra = _write(tmp_path / "docs" / "NOTICE", "notice")
    os.utime(extra, (1_000_000_000, 1_000_000_000))

    build_distribution(
        project_root=tmp_path,
        src_dir=Path("src"),
        out_dir=Path("dist"),
        manifest="package.json",
        extra_files=[Path("docs/NOTICE")],
    )

    copied = tmp_path / "dist" / "NOTICE"
    assert copied.read_text(encoding="utf-8") == "notice"
    assert copied.stat().st_mtime == extra.stat().st_mtime


def test_standard_files_come_from_config(tmp_path: Path) -> None:
    _manifest(tmp_path)
    _write(tmp_path / "README.md", "readme")
    _write(tmp_path / "AUTHORS", "me")

    build_distribution(
        project_root=tmp_path,
        src_dir=Path("src"),
        out_dir=Path("dist"),
        manifest="package.json",
        config=DistConfig(standard_files=("AUTHORS",)),
    )

    out = tmp_path / "dist"
    assert (out / "AUTHORS").exists()
    assert not (out / "README.md").exists()
