"""Typed configuration loading.

A project can tune jetsam with an optional `.jetsam.toml` at its root:

    [release]
    trunk = "main"

    [tools]
    package_manager = "npm"

Every key is optional; anything missing falls back to the defaults below.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DistConfig",
    "JetsamConfig",
    "ReleaseConfig",
    "ToolsConfig",
    "load_config",
    "load_project_config",
]

CONFIG_FILENAME = ".jetsam.toml"

DEFAULT_TRUNK = "master"
DEFAULT_REMOTE = "origin"
DEFAULT_MANIFEST = "package.json"
DEFAULT_CHANGELOG = "CHANGELOG.md"
DEFAULT_PACKAGE_MANAGER = "yarn"
DEFAULT_PRE_COMMIT_SCRIPT = "pre-commit"
DEFAULT_SEMVER = "semver"
DEFAULT_STANDARD_FILES = ("CHANGELOG.md", "LICENSE", "README.md", ".npmignore")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Branch and file names used by the release workflow."""

    trunk: str = DEFAULT_TRUNK
    remote: str = DEFAULT_REMOTE
    manifest: str = DEFAULT_MANIFEST
    changelog: str = DEFAULT_CHANGELOG


@dataclass(frozen=True, slots=True)
class ToolsConfig:
    """External commands invoked by jetsam."""

    package_manager: str = DEFAULT_PACKAGE_MANAGER
    pre_commit_script: str = DEFAULT_PRE_COMMIT_SCRIPT
    semver: str = DEFAULT_SEMVER


@dataclass(frozen=True, slots=True)
class DistConfig:
    """Files always copied into the distribution when present."""

    standard_files: tuple[str, ...] = DEFAULT_STANDARD_FILES


@dataclass(frozen=True, slots=True)
class JetsamConfig:
    """Main configuration container."""

    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    dist: DistConfig = field(default_factory=DistConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> JetsamConfig:
        """Create JetsamConfig from a mapping (parsed TOML)."""
        release = _table(data, "release")
        tools = _table(data, "tools")
        dist = _table(data, "dist")

        standard_files = get_str_list(dist, "standard_files")
        if "standard_files" in dist and standard_files is None:
            raise ValueError("dist.standard_files must be a list of strings")

        return cls(
            release=ReleaseConfig(
                trunk=_str(release, "release.trunk", DEFAULT_TRUNK),
                remote=_str(release, "release.remote", DEFAULT_REMOTE),
                manifest=_str(release, "release.manifest", DEFAULT_MANIFEST),
                changelog=_str(release, "release.changelog", DEFAULT_CHANGELOG),
            ),
            tools=ToolsConfig(
                package_manager=_str(tools, "tools.package_manager", DEFAULT_PACKAGE_MANAGER),
                pre_commit_script=_str(
                    tools, "tools.pre_commit_script", DEFAULT_PRE_COMMIT_SCRIPT
                ),
                semver=_str(tools, "tools.semver", DEFAULT_SEMVER),
            ),
            dist=DistConfig(
                standard_files=(
                    tuple(standard_files) if standard_files is not None else DEFAULT_STANDARD_FILES
                ),
            ),
        )


def _table(data: Mapping[str, object], key: str) -> StrDict:
    if key not in data:
        return {}
    table = get_table(data, key)
    if table is None:
        raise ValueError(f"[{key}] must be a table")
    return table


def _str(table: Mapping[str, object], dotted: str, default: str) -> str:
    key = dotted.rpartition(".")[2]
    if key not in table:
        return default
    value = get_str(table, key)
    if value is None:
        raise ValueError(f"{dotted} must be a non-empty string")
    return value


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[JetsamConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(JetsamConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(JetsamConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_project_config(project_root: Path) -> Result[JetsamConfig, ConfigError]:
    """Load `.jetsam.toml` from a project root, or the defaults if there is none."""
    path = project_root / CONFIG_FILENAME
    if not path.exists():
        return Ok(JetsamConfig())
    return load_config(path)
