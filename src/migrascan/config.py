"""Global configuration — XDG paths, env vars, and per-project scan settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from migrascan.scanner.models import ScanMode, ScanOptions
from migrascan.workspace import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_RESULTS

PROJECT_FILE_NAME = ".migrascan.yaml"


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "migrascan"
    return Path.home() / ".config" / "migrascan"


@dataclass
class MigraScanConfig:
    """Application-wide configuration."""

    config_dir: Path = field(default_factory=_default_config_dir)
    max_files: int = DEFAULT_MAX_RESULTS
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    extra_ignore: list[str] = field(default_factory=list)
    pattern_files: list[Path] = field(default_factory=list)
    verbose: bool = False

    @classmethod
    def load(cls) -> MigraScanConfig:
        """Load config from environment variables with XDG defaults."""
        config = cls()

        env_max_files = os.environ.get("MIGRASCAN_MAX_FILES")
        if env_max_files:
            config.max_files = int(env_max_files)

        env_max_size = os.environ.get("MIGRASCAN_MAX_FILE_SIZE")
        if env_max_size:
            config.max_file_size = int(env_max_size)

        # Comma-separated globs added to every scan's ignore list
        env_ignore = os.environ.get("MIGRASCAN_IGNORE")
        if env_ignore:
            config.extra_ignore = [
                glob.strip() for glob in env_ignore.split(",") if glob.strip()
            ]

        # User-wide custom patterns, if present
        user_patterns = config.config_dir / "patterns.yaml"
        if user_patterns.is_file():
            config.pattern_files.append(user_patterns)

        return config


@dataclass(frozen=True)
class ProjectSettings:
    """Scan settings read from a project's ``.migrascan.yaml``."""

    mode: ScanMode | None = None
    languages: tuple[str, ...] = ()
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    ignore: tuple[str, ...] = ()
    patterns: tuple[Path, ...] = ()

    def to_options(self, default_mode: ScanMode = ScanMode.PATTERN) -> ScanOptions:
        return ScanOptions(
            mode=self.mode or default_mode,
            languages=frozenset(self.languages),
            include_globs=self.include,
            exclude_globs=self.exclude,
        )


def load_project_file(path: str | Path) -> ProjectSettings:
    """Load a ``.migrascan.yaml`` file.

    Relative ``patterns`` paths resolve against the file's directory.
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"{path}: invalid YAML: {e}") from e
    if data is None:
        return ProjectSettings()
    if not isinstance(data, dict):
        raise ValueError(f"{path}: project settings must be a mapping")

    mode_value = data.get("mode")
    mode = ScanMode(mode_value) if mode_value else None

    pattern_paths = tuple(
        p if p.is_absolute() else path.parent / p
        for p in (Path(raw) for raw in _as_list(data.get("patterns")))
    )

    return ProjectSettings(
        mode=mode,
        languages=tuple(_as_list(data.get("languages"))),
        include=tuple(_as_list(data.get("include"))),
        exclude=tuple(_as_list(data.get("exclude"))),
        ignore=tuple(_as_list(data.get("ignore"))),
        patterns=pattern_paths,
    )


def _as_list(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(v) for v in value]
    raise ValueError(f"Expected a string or list, got {type(value).__name__}")
