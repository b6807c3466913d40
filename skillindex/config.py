"""Configuration loading for skillindex (.skillindex.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".skillindex.yml"
DEFAULT_MANIFEST = ".claude-plugin/plugin.json"
DEFAULT_README = "README.md"
DEFAULT_BEGIN_MARKER = "<!-- BEGIN DOTNET-SKILLS COMPRESSED INDEX -->"
DEFAULT_END_MARKER = "<!-- END DOTNET-SKILLS COMPRESSED INDEX -->"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class MarkerConfig:
    """Literal marker lines delimiting the managed README region."""

    begin: str = DEFAULT_BEGIN_MARKER
    end: str = DEFAULT_END_MARKER


@dataclass
class SkillIndexConfig:
    """Represents the settings defined in .skillindex.yml."""

    root: Path
    manifest_path: Path
    readme_path: Path
    markers: MarkerConfig = field(default_factory=MarkerConfig)


def load_config(config_path: Path) -> SkillIndexConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return _defaults(root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    manifest = _as_str(data.get("manifest")) or DEFAULT_MANIFEST
    readme = _as_str(data.get("readme")) or DEFAULT_README

    markers = MarkerConfig()
    marker_data = _as_dict(data.get("markers"))
    if marker_data:
        markers.begin = _as_str(marker_data.get("begin")) or DEFAULT_BEGIN_MARKER
        markers.end = _as_str(marker_data.get("end")) or DEFAULT_END_MARKER
    if markers.begin == markers.end:
        raise ConfigError("markers.begin and markers.end must differ")

    return SkillIndexConfig(
        root=root,
        manifest_path=root / manifest,
        readme_path=root / readme,
        markers=markers,
    )


def _defaults(root: Path) -> SkillIndexConfig:
    return SkillIndexConfig(
        root=root,
        manifest_path=root / DEFAULT_MANIFEST,
        readme_path=root / DEFAULT_README,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None
