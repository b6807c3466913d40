"""Manifest reader for plugin.json skill and agent references."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from .logging import get_logger

logger = get_logger("manifest")


class ManifestError(RuntimeError):
    """Raised when the manifest cannot be read or has the wrong structure."""


class PluginManifest(BaseModel):
    """Schema for the parts of plugin.json the index depends on."""

    model_config = ConfigDict(extra="allow")

    skills: List[str] = Field(default_factory=list)
    agents: Union[List[str], str] = Field(default_factory=list)

    @property
    def version(self) -> Optional[str]:
        value = (self.model_extra or {}).get("version")
        return None if value is None else str(value)


@dataclass
class ManifestReferences:
    """Ordered skill and agent references as declared in the manifest."""

    skills: List[str] = field(default_factory=list)
    agents: List[str] = field(default_factory=list)
    agents_directory: Optional[str] = None
    version: Optional[str] = None


def load_manifest(path: Path) -> PluginManifest:
    """Parse and validate the manifest file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Invalid JSON syntax in {path.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"{path.name} must contain a JSON object at the root")
    try:
        return PluginManifest.model_validate(data)
    except PydanticValidationError as exc:
        raise ManifestError(f"Unexpected structure in {path.name}: {exc}") from exc


def read_references(path: Path, *, root: Path) -> ManifestReferences:
    """Return skill and agent references in declaration order.

    References are neither de-duplicated nor checked for existence. When
    ``agents`` is a directory string, the ``*.md`` files inside it are listed
    in name order as manifest-style references.
    """
    manifest = load_manifest(path)
    references = ManifestReferences(skills=list(manifest.skills), version=manifest.version)

    if isinstance(manifest.agents, str):
        references.agents_directory = manifest.agents
        references.agents = _expand_agents_directory(root, manifest.agents)
    else:
        references.agents = list(manifest.agents)

    logger.debug(
        "Manifest %s lists %d skills and %d agents",
        path,
        len(references.skills),
        len(references.agents),
    )
    return references


def _expand_agents_directory(root: Path, directory: str) -> List[str]:
    agents_dir = root / strip_dot_prefix(directory)
    if not agents_dir.is_dir():
        logger.warning("Agents directory %s does not exist", agents_dir)
        return []
    return [
        "./" + file.relative_to(root).as_posix()
        for file in sorted(agents_dir.glob("*.md"))
        if file.is_file()
    ]


def strip_dot_prefix(reference: str) -> str:
    """Drop a leading "./" from a manifest reference."""
    return reference[2:] if reference.startswith("./") else reference


__all__ = [
    "ManifestError",
    "ManifestReferences",
    "PluginManifest",
    "load_manifest",
    "read_references",
    "strip_dot_prefix",
]
