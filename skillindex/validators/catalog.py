"""Consistency checks between plugin.json and the files it references."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Set

from ..logging import get_logger
from ..manifest import ManifestError, read_references, strip_dot_prefix
from ..resolver import AGENT_SUFFIX, SKILL_FILENAME, EntryResolver
from .base import CatalogReport

MARKETPLACE_FILENAME = "marketplace.json"
SKILLS_DIRNAME = "skills"
AGENTS_DIRNAME = "agents"


class CatalogValidator:
    """Checks that manifest references and catalog files agree."""

    def __init__(self, root: Path, manifest_path: Path) -> None:
        self.root = root
        self.manifest_path = manifest_path
        self.resolver = EntryResolver(root)
        self.logger = get_logger("validators.catalog")

    def validate(self) -> CatalogReport:
        report = CatalogReport()

        marketplace = self.manifest_path.parent / MARKETPLACE_FILENAME
        if marketplace.exists():
            try:
                json.loads(marketplace.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                report.error(MARKETPLACE_FILENAME, f"Invalid JSON syntax in {MARKETPLACE_FILENAME}: {exc}")
            else:
                self.logger.debug("%s syntax: OK", MARKETPLACE_FILENAME)

        try:
            references = read_references(self.manifest_path, root=self.root)
        except ManifestError as exc:
            report.error(self.manifest_path.name, str(exc))
            return report
        self.logger.debug("%s syntax: OK", self.manifest_path.name)

        report.version = references.version
        report.skills_registered = len(references.skills)
        report.agents_registered = len(references.agents)
        report.agents_directory = references.agents_directory

        for reference in references.skills:
            descriptor = self.resolver.skill_descriptor(reference)
            if descriptor.is_file():
                self.logger.debug("OK: %s", reference)
            else:
                report.error(reference, f"Missing {SKILL_FILENAME} for: {reference} (expected {descriptor})")

        if references.agents_directory is not None:
            agents_dir = self.root / strip_dot_prefix(references.agents_directory)
            if not agents_dir.is_dir():
                report.error(references.agents_directory, f"Missing agents directory: {agents_dir}")
        else:
            for reference in references.agents:
                descriptor = self.resolver.agent_descriptor(reference)
                if descriptor.is_file():
                    self.logger.debug("OK: %s", reference)
                else:
                    report.error(reference, f"Missing agent file: {descriptor}")

        registered_skills = {_normalise(reference) for reference in references.skills}
        for source in sorted(self._skill_sources()):
            if source not in registered_skills:
                report.warn(source, f"Skill not in {self.manifest_path.name}: ./{source}")

        if references.agents_directory is None:
            registered_agents = {_normalise(reference) for reference in references.agents}
            for agent_file in self._agent_files():
                relative = agent_file.relative_to(self.root).as_posix()
                stem = relative[: -len(AGENT_SUFFIX)]
                if relative not in registered_agents and stem not in registered_agents:
                    report.warn(stem, f"Agent file not in {self.manifest_path.name}: {agent_file.stem}")

        return report

    def _skill_sources(self) -> Set[str]:
        skills_dir = self.root / SKILLS_DIRNAME
        if not skills_dir.is_dir():
            return set()
        return {
            descriptor.parent.relative_to(self.root).as_posix()
            for descriptor in skills_dir.rglob(SKILL_FILENAME)
        }

    def _agent_files(self) -> list[Path]:
        agents_dir = self.root / AGENTS_DIRNAME
        if not agents_dir.is_dir():
            return []
        return sorted(path for path in agents_dir.glob(f"*{AGENT_SUFFIX}") if path.is_file())


def _normalise(reference: str) -> str:
    return strip_dot_prefix(reference.replace("\\", "/")).rstrip("/")


__all__ = ["CatalogValidator"]
