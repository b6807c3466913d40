"""Pipeline orchestration for generate/validate flows."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .classifier import bucket_entries
from .config import SkillIndexConfig, load_config
from .logging import get_logger
from .manifest import read_references
from .models import Buckets, Entry, EntryKind
from .postproc.markers import MarkerManager, write_atomic
from .render import IndexRenderer
from .resolver import EntryResolver
from .validators import CatalogReport, CatalogValidator


class DocumentError(RuntimeError):
    """Raised when the target document cannot be read."""


@dataclass
class IndexResult:
    """Rendered index plus the entries it was built from."""

    text: str
    entries: List[Entry]
    buckets: Buckets

    @property
    def unresolved(self) -> List[Entry]:
        return [entry for entry in self.entries if not entry.display_name]


@dataclass
class PatchOutcome:
    """Result of splicing the index into the target document."""

    path: Path
    changed: bool
    diff: str
    dry_run: bool
    index: IndexResult = field(repr=False)


class Orchestrator:
    """Coordinates manifest reading, resolution, classification, and rendering."""

    def __init__(
        self,
        renderer: IndexRenderer | None = None,
        marker_manager: MarkerManager | None = None,
    ) -> None:
        self.renderer = renderer or IndexRenderer()
        self._marker_manager = marker_manager
        self.logger = get_logger("orchestrator")

    def load_config(
        self,
        path: str,
        *,
        manifest: Optional[str] = None,
        readme: Optional[str] = None,
    ) -> SkillIndexConfig:
        """Load .skillindex.yml for ``path`` and apply command-line overrides."""
        root = Path(path).expanduser().resolve()
        config = load_config(root)
        if manifest:
            config.manifest_path = (root / manifest).resolve()
        if readme:
            config.readme_path = (root / readme).resolve()
        return config

    def _build_index(self, config: SkillIndexConfig) -> IndexResult:
        """Run the read-only part of the pipeline and return the rendered index."""
        self.logger.debug("Reading manifest %s", config.manifest_path)
        references = read_references(config.manifest_path, root=config.root)

        resolver = EntryResolver(config.root)
        entries = resolver.resolve_all(references.skills, EntryKind.SKILL)
        entries.extend(resolver.resolve_all(references.agents, EntryKind.AGENT))

        buckets = bucket_entries(entries)
        result = IndexResult(text=self.renderer.render(buckets), entries=entries, buckets=buckets)
        if result.unresolved:
            self.logger.warning(
                "%d entr%s resolved to an empty display name",
                len(result.unresolved),
                "y" if len(result.unresolved) == 1 else "ies",
            )
        return result

    def run_generate(self, config: SkillIndexConfig) -> IndexResult:
        """Return the rendered index without touching any file."""
        return self._build_index(config)

    def run_update(self, config: SkillIndexConfig, *, dry_run: bool = False) -> PatchOutcome:
        """Render the index and splice it into the configured README.

        Raises MarkerError when the markers are missing or duplicated; the
        document is left untouched in that case.
        """
        index = self._build_index(config)
        readme_path = config.readme_path
        if not readme_path.exists():
            raise FileNotFoundError(f"README not found at {readme_path}")

        original = _read_document(readme_path)
        manager = self._marker_manager or MarkerManager(
            begin=config.markers.begin, end=config.markers.end
        )
        updated = manager.replace(original, index.text)

        if updated == original:
            self.logger.info("Index already up to date in %s; skipping write", readme_path)
            return PatchOutcome(path=readme_path, changed=False, diff="", dry_run=dry_run, index=index)

        diff_text = _render_diff(original, updated, readme_path.name)
        if dry_run:
            self.logger.info("Dry-run completed; %s not written", readme_path)
            return PatchOutcome(path=readme_path, changed=True, diff=diff_text, dry_run=True, index=index)

        write_atomic(readme_path, updated)
        self.logger.info("Index written to %s", readme_path)
        return PatchOutcome(path=readme_path, changed=True, diff=diff_text, dry_run=False, index=index)

    def run_validate(self, config: SkillIndexConfig) -> CatalogReport:
        """Check the manifest against the files present in the catalog."""
        report = CatalogValidator(config.root, config.manifest_path).validate()
        for issue in report.warnings:
            self.logger.warning(issue.detail)
        for issue in report.errors:
            self.logger.error(issue.detail)
        return report


def _read_document(path: Path) -> str:
    # newline="" keeps CRLF and other line endings byte-for-byte.
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentError(f"Failed to read {path}: {exc}") from exc


def _render_diff(original: str, updated: str, name: str) -> str:
    diff = difflib.unified_diff(
        original.splitlines(),
        updated.splitlines(),
        fromfile=f"{name} (current)",
        tofile=f"{name} (updated)",
        lineterm="",
    )
    return "\n".join(diff)


__all__ = ["DocumentError", "IndexResult", "Orchestrator", "PatchOutcome"]
