"""Resolve manifest references to their declared display names."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Optional

from .logging import get_logger
from .manifest import strip_dot_prefix
from .models import Entry, EntryKind

SKILL_FILENAME = "SKILL.md"
AGENT_SUFFIX = ".md"

_NAME_LINE = re.compile(r"^\s*name:\s*(.*)$")


def extract_name(text: str) -> Optional[str]:
    """Return the value of the first ``name:`` line, or None when absent.

    Only the first declaration counts; descriptors often embed example YAML
    further down the body.
    """
    for line in text.splitlines():
        match = _NAME_LINE.match(line)
        if match:
            return match.group(1).rstrip()
    return None


class EntryResolver:
    """Maps references to descriptor files and reads their display names."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.logger = get_logger("resolver")

    def skill_descriptor(self, reference: str) -> Path:
        return self.root / strip_dot_prefix(reference).rstrip("/") / SKILL_FILENAME

    def agent_descriptor(self, reference: str) -> Path:
        candidate = self.root / strip_dot_prefix(reference)
        if candidate.is_file():
            return candidate
        return candidate.with_name(candidate.name + AGENT_SUFFIX)

    def resolve(self, reference: str, kind: EntryKind) -> Entry:
        if kind is EntryKind.SKILL:
            descriptor = self.skill_descriptor(reference)
        else:
            descriptor = self.agent_descriptor(reference)
        return Entry(reference=reference, display_name=self._read_name(reference, descriptor), kind=kind)

    def resolve_all(self, references: Iterable[str], kind: EntryKind) -> List[Entry]:
        return [self.resolve(reference, kind) for reference in references]

    def _read_name(self, reference: str, descriptor: Path) -> str:
        try:
            text = descriptor.read_text(encoding="utf-8")
        except FileNotFoundError:
            self.logger.warning("Missing descriptor for %s (expected %s)", reference, descriptor)
            return ""
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.warning("Cannot read descriptor for %s: %s", reference, exc)
            return ""
        name = extract_name(text)
        if name is None:
            self.logger.warning("No name: line in %s; using an empty display name", descriptor)
            return ""
        return name


__all__ = ["AGENT_SUFFIX", "EntryResolver", "SKILL_FILENAME", "extract_name"]
