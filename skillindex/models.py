"""Core data models shared across skillindex components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class EntryKind(str, Enum):
    """Whether a manifest reference points at a skill or an agent."""

    SKILL = "skill"
    AGENT = "agent"


@dataclass(frozen=True)
class Entry:
    """A manifest reference resolved to its declared display name."""

    reference: str
    display_name: str
    kind: EntryKind


@dataclass
class Buckets:
    """Display names grouped per category, in manifest order."""

    categories: Dict[str, List[str]] = field(default_factory=dict)
    agents: List[str] = field(default_factory=list)

    def names(self, category: str) -> List[str]:
        return self.categories.get(category, [])
