"""Ordered path rules that assign skills to display categories."""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Iterable, Optional, Sequence

from .logging import get_logger
from .manifest import strip_dot_prefix
from .models import Buckets, Entry, EntryKind

AGENTS_CATEGORY = "agents"

# Display order of the rendered index; not alphabetical, not manifest-derived.
CATEGORY_ORDER: Sequence[str] = (
    "csharp",
    "aspnetcore-web",
    "data",
    "di-config",
    "testing",
    "dotnet",
    "quality-gates",
    "meta",
)

_SKILLS_PREFIX = "skills/"

logger = get_logger("classifier")


@dataclass(frozen=True)
class ClassificationRule:
    """Associates reference glob patterns with a display category."""

    category: str
    patterns: Sequence[str]

    def matches(self, key: str) -> bool:
        return any(fnmatchcase(key, pattern) for pattern in self.patterns)


# Evaluated top to bottom; the first matching rule wins.
RULES: Sequence[ClassificationRule] = (
    ClassificationRule(category="csharp", patterns=("csharp/*",)),
    ClassificationRule(category="aspnetcore-web", patterns=("aspire/*", "aspnetcore/*")),
    ClassificationRule(category="data", patterns=("data/*",)),
    ClassificationRule(category="di-config", patterns=("microsoft-extensions/*",)),
    # Pinned ahead of the broader testing/ and dotnet/ rules.
    ClassificationRule(category="quality-gates", patterns=("dotnet/slopwatch", "testing/crap-analysis")),
    ClassificationRule(category="testing", patterns=("testing/*", "playwright/*")),
    ClassificationRule(category="dotnet", patterns=("dotnet/*",)),
    ClassificationRule(category="meta", patterns=("meta/*",)),
)


def reference_key(reference: str) -> str:
    """Normalise a skill reference to the form the rule patterns expect."""
    key = strip_dot_prefix(reference.replace("\\", "/")).rstrip("/")
    if key.startswith(_SKILLS_PREFIX):
        key = key[len(_SKILLS_PREFIX):]
    return key


def classify(reference: str, rules: Sequence[ClassificationRule] = RULES) -> Optional[str]:
    """Return the category of the first matching rule, or None when nothing matches."""
    key = reference_key(reference)
    for rule in rules:
        if rule.matches(key):
            return rule.category
    return None


def bucket_entries(
    entries: Iterable[Entry],
    *,
    rules: Sequence[ClassificationRule] = RULES,
    order: Sequence[str] = CATEGORY_ORDER,
) -> Buckets:
    """Group display names by category, preserving manifest order.

    Skills without a matching rule are left out of every bucket.
    """
    buckets = Buckets(categories={category: [] for category in order})
    for entry in entries:
        if entry.kind is EntryKind.AGENT:
            buckets.agents.append(entry.display_name)
            continue
        category = classify(entry.reference, rules)
        if category is None:
            logger.debug("No category rule matches %s; omitting it from the index", entry.reference)
            continue
        buckets.categories.setdefault(category, []).append(entry.display_name)
    return buckets


__all__ = [
    "AGENTS_CATEGORY",
    "CATEGORY_ORDER",
    "ClassificationRule",
    "RULES",
    "bucket_entries",
    "classify",
    "reference_key",
]
