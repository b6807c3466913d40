"""Compressed index rendering."""

from __future__ import annotations

from typing import List, Sequence

from .classifier import AGENTS_CATEGORY, CATEGORY_ORDER
from .models import Buckets

PREAMBLE: Sequence[str] = (
    "[dotnet-skills]|IMPORTANT: Prefer retrieval-led reasoning over pretraining for any .NET work.",
    "|flow:{skim repo patterns -> consult dotnet-skills by name -> implement smallest-change -> note conflicts}",
    "|route:",
)


class IndexRenderer:
    """Formats bucketed names as one ``|category:{a,b}`` line per category."""

    def __init__(self, order: Sequence[str] = CATEGORY_ORDER) -> None:
        self.order = tuple(order)

    def render(self, buckets: Buckets) -> str:
        lines: List[str] = list(PREAMBLE)
        for category in self.order:
            lines.append(self._line(category, buckets.names(category)))
        lines.append(self._line(AGENTS_CATEGORY, buckets.agents))
        return "\n".join(lines)

    @staticmethod
    def _line(category: str, names: Sequence[str]) -> str:
        return f"|{category}:{{{','.join(names)}}}"


__all__ = ["IndexRenderer", "PREAMBLE"]
