"""Managed marker utilities for the README index region."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import DEFAULT_BEGIN_MARKER, DEFAULT_END_MARKER


class MarkerError(RuntimeError):
    """Raised when the target document lacks a unique, ordered marker pair."""


@dataclass
class MarkerManager:
    """Replaces the BEGIN..END span of a document, leaving other bytes intact."""

    begin: str = DEFAULT_BEGIN_MARKER
    end: str = DEFAULT_END_MARKER
    fence: str = "markdown"

    def wrap(self, body: str) -> str:
        """Return the marker-delimited block holding ``body`` in a fenced code block."""
        return f"{self.begin}\n```{self.fence}\n{body.strip()}\n```\n{self.end}"

    def replace(self, document: str, body: str) -> str:
        """Return ``document`` with the managed region rebuilt around ``body``."""
        begin_index = self._locate(document, self.begin)
        end_index = self._locate(document, self.end)
        if end_index < begin_index:
            raise MarkerError(f"End marker appears before begin marker: {self.end}")
        tail = end_index + len(self.end)
        return f"{document[:begin_index]}{self.wrap(body)}{document[tail:]}"

    @staticmethod
    def _locate(document: str, marker: str) -> int:
        count = document.count(marker)
        if count == 0:
            raise MarkerError(f"Marker not found: {marker}")
        if count > 1:
            raise MarkerError(f"Marker appears {count} times (expected once): {marker}")
        return document.index(marker)


def write_atomic(path: Path, data: str) -> None:
    """Write data via a temp file in the same directory and rename it over ``path``."""
    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
            newline="",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        if path.exists():
            os.chmod(tmp_path, path.stat().st_mode & 0o777)
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


__all__ = ["MarkerError", "MarkerManager", "write_atomic"]
