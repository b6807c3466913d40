"""Core validation data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

ERROR = "error"
WARNING = "warning"


@dataclass
class ValidationIssue:
    """Represents a single catalog consistency finding."""

    severity: str
    reference: str
    detail: str

    def __str__(self) -> str:
        return f"{self.severity.upper()}: {self.detail}"


class ValidationError(RuntimeError):
    """Raised when catalog validation reports one or more errors."""

    def __init__(self, message: str, issues: Sequence[ValidationIssue]) -> None:
        super().__init__(message)
        self.issues = list(issues)


@dataclass
class CatalogReport:
    """Outcome of a catalog validation run."""

    issues: List[ValidationIssue] = field(default_factory=list)
    skills_registered: int = 0
    agents_registered: int = 0
    agents_directory: Optional[str] = None
    version: Optional[str] = None

    @property
    def errors(self) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == WARNING]

    def error(self, reference: str, detail: str) -> None:
        self.issues.append(ValidationIssue(severity=ERROR, reference=reference, detail=detail))

    def warn(self, reference: str, detail: str) -> None:
        self.issues.append(ValidationIssue(severity=WARNING, reference=reference, detail=detail))

    def raise_for_errors(self) -> None:
        errors = self.errors
        if errors:
            raise ValidationError(f"Catalog validation failed with {len(errors)} error(s)", errors)

    def summary_lines(self) -> List[str]:
        lines = [f"Skills registered: {self.skills_registered}"]
        if self.agents_directory is not None:
            lines.append(
                f"Agents registered: {self.agents_registered} (directory mode: {self.agents_directory})"
            )
        else:
            lines.append(f"Agents registered: {self.agents_registered}")
        lines.append(f"Plugin version: {self.version or 'unknown'}")
        if self.errors:
            lines.append(f"Errors: {len(self.errors)}")
        if self.warnings:
            lines.append(f"Warnings: {len(self.warnings)}")
        return lines
