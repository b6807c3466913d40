"""Tests for catalog consistency validation."""

from __future__ import annotations

import pytest

from skillindex.validators import CatalogValidator, ValidationError


def _validate(catalog):
    config = catalog.config()
    return CatalogValidator(config.root, config.manifest_path).validate()


def test_consistent_catalog_passes(catalog) -> None:
    catalog.skill("./skills/csharp/a", "a")
    catalog.agent("./agents/reviewer.md", "reviewer")
    catalog.manifest(skills=["./skills/csharp/a"], agents=["./agents/reviewer"], version="2.0.0")

    report = _validate(catalog)

    assert report.issues == []
    assert report.skills_registered == 1
    assert report.agents_registered == 1
    assert report.version == "2.0.0"
    report.raise_for_errors()


def test_missing_skill_descriptor_is_an_error(catalog) -> None:
    catalog.manifest(skills=["./skills/data/ghost"])

    report = _validate(catalog)

    assert len(report.errors) == 1
    assert "Missing SKILL.md for: ./skills/data/ghost" in report.errors[0].detail
    with pytest.raises(ValidationError) as excinfo:
        report.raise_for_errors()
    assert len(excinfo.value.issues) == 1


def test_missing_agent_file_is_an_error(catalog) -> None:
    catalog.manifest(agents=["./agents/nobody"])
    report = _validate(catalog)
    assert [issue.reference for issue in report.errors] == ["./agents/nobody"]


def test_unregistered_files_are_warnings(catalog) -> None:
    catalog.skill("./skills/csharp/a", "a")
    catalog.skill("./skills/meta/orphan", "orphan")
    catalog.agent("./agents/stray.md", "stray")
    catalog.manifest(skills=["./skills/csharp/a"], agents=[])

    report = _validate(catalog)

    assert report.errors == []
    assert [issue.reference for issue in report.warnings] == ["skills/meta/orphan", "agents/stray"]
    report.raise_for_errors()


def test_directory_mode_checks_directory(catalog) -> None:
    catalog.manifest(agents="./agents/")
    report = _validate(catalog)
    assert len(report.errors) == 1
    assert "Missing agents directory" in report.errors[0].detail
    assert report.summary_lines()[1].endswith("(directory mode: ./agents/)")


def test_invalid_manifest_stops_validation(catalog) -> None:
    path = catalog.root / ".claude-plugin" / "plugin.json"
    path.parent.mkdir(parents=True)
    path.write_text("{", encoding="utf-8")

    report = _validate(catalog)

    assert len(report.issues) == 1
    assert "Invalid JSON syntax" in report.errors[0].detail


def test_invalid_marketplace_json_is_an_error(catalog) -> None:
    catalog.manifest()
    catalog.write({".claude-plugin/marketplace.json": "{ broken"})
    report = _validate(catalog)
    assert [issue.reference for issue in report.errors] == ["marketplace.json"]


def test_summary_lines_report_counts(catalog) -> None:
    catalog.manifest(skills=["./skills/x/y"])
    lines = _validate(catalog).summary_lines()
    assert lines[0] == "Skills registered: 1"
    assert lines[1] == "Agents registered: 0"
    assert lines[2] == "Plugin version: unknown"
    assert "Errors: 1" in lines
