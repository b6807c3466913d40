"""CLI behaviour tests."""

from __future__ import annotations

import pytest

from skillindex.cli import _build_parser, main
from skillindex.config import DEFAULT_BEGIN_MARKER


def test_cli_accepts_verbose_before_and_after_command() -> None:
    parser = _build_parser()
    assert parser.parse_args(["--verbose", "generate"]).verbose is True
    assert parser.parse_args(["generate", "--verbose"]).verbose is True


def test_cli_generate_defaults_to_print_mode() -> None:
    args = _build_parser().parse_args(["generate"])
    assert args.command == "generate"
    assert args.update_readme is False
    assert args.dry_run is False
    assert args.path == "."


def test_cli_accepts_update_readme_flag() -> None:
    args = _build_parser().parse_args(["generate", "some/catalog", "--update-readme", "--readme", "docs/README.md"])
    assert args.update_readme is True
    assert args.path == "some/catalog"
    assert args.readme == "docs/README.md"


def test_main_prints_index_without_touching_files(catalog, capsys) -> None:
    catalog.skill("./skills/csharp/a", "alpha")
    catalog.manifest(skills=["./skills/csharp/a"])
    readme = catalog.readme()
    original = readme.read_bytes()

    main(["generate", str(catalog.path())])

    out = capsys.readouterr().out
    assert out.startswith("[dotnet-skills]|IMPORTANT")
    assert "|csharp:{alpha}\n" in out
    assert out.endswith("|agents:{}\n")
    assert readme.read_bytes() == original


def test_main_update_readme_writes_region(catalog, capsys) -> None:
    catalog.skill("./skills/csharp/a", "alpha")
    catalog.manifest(skills=["./skills/csharp/a"])
    readme = catalog.readme()

    main(["generate", str(catalog.path()), "--update-readme"])

    assert "Index updated in" in capsys.readouterr().out
    assert "|csharp:{alpha}" in readme.read_text(encoding="utf-8")


def test_main_exits_non_zero_when_markers_missing(catalog, capsys) -> None:
    catalog.manifest(skills=[])
    readme = catalog.root / "README.md"
    readme.write_text("# No markers\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(catalog.path()), "--update-readme"])

    assert excinfo.value.code == 1
    assert DEFAULT_BEGIN_MARKER in capsys.readouterr().err
    assert readme.read_text(encoding="utf-8") == "# No markers\n"


def test_main_exits_non_zero_on_malformed_manifest(catalog) -> None:
    catalog.write({".claude-plugin/plugin.json": "not json"})
    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(catalog.path())])
    assert excinfo.value.code == 1


def test_main_completes_with_unresolved_entry(catalog, capsys) -> None:
    catalog.manifest(skills=["./skills/meta/missing"])
    main(["generate", str(catalog.path())])
    captured = capsys.readouterr()
    assert "|meta:{}" in captured.out
    assert "Missing descriptor" in captured.err


def test_main_validate_reports_errors(catalog, capsys) -> None:
    catalog.manifest(skills=["./skills/meta/missing"])
    with pytest.raises(SystemExit) as excinfo:
        main(["validate", str(catalog.path())])
    assert excinfo.value.code == 1
    assert "Skills registered: 1" in capsys.readouterr().out


def test_main_validate_passes(catalog, capsys) -> None:
    catalog.skill("./skills/meta/a", "a")
    catalog.manifest(skills=["./skills/meta/a"])
    main(["validate", str(catalog.path())])
    assert "Validation passed!" in capsys.readouterr().out


def test_main_exits_non_zero_when_readme_cannot_be_written(catalog, capsys, monkeypatch) -> None:
    catalog.skill("./skills/csharp/a", "alpha")
    catalog.manifest(skills=["./skills/csharp/a"])
    readme = catalog.readme()
    original = readme.read_bytes()

    def _deny_write(path, data):
        raise PermissionError("permission denied")

    monkeypatch.setattr("skillindex.orchestrator.write_atomic", _deny_write)

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(catalog.path()), "--update-readme"])

    assert excinfo.value.code == 1
    assert "Failed to write" in capsys.readouterr().err
    assert readme.read_bytes() == original


def test_main_reports_unreadable_readme_as_read_failure(catalog, capsys) -> None:
    catalog.manifest(skills=[])
    (catalog.root / "README.md").write_bytes(b"# Catalog \xff\xfe\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(catalog.path()), "--update-readme"])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "Failed to read" in err
    assert "Failed to write" not in err


def test_main_reports_readme_directory_as_read_failure(catalog, capsys) -> None:
    catalog.manifest(skills=[])
    (catalog.root / "README.md").mkdir()

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(catalog.path()), "--update-readme"])

    assert excinfo.value.code == 1
    assert "Failed to read" in capsys.readouterr().err


def test_main_rejects_dry_run_without_update_readme(catalog, capsys) -> None:
    catalog.manifest(skills=[])

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(catalog.path()), "--dry-run"])

    assert excinfo.value.code == 2
    assert "--dry-run requires --update-readme" in capsys.readouterr().err


def test_main_exits_non_zero_on_undecodable_config(catalog, capsys) -> None:
    catalog.manifest(skills=[])
    (catalog.root / ".skillindex.yml").write_bytes(b"manifest: \xff\xfe\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(catalog.path())])

    assert excinfo.value.code == 1
    assert "Failed to read .skillindex.yml" in capsys.readouterr().err
