"""CLI entrypoints for skillindex commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .manifest import ManifestError
from .orchestrator import DocumentError, Orchestrator
from .postproc.markers import MarkerError
from .validators import ValidationError


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_catalog_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the catalog root (defaults to current directory).",
    )
    parser.add_argument(
        "--manifest",
        default=None,
        help="Manifest path relative to the catalog root (default: .claude-plugin/plugin.json).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skillindex",
        description="Generate the compressed skills index and keep the README in sync.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Render the compressed index (printed to stdout unless --update-readme is given).",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_catalog_options(generate_parser)
    generate_parser.add_argument(
        "--update-readme",
        action="store_true",
        help="Replace the marked index region of the README in place.",
    )
    generate_parser.add_argument(
        "--readme",
        default=None,
        help="README path relative to the catalog root (default: README.md).",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="With --update-readme, print the README diff without writing.",
    )

    validate_parser = subparsers.add_parser(
        "validate",
        help="Check that the manifest and the catalog files agree.",
    )
    _add_verbose_option(validate_parser, suppress_default=True)
    _add_catalog_options(validate_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for skillindex commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    orchestrator = Orchestrator()

    try:
        config = orchestrator.load_config(
            args.path,
            manifest=args.manifest,
            readme=getattr(args, "readme", None),
        )
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "generate":
        if args.dry_run and not args.update_readme:
            parser.error("--dry-run requires --update-readme")
        if not args.update_readme:
            try:
                result = orchestrator.run_generate(config)
            except ManifestError as exc:
                parser.exit(1, f"{exc}\n")
            print(result.text)
            return

        try:
            outcome = orchestrator.run_update(config, dry_run=bool(args.dry_run))
        except (ManifestError, MarkerError, DocumentError, FileNotFoundError) as exc:
            parser.exit(1, f"{exc}\n")
        except OSError as exc:
            parser.exit(1, f"Failed to write {config.readme_path}: {exc}\n")
        rel_path = _relativize(outcome.path)
        if not outcome.changed:
            message = f"{rel_path} already up to date"
            if outcome.dry_run:
                message += " (dry-run)"
            print(message)
        elif outcome.dry_run:
            print(f"{rel_path} changes (dry-run):")
            print(outcome.diff or "(no diff)")
        else:
            print(f"Index updated in {rel_path}")
    elif args.command == "validate":
        report = orchestrator.run_validate(config)
        for line in report.summary_lines():
            print(line)
        try:
            report.raise_for_errors()
        except ValidationError as exc:
            parser.exit(1, f"{exc}\n")
        print("Validation passed!")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
