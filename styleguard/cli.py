"""Command-line entry point for the Java style checker."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Sequence

from .config import CONFIG_FILENAME, StyleGuardConfig
from .errors import StyleGuardError
from .result import EvaluationReport, format_summary_table, format_violation, overall_exit_code, reports_to_dict
from .rules import Registry
from .runner import run_paths

logger = logging.getLogger(__name__)

DEFAULT_PATHS = (".",)
USAGE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="styleguard",
        description="Pattern-level checker for Java coding conventions",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files or directories to check (defaults to the current directory).",
    )
    parser.add_argument(
        "--rules",
        "-r",
        dest="rule_files",
        action="append",
        default=[],
        help="Additional rule-spec file, YAML or JSON (repeatable).",
    )
    parser.add_argument(
        "--no-builtin",
        action="store_true",
        help="Do not load the built-in Java convention rules.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Project configuration file (defaults to {CONFIG_FILENAME} when present).",
    )
    parser.add_argument(
        "--ext",
        dest="extensions",
        action="append",
        default=[],
        help="File extension to scan inside directories (repeatable, defaults to .java).",
    )
    parser.add_argument(
        "--workers",
        "-j",
        type=int,
        default=1,
        help="Number of files to check concurrently.",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Report format (defaults to text).",
    )
    parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Path to write the JSON report (e.g., artifacts/style.json).",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="Print the loaded rules and exit.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def load_config(args: argparse.Namespace) -> StyleGuardConfig:
    config = StyleGuardConfig.load(args.config)
    config.rule_files.extend(args.rule_files)
    if args.no_builtin:
        config.builtin = False
    if args.extensions:
        config.extensions = [ext if ext.startswith(".") else f".{ext}" for ext in args.extensions]
    return config


def list_rules(registry: Registry) -> None:
    for rule in registry.all():
        print(f"{rule.id:<14} {rule.severity.value:<5} {rule.description}")
    print(f"\n{len(registry)} rules loaded")


def write_output(reports: Sequence[EvaluationReport], output_path: str | None, report_format: str) -> None:
    if report_format == "text":
        for report in reports:
            for violation in report.violations:
                print(format_violation(report.source, violation))
        if any(report.violations for report in reports):
            print()
        print(format_summary_table(reports, max_violations=0))

    payload = json.dumps(reports_to_dict(reports), indent=2)
    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(payload, encoding="utf-8")
        print(f"\nReport written to {output_path}")
    elif report_format == "json":
        print(payload)


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    if args.workers < 1:
        parser.error("--workers must be at least 1")

    try:
        config = load_config(args)
        registry = config.build_registry()
    except StyleGuardError as exc:
        logger.error("%s", exc)
        return USAGE_ERROR

    if args.list_rules:
        list_rules(registry)
        return 0

    paths = args.paths or list(DEFAULT_PATHS)
    missing = [path for path in paths if not Path(path).exists()]
    if missing:
        logger.error("No such file or directory: %s", ", ".join(missing))
        return USAGE_ERROR

    reports = run_paths(registry, paths, extensions=tuple(config.extensions), workers=args.workers)
    if not reports:
        logger.warning("No files matching %s found", ", ".join(config.extensions))
    write_output(reports, args.output_path, args.format)
    return overall_exit_code(reports)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
