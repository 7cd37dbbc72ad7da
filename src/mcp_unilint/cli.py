"""Command-line entry point: lint files and print a report."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .domain.models import CSS, JAVASCRIPT
from .services.aggregator import analyze_paths
from .services.analyzer import FileAnalyzer
from .services.file_resolver import partition_files, resolve_files
from .services.formatters import format_results
from .services.knowledge_base import KnowledgeBase, KnowledgeBaseUnavailableError
from .services.lint_config import (
    BASELINE_FILTERS,
    MAX_WORKERS_CEILING,
    OUTPUT_FORMATS,
    ConfigurationError,
    LintConfig,
)

_LOG = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "unilint.config.json"

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_FATAL = 2


def _worker_count(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid worker count: {raw}") from exc
    if value < 1 or value > MAX_WORKERS_CEILING:
        raise argparse.ArgumentTypeError(
            f"worker count must be between 1 and {MAX_WORKERS_CEILING}"
        )
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unilint",
        description=(
            "Check JavaScript and CSS files for web feature baseline compatibility."
        ),
    )
    parser.add_argument("files", nargs="*", help="Files, directories or glob patterns.")
    parser.add_argument(
        "-f",
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        help="Output format (default: table).",
    )
    only = parser.add_mutually_exclusive_group()
    only.add_argument("--js-only", action="store_true", help="Only lint script files.")
    only.add_argument("--css-only", action="store_true", help="Only lint CSS files.")
    parser.add_argument(
        "--baseline",
        choices=BASELINE_FILTERS,
        help="Only report features at this baseline level (default: all).",
    )
    parser.add_argument("--config", type=Path, help="Path to a JSON configuration file.")
    parser.add_argument(
        "--features",
        type=Path,
        help="Path to the web-features knowledge base JSON.",
    )
    parser.add_argument("--ignore-pattern", help="Ignore files matching this glob.")
    parser.add_argument(
        "--quiet", action="store_true", help="Hide info findings and the summary."
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument(
        "--workers",
        type=_worker_count,
        help="Number of files analyzed in parallel.",
    )
    return parser


def load_config(args: argparse.Namespace) -> LintConfig:
    """Combine environment, config file and command-line settings."""

    config = LintConfig.from_env()
    config_path = args.config
    if config_path is None and Path(DEFAULT_CONFIG_FILE).is_file():
        config_path = Path(DEFAULT_CONFIG_FILE)
    if config_path is not None:
        config = LintConfig.from_file(config_path, config)
    return config.merge(
        baseline=args.baseline,
        output_format=args.output_format,
        quiet=args.quiet or None,
        verbose=args.verbose or None,
        features_path=args.features,
        max_workers=args.workers,
    )


def run(args: argparse.Namespace) -> int:
    config = load_config(args)
    if config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    if config.features_path is None:
        raise KnowledgeBaseUnavailableError(
            "No knowledge base configured; pass --features or set UNILINT_FEATURES_PATH."
        )
    knowledge_base = KnowledgeBase.from_path(config.features_path)

    files = resolve_files(
        args.files or list(config.include),
        args.ignore_pattern,
        extra_ignores=config.exclude,
    )
    partitions = partition_files(files, js_only=args.js_only, css_only=args.css_only)
    _LOG.debug(
        "Found %d script files and %d CSS files",
        len(partitions[JAVASCRIPT]),
        len(partitions[CSS]),
    )

    analyzer = FileAnalyzer(
        knowledge_base,
        config.baseline,
        max_file_bytes=config.max_file_bytes,
    )
    summary = analyze_paths(
        partitions[JAVASCRIPT] + partitions[CSS],
        analyzer,
        max_workers=config.max_workers,
    )
    sys.stdout.write(format_results(summary, config.output_format, config.quiet) + "\n")
    return EXIT_FINDINGS if summary.has_errors else EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return run(args)
    except (ConfigurationError, KnowledgeBaseUnavailableError) as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
