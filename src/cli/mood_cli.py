# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command line entry point for MOOD metrics computation."""

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.table import Table

from mood.analyzers import PythonAnalyzer
from mood.declaration import AnalyzerError
from mood.discovery import DEFAULT_EXCLUDE_PATTERNS, IgnoreMatcher, SourceDiscovery
from mood.metrics import MetricsReport
from mood.pipeline import EmptyInputError, MetricsPipeline
from mood.report import REPORT_COLUMNS, ReportFormatter

logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_BATCH_SIZE = 10


class ValidationError(RuntimeError):
    """Represent user input validation failure."""


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(
        prog="mood",
        description="Compute MOOD object-oriented design metrics for a source tree.",
    )
    parser.add_argument("--path", required=True, help="Root path to analyze.")
    parser.add_argument(
        "--output",
        required=False,
        help="Optional output file path for the tab-separated report.",
    )
    parser.add_argument(
        "--format",
        choices=("tsv", "table"),
        default="tsv",
        help="Output format for stdout.",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Additional gitignore-style exclusion pattern (repeatable).",
    )
    parser.add_argument(
        "--no-default-excludes",
        action="store_true",
        help="Do not apply the built-in test/docs/build exclusions.",
    )
    parser.add_argument(
        "--no-gitignore",
        action="store_true",
        help="Do not apply .gitignore files found under the root path.",
    )
    parser.add_argument(
        "--progress-batch-size",
        type=int,
        default=DEFAULT_PROGRESS_BATCH_SIZE,
        help="Emit progress line every N analyzed files.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run the metrics command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        root_path = _validate_args(args)
    except ValidationError as exc:
        logger.warning(f"Validation failed (error={exc})")
        stderr.write(f"{exc}\n")
        return 2

    patterns = [] if args.no_default_excludes else list(DEFAULT_EXCLUDE_PATTERNS)
    patterns.extend(args.exclude)
    try:
        matcher = IgnoreMatcher.from_project_root(
            input_root=root_path,
            extra_patterns=patterns,
            use_gitignore=not args.no_gitignore,
        )
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Failed to read .gitignore files (error={exc})")
        stderr.write(f"Failed to read .gitignore files: {exc}\n")
        return 2

    pipeline = MetricsPipeline(
        analyzer=PythonAnalyzer(),
        discovery=SourceDiscovery(matcher=matcher),
        progress_batch_size=args.progress_batch_size,
    )
    try:
        result = pipeline.run(root_path)
    except EmptyInputError as exc:
        logger.info(f"Nothing to report (path={root_path} reason={exc})")
        stdout.write(f"{exc}\n")
        return 0

    _write_errors(errors=result.errors, stderr=stderr)
    formatter = ReportFormatter()
    if args.output:
        try:
            formatter.write(result.report, Path(args.output))
        except OSError as exc:
            logger.warning(
                f"Failed to write report file (output_path={args.output} error={exc})"
            )
            stderr.write(f"Failed to write report file: {args.output}\n")
            return 2
    elif args.format == "table":
        _write_table(report=result.report, formatter=formatter, stdout=stdout)
    else:
        stdout.write(formatter.render(result.report) + "\n")

    logger.info(
        f"Total classes processed: {len(result.registry)} "
        f"(files={result.files_analyzed}/{result.files_discovered} "
        f"elapsed_seconds={result.elapsed_seconds:.1f})"
    )
    return 0


def _validate_args(args: argparse.Namespace) -> Path:
    """Validate the root path and numeric options.

    Args:
        args: Parsed CLI arguments.

    Returns:
        Absolute root path.

    Raises:
        ValidationError: If an argument is invalid.
    """
    root_path = Path(args.path).resolve()
    if not root_path.exists():
        raise ValidationError(f"Path does not exist: {root_path}")
    if not root_path.is_dir():
        raise ValidationError(f"Path must be a directory: {root_path}")
    if args.progress_batch_size <= 0:
        raise ValidationError("progress-batch-size must be > 0")
    return root_path


def _write_errors(errors: list[AnalyzerError], stderr: TextIO) -> None:
    """Write analyzer errors to stderr.

    Args:
        errors: Recoverable analyzer errors.
        stderr: Standard error stream.
    """
    for error in errors:
        stderr.write(f"analyzer_error: {error.file_path}: {error.message}\n")


def _write_table(report: MetricsReport, formatter: ReportFormatter, stdout: TextIO) -> None:
    """Write the report as a Rich table.

    Args:
        report: Computed metrics report.
        formatter: Formatter providing the cell values.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.rule("MOOD metrics", style=Style(color="cyan"), characters="-")
    table = Table(show_header=True, expand=False)
    for index, column in enumerate(REPORT_COLUMNS):
        table.add_column(column, justify="left" if index == 0 else "right", overflow="fold")
    rows = formatter.rows(report)
    for row in rows[1:-1]:
        table.add_row(*row)
    table.add_section()
    table.add_row(*rows[-1], style=Style(bold=True))
    console.print(table)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
