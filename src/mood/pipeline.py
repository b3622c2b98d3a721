# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""End-to-end metrics pipeline: discovery, analysis, graph build and metrics."""

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from mood.declaration import Analyzer, AnalyzerError, ClassDeclaration
from mood.discovery import SourceDiscovery
from mood.graph_builder import GraphBuilder
from mood.inheritance import InheritanceAnalyzer
from mood.metrics import MetricsAggregator, MetricsReport
from mood.registry import ClassRegistry

logger = logging.getLogger(__name__)


class EmptyInputError(RuntimeError):
    """Represent a run that found no source files or no class declarations."""


@dataclass(frozen=True)
class PipelineResult:
    """Represent the outcome of one pipeline run.

    Attributes:
        report: Computed metrics.
        registry: Analyzed class registry.
        files_discovered: Number of source files found.
        files_analyzed: Number of source files analyzed without error.
        declaration_count: Number of class declarations extracted.
        errors: Recoverable analyzer errors, one per skipped file.
        elapsed_seconds: Wall clock duration of the run.
    """

    report: MetricsReport
    registry: ClassRegistry
    files_discovered: int
    files_analyzed: int
    declaration_count: int
    errors: list[AnalyzerError]
    elapsed_seconds: float


def compute_metrics(declarations: Iterable[ClassDeclaration]) -> MetricsReport:
    """Build, analyze and measure a registry from in-memory declarations.

    Args:
        declarations: Class declarations in processing order.

    Returns:
        Computed metrics report.
    """
    registry = GraphBuilder(ClassRegistry()).build(declarations)
    InheritanceAnalyzer(registry).analyze()
    return MetricsAggregator(registry).compute()


class MetricsPipeline:
    """Run class discovery and metric computation over a source tree."""

    def __init__(
        self,
        analyzer: Analyzer,
        discovery: SourceDiscovery,
        progress_batch_size: int = 10,
    ) -> None:
        """Initialize the pipeline.

        Args:
            analyzer: Language analyzer extracting class declarations.
            discovery: Source file discovery.
            progress_batch_size: Emit a progress log line every N files.

        Raises:
            ValueError: If ``progress_batch_size`` is not greater than zero.
        """
        if progress_batch_size <= 0:
            raise ValueError("progress_batch_size must be > 0")
        self._analyzer = analyzer
        self._discovery = discovery
        self._progress_batch_size = progress_batch_size

    def run(self, root_path: Path) -> PipelineResult:
        """Analyze every discovered source file and compute metrics.

        Args:
            root_path: Root directory to analyze.

        Returns:
            Pipeline result with the metrics report.

        Raises:
            EmptyInputError: If no source files or no class declarations are found.
        """
        started = time.monotonic()
        files = self._discovery.discover(root_path)
        total = len(files)
        if total == 0:
            raise EmptyInputError(f"No source files found under {root_path}")
        logger.info(f"Found source files (path={root_path} files={total})")

        registry = ClassRegistry()
        builder = GraphBuilder(registry)
        errors: list[AnalyzerError] = []
        declaration_count = 0

        for completed, file_path in enumerate(files, start=1):
            try:
                declarations = self._analyzer.analyze_file(root_path, file_path)
            except (
                OSError,
                UnicodeDecodeError,
                SyntaxError,
                ValueError,
                RecursionError,
            ) as exc:
                relative_path = file_path.relative_to(root_path).as_posix()
                logger.warning(
                    f"Skipping file due to parse/read failure (file_path={relative_path} error={exc})"
                )
                errors.append(AnalyzerError(file_path=relative_path, message=str(exc)))
            else:
                for declaration in declarations:
                    builder.add(declaration)
                declaration_count += len(declarations)

            if completed % self._progress_batch_size == 0 or completed == total:
                self._log_progress(
                    completed=completed,
                    total=total,
                    failed=len(errors),
                    elapsed_seconds=time.monotonic() - started,
                )

        if declaration_count == 0:
            raise EmptyInputError(f"No class declarations found under {root_path}")

        InheritanceAnalyzer(registry).analyze()
        report = MetricsAggregator(registry).compute()
        elapsed = time.monotonic() - started
        logger.info(
            f"Analysis complete (classes={len(registry)} declarations={declaration_count} "
            f"errors={len(errors)} elapsed_seconds={elapsed:.1f})"
        )
        return PipelineResult(
            report=report,
            registry=registry,
            files_discovered=total,
            files_analyzed=total - len(errors),
            declaration_count=declaration_count,
            errors=errors,
            elapsed_seconds=elapsed,
        )

    def _log_progress(
        self, completed: int, total: int, failed: int, elapsed_seconds: float
    ) -> None:
        """Emit structured progress log line.

        Args:
            completed: Number of files processed.
            total: Total files for the run.
            failed: Number of files skipped due to errors.
            elapsed_seconds: Seconds since the run started.
        """
        percent = 100.0 if total == 0 else (completed / total) * 100.0
        logger.info(
            "analysis_progress completed=%s total=%s failed=%s percent=%.2f elapsed_seconds=%.1f",
            completed,
            total,
            failed,
            percent,
            elapsed_seconds,
        )
