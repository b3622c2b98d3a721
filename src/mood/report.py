# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Tab-separated rendering of MOOD metric reports."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

from mood.metrics import AggregateMetrics, ClassMetrics, MetricsReport

logger = logging.getLogger(__name__)

REPORT_COLUMNS: tuple[str, ...] = (
    "Class",
    "DIT",
    "NOC",
    "MHF (%)",
    "AHF (%)",
    "MIF (%)",
    "AIF (%)",
    "POF (%)",
)
TOTAL_LABEL = "TOTAL"
DELIMITER = "\t"


def format_percent(value: float) -> str:
    """Format a 0..1 ratio as a whole percentage, e.g. ``0.5`` -> ``50%``.

    Midpoints round away from zero.
    """
    scaled = Decimal(value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{scaled}%"


def format_decimal(value: float, places: int = 2) -> str:
    exponent = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


class ReportFormatter:
    """Render metric reports as tab-separated rows."""

    def rows(self, report: MetricsReport) -> list[list[str]]:
        """Return the header, one row per class and the total row.

        Args:
            report: Computed metrics report.

        Returns:
            Report rows as cell strings.
        """
        rows = [list(REPORT_COLUMNS)]
        rows.extend(self._class_row(item) for item in report.classes)
        rows.append(self._total_row(report.aggregate))
        return rows

    def render(self, report: MetricsReport) -> str:
        """Render the report as delimited text without a trailing newline."""
        return "\n".join(DELIMITER.join(row) for row in self.rows(report))

    def write(self, report: MetricsReport, output_path: Path) -> None:
        """Write the rendered report to ``output_path``.

        Raises:
            OSError: If directory creation or file writing fails.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(report), encoding="utf-8")
        logger.info(
            f"Report written (output_path={output_path} classes={len(report.classes)})"
        )

    def _class_row(self, item: ClassMetrics) -> list[str]:
        return [
            item.name,
            str(item.dit),
            str(item.noc),
            format_percent(item.mhf),
            format_percent(item.ahf),
            format_percent(item.mif),
            format_percent(item.aif),
            format_percent(item.pof),
        ]

    def _total_row(self, aggregate: AggregateMetrics) -> list[str]:
        return [
            TOTAL_LABEL,
            format_decimal(aggregate.average_dit),
            str(aggregate.total_noc),
            format_percent(aggregate.average_mhf),
            format_percent(aggregate.average_ahf),
            format_percent(aggregate.average_mif),
            format_percent(aggregate.average_aif),
            format_percent(aggregate.global_pof),
        ]
