"""Reporting: per-case statistics and output formats."""

from harness.report.formatters import (
    COLUMNS,
    FORMATTERS,
    build_json_report,
    get_formatter,
    report_rows,
)
from harness.report.summary import percentile, summarize, summarize_case

__all__ = [
    "COLUMNS",
    "FORMATTERS",
    "build_json_report",
    "get_formatter",
    "percentile",
    "report_rows",
    "summarize",
    "summarize_case",
]
