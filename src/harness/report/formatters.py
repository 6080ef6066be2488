"""Render case summaries as table, CSV, JSON or Markdown. Formatting never changes the numbers."""

from __future__ import annotations

import csv
import io
import json
from typing import Any, Callable, Dict, List, Sequence

from harness.report.summary import summarize_case

COLUMNS = [
    "case", "kind", "iterations", "measurements", "failed",
    "mean_ms", "p90_ms", "p95_ms", "mean_bytes", "extracted_length", "flags",
]


def _flags(summary) -> str:
    flags = []
    if summary.suspicious:
        flags.append("suspicious")
    if summary.timed_out:
        flags.append("timed_out")
    return ",".join(flags)


def report_rows(results: Sequence) -> List[Dict[str, Any]]:
    """One row per runner CaseResult, keyed by COLUMNS. Missing statistics stay None."""
    rows = []
    for result in results:
        s = summarize_case(result)
        rows.append({
            "case": s.case_name,
            "kind": result.case.kind.value,
            "iterations": result.iterations,
            "measurements": s.count,
            "failed": s.failed,
            "mean_ms": s.mean_ms,
            "p90_ms": s.p90_ms,
            "p95_ms": s.p95_ms,
            "mean_bytes": s.mean_bytes_allocated,
            "extracted_length": s.total_extracted_length,
            "flags": _flags(s),
        })
    return rows


def _cell(value: Any, blank: str) -> str:
    if value is None:
        return blank
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


def format_table(results: Sequence) -> str:
    """Aligned plain-text table for the console."""
    rows = [[_cell(row[c], "-") for c in COLUMNS] for row in report_rows(results)]
    widths = [max([len(c)] + [len(r[i]) for r in rows]) for i, c in enumerate(COLUMNS)]
    header = "  ".join(c.ljust(w) for c, w in zip(COLUMNS, widths))
    lines = [header, "-" * len(header)]
    for r in rows:
        lines.append("  ".join(v.ljust(w) for v, w in zip(r, widths)).rstrip())
    return "\n".join(lines) + "\n"


def format_csv(results: Sequence) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(COLUMNS)
    for row in report_rows(results):
        writer.writerow([_cell(row[c], "") for c in COLUMNS])
    return buf.getvalue()


def format_markdown(results: Sequence) -> str:
    lines = [
        "| " + " | ".join(COLUMNS) + " |",
        "|" + "|".join("---" for _ in COLUMNS) + "|",
    ]
    for row in report_rows(results):
        lines.append("| " + " | ".join(_cell(row[c], "-") for c in COLUMNS) + " |")
    return "\n".join(lines) + "\n"


def build_json_report(results: Sequence) -> Dict[str, Any]:
    """Summaries plus per-file extracted lengths, ready for json.dump."""
    cases = []
    for result in results:
        cases.append({
            "case": result.case.name,
            "kind": result.case.kind.value,
            "iterations": result.iterations,
            "summary": summarize_case(result).model_dump(),
            "files": [r.model_dump() for r in result.file_records],
        })
    return {"time_unit": "ms", "cases": cases}


def format_json(results: Sequence) -> str:
    return json.dumps(build_json_report(results), indent=2, ensure_ascii=False) + "\n"


FORMATTERS: Dict[str, Callable[[Sequence], str]] = {
    "table": format_table,
    "csv": format_csv,
    "json": format_json,
    "markdown": format_markdown,
}


def get_formatter(name: str) -> Callable[[Sequence], str]:
    try:
        return FORMATTERS[name]
    except KeyError:
        raise ValueError(f"Unknown report format {name!r} (expected one of: {', '.join(FORMATTERS)})") from None
