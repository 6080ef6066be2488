"""Tests for harness.report.formatters."""

import csv
import io
import json

import pytest

from entity.case import BenchmarkCase, DocumentKind
from entity.records import FileRecord, Measurement
from harness.report import COLUMNS, get_formatter, report_rows
from harness.report.formatters import format_csv, format_json, format_markdown, format_table
from harness.runner import CaseResult


def _result(name="extract_pdf", times_ms=(10, 20, 20, 30, 100), failed=0, **flags):
    measurements = [
        Measurement(
            case_name=name,
            iteration=i,
            path="/docs/a.pdf",
            elapsed_ns=int(t * 1_000_000),
            bytes_allocated=1024,
            extracted_length=4,
        )
        for i, t in enumerate(times_ms)
    ]
    measurements += [
        Measurement(case_name=name, iteration=0, path="/docs/bad.pdf", elapsed_ns=1, error="CorruptDocument: bad")
        for _ in range(failed)
    ]
    case = BenchmarkCase(name=name, kind=DocumentKind.PDF, file_set=[])
    return CaseResult(
        case=case,
        iterations=len(times_ms),
        measurements=measurements,
        file_records=[FileRecord(path="/docs/a.pdf", extracted_length=4)],
        **flags,
    )


@pytest.fixture
def results():
    return [_result(), _result(name="extract_empty", times_ms=(), failed=2)]


def test_report_rows(results):
    rows = report_rows(results)
    assert [r["case"] for r in rows] == ["extract_pdf", "extract_empty"]
    assert set(rows[0]) == set(COLUMNS)
    assert rows[0]["mean_ms"] == pytest.approx(36.0)
    assert rows[0]["p90_ms"] == pytest.approx(72.0)
    assert rows[0]["p95_ms"] == pytest.approx(86.0)
    assert rows[0]["extracted_length"] == 20
    assert rows[1]["mean_ms"] is None
    assert rows[1]["failed"] == 2


def test_table_shows_every_case(results):
    out = format_table(results)
    lines = out.splitlines()
    assert lines[0].split() == COLUMNS
    assert "extract_pdf" in out
    assert "36.000" in out
    assert "72.000" in out
    assert "86.000" in out
    empty_row = next(line for line in lines if line.startswith("extract_empty"))
    assert " - " in empty_row


def test_csv_round_values(results):
    rows = list(csv.DictReader(io.StringIO(format_csv(results))))
    assert rows[0]["case"] == "extract_pdf"
    assert rows[0]["mean_ms"] == "36.000"
    assert rows[0]["p95_ms"] == "86.000"
    assert rows[1]["mean_ms"] == ""


def test_markdown(results):
    lines = format_markdown(results).splitlines()
    assert lines[0].startswith("| case | kind |")
    assert lines[1].startswith("|---|")
    assert len(lines) == 2 + len(results)


def test_json_carries_summary_and_files(results):
    data = json.loads(format_json(results))
    assert data["time_unit"] == "ms"
    first = data["cases"][0]
    assert first["case"] == "extract_pdf"
    assert first["kind"] == "pdf"
    assert first["summary"]["mean_ms"] == pytest.approx(36.0)
    assert first["summary"]["p90_ms"] == pytest.approx(72.0)
    assert first["files"] == [{"path": "/docs/a.pdf", "extracted_length": 4}]
    assert data["cases"][1]["summary"]["mean_ms"] is None


def test_flags_column():
    rows = report_rows([_result(suspicious=True, timed_out=True)])
    assert rows[0]["flags"] == "suspicious,timed_out"


def test_formats_agree_on_numbers(results):
    csv_rows = list(csv.DictReader(io.StringIO(format_csv(results))))
    json_cases = json.loads(format_json(results))["cases"]
    for row, case in zip(csv_rows, json_cases):
        if row["p95_ms"]:
            assert float(row["p95_ms"]) == pytest.approx(case["summary"]["p95_ms"], abs=1e-3)


def test_get_formatter():
    assert get_formatter("csv") is format_csv
    with pytest.raises(ValueError, match="Unknown report format"):
        get_formatter("xml")
