"""Tests for the textbench command line entry point."""

import json
import os

import pytest

import textbench
from commons import config as config_pkg
from entity.case import DocumentKind


@pytest.fixture(autouse=True)
def restore_config(monkeypatch):
    """--config replaces the loaded config; put the original back after each test."""
    monkeypatch.setattr(config_pkg, "config", config_pkg.config)
    monkeypatch.setattr(config_pkg, "_config_instance", config_pkg._config_instance)


def _args(root, *extra):
    return ["--root", str(root), "--warmup", "0", "--iterations", "1", "--no-memory", *extra]


def test_missing_root_exits_1_without_report(tmp_path, capsys):
    out = tmp_path / "report.json"
    code = textbench.main(_args(tmp_path / "nowhere", "--format", "json", "--output", str(out)))
    assert code == textbench.EXIT_CONFIG_ERROR
    assert not out.exists()
    assert "Directory not found" in capsys.readouterr().out


def test_invalid_iterations_exits_1(tmp_path):
    assert textbench.main(["--root", str(tmp_path), "--iterations", "0"]) == textbench.EXIT_CONFIG_ERROR


def test_every_file_corrupt_exits_2(tmp_path):
    (tmp_path / "bad.xlsx").write_bytes(b"garbage bytes, not a workbook")
    code = textbench.main(_args(tmp_path, "--kind", "spreadsheet"))
    assert code == textbench.EXIT_ALL_FAILED


def test_pdf_run_writes_json_report(tmp_path, make_pdf):
    docs = tmp_path / "docs"
    docs.mkdir()
    make_pdf(docs / "one.pdf", pages=("Hello PDF",))
    out = tmp_path / "results" / "bench.json"

    code = textbench.main(_args(docs, "--kind", "pdf", "--format", "json", "--output", str(out)))

    assert code == textbench.EXIT_OK
    data = json.loads(out.read_text(encoding="utf-8"))
    (case,) = data["cases"]
    assert case["case"] == "extract_pdf"
    assert case["summary"]["count"] == 1
    assert case["summary"]["failed"] == 0
    assert case["files"][0]["extracted_length"] > 0


def test_csv_to_stdout(tmp_path, make_pdf, capsys):
    make_pdf(tmp_path / "one.pdf")
    code = textbench.main(_args(tmp_path, "--kind", "pdf", "--format", "csv"))
    assert code == textbench.EXIT_OK
    assert "case,kind,iterations" in capsys.readouterr().out


def test_no_documents_exits_0(tmp_path, capsys):
    code = textbench.main(_args(tmp_path))
    assert code == textbench.EXIT_OK
    assert "No documents found" in capsys.readouterr().out


def test_one_good_case_is_enough(tmp_path, make_pdf):
    make_pdf(tmp_path / "ok.pdf")
    (tmp_path / "bad.xlsx").write_bytes(b"garbage")
    # every case sees both files; pdf succeeds on ok.pdf
    code = textbench.main(_args(tmp_path, "--kind", "all"))
    assert code == textbench.EXIT_OK


def test_per_kind_subfolder_is_used(tmp_path):
    (tmp_path / "pdf").mkdir()
    assert textbench.resolve_kind_root(str(tmp_path), DocumentKind.PDF) == str(tmp_path / "pdf")
    assert textbench.resolve_kind_root(str(tmp_path), DocumentKind.RICHTEXT) == str(tmp_path)


def test_config_file_overrides_defaults(tmp_path, make_pdf):
    docs = tmp_path / "docs"
    docs.mkdir()
    make_pdf(docs / "ok.pdf")
    cfg_path = tmp_path / "bench.yaml"
    cfg_path.write_text(
        "benchmark:\n  warmup: 0\n  iterations: 2\n  track_memory: false\n"
        f"paths:\n  root: {docs.as_posix()}\n",
        encoding="utf-8",
    )
    out = tmp_path / "r.json"
    code = textbench.main(["--config", str(cfg_path), "--kind", "pdf", "--format", "json", "--output", str(out)])
    assert code == textbench.EXIT_OK
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["cases"][0]["summary"]["count"] == 2


def test_unreadable_config_exits_1(tmp_path):
    assert textbench.main(["--config", str(tmp_path / "missing.yaml")]) == textbench.EXIT_CONFIG_ERROR


def test_unknown_format_rejected_by_parser(tmp_path):
    with pytest.raises(SystemExit):
        textbench.main(["--root", str(tmp_path), "--format", "xml"])


def test_unreadable_subdirectory_exits_1_without_report(tmp_path, make_pdf, monkeypatch, capsys):
    docs = tmp_path / "docs"
    (docs / "locked").mkdir(parents=True)
    make_pdf(docs / "ok.pdf")
    out = tmp_path / "report.json"
    real_scandir = os.scandir
    blocked = str(docs / "locked")

    def fake_scandir(path="."):
        if os.fspath(path) == blocked:
            raise PermissionError(13, "Permission denied", blocked)
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)
    code = textbench.main(_args(docs, "--kind", "pdf", "--format", "json", "--output", str(out)))

    assert code == textbench.EXIT_CONFIG_ERROR
    assert not out.exists()
    assert "Cannot read directory" in capsys.readouterr().out


def test_invalid_extractor_option_fails_before_any_case_runs(tmp_path, make_docx, capsys):
    make_docx(tmp_path / "doc.docx")
    cfg_path = tmp_path / "bench.yaml"
    cfg_path.write_text("extractors:\n  spreadsheet:\n    cell_text: everything\n", encoding="utf-8")
    code = textbench.main(["--config", str(cfg_path), *_args(tmp_path, "--kind", "all")])

    assert code == textbench.EXIT_CONFIG_ERROR
    out = capsys.readouterr().out
    assert "cell_text" in out
    assert "Running" not in out
