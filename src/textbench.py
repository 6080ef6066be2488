"""
textbench - Document Text Extraction Benchmark

Measures wall-clock time and memory allocation of text extraction over
rich-text (.docx), spreadsheet (.xlsx) and PDF documents found under a root
directory, and reports mean/p90/p95 per case.

Per document kind the files come from extractors.<kind>.root in config.yaml
when set, else from <root>/<kind> when that folder exists, else from <root>.

Exit codes:
  0  success
  1  configuration error (bad root directory, unreadable folder, invalid option)
  2  every benchmark case failed completely

Usage:
    python src/textbench.py --root documents
    python src/textbench.py --root documents --kind pdf --iterations 10
    python src/textbench.py --root documents --format csv --output results/bench.csv
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import List, Optional

# Add this directory to path so commons/entity/harness import when run as a script
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), ".")))

from commons import config as config_pkg
from commons.config import get_section
from commons.errors import AccessDenied, DirectoryNotFound
from commons.folder import FileEnumerator
from commons.io import LocalFileWriter
from entity.case import BenchmarkCase, DocumentKind
from harness.extractors import DocumentExtractor, get_extractor
from harness.report import FORMATTERS, get_formatter
from harness.report.formatters import format_table
from harness.runner import DEFAULT_ITERATIONS, DEFAULT_WARMUP, BenchmarkRunner, CaseResult

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_ALL_FAILED = 2

KIND_CHOICES = [k.value for k in DocumentKind] + ["all"]

logger = logging.getLogger("textbench")


def _cfg() -> dict:
    return config_pkg.config or {}


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class BenchConfig:
    """Run configuration: config.yaml values, overridden by CLI flags."""
    root: str = field(default_factory=lambda: get_section(_cfg(), "paths").get("root", "documents"))
    kind: str = "all"
    warmup: int = field(default_factory=lambda: get_section(_cfg(), "benchmark").get("warmup", DEFAULT_WARMUP))
    iterations: int = field(default_factory=lambda: get_section(_cfg(), "benchmark").get("iterations", DEFAULT_ITERATIONS))
    timeout_seconds: Optional[float] = field(default_factory=lambda: get_section(_cfg(), "benchmark").get("timeout_seconds"))
    track_memory: bool = field(default_factory=lambda: get_section(_cfg(), "benchmark").get("track_memory", True))
    report_format: str = field(default_factory=lambda: get_section(_cfg(), "report").get("format", "table"))
    output: Optional[str] = None

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "BenchConfig":
        cfg = cls()
        overrides = {
            "root": args.root,
            "kind": args.kind,
            "warmup": args.warmup,
            "iterations": args.iterations,
            "timeout_seconds": args.timeout,
            "report_format": args.format,
            "output": args.output,
        }
        for name, value in overrides.items():
            if value is not None:
                setattr(cfg, name, value)
        if args.no_memory:
            cfg.track_memory = False
        return cfg

    def kinds(self) -> List[DocumentKind]:
        if self.kind == "all":
            return list(DocumentKind)
        return [DocumentKind.parse(self.kind)]


def resolve_kind_root(root: str, kind: DocumentKind) -> str:
    """extractors.<kind>.root from config, else <root>/<kind> if it is a folder, else root."""
    configured = get_section(_cfg(), "extractors", kind.value).get("root")
    if configured:
        return configured
    per_kind = os.path.join(root, kind.value)
    if os.path.isdir(per_kind):
        return per_kind
    return root


def build_cases(cfg: BenchConfig) -> List[BenchmarkCase]:
    """One case per requested kind. Raises DirectoryNotFound for a missing root."""
    if not os.path.isdir(cfg.root):
        raise DirectoryNotFound(f"Directory not found: {cfg.root}")
    cases = []
    for kind in cfg.kinds():
        file_set = FileEnumerator(resolve_kind_root(cfg.root, kind))
        cases.append(BenchmarkCase(name=f"extract_{kind.value}", kind=kind, file_set=file_set))
    return cases


def build_extractors(cases: List[BenchmarkCase]) -> List[DocumentExtractor]:
    """One fresh extractor per case. Invalid adapter options raise here, before any case runs."""
    return [get_extractor(case.kind) for case in cases]


def setup_logging(verbose: bool = False) -> None:
    log_cfg = get_section(_cfg(), "logging")
    level = logging.DEBUG if verbose else getattr(logging, str(log_cfg.get("level", "WARNING")).upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format=log_cfg.get("format", "%(asctime)s %(levelname)s %(name)s: %(message)s"),
    )


# =============================================================================
# Main Application
# =============================================================================

class TextBenchApp:
    """Builds cases, runs them one at a time, prints the console table and writes the report."""

    def __init__(self, cfg: BenchConfig, writer: Optional[LocalFileWriter] = None):
        self.config = cfg
        self.writer = writer or LocalFileWriter()
        self.results: List[CaseResult] = []

    def run(self) -> int:
        print("\n" + "=" * 60)
        print("📊 textbench - Document Text Extraction Benchmark")
        print("=" * 60)
        print(f"📁 Root: {self.config.root}")
        print(f"📄 Kind: {self.config.kind}")
        print(f"🔁 Warmup: {self.config.warmup}  Iterations: {self.config.iterations}")
        print("=" * 60)

        try:
            runner = BenchmarkRunner(
                warmup=self.config.warmup,
                iterations=self.config.iterations,
                timeout_seconds=self.config.timeout_seconds,
                track_memory=self.config.track_memory,
            )
            formatter = get_formatter(self.config.report_format)
            cases = build_cases(self.config)
            extractors = build_extractors(cases)
            for case, extractor in zip(cases, extractors):
                print(f"\n▶️ Running {case.name} over {case.file_set.root}")
                result = runner.run_case(case, extractor)
                self.results.append(result)
                print(f"✅ {case.name}: {len(result.measurements)} measurements, {result.failed_count} failed")
        except (DirectoryNotFound, AccessDenied) as e:
            print(f"❌ {e}")
            return EXIT_CONFIG_ERROR
        except ValueError as e:
            print(f"❌ Invalid configuration: {e}")
            return EXIT_CONFIG_ERROR

        print()
        print(format_table(self.results), end="")
        self._write_report(formatter(self.results))
        return self._exit_code()

    def _write_report(self, rendered: str) -> None:
        if not self.config.output:
            if self.config.report_format != "table":
                print(rendered, end="")
            return
        self.writer.write_text(rendered, self.config.output)
        print(f"💾 Report ({self.config.report_format}) saved to: {self.config.output}")

    def _exit_code(self) -> int:
        ran = [r for r in self.results if r.measurements]
        if not ran:
            print("⚠️ No documents found to benchmark")
            return EXIT_OK
        if all(r.failed_completely for r in ran):
            print("❌ Every benchmark case failed completely")
            return EXIT_ALL_FAILED
        return EXIT_OK


# =============================================================================
# CLI Entry Point
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="textbench - Document Text Extraction Benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Benchmark every kind under ./documents (richtext/, spreadsheet/, pdf/ subfolders if present)
  python src/textbench.py --root documents

  # Only PDFs, 10 measured iterations, no warmup
  python src/textbench.py --root documents --kind pdf --warmup 0 --iterations 10

  # CSV report to a file
  python src/textbench.py --root documents --format csv --output results/bench.csv
        """
    )
    parser.add_argument("--root", help="Directory to enumerate documents from (default: paths.root from config)")
    parser.add_argument("--kind", choices=KIND_CHOICES, help="Document kind to benchmark (default: all)")
    parser.add_argument("--warmup", type=int, help="Untimed warmup iterations per case")
    parser.add_argument("--iterations", type=int, help="Measured iterations per case")
    parser.add_argument("--format", choices=list(FORMATTERS), help="Report format (default: report.format from config)")
    parser.add_argument("--output", help="Write the report to this path instead of stdout")
    parser.add_argument("--timeout", type=float, help="Per-case time budget in seconds; remaining iterations are dropped")
    parser.add_argument("--no-memory", action="store_true", help="Skip tracemalloc allocation tracking")
    parser.add_argument("--config", help="Path to an alternative config.yaml")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.config:
        try:
            config_pkg.load_config(args.config, reload=True)
        except (OSError, ValueError) as e:
            print(f"❌ Cannot load config {args.config}: {e}")
            return EXIT_CONFIG_ERROR
    setup_logging(args.verbose)
    app = TextBenchApp(BenchConfig.from_args(args))
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
