"""
Benchmark harness.

Subpackages:
  extractors - DocumentExtractor protocol, rich-text/spreadsheet/PDF adapters, registry
  runner     - BenchmarkRunner, CaseResult
  report     - summarize, percentile, output formatters
"""

from commons.errors import (
    AccessDenied,
    BenchmarkError,
    CaseTimeout,
    CorruptDocument,
    DirectoryNotFound,
    ExtractionError,
    SuspiciousResult,
    UnsupportedFormat,
)
from harness.extractors import EXTRACTOR_REGISTRY, get_extractor, register_extractor
from harness.report import get_formatter, summarize
from harness.runner import BenchmarkRunner, CaseResult

__all__ = [
    "AccessDenied",
    "BenchmarkError",
    "CaseTimeout",
    "CorruptDocument",
    "DirectoryNotFound",
    "ExtractionError",
    "SuspiciousResult",
    "UnsupportedFormat",
    "EXTRACTOR_REGISTRY",
    "get_extractor",
    "register_extractor",
    "get_formatter",
    "summarize",
    "BenchmarkRunner",
    "CaseResult",
]
