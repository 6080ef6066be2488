"""Shared entities: document kinds, benchmark cases, measurements and summaries."""

from entity.case import BenchmarkCase, DocumentKind
from entity.records import FileRecord, Measurement, Summary

__all__ = ["BenchmarkCase", "DocumentKind", "FileRecord", "Measurement", "Summary"]
