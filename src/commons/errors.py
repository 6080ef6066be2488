"""
Error taxonomy for a benchmark run.

Enumeration errors (DirectoryNotFound, AccessDenied) are fatal to the run.
Extraction errors (UnsupportedFormat, CorruptDocument) are per file and end up
as failed measurements. CaseTimeout truncates one case. SuspiciousResult is a
warning category, never raised.
"""


class BenchmarkError(Exception):
    """Base class for textbench errors."""


class DirectoryNotFound(BenchmarkError, FileNotFoundError):
    """The root directory to enumerate does not exist or is not a directory."""


class AccessDenied(BenchmarkError, PermissionError):
    """A directory under the root could not be read."""


class ExtractionError(BenchmarkError):
    """Loading or extracting one document failed."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"{path}: {reason}" if reason else path
        super().__init__(message)


class UnsupportedFormat(ExtractionError):
    """The document library does not accept this file type."""


class CorruptDocument(ExtractionError):
    """The file has the right type but could not be parsed."""


class CaseTimeout(BenchmarkError):
    """A case ran past its time budget; remaining iterations were dropped."""

    def __init__(self, case_name: str, timeout_seconds: float):
        self.case_name = case_name
        self.timeout_seconds = timeout_seconds
        super().__init__(f"case {case_name!r} exceeded {timeout_seconds:g}s")


class SuspiciousResult(UserWarning):
    """Every successful extraction in a case returned empty text."""
