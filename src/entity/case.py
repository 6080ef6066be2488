"""Benchmark case definition: which adapter runs over which file set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class DocumentKind(str, Enum):
    """Document kinds with an extractor adapter. The value is the CLI/config name."""

    RICHTEXT = "richtext"
    SPREADSHEET = "spreadsheet"
    PDF = "pdf"

    @classmethod
    def parse(cls, value: str) -> "DocumentKind":
        try:
            return cls(value.strip().lower())
        except ValueError:
            names = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown document kind {value!r} (expected one of: {names})") from None


@dataclass(frozen=True)
class BenchmarkCase:
    """
    One configured combination of document kind and file set.
    file_set must be re-iterable (e.g. FileEnumerator); the runner walks it
    once per warmup/measured iteration.
    """

    name: str
    kind: DocumentKind
    file_set: Iterable[str]
