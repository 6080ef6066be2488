"""Per-run records: measurements, per-file results, and per-case summaries."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FileRecord(BaseModel):
    """Extracted length for one file, taken from its first successful measured pass."""

    model_config = ConfigDict(frozen=True)

    path: str
    extracted_length: int = Field(ge=0)


class Measurement(BaseModel):
    """One timed load+extract of one file in one measured iteration. error is set on failure."""

    model_config = ConfigDict(frozen=True)

    case_name: str
    iteration: int = Field(ge=0)
    path: str
    elapsed_ns: int = Field(ge=0)
    bytes_allocated: int = Field(default=0, ge=0)
    extracted_length: int = Field(default=0, ge=0)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000


class Summary(BaseModel):
    """Aggregate statistics for one case. Timing stats are None when nothing succeeded."""

    model_config = ConfigDict(frozen=True)

    case_name: str
    count: int = 0
    succeeded: int = 0
    failed: int = 0
    mean_ms: Optional[float] = None
    p90_ms: Optional[float] = None
    p95_ms: Optional[float] = None
    min_ms: Optional[float] = None
    max_ms: Optional[float] = None
    mean_bytes_allocated: Optional[float] = None
    total_extracted_length: int = 0
    suspicious: bool = False
    timed_out: bool = False
