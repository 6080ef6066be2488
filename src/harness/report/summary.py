"""Aggregate measurements into per-case statistics. Pure functions, no I/O."""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence

from entity.records import Measurement, Summary


def percentile(samples: Sequence[float], pct: float) -> Optional[float]:
    """
    Linear interpolation between closest ranks ("inclusive" definition):
    rank = pct/100 * (n - 1) over the sorted samples. None for no samples.
    For [10, 20, 20, 30, 100]: p90 = 72, p95 = 86.
    """
    if not 0 <= pct <= 100:
        raise ValueError(f"percentile must be within [0, 100], got {pct}")
    if not samples:
        return None
    ordered = sorted(samples)
    rank = pct / 100 * (len(ordered) - 1)
    lower = math.floor(rank)
    upper = math.ceil(rank)
    if lower == upper:
        return float(ordered[lower])
    fraction = rank - lower
    return ordered[lower] + (ordered[upper] - ordered[lower]) * fraction


def _mean(values: Sequence[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None


def summarize(
    measurements: Iterable[Measurement],
    case_name: str | None = None,
    suspicious: bool = False,
    timed_out: bool = False,
) -> Summary:
    """
    count covers every measurement; timing and memory statistics use successful
    ones only. summarize([]) is a Summary with count 0 and no statistics.
    """
    measurements = list(measurements)
    if case_name is None:
        case_name = measurements[0].case_name if measurements else ""
    ok = [m for m in measurements if not m.failed]
    times_ms = [m.elapsed_ms for m in ok]
    return Summary(
        case_name=case_name,
        count=len(measurements),
        succeeded=len(ok),
        failed=len(measurements) - len(ok),
        mean_ms=_mean(times_ms),
        p90_ms=percentile(times_ms, 90),
        p95_ms=percentile(times_ms, 95),
        min_ms=min(times_ms) if times_ms else None,
        max_ms=max(times_ms) if times_ms else None,
        mean_bytes_allocated=_mean([m.bytes_allocated for m in ok]),
        total_extracted_length=sum(m.extracted_length for m in ok),
        suspicious=suspicious,
        timed_out=timed_out,
    )


def summarize_case(result) -> Summary:
    """Summary for a runner CaseResult, carrying its suspicious/timed-out flags."""
    return summarize(
        result.measurements,
        case_name=result.case.name,
        suspicious=result.suspicious,
        timed_out=result.timed_out,
    )
