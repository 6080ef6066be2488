"""Benchmark runner: warmup + measured iterations over one case at a time, strictly sequential."""

from __future__ import annotations

import gc
import logging
import time
import tracemalloc
import warnings
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from commons.errors import CaseTimeout, SuspiciousResult
from entity.case import BenchmarkCase
from entity.records import FileRecord, Measurement
from harness.extractors import DocumentExtractor, get_extractor

logger = logging.getLogger(__name__)

DEFAULT_WARMUP = 1
DEFAULT_ITERATIONS = 5


def _benchmark_config() -> Dict:
    try:
        from commons.config import config
        return config.get("benchmark") or {}
    except Exception:
        return {}


@dataclass
class CaseResult:
    """Everything one case produced. Measurements cover measured iterations only."""

    case: BenchmarkCase
    iterations: int
    measurements: List[Measurement] = field(default_factory=list)
    file_records: List[FileRecord] = field(default_factory=list)
    suspicious: bool = False
    timed_out: bool = False

    @property
    def failed_count(self) -> int:
        return sum(1 for m in self.measurements if m.failed)

    @property
    def failed_completely(self) -> bool:
        """At least one measurement and none succeeded."""
        return bool(self.measurements) and self.failed_count == len(self.measurements)


class BenchmarkRunner:
    """
    Runs each case through Idle → Warmup(k) → Measuring(n) → Done.

    Per measured iteration, every file of the case is loaded and extracted once;
    the timer wraps that call only (file enumeration is outside it). With
    track_memory on, allocations come from a second, untimed extraction of the
    same file under tracemalloc, so tracing never runs inside a timed call. A failing
    file becomes a failed Measurement and the runner moves on. Enumeration
    errors (DirectoryNotFound, AccessDenied) are not caught and abort the run.
    Defaults come from config.yaml benchmark.*.
    """

    def __init__(
        self,
        warmup: int | None = None,
        iterations: int | None = None,
        timeout_seconds: float | None = None,
        track_memory: bool | None = None,
        timer: Callable[[], int] = time.perf_counter_ns,
        clock: Callable[[], float] = time.monotonic,
    ):
        cfg = _benchmark_config()
        self.warmup = warmup if warmup is not None else cfg.get("warmup", DEFAULT_WARMUP)
        self.iterations = iterations if iterations is not None else cfg.get("iterations", DEFAULT_ITERATIONS)
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else cfg.get("timeout_seconds")
        self.track_memory = track_memory if track_memory is not None else cfg.get("track_memory", True)
        if self.warmup < 0:
            raise ValueError(f"warmup must be >= 0, got {self.warmup}")
        if self.iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {self.iterations}")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        self._timer = timer
        self._clock = clock

    def run(self, cases: Iterable[BenchmarkCase]) -> List[CaseResult]:
        """Run cases one after another; each gets a fresh extractor from the registry."""
        return [self.run_case(case) for case in cases]

    def run_case(self, case: BenchmarkCase, extractor: Optional[DocumentExtractor] = None) -> CaseResult:
        extractor = extractor if extractor is not None else get_extractor(case.kind)
        result = CaseResult(case=case, iterations=self.iterations)
        deadline = self._clock() + self.timeout_seconds if self.timeout_seconds else None
        logger.info("case %s: %d warmup, %d measured iterations", case.name, self.warmup, self.iterations)

        try:
            for _ in range(self.warmup):
                self._warmup_iteration(case, extractor, deadline)
            gc.collect()
            for iteration in range(self.iterations):
                self._measured_iteration(case, extractor, iteration, deadline, result)
        except CaseTimeout as e:
            result.timed_out = True
            logger.warning("%s; reporting %d measurements collected so far", e, len(result.measurements))

        successes = [m for m in result.measurements if not m.failed]
        if successes and all(m.extracted_length == 0 for m in successes):
            result.suspicious = True
            message = f"case {case.name!r}: every successful extraction returned empty text"
            logger.warning(message)
            warnings.warn(message, SuspiciousResult, stacklevel=2)
        return result

    def _check_deadline(self, case: BenchmarkCase, deadline: float | None) -> None:
        if deadline is not None and self._clock() >= deadline:
            raise CaseTimeout(case.name, self.timeout_seconds)

    def _warmup_iteration(self, case: BenchmarkCase, extractor: DocumentExtractor, deadline: float | None) -> None:
        for path in case.file_set:
            self._check_deadline(case, deadline)
            try:
                extractor.extract(path)
            except Exception as e:
                logger.debug("warmup failure in %s on %s: %s", case.name, path, e)

    def _measured_iteration(
        self,
        case: BenchmarkCase,
        extractor: DocumentExtractor,
        iteration: int,
        deadline: float | None,
        result: CaseResult,
    ) -> None:
        recorded = {r.path for r in result.file_records}
        for path in case.file_set:
            self._check_deadline(case, deadline)
            measurement = self._measure(case, extractor, iteration, path)
            result.measurements.append(measurement)
            if measurement.failed:
                logger.warning("%s [%d] %s failed: %s", case.name, iteration, path, measurement.error)
            elif path not in recorded:
                result.file_records.append(FileRecord(path=path, extracted_length=measurement.extracted_length))
                recorded.add(path)

    def _measure(self, case: BenchmarkCase, extractor: DocumentExtractor, iteration: int, path: str) -> Measurement:
        error = None
        length = 0
        start = self._timer()
        try:
            length = extractor.extract(path)
        except Exception as e:
            error = f"{type(e).__name__}: {e}"
        elapsed = self._timer() - start

        allocated = 0
        if self.track_memory and error is None:
            allocated = self._allocated_bytes(extractor, path)

        return Measurement(
            case_name=case.name,
            iteration=iteration,
            path=path,
            elapsed_ns=max(elapsed, 0),
            bytes_allocated=allocated,
            extracted_length=length if error is None else 0,
            error=error,
        )

    def _allocated_bytes(self, extractor: DocumentExtractor, path: str) -> int:
        """Peak bytes traced above the baseline during one untimed extraction of path."""
        started_tracing = not tracemalloc.is_tracing()
        if started_tracing:
            tracemalloc.start()
        try:
            tracemalloc.reset_peak()
            baseline = tracemalloc.get_traced_memory()[0]
            try:
                extractor.extract(path)
            except Exception as e:
                logger.debug("memory pass failed on %s: %s", path, e)
                return 0
            return max(tracemalloc.get_traced_memory()[1] - baseline, 0)
        finally:
            if started_tracing:
                tracemalloc.stop()
