"""
Benchmark orchestrator.

One BenchmarkRun generates a single dataset and feeds a private copy of it
to the pure form of every selected algorithm, one at a time. Between
algorithms it yields to the event loop and checks the cancellation flag.
Results are published as each algorithm completes; an abort keeps them.
"""

import asyncio
import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .catalog import get_algorithm, keys
from .dataset import Distribution, generate
from .errors import InvalidInputError, InvalidTransitionError
from .pure import time_pure
from .settings import BENCHMARK_SIZE_DEFAULT, BENCHMARK_VALUE_MAX

logger = logging.getLogger(__name__)


class BenchmarkOutcome(str, enum.Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"
    FAILED = "failed"


@dataclass(frozen=True)
class BenchmarkResult:
    algorithm: str
    name: str
    elapsed_ms: float
    comparisons: int
    swaps: int
    dataset_size: int


@dataclass
class BenchmarkReport:
    outcome: BenchmarkOutcome
    results: List[BenchmarkResult] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def total_ms(self):
        return round(sum(r.elapsed_ms for r in self.results), 3)

    @property
    def fastest(self):
        return min(self.results, key=lambda r: r.elapsed_ms, default=None)

    @property
    def slowest(self):
        return max(self.results, key=lambda r: r.elapsed_ms, default=None)

    @property
    def fewest_comparisons(self):
        return min(self.results, key=lambda r: r.comparisons, default=None)

    @property
    def fewest_swaps(self):
        return min(self.results, key=lambda r: r.swaps, default=None)


class BenchmarkRun:
    def __init__(self, size=BENCHMARK_SIZE_DEFAULT, value_range=(0, BENCHMARK_VALUE_MAX),
                 distribution=Distribution.RANDOM, algorithms=None, seed=None, pause_s=0.0):
        selected = list(algorithms) if algorithms is not None else keys()
        if not selected:
            raise InvalidInputError("No algorithms selected for the benchmark")
        self.algorithms = [get_algorithm(k) for k in selected]
        self.distribution = Distribution(distribution)
        # a tuple: nobody gets to sort the shared dataset in place
        self.dataset = tuple(generate(size, value_range, self.distribution, seed))
        self.pause_s = pause_s
        self.results: List[BenchmarkResult] = []
        self.outcome = BenchmarkOutcome.PENDING
        self.error = None
        self.current = None
        self._cancelled = False
        self._listeners = []

    @property
    def size(self):
        return len(self.dataset)

    @property
    def cancelled(self):
        return self._cancelled

    def cancel(self):
        if not self._cancelled:
            logger.info("Benchmark abort requested")
        self._cancelled = True

    def subscribe(self, callback):
        """``callback(result, done, total)`` after each algorithm."""
        self._listeners.append(callback)

    def clear(self):
        if self.outcome is BenchmarkOutcome.RUNNING:
            raise InvalidTransitionError("Cannot clear results while the benchmark is running")
        self.results.clear()

    async def stream(self):
        """Async generator of BenchmarkResult, one per finished algorithm."""
        if self.outcome is not BenchmarkOutcome.PENDING:
            raise InvalidTransitionError(f"Benchmark already {self.outcome.value}")
        self.outcome = BenchmarkOutcome.RUNNING
        total = len(self.algorithms)
        logger.info("Benchmark: %d algorithms on %d values (%s)", total, self.size, self.distribution.value)

        try:
            for info in self.algorithms:
                await asyncio.sleep(self.pause_s)
                if self._cancelled:
                    self.outcome = BenchmarkOutcome.ABORTED
                    logger.info("Benchmark aborted after %d/%d algorithms", len(self.results), total)
                    return
                self.current = info
                try:
                    timed = time_pure(info.pure, self.dataset)
                except Exception as e:
                    self.outcome = BenchmarkOutcome.FAILED
                    self.error = e
                    logger.exception("Benchmark failed in %s", info.key)
                    raise
                result = BenchmarkResult(info.key, info.name, timed.elapsed_ms,
                                         timed.comparisons, timed.swaps, self.size)
                self.results.append(result)
                logger.debug("%s: %.3f ms, %d comparisons, %d swaps",
                             info.key, result.elapsed_ms, result.comparisons, result.swaps)
                for cb in list(self._listeners):
                    cb(result, len(self.results), total)
                yield result
            self.outcome = BenchmarkOutcome.COMPLETED
        finally:
            # consumer closed the stream or the task was cancelled
            self.current = None
            if self.outcome is BenchmarkOutcome.RUNNING:
                self.outcome = BenchmarkOutcome.ABORTED

    async def run(self) -> BenchmarkReport:
        async for _ in self.stream():
            pass
        return self.report()

    def report(self):
        return BenchmarkReport(self.outcome, list(self.results), self.error)


def format_table(results):
    header = f"{'Algorithm':<28} {'Time (ms)':>11} {'Comparisons':>13} {'Swaps':>11}"
    lines = [header, "-" * len(header)]
    for r in results:
        lines.append(f"{r.name:<28} {r.elapsed_ms:>11.3f} {r.comparisons:>13} {r.swaps:>11}")
    return "\n".join(lines)
