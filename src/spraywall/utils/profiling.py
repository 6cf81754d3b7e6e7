"""
Latency tracking for the editor's UI-thread work.

Flood fill, canvas redraw and export all run synchronously inside pointer
and button handlers, so each is timed against a budget and a miss is logged
as a warning.
"""

import functools
import logging
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Optional

logger = logging.getLogger("spraywall.profiling")


@dataclass
class TimingResult:
    """One timed call."""
    operation: str
    duration_ms: float
    timestamp: float
    success: bool = True
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def over_budget(self) -> bool:
        budget = PerformanceProfiler.TARGETS.get(self.operation)
        return budget is not None and self.duration_ms > budget


class PerformanceProfiler:
    """
    Process-wide collector of timing results.

    Only the most recent ``max_results`` results are kept.
    """

    # Budgets in milliseconds
    TARGETS = {
        "flood_fill": 100,
        "canvas_render": 50,
        "export_render": 200,
        "image_load": 1000,
        "problem_save": 1000,
    }

    _instance: Optional['PerformanceProfiler'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._initialized = True
        self.enabled = True
        self._results: Deque[TimingResult] = deque(maxlen=1000)

    @classmethod
    def get_instance(cls) -> 'PerformanceProfiler':
        return cls()

    @property
    def results(self) -> List[TimingResult]:
        return list(self._results)

    @property
    def max_results(self) -> int:
        return self._results.maxlen

    @max_results.setter
    def max_results(self, value: int):
        self._results = deque(self._results, maxlen=value)

    def record(self, operation: str, duration_ms: float,
               success: bool = True, **details) -> Optional[TimingResult]:
        """Store a finished measurement and log it."""
        if not self.enabled:
            return None

        result = TimingResult(operation, duration_ms, time.time(), success, details)
        self._results.append(result)

        if result.over_budget:
            logger.warning(
                f"Performance warning: {operation} took {duration_ms:.1f}ms "
                f"(target: {self.TARGETS[operation]}ms)"
            )
        else:
            logger.debug(f"{operation}: {duration_ms:.1f}ms")
        return result

    @contextmanager
    def measure(self, operation: str, **details):
        """Time the enclosed block; a raised exception is recorded as a failure."""
        start = time.perf_counter()
        success = False
        try:
            yield
            success = True
        finally:
            self.record(operation, (time.perf_counter() - start) * 1000,
                        success=success, **details)

    def get_summary(self) -> Dict[str, Any]:
        """Count, average, min and max per operation, with its budget."""
        grouped: Dict[str, List[float]] = {}
        for result in self._results:
            grouped.setdefault(result.operation, []).append(result.duration_ms)

        summary = {}
        for operation, durations in grouped.items():
            budget = self.TARGETS.get(operation)
            avg = sum(durations) / len(durations)
            summary[operation] = {
                "count": len(durations),
                "avg_ms": round(avg, 2),
                "min_ms": round(min(durations), 2),
                "max_ms": round(max(durations), 2),
                "target_ms": budget,
                "meets_target": avg <= budget if budget else None,
            }
        return summary

    def clear(self):
        self._results.clear()


def timed(operation: str = None):
    """
    Decorator recording each call under ``operation``.

    Usage:
        @timed("flood_fill")
        def flood_fill(self, image, seed):
            ...
    """
    def decorator(func: Callable) -> Callable:
        name = operation or func.__name__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with PerformanceProfiler.get_instance().measure(name):
                return func(*args, **kwargs)

        return wrapper
    return decorator


def profile_block(operation: str):
    """
    Context manager timing a block.

    Usage:
        with profile_block("problem_save"):
            ...
    """
    return PerformanceProfiler.get_instance().measure(operation)


profiler = PerformanceProfiler.get_instance()
