"""Performance monitoring utilities for VersionMatrix."""

import functools
import time
import tracemalloc
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, TypeVar

from rich.console import Console
from rich.table import Table

from .logging import get_logger

F = TypeVar('F', bound=Callable[..., Any])


@dataclass
class StageMetrics:
    """Timing and memory figures for one measured pipeline stage."""

    stage: str
    execution_time: float
    memory_usage_mb: Optional[float] = None
    memory_peak_mb: Optional[float] = None


class PerformanceMonitor:
    """Collects stage timings, optionally with tracemalloc memory figures."""

    def __init__(self, enable_memory_tracking: bool = False) -> None:
        self.metrics: List[StageMetrics] = []
        self.enable_memory_tracking = enable_memory_tracking
        self._owns_tracing = False

        if enable_memory_tracking and not tracemalloc.is_tracing():
            tracemalloc.start()
            self._owns_tracing = True

    @contextmanager
    def measure(self, name: str) -> Iterator[None]:
        """Context manager for measuring a pipeline stage.

        Args:
            name: Name of the stage being measured
        """
        start_time = time.perf_counter()
        start_memory = tracemalloc.get_traced_memory()[0] if self.enable_memory_tracking else 0

        try:
            yield
        finally:
            execution_time = time.perf_counter() - start_time
            usage = peak = None
            if self.enable_memory_tracking:
                current, peak_bytes = tracemalloc.get_traced_memory()
                usage = (current - start_memory) / 1024 / 1024
                peak = peak_bytes / 1024 / 1024

            self.metrics.append(StageMetrics(
                stage=name,
                execution_time=execution_time,
                memory_usage_mb=usage,
                memory_peak_mb=peak,
            ))

    def build_table(self) -> Table:
        """Render the per-stage metrics as a rich table."""
        table = Table(title="Performance Summary")
        table.add_column("Stage", style="cyan")
        table.add_column("Time", style="green")
        if self.enable_memory_tracking:
            table.add_column("Peak Memory", style="yellow")

        for metric in self.metrics:
            row = [metric.stage, f"{metric.execution_time:.4f}s"]
            if self.enable_memory_tracking:
                row.append(f"{metric.memory_peak_mb or 0:.2f} MB")
            table.add_row(*row)
        return table

    def print_summary(self, console: Optional[Console] = None) -> None:
        """Print performance summary to console."""
        if not self.metrics:
            return
        (console or Console()).print(self.build_table())

    def close(self) -> None:
        """Stop memory tracing if this monitor started it."""
        if self._owns_tracing:
            tracemalloc.stop()
            self._owns_tracing = False


def benchmark(func: F) -> F:
    """Simple benchmark decorator.

    Timing is logged at DEBUG, so it shows up with verbose logging.

    Args:
        func: Function to benchmark

    Returns:
        Wrapped function with timing
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            get_logger("Performance").debug(
                f"{func.__name__} took {time.perf_counter() - start_time:.4f} seconds"
            )
    return wrapper  # type: ignore[return-value]
