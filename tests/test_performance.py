"""Tests for performance monitoring."""

import tracemalloc

import pytest

from version_matrix.utils.performance import PerformanceMonitor


class TestPerformanceMonitor:
    """Test stage measurement and memory tracing."""

    def test_measure_records_stages(self):
        """Test that each measured block adds one metric."""
        monitor = PerformanceMonitor()

        with monitor.measure("parse"):
            pass
        with pytest.raises(RuntimeError):
            with monitor.measure("match"):
                raise RuntimeError("boom")

        assert [m.stage for m in monitor.metrics] == ["parse", "match"]
        assert monitor.metrics[0].memory_peak_mb is None

    def test_close_stops_own_tracing(self):
        """Test that the monitor stops the tracing it started."""
        if tracemalloc.is_tracing():
            pytest.skip("tracemalloc is already running")

        monitor = PerformanceMonitor(enable_memory_tracking=True)
        with monitor.measure("expand"):
            [str(i) for i in range(1000)]
        monitor.close()

        assert not tracemalloc.is_tracing()
        assert monitor.metrics[0].memory_peak_mb is not None

    def test_close_leaves_other_tracing(self):
        """Test that tracing started elsewhere keeps running."""
        if tracemalloc.is_tracing():
            pytest.skip("tracemalloc is already running")

        tracemalloc.start()
        try:
            PerformanceMonitor(enable_memory_tracking=True).close()
            assert tracemalloc.is_tracing()
        finally:
            tracemalloc.stop()
