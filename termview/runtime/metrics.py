"""Rolling loop metrics for lightweight runtime diagnostics."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IterationMetrics:
    """Metrics captured for a single loop iteration."""

    iteration_index: int
    dt_ms: float
    modal_depth: int
    events_dispatched: int
    idle_broadcasts: int
    poll_failures: int = 0


@dataclass(frozen=True, slots=True)
class MetricsSnapshot:
    """Read-only snapshot for loggers and tests."""

    last_iteration: IterationMetrics | None
    rolling_dt_ms: float
    total_events: int
    total_idle_broadcasts: int
    max_modal_depth: int


class NoopMetricsCollector:
    """No-op collector for zero-impact disabled mode."""

    def begin_iteration(self, modal_depth: int) -> None:
        _ = modal_depth

    def increment_events_dispatched(self, count: int = 1) -> None:
        _ = count

    def increment_idle_broadcasts(self, count: int = 1) -> None:
        _ = count

    def increment_poll_failures(self, count: int = 1) -> None:
        _ = count

    def end_iteration(self, dt_ms: float) -> None:
        _ = dt_ms

    def snapshot(self) -> MetricsSnapshot:
        return MetricsSnapshot(
            last_iteration=None,
            rolling_dt_ms=0.0,
            total_events=0,
            total_idle_broadcasts=0,
            max_modal_depth=0,
        )


class MetricsCollector:
    """Small in-memory rolling metrics collector."""

    def __init__(self, *, window_size: int = 60) -> None:
        self._window_size = max(1, int(window_size))
        self._dt_window: deque[float] = deque(maxlen=self._window_size)
        self._iteration_index = 0
        self._modal_depth = 0
        self._events_dispatched = 0
        self._idle_broadcasts = 0
        self._poll_failures = 0
        self._total_events = 0
        self._total_idle_broadcasts = 0
        self._max_modal_depth = 0
        self._last_iteration: IterationMetrics | None = None

    def begin_iteration(self, modal_depth: int) -> None:
        self._iteration_index += 1
        self._modal_depth = int(modal_depth)
        self._max_modal_depth = max(self._max_modal_depth, self._modal_depth)
        self._events_dispatched = 0
        self._idle_broadcasts = 0
        self._poll_failures = 0

    def increment_events_dispatched(self, count: int = 1) -> None:
        self._events_dispatched += int(count)
        self._total_events += int(count)

    def increment_idle_broadcasts(self, count: int = 1) -> None:
        self._idle_broadcasts += int(count)
        self._total_idle_broadcasts += int(count)

    def increment_poll_failures(self, count: int = 1) -> None:
        self._poll_failures += int(count)

    def end_iteration(self, dt_ms: float) -> IterationMetrics:
        dt = float(dt_ms)
        self._dt_window.append(dt)
        self._last_iteration = IterationMetrics(
            iteration_index=self._iteration_index,
            dt_ms=dt,
            modal_depth=self._modal_depth,
            events_dispatched=self._events_dispatched,
            idle_broadcasts=self._idle_broadcasts,
            poll_failures=self._poll_failures,
        )
        return self._last_iteration

    def snapshot(self) -> MetricsSnapshot:
        rolling_dt = (sum(self._dt_window) / len(self._dt_window)) if self._dt_window else 0.0
        return MetricsSnapshot(
            last_iteration=self._last_iteration,
            rolling_dt_ms=rolling_dt,
            total_events=self._total_events,
            total_idle_broadcasts=self._total_idle_broadcasts,
            max_modal_depth=self._max_modal_depth,
        )


def create_metrics_collector(
    *, enabled: bool, window_size: int = 60
) -> MetricsCollector | NoopMetricsCollector:
    """Factory returning enabled collector or no-op implementation."""
    if not enabled:
        return NoopMetricsCollector()
    return MetricsCollector(window_size=window_size)
