from __future__ import annotations

from termview.runtime.metrics import MetricsCollector, NoopMetricsCollector, create_metrics_collector


def test_metrics_collector_records_iteration() -> None:
    collector = MetricsCollector(window_size=4)
    collector.begin_iteration(modal_depth=1)
    collector.increment_events_dispatched()
    collector.increment_idle_broadcasts()
    collector.increment_poll_failures()
    iteration = collector.end_iteration(12.0)

    assert iteration.iteration_index == 1
    assert iteration.modal_depth == 1
    assert iteration.events_dispatched == 1
    assert iteration.idle_broadcasts == 1
    assert iteration.poll_failures == 1

    snap = collector.snapshot()
    assert snap.last_iteration is iteration
    assert snap.rolling_dt_ms == 12.0
    assert snap.max_modal_depth == 1


def test_metrics_collector_rolling_window_and_totals() -> None:
    collector = MetricsCollector(window_size=2)
    for dt, depth in ((10.0, 0), (30.0, 2), (50.0, 1)):
        collector.begin_iteration(depth)
        collector.increment_events_dispatched(2)
        collector.end_iteration(dt)

    snap = collector.snapshot()
    assert snap.rolling_dt_ms == 40.0
    assert snap.total_events == 6
    assert snap.max_modal_depth == 2
    assert snap.last_iteration is not None
    assert snap.last_iteration.events_dispatched == 2


def test_create_metrics_collector_respects_flag() -> None:
    assert isinstance(create_metrics_collector(enabled=False), NoopMetricsCollector)
    assert isinstance(create_metrics_collector(enabled=True), MetricsCollector)
    assert NoopMetricsCollector().snapshot().total_events == 0
