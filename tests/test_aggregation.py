import time
from datetime import date, datetime, timezone

import pytest

from baby_tracker.aggregation import (
    DailySummary,
    daily_summaries,
    day_key,
    format_summary_line,
    group_by_day,
    summarize,
    trend_series,
)
from baby_tracker.schema import Event


def sample_events():
    return [
        Event("Breastfeeding", datetime.fromisoformat("2025-01-02T09:00:00"), 600, 80, "Left"),
        Event("Sleeping", datetime.fromisoformat("2025-01-01T22:00:00"), 3600),
        Event("Pumping", datetime.fromisoformat("2025-01-03T07:00:00"), 900, 100, "Both"),
        Event("Sleeping", datetime.fromisoformat("2025-01-01T01:00:00"), 7200),
        Event("Pumping", datetime.fromisoformat("2025-01-02T06:00:00"), 900, 60, "Right"),
        Event("Snack", datetime.fromisoformat("2025-01-02T05:00:00"), 300),
    ]


def test_summarize_example():
    day = [
        Event("Sleeping", datetime.fromisoformat("2025-01-01T01:00:00"), 7200),
        Event("Pumping", datetime.fromisoformat("2025-01-01T06:00:00"), 0, 60, "Both"),
        Event("Pumping", datetime.fromisoformat("2025-01-01T12:00:00"), 0, 90, "Left"),
        Event("Breastfeeding", datetime.fromisoformat("2025-01-01T15:00:00"), 600, 50, "Right"),
    ]
    summary = summarize(day)
    assert summary == DailySummary(
        sleeping_duration=7200,
        pumping_count=2,
        pumping_volume=150,
        breastfeeding_count=1,
        breastfeeding_duration=600,
    )


def test_summarize_ignores_unknown_types_and_missing_volume():
    day = [
        Event("Snack", datetime.fromisoformat("2025-01-01T01:00:00"), 7200, 30),
        Event("Pumping", datetime.fromisoformat("2025-01-01T02:00:00"), 600),
    ]
    summary = summarize(day)
    assert summary.pumping_count == 1
    assert summary.pumping_volume == 0
    assert summary.sleeping_duration == 0


def test_summarize_is_pure():
    events = sample_events()
    snapshot = list(events)
    assert summarize(events) == summarize(list(reversed(events)))
    assert events == snapshot


def test_group_by_day_orders_days_and_events():
    grouped = group_by_day(sample_events())
    assert list(grouped) == [date(2025, 1, 1), date(2025, 1, 2), date(2025, 1, 3)]
    for day_events in grouped.values():
        starts = [event.start for event in day_events]
        assert starts == sorted(starts)
    assert [e.type for e in grouped[date(2025, 1, 2)]] == ["Snack", "Pumping", "Breastfeeding"]


def test_trend_series_and_daily_summaries():
    events = sample_events()
    series = trend_series(events)
    assert series.sleep_hours == [(date(2025, 1, 1), 3.0), (date(2025, 1, 2), 0.0), (date(2025, 1, 3), 0.0)]
    assert series.pumping_volume == [(date(2025, 1, 1), 0), (date(2025, 1, 2), 60), (date(2025, 1, 3), 100)]
    assert series.breastfeeding_minutes == [(date(2025, 1, 1), 0), (date(2025, 1, 2), 10), (date(2025, 1, 3), 0)]
    assert daily_summaries(events)[date(2025, 1, 2)].breastfeeding_count == 1


def test_format_summary_line():
    summary = DailySummary(7200, 2, 150, 1, 600)
    assert format_summary_line(summary) == "Sleep: 2.0 hrs • Pumping: 2x, 150ml • Breastfeeding: 1x, 10 min"


def test_empty_input():
    assert group_by_day([]) == {}
    assert summarize([]) == DailySummary()


@pytest.fixture
def eastern_tz(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "EST5")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_aware_start_is_keyed_by_local_day(eastern_tz):
    event = Event("Sleeping", datetime(2025, 1, 2, 2, 0, tzinfo=timezone.utc), 600)

    assert day_key(event) == date(2025, 1, 1)
    assert list(group_by_day([event])) == [date(2025, 1, 1)]
