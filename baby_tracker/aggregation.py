"""Per-day grouping and summaries for the timeline and trend charts."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date

from baby_tracker.schema import Event
from baby_tracker.units import seconds_to_hours, seconds_to_minutes


@dataclass(frozen=True)
class DailySummary:
    """Totals for one calendar day. Durations are in seconds."""

    sleeping_duration: int = 0
    pumping_count: int = 0
    pumping_volume: int = 0
    breastfeeding_count: int = 0
    breastfeeding_duration: int = 0

    @property
    def sleep_hours(self) -> float:
        return seconds_to_hours(self.sleeping_duration)

    @property
    def breastfeeding_minutes(self) -> int:
        return seconds_to_minutes(self.breastfeeding_duration)


@dataclass
class TrendSeries:
    """Day-keyed datasets for the three trend charts."""

    sleep_hours: list[tuple[date, float]] = field(default_factory=list)
    pumping_volume: list[tuple[date, int]] = field(default_factory=list)
    breastfeeding_minutes: list[tuple[date, int]] = field(default_factory=list)


def day_key(event: Event) -> date:
    """Calendar day of the event start in local time."""

    start = event.start
    if start.tzinfo is not None:
        start = start.astimezone()
    return start.date()


def group_by_day(events: list[Event]) -> dict[date, list[Event]]:
    """Group events by local calendar day, days and events in chronological order."""

    grouped: dict[date, list[Event]] = defaultdict(list)
    for event in sorted(events, key=lambda e: e.start):
        grouped[day_key(event)].append(event)
    return {day: grouped[day] for day in sorted(grouped)}


def summarize(day_events: list[Event]) -> DailySummary:
    """Accumulate sleep, pumping and breastfeeding totals. Other types are ignored."""

    sleeping_duration = 0
    pumping_count = 0
    pumping_volume = 0
    breastfeeding_count = 0
    breastfeeding_duration = 0

    for event in day_events:
        if event.type == "Sleeping":
            sleeping_duration += event.duration
        elif event.type == "Pumping":
            pumping_count += 1
            pumping_volume += event.volume or 0
        elif event.type == "Breastfeeding":
            breastfeeding_count += 1
            breastfeeding_duration += event.duration

    return DailySummary(
        sleeping_duration=sleeping_duration,
        pumping_count=pumping_count,
        pumping_volume=pumping_volume,
        breastfeeding_count=breastfeeding_count,
        breastfeeding_duration=breastfeeding_duration,
    )


def daily_summaries(events: list[Event]) -> dict[date, DailySummary]:
    return {day: summarize(day_events) for day, day_events in group_by_day(events).items()}


def trend_series(events: list[Event]) -> TrendSeries:
    """Build the sleep hours, pumping volume and breastfeeding minutes series."""

    series = TrendSeries()
    for day, summary in daily_summaries(events).items():
        series.sleep_hours.append((day, summary.sleep_hours))
        series.pumping_volume.append((day, summary.pumping_volume))
        series.breastfeeding_minutes.append((day, summary.breastfeeding_minutes))
    return series


def format_summary_line(summary: DailySummary) -> str:
    """Timeline header line for one day."""

    return (
        f"Sleep: {summary.sleep_hours} hrs • "
        f"Pumping: {summary.pumping_count}x, {summary.pumping_volume}ml • "
        f"Breastfeeding: {summary.breastfeeding_count}x, {summary.breastfeeding_minutes} min"
    )
