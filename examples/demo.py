"""Demo script for baby-tracker."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from baby_tracker.adapters.csv_adapter import parse
from baby_tracker.aggregation import format_summary_line, group_by_day, summarize, trend_series
from baby_tracker.config_store import InMemoryConfigStore
from baby_tracker.custom_types import CustomTypeRegistry
from baby_tracker.registry import SchemaRegistry


def main() -> None:
    events = parse("examples/sample_events.csv")
    for day, day_events in group_by_day(events).items():
        print(day.isoformat(), "-", format_summary_line(summarize(day_events)))
    print("Sleep trend:", trend_series(events).sleep_hours)

    store = InMemoryConfigStore()
    CustomTypeRegistry(store).create_type(
        "Diaper",
        "#f59e0b",
        track_duration=False,
        track_volume=False,
        custom_inputs=[("Wetness", "range"), ("Kind", "select")],
    )
    print("Diaper fields:", SchemaRegistry(store).resolve_schema("Diaper"))


if __name__ == "__main__":
    main()
