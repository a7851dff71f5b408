"""CSV adapter for spreadsheet exports of tracked events."""

from __future__ import annotations

import csv

from baby_tracker.schema import Event
from baby_tracker.sync import event_from_payload

_REQUIRED_FIELDS = {"type", "start"}


def _parse_row(row: dict, row_number: int) -> Event:
    missing = sorted(field for field in _REQUIRED_FIELDS if not row.get(field))
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")
    return event_from_payload(row, row_number, label="Row")


def parse(file_path: str) -> list[Event]:
    """Parse CSV file with columns type,start,duration,volume,side."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        events: list[Event] = []
        for row_number, row in enumerate(reader, start=2):
            events.append(_parse_row(row, row_number))
        return events
