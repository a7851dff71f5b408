"""JSON adapter for tracked events."""

from __future__ import annotations

import json

from baby_tracker.schema import Event
from baby_tracker.sync import event_from_payload, event_to_payload


def parse(file_path: str) -> list[Event]:
    """Parse a JSON array of event records, as returned by the sync endpoint."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    return [event_from_payload(item, i) for i, item in enumerate(payload, start=1)]


def dump(events: list[Event], file_path: str) -> None:
    with open(file_path, "w", encoding="utf-8") as handle:
        json.dump([event_to_payload(event) for event in events], handle, indent=2)
