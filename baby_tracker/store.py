"""In-memory ordered event store."""

from __future__ import annotations

from typing import Iterable

from baby_tracker.schema import Event


class EventStore:
    """Events in insertion order. Positions are the only identity events have."""

    def __init__(self, events: Iterable[Event] = ()):
        self._events: list[Event] = list(events)

    def append(self, event: Event) -> int:
        """Append ``event`` and return its position."""

        self._events.append(event)
        return len(self._events) - 1

    def replace_at(self, index: int, event: Event) -> None:
        self.check_index(index)
        self._events[index] = event

    def remove_at(self, index: int) -> Event:
        self.check_index(index)
        return self._events.pop(index)

    def replace_all(self, events: Iterable[Event]) -> None:
        self._events = list(events)

    def all(self) -> list[Event]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def check_index(self, index: int) -> None:
        # Negative positions would silently address the list from the end.
        if not 0 <= index < len(self._events):
            raise IndexError(f"Event position {index} out of range (size {len(self._events)})")
