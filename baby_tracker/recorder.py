"""Start / finish lifecycle of events being recorded or edited."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional

from baby_tracker.registry import SchemaRegistry
from baby_tracker.schema import Event
from baby_tracker.store import EventStore
from baby_tracker.units import from_canonical_seconds, to_canonical_seconds

logger = logging.getLogger(__name__)

DEFAULT_VOLUME = 50
DEFAULT_SIDE = "Both"


class RecorderBusyError(RuntimeError):
    """Raised when a draft is started while another one is open."""


class NoActiveDraftError(RuntimeError):
    """Raised when finishing or cancelling without an open draft."""


def local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class Draft:
    """An event being recorded. Nothing is stored until it is finished.

    ``duration`` is expressed in the unit of the type's duration field
    (minutes for the built-in schema); 0 or None means "until now".
    ``stored_duration`` holds the seconds of the event being edited and is
    kept as is while ``duration`` is left unchanged.
    """

    type: str
    start: datetime
    duration: Optional[float] = None
    volume: int = DEFAULT_VOLUME
    side: str = DEFAULT_SIDE
    values: dict[str, Any] = field(default_factory=dict)
    index: Optional[int] = None
    stored_duration: Optional[int] = None

    @property
    def is_edit(self) -> bool:
        return self.index is not None


class EventRecorder:
    def __init__(self, registry: SchemaRegistry, store: EventStore, clock: Callable[[], datetime] = local_now):
        self.registry = registry
        self.store = store
        self.clock = clock
        self.draft: Optional[Draft] = None
        self.last_volume = DEFAULT_VOLUME

    def start(self, event_type: str) -> Draft:
        if self.draft is not None:
            raise RecorderBusyError(f"Already recording {self.draft.type}")
        self.draft = Draft(type=event_type, start=self.clock(), volume=self.last_volume)
        logger.debug("Started %s at %s", event_type, self.draft.start)
        return self.draft

    def edit(self, index: int) -> Draft:
        """Open a draft pre-filled from the stored event at ``index``."""

        if self.draft is not None:
            raise RecorderBusyError(f"Already recording {self.draft.type}")
        self.store.check_index(index)
        event = self.store.all()[index]
        unit = self.registry.resolve_unit(event.type, "duration")
        self.draft = Draft(
            type=event.type,
            start=event.start,
            duration=from_canonical_seconds(event.duration, unit),
            volume=event.volume if event.volume is not None else self.last_volume,
            side=event.side or DEFAULT_SIDE,
            index=index,
            stored_duration=event.duration,
        )
        return self.draft

    def cancel(self) -> None:
        if self.draft is None:
            raise NoActiveDraftError("No event is being recorded")
        self.draft = None

    def finish(self) -> Event:
        """Finalize the open draft and commit it to the store."""

        draft = self.draft
        if draft is None:
            raise NoActiveDraftError("No event is being recorded")

        event = Event(
            type=draft.type,
            start=draft.start,
            duration=self._duration_seconds(draft),
            volume=int(draft.volume) if self.registry.has_field(draft.type, "volume") else None,
            side=draft.side if self.registry.has_field(draft.type, "side") else None,
        )
        if draft.is_edit:
            self.store.replace_at(draft.index, event)
        else:
            self.store.append(event)

        self.draft = None
        if event.volume is not None:
            self.last_volume = event.volume
        logger.info("Recorded %s: %ss", event.type, event.duration)
        return event

    def _duration_seconds(self, draft: Draft) -> int:
        unit = self.registry.resolve_unit(draft.type, "duration")
        if draft.stored_duration is not None and draft.duration == from_canonical_seconds(draft.stored_duration, unit):
            return draft.stored_duration
        if draft.duration and draft.duration > 0:
            return round(to_canonical_seconds(draft.duration, unit))
        elapsed = (self.clock() - draft.start).total_seconds()
        return max(0, round(elapsed))
