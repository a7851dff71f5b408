"""Tracker session wiring the store, schema registry, recorder and sync client."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from datetime import datetime
from typing import Callable, Optional

from baby_tracker.aggregation import TrendSeries, daily_summaries, group_by_day, trend_series
from baby_tracker.config_store import ConfigStore, JsonFileConfigStore
from baby_tracker.custom_types import CustomTypeRegistry
from baby_tracker.recorder import Draft, EventRecorder, local_now
from baby_tracker.registry import SchemaRegistry
from baby_tracker.schema import Event
from baby_tracker.settings import Settings, settings as default_settings
from baby_tracker.store import EventStore
from baby_tracker.sync import LoadResult, SyncClient

logger = logging.getLogger(__name__)


class TrackerSession:
    """State of one tracker session.

    Every finished event is pushed to the sync client when one is configured.
    By default the push runs in the background and its outcome is only
    logged; ``pending_pushes`` keeps the futures for callers that care.
    """

    def __init__(
        self,
        config_store: ConfigStore,
        sync_client: Optional[SyncClient] = None,
        clock: Callable[[], datetime] = local_now,
        wait_for_push: bool = False,
    ):
        self.config_store = config_store
        self.registry = SchemaRegistry(config_store)
        self.custom_types = CustomTypeRegistry(config_store)
        self.store = EventStore()
        self.recorder = EventRecorder(self.registry, self.store, clock=clock)
        self.sync_client = sync_client
        self.wait_for_push = wait_for_push
        self.pending_pushes: list[Future] = []

    @classmethod
    def from_settings(cls, config: Settings = default_settings) -> "TrackerSession":
        sync_client = None
        if config.sync_url:
            sync_client = SyncClient(config.sync_url, timeout=config.sync_timeout, max_attempts=config.sync_max_attempts)
        return cls(JsonFileConfigStore(config.config_path), sync_client=sync_client)

    @property
    def draft(self) -> Optional[Draft]:
        return self.recorder.draft

    def events(self) -> list[Event]:
        return self.store.all()

    def start(self, event_type: str) -> Draft:
        return self.recorder.start(event_type)

    def edit(self, index: int) -> Draft:
        return self.recorder.edit(index)

    def cancel(self) -> None:
        self.recorder.cancel()

    def finish(self) -> Event:
        event = self.recorder.finish()
        if self.sync_client is not None:
            if self.wait_for_push:
                self.sync_client.push_event(event)
            else:
                self.pending_pushes = [future for future in self.pending_pushes if not future.done()]
                self.pending_pushes.append(self.sync_client.push_event_async(event))
        return event

    def delete(self, index: int) -> Event:
        return self.store.remove_at(index)

    def load_remote(self) -> LoadResult:
        """Load remote events and merge them with local ones.

        Remote events come first, followed by local events the remote side
        does not have yet (for example ones finalized before the load
        completed). An open edit draft is re-pointed at its event's new
        position.
        """

        if self.sync_client is None:
            return LoadResult(ok=False, reason="sync disabled")

        result = self.sync_client.load_events()
        if not result.ok:
            return result

        local = self.store.all()
        merged = result.events + [event for event in local if event not in result.events]
        draft = self.recorder.draft
        if draft is not None and draft.is_edit:
            draft.index = merged.index(local[draft.index])
        self.store.replace_all(merged)
        logger.info("Merged %d remote and %d local events", len(result.events), len(merged) - len(result.events))
        return result

    def timeline(self) -> dict:
        """Events grouped by day, each paired with its position in the store."""

        positions = {id(event): index for index, event in enumerate(self.store.all())}
        return {
            day: [(positions[id(event)], event) for event in day_events]
            for day, day_events in group_by_day(self.store.all()).items()
        }

    def summaries(self) -> dict:
        return daily_summaries(self.store.all())

    def trends(self) -> TrendSeries:
        return trend_series(self.store.all())

    def close(self) -> None:
        if self.sync_client is not None:
            self.sync_client.close()
