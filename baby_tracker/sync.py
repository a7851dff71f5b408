"""Remote spreadsheet endpoint client and event wire format."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

import requests

from baby_tracker.schema import SIDES, Event

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp. Naive values are taken as local time."""

    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    return parsed.astimezone()


def _optional_int(value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    return int(round(float(value)))


def event_to_payload(event: Event) -> dict:
    return {
        "type": event.type,
        "start": event.start.isoformat(),
        "end": event.end.isoformat(),
        "duration": event.duration,
        "volume": event.volume,
        "side": event.side,
    }


def event_from_payload(item: Any, index: int = 1, label: str = "Item") -> Event:
    """Coerce one wire record into an Event, raising ValueError if it cannot be."""

    if not isinstance(item, dict):
        raise ValueError(f"{label} {index}: expected an object")

    event_type = str(item.get("type") or "").strip()
    if not event_type:
        raise ValueError(f"{label} {index}: missing type")

    try:
        start = parse_timestamp(item["start"])
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"{label} {index}: malformed start") from exc

    try:
        duration = _optional_int(item.get("duration")) or 0
        volume = _optional_int(item.get("volume"))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label} {index}: invalid duration or volume") from exc
    if duration < 0:
        raise ValueError(f"{label} {index}: negative duration")

    side = item.get("side") or None
    if side is not None and side not in SIDES:
        raise ValueError(f"{label} {index}: invalid side '{side}'")

    return Event(type=event_type, start=start, duration=duration, volume=volume, side=side)


@dataclass
class SyncResult:
    ok: bool
    reason: Optional[str] = None


@dataclass
class LoadResult:
    ok: bool
    events: list[Event] = field(default_factory=list)
    reason: Optional[str] = None


class SyncClient:
    """Push and load events against a JSON endpoint.

    Network and HTTP failures are reported through the returned result, never
    raised. With ``max_attempts=1`` a failed push is simply dropped.
    """

    def __init__(self, url: str, timeout: float = 5.0, max_attempts: int = 1, session: Any = None):
        self.url = url
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.session = session or requests.Session()
        self._executor: Optional[ThreadPoolExecutor] = None

    def _request(self, method: str, **kwargs) -> tuple[Any, Optional[str]]:
        attempts = 0
        last_error = None
        while attempts < self.max_attempts:
            attempts += 1
            try:
                resp = self.session.request(method, self.url, timeout=self.timeout, **kwargs)
                resp.raise_for_status()
                return resp, None
            except requests.exceptions.RequestException as exc:
                last_error = str(exc)
                if attempts < self.max_attempts:
                    time.sleep(0.2 * attempts)
        return None, last_error

    def push_event(self, event: Event) -> SyncResult:
        resp, error = self._request("POST", json=event_to_payload(event))
        if resp is None:
            logger.warning("Failed to push %s event started %s: %s", event.type, event.start, error)
            return SyncResult(ok=False, reason=error)
        return SyncResult(ok=True)

    def push_event_async(self, event: Event) -> Future:
        """Push on a background worker; the returned future yields a SyncResult."""

        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="baby-tracker-sync")
        return self._executor.submit(self.push_event, event)

    def load_events(self) -> LoadResult:
        """Fetch all remote events. Records that cannot be coerced are skipped."""

        resp, error = self._request("GET")
        if resp is None:
            logger.warning("Failed to load remote events: %s", error)
            return LoadResult(ok=False, reason=error)

        try:
            payload = resp.json()
        except ValueError:
            logger.warning("Remote endpoint returned a non-JSON body")
            return LoadResult(ok=False, reason="response is not JSON")
        if not isinstance(payload, list):
            return LoadResult(ok=False, reason="response is not a list")

        events = []
        for index, item in enumerate(payload, start=1):
            try:
                events.append(event_from_payload(item, index))
            except ValueError as exc:
                logger.warning("Skipping remote record: %s", exc)
        logger.info("Loaded %d remote events", len(events))
        return LoadResult(ok=True, events=events)

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        self.session.close()
