"""Key-value configuration stores holding the custom type settings."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

CUSTOM_TYPES_KEY = "customEventTypes"
CUSTOM_COLORS_KEY = "customEventColors"
CUSTOM_SETTINGS_KEY = "customEventSettings"


class ConfigStore(Protocol):
    """String key-value store. Values are JSON documents written by callers."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryConfigStore:
    """Dict-backed store, mostly useful in tests."""

    def __init__(self, values: Optional[dict[str, str]] = None):
        self.values = dict(values or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class JsonFileConfigStore:
    """Store persisted as a single JSON object on disk.

    The file is re-read on every ``get`` so several sessions pointed at the
    same path see each other's writes. An unreadable file behaves like an
    empty one.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable config file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: top level is not an object", self.path)
            return {}
        return {key: value for key, value in data.items() if isinstance(value, str)}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def read_json(store: ConfigStore, key: str, expected_type: type):
    """Return the JSON value at ``key``, or an empty ``expected_type`` value.

    Absent keys, invalid JSON and values of the wrong shape all degrade to the
    empty default; nothing is raised.
    """

    raw = store.get(key)
    if raw is None:
        return expected_type()
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Config key %s does not hold valid JSON; using default", key)
        return expected_type()
    if not isinstance(value, expected_type):
        logger.warning("Config key %s holds %s, expected %s; using default", key, type(value).__name__, expected_type.__name__)
        return expected_type()
    return value


def write_json(store: ConfigStore, key: str, value) -> None:
    store.set(key, json.dumps(value))
