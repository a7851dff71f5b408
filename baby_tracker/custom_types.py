"""Creation and removal of user-defined event types."""

from __future__ import annotations

import logging
from typing import Iterable

from baby_tracker.config_store import (
    CUSTOM_COLORS_KEY,
    CUSTOM_SETTINGS_KEY,
    CUSTOM_TYPES_KEY,
    ConfigStore,
    read_json,
    write_json,
)
from baby_tracker.schema import (
    BUILTIN_TYPES,
    CustomInput,
    CustomTypeSettings,
    normalize_kind,
    validate_custom_inputs,
)

logger = logging.getLogger(__name__)

BUILTIN_COLORS = {
    "Sleeping": "#a78bfa",
    "Pumping": "#34d399",
    "Breastfeeding": "#f472b6",
}
DEFAULT_CUSTOM_COLOR = "#8884d8"
NEUTRAL_COLOR = "#9ca3af"


class CustomTypeRegistry:
    """Ordered list of custom types plus their colors and schema settings."""

    def __init__(self, store: ConfigStore):
        self.store = store

    def list_types(self) -> list[str]:
        return [name for name in read_json(self.store, CUSTOM_TYPES_KEY, list) if isinstance(name, str)]

    def all_types(self) -> list[str]:
        """Built-in types followed by custom types in creation order."""

        return [*BUILTIN_TYPES, *self.list_types()]

    def create_type(
        self,
        name: str,
        color: str = DEFAULT_CUSTOM_COLOR,
        track_duration: bool = True,
        track_volume: bool = True,
        custom_inputs: Iterable = (),
    ) -> bool:
        """Register a new custom type. Returns False when the type or an input name is rejected.

        ``custom_inputs`` holds ``CustomInput`` objects or ``(name, kind)`` pairs.
        """

        name = name.strip()
        if not name:
            logger.info("Rejected custom type with blank name")
            return False
        if name in BUILTIN_TYPES or name in self.list_types():
            logger.info("Rejected custom type %r: name already in use", name)
            return False

        inputs = []
        for item in custom_inputs:
            if not isinstance(item, CustomInput):
                input_name, kind = item
                item = CustomInput(name=input_name, kind=normalize_kind(kind))
            inputs.append(CustomInput(name=item.name.strip(), kind=item.kind))
        try:
            validate_custom_inputs(inputs)
        except ValueError as exc:
            logger.info("Rejected custom type %r: %s", name, exc)
            return False
        settings = CustomTypeSettings(track_duration=track_duration, track_volume=track_volume, custom_inputs=inputs)

        records = read_json(self.store, CUSTOM_SETTINGS_KEY, dict)
        records[name] = settings.to_record()
        write_json(self.store, CUSTOM_SETTINGS_KEY, records)

        colors = read_json(self.store, CUSTOM_COLORS_KEY, dict)
        colors[name] = color
        write_json(self.store, CUSTOM_COLORS_KEY, colors)

        write_json(self.store, CUSTOM_TYPES_KEY, [*self.list_types(), name])
        logger.info("Created custom type %r", name)
        return True

    def remove_type(self, name: str) -> None:
        """Remove a custom type with its color and settings. Unknown names are a no-op."""

        types = self.list_types()
        colors = read_json(self.store, CUSTOM_COLORS_KEY, dict)
        records = read_json(self.store, CUSTOM_SETTINGS_KEY, dict)
        if name not in types and name not in colors and name not in records:
            return

        write_json(self.store, CUSTOM_TYPES_KEY, [t for t in types if t != name])
        colors.pop(name, None)
        write_json(self.store, CUSTOM_COLORS_KEY, colors)
        records.pop(name, None)
        write_json(self.store, CUSTOM_SETTINGS_KEY, records)
        logger.info("Removed custom type %r", name)

    def color_for(self, type_name: str) -> str:
        if type_name in BUILTIN_COLORS:
            return BUILTIN_COLORS[type_name]
        color = read_json(self.store, CUSTOM_COLORS_KEY, dict).get(type_name)
        return color if isinstance(color, str) and color else NEUTRAL_COLOR
