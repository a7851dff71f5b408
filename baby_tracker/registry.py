"""Resolution of per-type input schemas."""

from __future__ import annotations

import logging
from typing import Optional

from baby_tracker.config_store import CUSTOM_SETTINGS_KEY, ConfigStore, read_json
from baby_tracker.schema import (
    BUILTIN_SCHEMAS,
    DURATION_FIELD,
    SIDE_FIELD,
    VOLUME_FIELD,
    CustomTypeSettings,
    FieldDescriptor,
)

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """Merge built-in schemas with user customizations from a config store."""

    def __init__(self, store: ConfigStore):
        self.store = store

    def custom_settings(self, type_name: str) -> Optional[CustomTypeSettings]:
        """Return the stored customization of ``type_name``, or None if absent or malformed."""

        records = read_json(self.store, CUSTOM_SETTINGS_KEY, dict)
        record = records.get(type_name)
        if record is None:
            return None
        try:
            return CustomTypeSettings.from_record(record)
        except ValueError as exc:
            logger.warning("Ignoring malformed settings for %r: %s", type_name, exc)
            return None

    def resolve_schema(self, type_name: str) -> list[FieldDescriptor]:
        """Return the ordered input fields for ``type_name``.

        Built-in types always resolve to their fixed schema. Custom types get
        their own inputs first, then duration, then volume and side.
        """

        if type_name in BUILTIN_SCHEMAS:
            return list(BUILTIN_SCHEMAS[type_name])

        settings = self.custom_settings(type_name)
        if settings is None:
            return []

        fields: list[FieldDescriptor] = [item.to_descriptor() for item in settings.custom_inputs]
        if settings.track_duration:
            fields.append(DURATION_FIELD)
        if settings.track_volume:
            fields.extend([VOLUME_FIELD, SIDE_FIELD])
        return fields

    def field(self, type_name: str, field_name: str) -> Optional[FieldDescriptor]:
        for descriptor in self.resolve_schema(type_name):
            if descriptor.name == field_name:
                return descriptor
        return None

    def has_field(self, type_name: str, field_name: str) -> bool:
        return self.field(type_name, field_name) is not None

    def resolve_unit(self, type_name: str, field_name: str) -> Optional[str]:
        """Return the unit tag of a field, or None when the field or its unit is missing."""

        descriptor = self.field(type_name, field_name)
        return descriptor.unit if descriptor is not None else None
