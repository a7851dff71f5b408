"""Core data schema for tracked events and their input fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import ClassVar, Optional, Union

from baby_tracker.units import Unit

BUILTIN_TYPES = ("Sleeping", "Pumping", "Breastfeeding")
SIDES = ("Both", "Left", "Right")


@dataclass
class Event:
    """A finalized event. ``duration`` is always in seconds."""

    type: str
    start: datetime
    duration: int
    volume: Optional[int] = None
    side: Optional[str] = None

    @property
    def end(self) -> datetime:
        return self.start + timedelta(seconds=self.duration)


@dataclass(frozen=True)
class TimestampField:
    name: str
    label: str
    unit: Optional[str] = None
    kind: ClassVar[str] = "timestamp"


@dataclass(frozen=True)
class NumericField:
    name: str
    label: str
    unit: Optional[str] = None
    kind: ClassVar[str] = "numeric"


@dataclass(frozen=True)
class RangedField:
    name: str
    label: str
    min: float = 0
    max: float = 100
    step: float = 5
    unit: Optional[str] = None
    kind: ClassVar[str] = "ranged"


@dataclass(frozen=True)
class EnumField:
    name: str
    label: str
    options: tuple[str, ...] = ("Option 1", "Option 2")
    unit: Optional[str] = None
    kind: ClassVar[str] = "enumerated"


FieldDescriptor = Union[TimestampField, NumericField, RangedField, EnumField]

FIELD_KINDS = {
    TimestampField.kind: TimestampField,
    NumericField.kind: NumericField,
    RangedField.kind: RangedField,
    EnumField.kind: EnumField,
}

# Kind names used by older settings records.
_KIND_ALIASES = {
    "number": NumericField.kind,
    "range": RangedField.kind,
    "select": EnumField.kind,
    "datetime": TimestampField.kind,
    "datetime-local": TimestampField.kind,
}


def normalize_kind(kind: str) -> str:
    """Map a persisted kind name to a descriptor kind, or raise ValueError."""

    value = str(kind).strip().lower()
    value = _KIND_ALIASES.get(value, value)
    if value not in FIELD_KINDS:
        raise ValueError(f"Unknown field kind '{kind}'")
    return value


DURATION_FIELD = NumericField(name="duration", label="Duration (min)", unit=Unit.MINUTES)
VOLUME_FIELD = RangedField(name="volume", label="Volume (ml)", min=0, max=200, step=10, unit=Unit.MILLILITERS)
SIDE_FIELD = EnumField(name="side", label="Side", options=SIDES)

BUILTIN_SCHEMAS: dict[str, tuple[FieldDescriptor, ...]] = {
    "Sleeping": (DURATION_FIELD,),
    "Pumping": (VOLUME_FIELD, SIDE_FIELD, DURATION_FIELD),
    "Breastfeeding": (VOLUME_FIELD, SIDE_FIELD, DURATION_FIELD),
}


@dataclass(frozen=True)
class CustomInput:
    """A user-added input of a custom event type."""

    name: str
    kind: str

    def to_descriptor(self) -> FieldDescriptor:
        # Custom fields carry no unit and use the default bounds of their kind.
        if self.kind == TimestampField.kind:
            return TimestampField(name=self.name, label=self.name)
        if self.kind == NumericField.kind:
            return NumericField(name=self.name, label=self.name)
        if self.kind == RangedField.kind:
            return RangedField(name=self.name, label=self.name)
        if self.kind == EnumField.kind:
            return EnumField(name=self.name, label=self.name)
        raise ValueError(f"Unknown field kind '{self.kind}'")


# Names of the built-in fields a custom type may carry next to its own inputs.
RESERVED_INPUT_NAMES = frozenset(
    {DURATION_FIELD.name, VOLUME_FIELD.name, SIDE_FIELD.name}
)


def validate_custom_inputs(inputs) -> None:
    """Raise ValueError unless input names are non-blank, unique and not reserved."""

    seen = set()
    for item in inputs:
        name = item.name.strip()
        if not name:
            raise ValueError("Custom input name must not be blank")
        if name.lower() in RESERVED_INPUT_NAMES:
            raise ValueError(f"Custom input name '{name}' is reserved")
        if name in seen:
            raise ValueError(f"Duplicate custom input name '{name}'")
        seen.add(name)


@dataclass
class CustomTypeSettings:
    """Persisted schema customization of one custom event type."""

    track_duration: bool = True
    track_volume: bool = True
    custom_inputs: list[CustomInput] = field(default_factory=list)

    def to_record(self) -> dict:
        return {
            "trackDuration": self.track_duration,
            "trackVolume": self.track_volume,
            "customInputs": [{"name": item.name, "kind": item.kind} for item in self.custom_inputs],
        }

    @classmethod
    def from_record(cls, record: object) -> "CustomTypeSettings":
        """Build settings from a stored record, raising ValueError if malformed.

        Older records use ``duration`` / ``volume`` flags and ``type`` for
        the input kind; both shapes load.
        """

        if not isinstance(record, dict):
            raise ValueError("Settings record must be an object")

        track_duration = record.get("trackDuration", record.get("duration", False))
        track_volume = record.get("trackVolume", record.get("volume", False))
        if not isinstance(track_duration, bool) or not isinstance(track_volume, bool):
            raise ValueError("Settings flags must be booleans")

        raw_inputs = record.get("customInputs") or []
        if not isinstance(raw_inputs, list):
            raise ValueError("customInputs must be a list")

        inputs = []
        for item in raw_inputs:
            if not isinstance(item, dict) or not isinstance(item.get("name"), str):
                raise ValueError("Custom input must be an object with a name")
            kind = item.get("kind", item.get("type"))
            if kind is None:
                raise ValueError(f"Custom input '{item['name']}' has no kind")
            inputs.append(CustomInput(name=item["name"], kind=normalize_kind(kind)))
        validate_custom_inputs(inputs)

        return cls(track_duration=track_duration, track_volume=track_volume, custom_inputs=inputs)
