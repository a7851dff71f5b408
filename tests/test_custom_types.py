from baby_tracker.config_store import InMemoryConfigStore, read_json
from baby_tracker.custom_types import NEUTRAL_COLOR, CustomTypeRegistry
from baby_tracker.registry import SchemaRegistry
from baby_tracker.schema import CustomInput


def test_create_type_persists_everything():
    store = InMemoryConfigStore()
    types = CustomTypeRegistry(store)
    assert types.create_type("Snack", "#ff0000", track_duration=True, track_volume=False, custom_inputs=[("Food", "select")])

    assert types.list_types() == ["Snack"]
    assert types.all_types() == ["Sleeping", "Pumping", "Breastfeeding", "Snack"]
    assert types.color_for("Snack") == "#ff0000"
    assert read_json(store, "customEventSettings", dict)["Snack"] == {
        "trackDuration": True,
        "trackVolume": False,
        "customInputs": [{"name": "Food", "kind": "enumerated"}],
    }
    assert [f.name for f in SchemaRegistry(store).resolve_schema("Snack")] == ["Food", "duration"]


def test_create_type_rejections():
    types = CustomTypeRegistry(InMemoryConfigStore())
    assert not types.create_type("Sleeping", "#000000")
    assert not types.create_type("", "#000000")
    assert not types.create_type("   ", "#000000")
    assert types.create_type("Snack", "#000000")
    assert not types.create_type("Snack", "#111111")
    assert types.list_types() == ["Snack"]
    assert types.color_for("Snack") == "#000000"


def test_names_are_case_sensitive_and_ordered():
    types = CustomTypeRegistry(InMemoryConfigStore())
    assert types.create_type("Snack")
    assert types.create_type("snack", custom_inputs=[CustomInput("Amount", "ranged")])
    assert types.create_type("Bath")
    assert types.list_types() == ["Snack", "snack", "Bath"]


def test_remove_type_cascades():
    store = InMemoryConfigStore()
    types = CustomTypeRegistry(store)
    types.create_type("Snack", "#ff0000")
    types.create_type("Bath", "#00ff00")
    types.remove_type("Snack")

    assert types.list_types() == ["Bath"]
    assert "Snack" not in read_json(store, "customEventColors", dict)
    assert "Snack" not in read_json(store, "customEventSettings", dict)
    assert SchemaRegistry(store).resolve_schema("Snack") == []
    assert types.create_type("Snack")


def test_remove_unknown_type_is_noop():
    store = InMemoryConfigStore()
    types = CustomTypeRegistry(store)
    types.create_type("Bath")
    before = dict(store.values)
    types.remove_type("NeverCreated")
    assert store.values == before


def test_color_resolution():
    store = InMemoryConfigStore({"customEventTypes": '["Ghost"]', "customEventColors": "garbage"})
    types = CustomTypeRegistry(store)
    assert types.color_for("Sleeping") == "#a78bfa"
    assert types.color_for("Ghost") == NEUTRAL_COLOR
    assert types.color_for("Unknown") == NEUTRAL_COLOR


def test_rejects_reserved_blank_or_repeated_input_names():
    store = InMemoryConfigStore()
    types = CustomTypeRegistry(store)
    assert not types.create_type(
        "Snack", track_duration=True, track_volume=False, custom_inputs=[("duration", "numeric"), ("", "numeric")]
    )
    assert not types.create_type("Snack", custom_inputs=[("Food", "select"), (" Food ", "numeric")])
    assert not types.create_type("Snack", custom_inputs=[("  ", "numeric")])
    assert not types.create_type("Snack", custom_inputs=[("Side", "select")])

    assert types.list_types() == []
    assert store.values == {}
    assert types.create_type("Snack", custom_inputs=[(" Food ", "select")])
    assert [f.name for f in SchemaRegistry(store).resolve_schema("Snack")][0] == "Food"
