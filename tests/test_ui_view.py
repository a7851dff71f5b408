from datetime import date, datetime

from baby_tracker.config_store import InMemoryConfigStore
from baby_tracker.schema import Event
from baby_tracker.session import TrackerSession
from ui_demo_streamlit.app import build_view


def test_build_view_shapes_timeline_and_trends():
    session = TrackerSession(InMemoryConfigStore())
    session.custom_types.create_type("Snack", "#123456", track_volume=False)
    session.store.replace_all(
        [
            Event("Pumping", datetime(2025, 1, 1, 6, 0), 600, 60, "Both"),
            Event("Sleeping", datetime(2025, 1, 1, 1, 0), 7200),
            Event("Snack", datetime(2025, 1, 2, 12, 30), 300),
        ]
    )

    view = build_view(session)

    first, second = view["days"]
    assert first["day"] == date(2025, 1, 1)
    assert first["bars"] == {"Sleep": 120, "Pump": 60, "BF": 0}
    assert [entry["index"] for entry in first["events"]] == [1, 0]
    assert first["events"][1]["detail"] == "10 min • 60ml • Both"
    assert second["events"][0]["color"] == "#123456"
    assert view["trends"]["Sleep (hours)"] == [(date(2025, 1, 1), 2.0), (date(2025, 1, 2), 0.0)]
