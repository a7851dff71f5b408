import json
from datetime import datetime

import pytest

from baby_tracker.adapters.csv_adapter import parse as parse_csv
from baby_tracker.adapters.json_adapter import dump as dump_json
from baby_tracker.adapters.json_adapter import parse as parse_json
from baby_tracker.schema import Event


def test_csv_parse_success(tmp_path):
    path = tmp_path / "events.csv"
    path.write_text(
        "type,start,duration,volume,side\n"
        "Sleeping,2025-01-01T01:00:00,7200,,\n"
        "Pumping,2025-01-01T06:00:00,900,60,Left\n",
        encoding="utf-8",
    )
    events = parse_csv(str(path))
    assert len(events) == 2
    assert events[0].volume is None
    assert events[1].volume == 60
    assert events[1].side == "Left"


def test_csv_parse_invalid_row(tmp_path):
    path = tmp_path / "events.csv"
    path.write_text("type,start,duration\nSleeping,bad,60\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Row 2"):
        parse_csv(str(path))


def test_csv_parse_missing_fields(tmp_path):
    path = tmp_path / "events.csv"
    path.write_text("type,start\n,2025-01-01T01:00:00\n", encoding="utf-8")
    with pytest.raises(ValueError, match="missing required fields"):
        parse_csv(str(path))


def test_json_parse_success(tmp_path):
    path = tmp_path / "events.json"
    payload = [
        {"type": "Sleeping", "start": "2025-01-01T01:00:00", "duration": 7200},
        {"type": "Breastfeeding", "start": "2025-01-01T09:00:00", "duration": "600", "volume": 40, "side": "Both"},
    ]
    path.write_text(json.dumps(payload), encoding="utf-8")
    events = parse_json(str(path))
    assert len(events) == 2
    assert events[1].duration == 600


def test_json_parse_malformed(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(json.dumps([{"type": "Sleeping", "start": "bad"}]), encoding="utf-8")
    with pytest.raises(ValueError):
        parse_json(str(path))


def test_json_dump_then_parse(tmp_path):
    path = tmp_path / "events.json"
    events = [Event("Pumping", datetime(2025, 1, 1, 6, 0).astimezone(), 900, 60, "Left")]
    dump_json(events, str(path))
    assert parse_json(str(path)) == events
