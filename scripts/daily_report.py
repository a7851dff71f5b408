"""Print per-day summaries from a CSV/JSON event export."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from baby_tracker.adapters import csv_adapter, json_adapter
from baby_tracker.aggregation import daily_summaries, format_summary_line
from baby_tracker.settings import settings


def _load_events(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> None:
    logging.basicConfig(level=settings.log_level)
    parser = argparse.ArgumentParser(description="Summarize tracked events per day")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON events file")
    parser.add_argument("--out", help="Optional path for the JSON report")
    args = parser.parse_args()

    events = _load_events(Path(args.data))
    report = {
        day.isoformat(): {
            "sleeping_duration": summary.sleeping_duration,
            "pumping_count": summary.pumping_count,
            "pumping_volume": summary.pumping_volume,
            "breastfeeding_count": summary.breastfeeding_count,
            "breastfeeding_duration": summary.breastfeeding_duration,
            "line": format_summary_line(summary),
        }
        for day, summary in daily_summaries(events).items()
    }

    print(json.dumps(report, indent=2, ensure_ascii=False))

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"Saved daily report to {out_path}")


if __name__ == "__main__":
    main()
