"""Streamlit demo UI for baby-tracker."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from baby_tracker.aggregation import format_summary_line, summarize
from baby_tracker.schema import EnumField, NumericField, RangedField, TimestampField
from baby_tracker.session import TrackerSession
from baby_tracker.units import seconds_to_minutes

FIELD_KIND_LABELS = {"Number": "numeric", "Slider": "ranged", "Dropdown": "enumerated"}


def build_view(session: TrackerSession) -> dict[str, Any]:
    """Return the timeline and trend data shown by the UI."""

    days = []
    for day, entries in session.timeline().items():
        summary = summarize([event for _, event in entries])
        days.append(
            {
                "day": day,
                "header": format_summary_line(summary),
                "bars": {
                    "Sleep": seconds_to_minutes(summary.sleeping_duration),
                    "Pump": summary.pumping_volume,
                    "BF": summary.breastfeeding_minutes,
                },
                "events": [
                    {
                        "index": index,
                        "time": event.start.strftime("%H:%M"),
                        "type": event.type,
                        "color": session.custom_types.color_for(event.type),
                        "detail": _event_detail(event),
                    }
                    for index, event in entries
                ],
            }
        )

    trends = session.trends()
    return {
        "days": days,
        "trends": {
            "Sleep (hours)": trends.sleep_hours,
            "Pumping Volume (ml)": trends.pumping_volume,
            "Breastfeeding (minutes)": trends.breastfeeding_minutes,
        },
    }


def _event_detail(event) -> str:
    parts = [f"{seconds_to_minutes(event.duration)} min"]
    if event.volume is not None:
        parts.append(f"{event.volume}ml")
    if event.side:
        parts.append(event.side)
    return " • ".join(parts)


def _render_draft_field(st, draft, descriptor) -> None:
    key = f"field_{descriptor.name}"
    if isinstance(descriptor, TimestampField):
        current = draft.values.get(descriptor.name) or draft.start
        day = st.date_input(descriptor.label, value=current.date(), key=f"{key}_date")
        time_of_day = st.time_input(f"{descriptor.label} time", value=current.time(), key=f"{key}_time")
        draft.values[descriptor.name] = datetime.combine(day, time_of_day)
    elif isinstance(descriptor, NumericField):
        if descriptor.name == "duration":
            draft.duration = st.number_input(descriptor.label, min_value=0.0, value=float(draft.duration or 0), key=key)
        else:
            draft.values[descriptor.name] = st.number_input(descriptor.label, min_value=0, key=key)
    elif isinstance(descriptor, RangedField):
        if descriptor.name == "volume":
            draft.volume = st.slider(
                descriptor.label,
                min_value=int(descriptor.min),
                max_value=int(descriptor.max),
                step=int(descriptor.step),
                value=min(int(descriptor.max), max(int(descriptor.min), int(draft.volume))),
                key=key,
            )
        else:
            draft.values[descriptor.name] = st.slider(
                descriptor.label,
                min_value=int(descriptor.min),
                max_value=int(descriptor.max),
                step=int(descriptor.step),
                key=key,
            )
    elif isinstance(descriptor, EnumField):
        options = list(descriptor.options)
        if descriptor.name == "side":
            index = options.index(draft.side) if draft.side in options else 0
            draft.side = st.selectbox(descriptor.label, options=options, index=index, key=key)
        else:
            draft.values[descriptor.name] = st.selectbox(descriptor.label, options=options, key=key)
    else:
        raise TypeError(f"Unsupported field descriptor {descriptor!r}")


def _render_tracker(st, session: TrackerSession, view: dict) -> None:
    st.header("Breastfeeding Tracker")
    types = session.custom_types.all_types()
    columns = st.columns(min(len(types), 3))
    for i, event_type in enumerate(types):
        if columns[i % len(columns)].button(event_type, disabled=session.draft is not None, key=f"start_{event_type}"):
            session.start(event_type)
            st.rerun()

    draft = session.draft
    if draft is not None:
        with st.container(border=True):
            st.write(f"**{'Editing' if draft.is_edit else 'Recording'}: {draft.type}**")
            start_day = st.date_input("Start date", value=draft.start.date())
            start_time = st.time_input("Start time", value=draft.start.time())
            draft.start = datetime.combine(start_day, start_time).astimezone()
            for descriptor in session.registry.resolve_schema(draft.type):
                _render_draft_field(st, draft, descriptor)
            save_col, cancel_col = st.columns(2)
            if save_col.button("Update" if draft.is_edit else "Save", type="primary"):
                session.finish()
                st.rerun()
            if cancel_col.button("Cancel"):
                session.cancel()
                st.rerun()

    st.subheader("Timeline")
    for day in view["days"]:
        st.markdown(f"**{day['day'].strftime('%B %d, %Y')}**")
        st.caption(day["header"])
        st.bar_chart(
            [{"name": name, "value": value} for name, value in day["bars"].items()],
            x="name",
            y="value",
            horizontal=True,
            height=120,
        )
        for entry in day["events"]:
            c1, c2, c3, c4 = st.columns([1, 4, 1, 1])
            c1.markdown(f"<span style='color:{entry['color']}'>●</span> {entry['time']}", unsafe_allow_html=True)
            c2.write(f"**{entry['type']}** — {entry['detail']}")
            if c3.button("Edit", key=f"edit_{entry['index']}", disabled=session.draft is not None):
                session.edit(entry["index"])
                st.rerun()
            if c4.button("Delete", key=f"delete_{entry['index']}", disabled=session.draft is not None):
                session.delete(entry["index"])
                st.rerun()


def _render_analysis(st, view: dict) -> None:
    st.header("Daily Trends")
    for title, points in view["trends"].items():
        st.subheader(title)
        if not points:
            st.info("No events recorded yet.")
            continue
        st.line_chart(
            {"date": [day.strftime("%m/%d") for day, _ in points], "value": [value for _, value in points]},
            x="date",
            y="value",
        )


def _render_settings(st, session: TrackerSession) -> None:
    st.header("Settings")
    pending = st.session_state.setdefault("pending_inputs", [])

    name = st.text_input("New event type")
    color = st.color_picker("Color", value="#8884d8")
    track_volume = st.checkbox("Track volume", value=True)
    track_duration = st.checkbox("Track duration", value=True)

    c1, c2, c3 = st.columns([2, 2, 1])
    input_name = c1.text_input("Input name")
    input_kind = c2.selectbox("Input type", options=list(FIELD_KIND_LABELS))
    if c3.button("Add Field") and input_name.strip():
        pending.append((input_name.strip(), FIELD_KIND_LABELS[input_kind]))
    for input_name, kind in pending:
        st.write(f"- {input_name} ({kind})")

    if st.button("Add", type="primary"):
        created = session.custom_types.create_type(
            name,
            color,
            track_duration=track_duration,
            track_volume=track_volume,
            custom_inputs=pending,
        )
        if created:
            st.session_state["pending_inputs"] = []
            st.rerun()
        else:
            st.error("Type name is blank or already in use, or an input name is blank, repeated or reserved.")

    for event_type in session.custom_types.list_types():
        t1, t2 = st.columns([4, 1])
        t1.write(event_type)
        if t2.button("Remove", key=f"remove_{event_type}"):
            session.custom_types.remove_type(event_type)
            st.rerun()


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Baby Tracker", layout="centered")

    if "session" not in st.session_state:
        session = TrackerSession.from_settings()
        result = session.load_remote()
        if not result.ok and session.sync_client is not None:
            st.warning(f"Could not load remote events: {result.reason}")
        st.session_state["session"] = session
    session = st.session_state["session"]

    view = build_view(session)
    tracker_tab, analysis_tab, settings_tab = st.tabs(["Tracker", "Analysis", "Settings"])
    with tracker_tab:
        _render_tracker(st, session, view)
    with analysis_tab:
        _render_analysis(st, view)
    with settings_tab:
        _render_settings(st, session)


if __name__ == "__main__":
    main()
