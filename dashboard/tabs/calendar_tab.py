import html
from datetime import timedelta

import streamlit as st

from dashboard.actions import mutate
from dashboard.constants import DAY_LABELS, EVENT_TYPES
from dashboard.data.loaders import EVENTS_PATH, load_calendar
from dashboard.metrics.dates import end_of_week, format_day, parse_day, start_of_week
from dashboard.state import session_slices

SLICE = "calendar"
EVENT_COLORS = {
    "appointment": "#8FB6D9",
    "work": "#E08E45",
    "personal": "#b7d1c9",
    "deadline": "#D95252",
    "meeting": "#cbb5e2",
}


def _shift_week(ctx, weeks):
    anchor = session_slices.get_date(SLICE, "anchor", ctx.today)
    if weeks == 0:
        anchor = ctx.today
    else:
        anchor = anchor + timedelta(weeks=weeks)
    session_slices.set_value(SLICE, "anchor", anchor)


def _create_event(ctx):
    state = st.session_state
    title = (state.get("calendar.title") or "").strip()
    if not title:
        st.warning("Give the event a title first.")
        return
    all_day = bool(state.get("calendar.all_day"))
    start_time = state.get("calendar.start_time")
    end_time = state.get("calendar.end_time")
    start_day = state.get("calendar.start_date") or ctx.today
    payload = {
        "title": title,
        "event_type": state.get("calendar.event_type", "personal"),
        "start_date": format_day(start_day),
        "end_date": format_day(start_day),
        "start_time": None if all_day or not start_time else start_time.strftime("%H:%M"),
        "end_time": None if all_day or not end_time else end_time.strftime("%H:%M"),
        "location": (state.get("calendar.location") or "").strip() or None,
        "is_all_day": all_day,
    }
    if mutate(ctx, "POST", EVENTS_PATH, json=payload, invalidates=[EVENTS_PATH], success="Event added"):
        state["calendar.title"] = ""


def _delete_event(ctx, event_id):
    mutate(ctx, "DELETE", f"{EVENTS_PATH}/{event_id}", invalidates=[EVENTS_PATH])


def _event_sort_key(event):
    return (not event.get("is_all_day"), event.get("start_time") or "")


def _render_day(ctx, day, events):
    marker = " · today" if day == ctx.today else ""
    st.markdown(
        f"<div class='section-title'>{DAY_LABELS[day.weekday()]} {day.strftime('%d/%m')}{marker}</div>",
        unsafe_allow_html=True,
    )
    if not events:
        st.markdown("<span class='small-label'>Free</span>", unsafe_allow_html=True)
    for event in sorted(events, key=_event_sort_key):
        color = event.get("color") or EVENT_COLORS.get(event.get("event_type"), "#8FB6D9")
        when = "All day" if event.get("is_all_day") or not event.get("start_time") else event["start_time"]
        st.markdown(
            f"<div class='card' style='border-left:3px solid {color};'>"
            f"<span class='small-label'>{when}</span><br>{html.escape(event.get('title') or '')}</div>",
            unsafe_allow_html=True,
        )
        st.button("Remove", key=f"calendar.delete.{event['id']}", on_click=_delete_event, args=(ctx, event["id"]))


def render_calendar_tab(ctx):
    anchor = session_slices.get_date(SLICE, "anchor", ctx.today)
    week_start, week_end = start_of_week(anchor), end_of_week(anchor)

    nav = st.columns([0.15, 0.15, 0.15, 0.55])
    nav[0].button("◀ Prev", key="calendar.prev", on_click=_shift_week, args=(ctx, -1))
    nav[1].button("Today", key="calendar.today", on_click=_shift_week, args=(ctx, 0))
    nav[2].button("Next ▶", key="calendar.next", on_click=_shift_week, args=(ctx, 1))
    nav[3].markdown(f"**{week_start.strftime('%d %b')} – {week_end.strftime('%d %b %Y')}**")

    events = load_calendar(ctx.cache, anchor)["events"]
    by_day = {}
    for event in events:
        start = parse_day(event.get("start_date"))
        end = parse_day(event["end_date"]) if event.get("end_date") else start
        current = max(start, week_start)
        while current <= min(end, week_end):
            by_day.setdefault(current, []).append(event)
            current += timedelta(days=1)

    columns = st.columns(7)
    for offset, col in enumerate(columns):
        day = week_start + timedelta(days=offset)
        with col:
            _render_day(ctx, day, by_day.get(day, []))

    with st.expander("New event"):
        st.text_input("Title", key="calendar.title")
        cols = st.columns(3)
        cols[0].date_input("Date", value=anchor, key="calendar.start_date")
        cols[1].selectbox("Type", EVENT_TYPES, index=EVENT_TYPES.index("personal"), key="calendar.event_type")
        cols[2].checkbox("All day", key="calendar.all_day")
        times = st.columns(3)
        times[0].time_input("Start", value=None, key="calendar.start_time")
        times[1].time_input("End", value=None, key="calendar.end_time")
        times[2].text_input("Location", key="calendar.location")
        st.button("Add event", key="calendar.add", on_click=_create_event, args=(ctx,))
