import html
from datetime import timedelta

import streamlit as st

from dashboard.actions import mutate
from dashboard.constants import TIME_BLOCK_TYPES
from dashboard.data.loaders import DAILY_PLANS_PATH, WEEKLY_PLANS_PATH, load_planning
from dashboard.metrics.dates import format_day, start_of_week
from dashboard.metrics.planning import (
    checklist_progress,
    overlapping_blocks,
    planned_minutes,
    sorted_time_blocks,
    toggle_item,
)
from dashboard.state import session_slices
from dashboard.visualizations import progress_html

SLICE = "planning"
PLAN_PATHS = [WEEKLY_PLANS_PATH, DAILY_PLANS_PATH]


def _shift_day(days):
    day = session_slices.get_date(SLICE, "day", None)
    if day is not None:
        session_slices.set_value(SLICE, "day", day + timedelta(days=days))


def _create_weekly_plan(ctx, week_start):
    title = (st.session_state.get("planning.week_title") or "").strip() or f"Week of {week_start:%b %d}"
    payload = {"week_start_date": format_day(week_start), "title": title}
    mutate(ctx, "POST", WEEKLY_PLANS_PATH, json=payload, invalidates=PLAN_PATHS, success="Weekly plan created")


def _create_daily_plan(ctx, day, weekly_plan):
    title = (st.session_state.get("planning.day_title") or "").strip() or f"{day:%A}"
    payload = {
        "date": format_day(day),
        "title": title,
        "weekly_plan_id": weekly_plan["id"] if weekly_plan else None,
    }
    mutate(ctx, "POST", DAILY_PLANS_PATH, json=payload, invalidates=PLAN_PATHS, success="Daily plan created")


def _patch_plan(ctx, path, plan_id, patch, success=None):
    mutate(ctx, "PATCH", f"{path}/{plan_id}", json=patch, invalidates=PLAN_PATHS, success=success)


def _toggle(ctx, path, plan, field, item_id):
    _patch_plan(ctx, path, plan["id"], {field: toggle_item(plan.get(field), item_id)})


def _add_item(ctx, path, plan, field, input_key):
    text = (st.session_state.get(input_key) or "").strip()
    if not text:
        return
    item = {"text": text, "completed": False}
    _patch_plan(ctx, path, plan["id"], {field: list(plan.get(field) or []) + [item]})
    st.session_state[input_key] = ""


def _add_time_block(ctx, plan):
    state = st.session_state
    title = (state.get("planning.block_title") or "").strip()
    start, end = state.get("planning.block_start"), state.get("planning.block_end")
    if not title or start is None or end is None:
        st.warning("A time block needs a title, a start and an end.")
        return
    if end <= start:
        st.warning("A time block must end after it starts.")
        return
    block = {
        "title": title,
        "start_time": start.strftime("%H:%M"),
        "end_time": end.strftime("%H:%M"),
        "type": state.get("planning.block_type") or "work",
        "completed": False,
    }
    _patch_plan(ctx, DAILY_PLANS_PATH, plan["id"], {"time_blocks": list(plan.get("time_blocks") or []) + [block]})
    state["planning.block_title"] = ""


def _save_reflection(ctx, path, plan, input_key):
    _patch_plan(ctx, path, plan["id"], {"reflection": st.session_state.get(input_key) or None}, "Reflection saved")


def _save_wellness(ctx, plan):
    patch = {
        "energy_level": st.session_state.get(f"planning.{plan['id']}.energy"),
        "mood_rating": st.session_state.get(f"planning.{plan['id']}.mood"),
    }
    _patch_plan(ctx, DAILY_PLANS_PATH, plan["id"], patch, "Check-in saved")


def _render_checklist(ctx, path, plan, field, label):
    items = plan.get(field) or []
    progress = checklist_progress(items)
    st.markdown(
        progress_html(f"{label} · {progress.completed}/{progress.total}", progress.rate),
        unsafe_allow_html=True,
    )
    for item in items:
        text = html.escape(item.get("text") or "")
        if item.get("category"):
            text += f" <span class='pill'>{html.escape(item['category'])}</span>"
        cols = st.columns([0.1, 0.9])
        cols[0].checkbox(
            "done",
            value=bool(item.get("completed")),
            key=f"planning.{plan['id']}.{field}.{item['id']}",
            on_change=_toggle,
            args=(ctx, path, plan, field, item["id"]),
            label_visibility="collapsed",
        )
        cols[1].markdown(text, unsafe_allow_html=True)
    input_key = f"planning.{plan['id']}.{field}.new"
    cols = st.columns([0.75, 0.25])
    cols[0].text_input(f"Add to {label.lower()}", key=input_key, label_visibility="collapsed")
    cols[1].button("Add", key=f"{input_key}.add", on_click=_add_item, args=(ctx, path, plan, field, input_key))


def _render_week(ctx, week_start, weekly_plan, week_days):
    st.markdown(
        f"<div class='section-title'>Week of {week_start:%b %d, %Y}</div>",
        unsafe_allow_html=True,
    )
    if not weekly_plan:
        st.text_input("Plan title", key="planning.week_title", placeholder=f"Week of {week_start:%b %d}")
        st.button("Create weekly plan", key="planning.week_create", on_click=_create_weekly_plan, args=(ctx, week_start))
        return
    st.markdown(f"**{html.escape(weekly_plan['title'])}**")
    if weekly_plan.get("notes"):
        st.caption(weekly_plan["notes"])
    _render_checklist(ctx, WEEKLY_PLANS_PATH, weekly_plan, "goals", "Goals")
    _render_checklist(ctx, WEEKLY_PLANS_PATH, weekly_plan, "priorities", "Priorities")
    st.caption(f"Days planned this week: {len(week_days)}/7")
    key = f"planning.{weekly_plan['id']}.reflection"
    st.text_area("Week reflection", weekly_plan.get("reflection") or "", key=key)
    st.button(
        "Save reflection",
        key=f"{key}.save",
        on_click=_save_reflection,
        args=(ctx, WEEKLY_PLANS_PATH, weekly_plan, key),
    )


def _render_time_blocks(ctx, plan):
    blocks = sorted_time_blocks(plan.get("time_blocks"))
    done = checklist_progress(blocks)
    st.caption(f"{planned_minutes(blocks)} min planned · {done.completed}/{done.total} blocks done")
    for first, second in overlapping_blocks(blocks):
        st.markdown(
            f"<div class='warning-row'>{html.escape(first)} overlaps {html.escape(second)}</div>",
            unsafe_allow_html=True,
        )
    for block in blocks:
        cols = st.columns([0.1, 0.9])
        cols[0].checkbox(
            "done",
            value=bool(block.get("completed")),
            key=f"planning.{plan['id']}.block.{block['id']}",
            on_change=_toggle,
            args=(ctx, DAILY_PLANS_PATH, plan, "time_blocks", block["id"]),
            label_visibility="collapsed",
        )
        cols[1].markdown(
            f"{block['start_time']}-{block['end_time']} · {html.escape(block['title'])} "
            f"<span class='pill'>{block.get('type')}</span>",
            unsafe_allow_html=True,
        )
    with st.expander("Add time block"):
        cols = st.columns([0.4, 0.2, 0.2, 0.2])
        cols[0].text_input("Title", key="planning.block_title")
        cols[1].time_input("Start", key="planning.block_start", step=900)
        cols[2].time_input("End", key="planning.block_end", step=900)
        cols[3].selectbox("Type", TIME_BLOCK_TYPES, key="planning.block_type")
        st.button("Add block", key="planning.block_add", on_click=_add_time_block, args=(ctx, plan))


def _render_day(ctx, day, daily_plan, weekly_plan):
    st.markdown(f"<div class='section-title'>{day:%A, %b %d}</div>", unsafe_allow_html=True)
    if not daily_plan:
        st.text_input("Plan title", key="planning.day_title", placeholder=f"{day:%A}")
        st.button(
            "Create daily plan",
            key="planning.day_create",
            on_click=_create_daily_plan,
            args=(ctx, day, weekly_plan),
        )
        return
    st.markdown(f"**{html.escape(daily_plan['title'])}**")
    _render_time_blocks(ctx, daily_plan)
    _render_checklist(ctx, DAILY_PLANS_PATH, daily_plan, "priorities", "Priorities")
    cols = st.columns(2)
    cols[0].slider("Energy", 1, 10, int(daily_plan.get("energy_level") or 5), key=f"planning.{daily_plan['id']}.energy")
    cols[1].slider("Mood", 1, 10, int(daily_plan.get("mood_rating") or 5), key=f"planning.{daily_plan['id']}.mood")
    st.button("Save check-in", key="planning.wellness", on_click=_save_wellness, args=(ctx, daily_plan))
    key = f"planning.{daily_plan['id']}.reflection"
    st.text_area("Day reflection", daily_plan.get("reflection") or "", key=key)
    st.button(
        "Save reflection",
        key=f"{key}.save",
        on_click=_save_reflection,
        args=(ctx, DAILY_PLANS_PATH, daily_plan, key),
    )


def render_planning_tab(ctx):
    day = session_slices.get_date(SLICE, "day", ctx.today)
    session_slices.set_value(SLICE, "day", day)
    nav = st.columns([0.15, 0.15, 0.15, 0.55])
    nav[0].button("◀ Week", key="planning.prev", on_click=_shift_day, args=(-7,))
    nav[1].button("Today", key="planning.today", on_click=session_slices.set_value, args=(SLICE, "day", ctx.today))
    nav[2].button("Week ▶", key="planning.next", on_click=_shift_day, args=(7,))
    week_start = start_of_week(day)
    picked = nav[3].date_input(
        "Day",
        value=day,
        min_value=week_start,
        max_value=week_start + timedelta(days=6),
        label_visibility="collapsed",
    )
    if picked != day:
        session_slices.set_value(SLICE, "day", picked)
        day = picked

    data = load_planning(ctx.cache, day)
    left, right = st.columns([0.45, 0.55])
    with left:
        _render_week(ctx, week_start, data["weekly_plan"], data["week_days"])
    with right:
        _render_day(ctx, day, data["daily_plan"], data["weekly_plan"])
