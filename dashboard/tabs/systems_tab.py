from datetime import timedelta

import streamlit as st

from dashboard.actions import mutate
from dashboard.constants import GOAL_CATEGORIES, HABIT_FREQUENCIES, HABIT_TRACKING_TYPES
from dashboard.data.loaders import GOALS_PATH, HABIT_ENTRIES_PATH, HABITS_PATH, load_systems
from dashboard.metrics.completion import active_habits, goal_completion, habit_completion_today, target_value
from dashboard.metrics.dates import format_day, parse_day
from dashboard.metrics.streaks import habit_streak
from dashboard.visualizations import build_habit_week_grid, habit_heatmap, progress_html

HEATMAP_WEEKS = 8


def _log_value(ctx, habit, widget_key, day):
    value = st.session_state.get(widget_key)
    if isinstance(value, bool):
        value = target_value(habit) if value else 0
    mutate(
        ctx,
        "POST",
        HABIT_ENTRIES_PATH,
        json={"habit_id": habit["id"], "date": format_day(day), "value": float(value or 0)},
        invalidates=[HABIT_ENTRIES_PATH, HABITS_PATH],
    )


def _create_habit(ctx):
    state = st.session_state
    name = (state.get("systems.new_name") or "").strip()
    if not name:
        st.warning("Name the system first.")
        return
    payload = {
        "name": name,
        "category": (state.get("systems.new_category") or "").strip() or None,
        "tracking_type": state.get("systems.new_tracking", "boolean"),
        "frequency": state.get("systems.new_frequency", "daily"),
        "target_value": int(state.get("systems.new_target", 1)),
        "unit": (state.get("systems.new_unit") or "").strip() or None,
    }
    if mutate(ctx, "POST", HABITS_PATH, json=payload, invalidates=[HABITS_PATH], success="System added"):
        state["systems.new_name"] = ""


def _archive_habit(ctx, habit):
    mutate(
        ctx,
        "PATCH",
        f"{HABITS_PATH}/{habit['id']}",
        json={"is_archived": not habit.get("is_archived")},
        invalidates=[HABITS_PATH],
    )


def _create_goal(ctx):
    state = st.session_state
    title = (state.get("systems.goal_title") or "").strip()
    if not title:
        return
    deadline = state.get("systems.goal_deadline")
    payload = {
        "title": title,
        "category": state.get("systems.goal_category"),
        "deadline": format_day(deadline) if deadline else None,
        "progress": 0,
    }
    if mutate(ctx, "POST", GOALS_PATH, json=payload, invalidates=[GOALS_PATH], success="Goal added"):
        state["systems.goal_title"] = ""


def _set_goal_progress(ctx, goal_id, widget_key):
    mutate(
        ctx,
        "PATCH",
        f"{GOALS_PATH}/{goal_id}",
        json={"progress": int(st.session_state.get(widget_key, 0))},
        invalidates=[GOALS_PATH],
    )


def _render_habit(ctx, habit, entries, day):
    habit_entries = [entry for entry in entries if entry.get("habit_id") == habit["id"]]
    entry = next((e for e in habit_entries if parse_day(e.get("date")) == day), None)
    streak = habit_streak(habit, habit_entries, ctx.today)
    widget_key = f"systems.log.{habit['id']}.{format_day(day)}"
    cols = st.columns([0.5, 0.3, 0.2])
    cols[0].markdown(f"**{habit.get('name')}**  \n<span class='small-label'>🔥 {streak} day streak</span>", unsafe_allow_html=True)
    if habit.get("tracking_type") == "boolean":
        cols[1].checkbox(
            "Done",
            value=bool(entry) and (entry.get("value") or 0) >= target_value(habit),
            key=widget_key,
            on_change=_log_value,
            args=(ctx, habit, widget_key, day),
        )
    else:
        cols[1].number_input(
            f"Value ({habit.get('unit') or 'units'}) / {target_value(habit)}",
            min_value=0.0,
            value=float((entry or {}).get("value") or 0),
            key=widget_key,
            on_change=_log_value,
            args=(ctx, habit, widget_key, day),
        )
    cols[2].button("Archive", key=f"systems.archive.{habit['id']}", on_click=_archive_habit, args=(ctx, habit))


def _render_habits(ctx, habits, entries):
    day = st.date_input("Log for", value=ctx.today, max_value=ctx.today, key="systems.day")
    summary = habit_completion_today(habits, entries, day)
    st.markdown(progress_html(f"{summary.completed}/{summary.total} systems complete", summary.rate), unsafe_allow_html=True)

    active = active_habits(habits)
    if not active:
        st.info("No systems yet.")
    for habit in active:
        _render_habit(ctx, habit, entries, day)

    if active:
        z, text, x_labels, y_labels = build_habit_week_grid(habits, entries, ctx.today, weeks=HEATMAP_WEEKS)
        st.plotly_chart(habit_heatmap(z, text, x_labels, y_labels, "Last 8 weeks"), use_container_width=True)

    with st.expander("New system"):
        st.text_input("Name", key="systems.new_name")
        cols = st.columns(3)
        cols[0].selectbox("Tracking", HABIT_TRACKING_TYPES, key="systems.new_tracking")
        cols[1].selectbox("Frequency", HABIT_FREQUENCIES, key="systems.new_frequency")
        cols[2].number_input("Target", min_value=1, value=1, step=1, key="systems.new_target")
        more = st.columns(2)
        more[0].text_input("Category", key="systems.new_category")
        more[1].text_input("Unit", key="systems.new_unit")
        st.button("Add system", key="systems.add", on_click=_create_habit, args=(ctx,))

    archived = [habit for habit in habits if habit.get("is_archived")]
    if archived:
        with st.expander(f"Archived ({len(archived)})"):
            for habit in archived:
                st.button(
                    f"Restore {habit.get('name')}",
                    key=f"systems.restore.{habit['id']}",
                    on_click=_archive_habit,
                    args=(ctx, habit),
                )


def _render_goals(ctx, goals):
    summary = goal_completion(goals)
    st.caption(f"{summary.completed}/{summary.total} goals complete · {summary.rate}%")
    for goal in goals:
        widget_key = f"systems.goal.{goal['id']}"
        cols = st.columns([0.6, 0.4])
        deadline = goal.get("deadline")
        cols[0].markdown(f"**{goal.get('title')}**" + (f"  \n<span class='small-label'>due {deadline}</span>" if deadline else ""), unsafe_allow_html=True)
        cols[1].slider(
            "Progress",
            0,
            100,
            int(goal.get("progress") or 0),
            key=widget_key,
            label_visibility="collapsed",
            on_change=_set_goal_progress,
            args=(ctx, goal["id"], widget_key),
        )
    with st.expander("New goal"):
        st.text_input("Title", key="systems.goal_title")
        cols = st.columns(2)
        cols[0].selectbox("Category", GOAL_CATEGORIES, key="systems.goal_category")
        cols[1].date_input("Deadline", value=None, key="systems.goal_deadline")
        st.button("Add goal", key="systems.goal_add", on_click=_create_goal, args=(ctx,))


def render_systems_tab(ctx):
    start = ctx.today - timedelta(weeks=HEATMAP_WEEKS)
    data = load_systems(ctx.cache, start, ctx.today)
    left, right = st.columns([0.6, 0.4])
    with left:
        st.markdown("<div class='section-title'>Systems</div>", unsafe_allow_html=True)
        _render_habits(ctx, data["habits"], data["habit_entries"])
    with right:
        st.markdown("<div class='section-title'>Goals</div>", unsafe_allow_html=True)
        _render_goals(ctx, data["goals"])
