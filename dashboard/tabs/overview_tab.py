import html

import streamlit as st

from dashboard.actions import mutate
from dashboard.constants import PRIORITY_META
from dashboard.data.loaders import HABIT_ENTRIES_PATH, HABITS_PATH, TODOS_PATH, load_overview
from dashboard.metrics.completion import (
    active_habits,
    focus_completion,
    goal_completion,
    habit_completion_today,
    is_habit_complete,
)
from dashboard.metrics.dates import format_day
from dashboard.metrics.eisenhower import essential_tasks
from dashboard.metrics.overview import build_insights, category_progress, event_overview, todo_overview
from dashboard.visualizations import pill_html, progress_html

INSIGHT_ICONS = {"success": "📈", "warning": "⚠️", "info": "🎯"}


def _toggle_todo(ctx, todo):
    status = "pending" if todo.get("status") == "completed" else "completed"
    mutate(ctx, "PATCH", f"{TODOS_PATH}/{todo['id']}", json={"status": status}, invalidates=[TODOS_PATH])


def _log_habit(ctx, habit, done):
    value = habit.get("target_value") or 1
    mutate(
        ctx,
        "POST",
        HABIT_ENTRIES_PATH,
        json={"habit_id": habit["id"], "date": format_day(ctx.today), "value": value if done else 0},
        invalidates=[HABIT_ENTRIES_PATH, HABITS_PATH],
    )


def _render_todo_row(ctx, todo, key_prefix):
    priority = todo.get("priority") or "medium"
    cols = st.columns([0.08, 0.72, 0.2])
    cols[0].checkbox(
        "done",
        value=todo.get("status") == "completed",
        key=f"{key_prefix}.{todo['id']}",
        label_visibility="collapsed",
        on_change=_toggle_todo,
        args=(ctx, todo),
    )
    cols[1].markdown(html.escape(todo.get("title") or ""))
    cols[2].markdown(pill_html(priority, PRIORITY_META.get(priority, {}).get("color")), unsafe_allow_html=True)


def render_overview_tab(ctx):
    today = ctx.today
    data = load_overview(ctx.cache, today)
    habits = data["habits"]
    todos = data["todos"]

    habit_summary = habit_completion_today(habits, data["habit_entries"], today)
    todo_counts = todo_overview(todos, today)
    goal_summary = goal_completion(data["goals"])
    focus = focus_completion(data["timer_sessions"])
    events = event_overview(data["events"], today)

    st.markdown("<div class='section-title'>Today</div>", unsafe_allow_html=True)
    cols = st.columns(4)
    cols[0].metric("Tasks", todo_counts.total, f"{todo_counts.pending} pending", delta_color="off")
    cols[1].metric("Events today", len(events.today), f"{events.upcoming} upcoming", delta_color="off")
    cols[2].metric(
        "Systems",
        f"{habit_summary.completed}/{habit_summary.total}",
        f"{habit_summary.rate}% done",
        delta_color="off",
    )
    cols[3].metric("Focus minutes", focus.total_minutes, f"{focus.completed_sessions} sessions", delta_color="off")

    left, right = st.columns([0.6, 0.4])
    with left:
        st.markdown("<div class='section-title'>Essential tasks</div>", unsafe_allow_html=True)
        essentials = essential_tasks(todos, today)
        if not essentials:
            st.caption("Nothing urgent. Enjoy the calm.")
        for todo in essentials:
            _render_todo_row(ctx, todo, "overview.essential")
        if todo_counts.overdue:
            st.markdown(
                f"<div class='warning-row'>{len(todo_counts.overdue)} overdue tasks</div>",
                unsafe_allow_html=True,
            )

        st.markdown("<div class='section-title' style='margin-top:12px;'>Due today</div>", unsafe_allow_html=True)
        if not todo_counts.due_today:
            st.caption("No tasks due today.")
        for todo in todo_counts.due_today:
            _render_todo_row(ctx, todo, "overview.today")

        categories = category_progress(todos, data["categories"])
        if categories:
            st.markdown("<div class='section-title' style='margin-top:12px;'>Categories</div>", unsafe_allow_html=True)
            for row in categories:
                st.markdown(
                    progress_html(f"{row.name} · {row.completed}/{row.total}", row.completed, row.total, row.color),
                    unsafe_allow_html=True,
                )

    with right:
        st.markdown("<div class='section-title'>Systems today</div>", unsafe_allow_html=True)
        entries_by_habit = {entry.get("habit_id"): entry for entry in data["habit_entries"]}
        active = active_habits(habits)
        if not active:
            st.caption("No systems yet. Add one in the Systems tab.")
        for habit in active:
            entry = entries_by_habit.get(habit["id"])
            done = bool(entry) and is_habit_complete(habit, entry)
            label = f"{habit.get('name')} · 🔥 {habit.get('streak_days') or 0}"
            st.checkbox(
                label,
                value=done,
                key=f"overview.habit.{habit['id']}.{format_day(today)}",
                on_change=_log_habit,
                args=(ctx, habit, not done),
            )

        st.markdown("<div class='section-title' style='margin-top:12px;'>Schedule</div>", unsafe_allow_html=True)
        if not events.today:
            st.caption("No events today.")
        for event in events.today:
            start = event.get("start_time") or "All day"
            st.markdown(f"**{start}** · {html.escape(event.get('title') or '')}")
        if events.tomorrow:
            st.caption("Tomorrow: " + ", ".join(event.get("title") or "" for event in events.tomorrow[:2]))

        st.markdown("<div class='section-title' style='margin-top:12px;'>Goals</div>", unsafe_allow_html=True)
        st.caption(f"{goal_summary.completed}/{goal_summary.total} complete")
        for goal in data["goals"][:4]:
            st.markdown(progress_html(goal.get("title"), goal.get("progress") or 0), unsafe_allow_html=True)

    insights = build_insights(habits, data["goals"], data["health_entries"])
    if insights:
        st.markdown("<div class='section-title' style='margin-top:12px;'>Insights</div>", unsafe_allow_html=True)
        for insight in insights:
            st.markdown(
                f"<div class='card'>{INSIGHT_ICONS.get(insight.tone, '')} <strong>{insight.title}</strong><br>"
                f"<span class='small-label'>{html.escape(insight.message)}</span></div>",
                unsafe_allow_html=True,
            )
