import pandas as pd
import streamlit as st

from dashboard.constants import DEFAULT_TIME_RANGE, TIME_RANGES
from dashboard.data.loaders import load_analytics
from dashboard.metrics.rollups import build_report, filter_window, resolve_window
from dashboard.visualizations import bar_chart, dot_chart


def _sleep_frame(entries, window):
    rows = [
        {"date": entry["date"], "sleep_hours": entry.get("sleep_hours"), "mood": entry.get("mood")}
        for entry in filter_window(entries, window)
    ]
    frame = pd.DataFrame(rows, columns=["date", "sleep_hours", "mood"])
    return frame.sort_values("date")


def render_analytics_tab(ctx):
    labels = dict(TIME_RANGES)
    tokens = [token for token, _ in TIME_RANGES]
    token = st.selectbox(
        "Time range",
        tokens,
        index=tokens.index(DEFAULT_TIME_RANGE),
        format_func=labels.get,
        key="analytics.range",
    )
    window = resolve_window(token, ctx.today)
    data = load_analytics(ctx.cache, window.start, window.end)
    report = build_report(
        token,
        ctx.today,
        habits=data["habits"],
        habit_entries=data["habit_entries"],
        goals=data["goals"],
        health_entries=data["health_entries"],
        timer_sessions=data["timer_sessions"],
        todos=data["todos"],
    )
    st.caption(f"{window.start.isoformat()} → {window.end.isoformat()} ({window.days} days)")

    cols = st.columns(4)
    cols[0].metric("Systems completion", f"{report.habits.completion_rate}%", f"{report.habits.total_completions} check-ins", delta_color="off")
    cols[1].metric("Goals avg progress", f"{report.goals.average_progress}%", f"{report.goals.completed_goals}/{report.goals.total_goals} done", delta_color="off")
    cols[2].metric("Focus hours", report.timer.total_hours, f"{report.timer.pomodoro_sessions} pomodoros", delta_color="off")
    cols[3].metric("Tasks completion", f"{report.todos.completion_rate}%", f"{report.todos.pending_todos} pending", delta_color="off")

    if report.habits.best_habit:
        st.markdown(
            f"<div class='small-label'>Most consistent system: <strong>{report.habits.best_habit}</strong>"
            f" ({report.habits.best_habit_score} days)</div>",
            unsafe_allow_html=True,
        )

    st.markdown("<div class='section-title' style='margin-top:12px;'>Health</div>", unsafe_allow_html=True)
    health = report.health
    health_cols = st.columns(4)
    health_cols[0].metric("Avg sleep", f"{health.average_sleep} h", f"{health.nights_tracked} nights", delta_color="off")
    health_cols[1].metric("Sleep quality", health.average_sleep_quality)
    health_cols[2].metric("Avg mood", health.average_mood)
    health_cols[3].metric("Exercise", f"{health.total_exercise_minutes} min", f"{health.exercise_days} days", delta_color="off")

    frame = _sleep_frame(data["health_entries"], window)
    chart_cols = st.columns(2)
    if not frame.empty:
        chart_cols[0].plotly_chart(dot_chart(frame["sleep_hours"], frame["date"], "Sleep hours", "#a9c0e8"), use_container_width=True)
        chart_cols[1].plotly_chart(dot_chart(frame["mood"], frame["date"], "Mood", "#cbb5e2"), use_container_width=True)
    else:
        st.caption("No health entries in this range.")

    distribution = report.todos.priority_distribution
    category_counts = report.goals.goals_by_category
    dist_cols = st.columns(2)
    if distribution:
        dist_cols[0].plotly_chart(
            bar_chart(list(distribution), list(distribution.values()), "Tasks by priority"),
            use_container_width=True,
        )
    if category_counts:
        dist_cols[1].plotly_chart(
            bar_chart(list(category_counts), list(category_counts.values()), "Goals by category", color="#b7d1c9"),
            use_container_width=True,
        )

    with st.expander("Raw report"):
        st.json(report.as_dict())
