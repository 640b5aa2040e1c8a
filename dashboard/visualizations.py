from __future__ import annotations

import html
from datetime import timedelta

from dashboard.constants import DAY_LABELS
from dashboard.metrics.completion import is_habit_complete
from dashboard.metrics.dates import parse_day, start_of_week
from dashboard.theme import get_active_theme


def _active_theme():
    return get_active_theme()[1]


def apply_common_plot_style(fig, title, show_xgrid=True, show_ygrid=True):
    theme = _active_theme()
    fig.update_layout(
        title=title,
        title_font=dict(color=theme["text_main"], size=16, family="Crimson Text"),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=theme["text_main"], family="IBM Plex Sans"),
        margin=dict(l=40, r=20, t=40, b=30),
        xaxis=dict(
            showgrid=show_xgrid,
            gridcolor=theme["plot_grid"],
            tickfont=dict(color=theme["text_soft"]),
            zeroline=False,
        ),
        yaxis=dict(
            showgrid=show_ygrid,
            gridcolor=theme["plot_grid"],
            tickfont=dict(color=theme["text_soft"]),
            zeroline=False,
        ),
    )
    return fig


def dot_chart(values, dates, title, color, height=260):
    import plotly.graph_objects as go

    fig = go.Figure(
        data=go.Scatter(
            x=list(dates),
            y=list(values),
            mode="lines+markers",
            line=dict(color=color, width=2),
            marker=dict(size=8, color=color, line=dict(width=1, color=_active_theme()["plot_marker_line"])),
            connectgaps=False,
        )
    )
    apply_common_plot_style(fig, title)
    fig.update_layout(height=height)
    return fig


def bar_chart(labels, values, title, color=None, height=260, horizontal=False):
    import plotly.graph_objects as go

    color = color or _active_theme()["accent"]
    if horizontal:
        bar = go.Bar(x=list(values), y=list(labels), orientation="h", marker_color=color)
    else:
        bar = go.Bar(x=list(labels), y=list(values), marker_color=color)
    fig = go.Figure(data=bar)
    apply_common_plot_style(fig, title, show_xgrid=horizontal, show_ygrid=not horizontal)
    fig.update_layout(height=height)
    if horizontal:
        fig.update_yaxes(autorange="reversed")
    return fig


def build_habit_week_grid(habits, entries, reference_day, weeks=8):
    """Completion matrix for the last ``weeks`` weeks: rows are weekdays."""
    import numpy as np

    first_day = start_of_week(reference_day) - timedelta(weeks=weeks - 1)
    z = np.full((7, weeks), np.nan)
    text = [["" for _ in range(weeks)] for _ in range(7)]
    active = [habit for habit in habits if not habit.get("is_archived")]
    by_id = {habit.get("id"): habit for habit in active}
    done_by_day = {}
    for entry in entries:
        habit = by_id.get(entry.get("habit_id"))
        if habit is not None and is_habit_complete(habit, entry):
            day = parse_day(entry.get("date"))
            done_by_day.setdefault(day, set()).add(habit.get("id"))

    for week in range(weeks):
        for weekday in range(7):
            current = first_day + timedelta(weeks=week, days=weekday)
            if current > reference_day:
                text[weekday][week] = f"{current.isoformat()} • upcoming"
                continue
            done = len(done_by_day.get(current, ()))
            total = len(active)
            z[weekday, week] = (done / total) if total else 0
            text[weekday][week] = f"{current.isoformat()} • {done}/{total} systems"
    week_labels = [(first_day + timedelta(weeks=week)).strftime("%d/%m") for week in range(weeks)]
    return z, text, week_labels, DAY_LABELS


def habit_heatmap(z, hover_text, x_labels, y_labels, title=""):
    import plotly.graph_objects as go

    theme = _active_theme()
    fig = go.Figure(
        data=go.Heatmap(
            z=z,
            text=hover_text,
            hoverinfo="text",
            colorscale=[(0, theme["heat_empty"]), (1, theme["heat_full"])],
            showscale=False,
            zmin=0,
            zmax=1,
            xgap=2,
            ygap=2,
        )
    )
    apply_common_plot_style(fig, title, show_xgrid=False, show_ygrid=False)
    fig.update_layout(height=260, margin=dict(l=20, r=20, t=40, b=20))
    fig.update_xaxes(tickmode="array", tickvals=list(range(len(x_labels))), ticktext=x_labels, side="top")
    fig.update_yaxes(
        tickmode="array",
        tickvals=list(range(len(y_labels))),
        ticktext=y_labels,
        autorange="reversed",
    )
    return fig


def progress_html(label, value, maximum=100, color=None):
    theme = _active_theme()
    color = color or theme["accent"]
    percent = 0 if not maximum else max(0, min(100, 100 * value / maximum))
    return (
        "<div style='margin-bottom:8px;'>"
        f"<div class='small-label'>{html.escape(str(label))}</div>"
        f"<div style='background:{theme['heat_empty']};border-radius:6px;height:8px;'>"
        f"<div style='width:{percent:.0f}%;background:{color};height:8px;border-radius:6px;'></div>"
        "</div></div>"
    )


def pill_html(text, color=None):
    style = f" style='border-color:{color};color:{color};'" if color else ""
    return f"<span class='pill'{style}>{html.escape(str(text))}</span>"
