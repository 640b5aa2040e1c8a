import streamlit as st

from dashboard.tabs.analytics_tab import render_analytics_tab
from dashboard.tabs.calendar_tab import render_calendar_tab
from dashboard.tabs.content_tab import render_content_tab
from dashboard.tabs.health_tab import render_health_tab
from dashboard.tabs.nutrition_tab import render_nutrition_tab
from dashboard.tabs.overview_tab import render_overview_tab
from dashboard.tabs.planning_tab import render_planning_tab
from dashboard.tabs.systems_tab import render_systems_tab
from dashboard.tabs.todos_tab import render_todos_tab


TAB_OPTIONS = [
    "Overview",
    "Tasks",
    "Planning",
    "Systems",
    "Calendar",
    "Analytics",
    "Health",
    "Nutrition",
    "Content",
]


def render_router(ctx):
    active = st.session_state.get("ui.active_tab") or TAB_OPTIONS[0]
    active = st.segmented_control(
        "Workspace",
        TAB_OPTIONS,
        key="ui.active_tab",
        default=active,
    )

    renderers = {
        "Overview": _render_overview,
        "Tasks": _render_todos,
        "Planning": _render_planning,
        "Systems": _render_systems,
        "Calendar": _render_calendar,
        "Analytics": _render_analytics,
        "Health": _render_health,
        "Nutrition": _render_nutrition,
        "Content": _render_content,
    }
    return renderers.get(active, _render_overview)(ctx)


@st.fragment
def _render_overview(ctx):
    render_overview_tab(ctx)


@st.fragment
def _render_todos(ctx):
    render_todos_tab(ctx)


@st.fragment
def _render_planning(ctx):
    render_planning_tab(ctx)


@st.fragment
def _render_systems(ctx):
    render_systems_tab(ctx)


@st.fragment
def _render_calendar(ctx):
    render_calendar_tab(ctx)


@st.fragment
def _render_analytics(ctx):
    render_analytics_tab(ctx)


@st.fragment
def _render_health(ctx):
    render_health_tab(ctx)


@st.fragment
def _render_nutrition(ctx):
    render_nutrition_tab(ctx)


@st.fragment
def _render_content(ctx):
    render_content_tab(ctx)
