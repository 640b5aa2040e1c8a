import logging
import os

import streamlit as st

from dashboard.context import DashboardContext
from dashboard.data import api_client
from dashboard.data.query_cache import QueryCache
from dashboard.logging_config import configure_logging
from dashboard.metrics.dates import today as local_today
from dashboard.router import render_router
from dashboard.theme import get_active_theme, inject_theme_css, toggle_theme

ENV_FALLBACK_KEYS = {
    ("app", "API_BASE_URL"): "API_BASE_URL",
    ("app", "DASHBOARD_TIMEZONE"): "DASHBOARD_TIMEZONE",
}
CACHE_STATE_KEY = "data.query_cache"

st.set_page_config(page_title="LifeTrack", layout="wide")
configure_logging()
logger = logging.getLogger("lifetrack.app")


def get_secret(path, default=None):
    env_key = ENV_FALLBACK_KEYS.get(tuple(path))
    if env_key:
        env_value = os.getenv(env_key)
        if env_value:
            return env_value
    current = st.secrets
    for key in path:
        try:
            if key not in current:
                return default
            current = current[key]
        except Exception:
            return default
    return current


def get_query_cache():
    cache = st.session_state.get(CACHE_STATE_KEY)
    if cache is None:
        cache = QueryCache()
        st.session_state[CACHE_STATE_KEY] = cache
    return cache


def _refresh():
    get_query_cache().clear()


api_client.configure(get_secret)
inject_theme_css()
theme_name, _ = get_active_theme()

title_cols = st.columns([0.8, 0.1, 0.1])
with title_cols[0]:
    st.markdown("<div class='page-title' style='font-size:30px;'>LifeTrack</div>", unsafe_allow_html=True)
with title_cols[1]:
    st.button("↻", key="ui.refresh", help="Reload data", on_click=_refresh)
with title_cols[2]:
    st.button(
        "☀️" if theme_name == "dark" else "🌙",
        key="ui.toggle_theme",
        help="Switch theme",
        on_click=toggle_theme,
    )

if not api_client.is_enabled():
    logger.warning("API_BASE_URL is not configured")
    st.warning("Set API_BASE_URL in .streamlit/secrets.toml or the environment to connect to the backend.")
    st.stop()

tz_name = api_client.dashboard_timezone()
context = DashboardContext(cache=get_query_cache(), today=local_today(tz_name), tz_name=tz_name)

render_router(context)
