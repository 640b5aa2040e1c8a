import html

import streamlit as st

from dashboard.actions import mutate
from dashboard.constants import WATCHLIST_STATUSES, WATCHLIST_TYPE_ICONS, WATCHLIST_TYPES
from dashboard.data.loaders import (
    SCREEN_APPS_PATH,
    SCREEN_ENTRIES_PATH,
    SCREEN_LIMITS_PATH,
    WATCHLIST_PATH,
    load_content,
)
from dashboard.metrics.dates import format_day
from dashboard.metrics.screen_time import (
    app_usage,
    entries_for_day,
    entries_for_week,
    limit_warnings,
    top_apps,
    total_minutes,
)
from dashboard.metrics.watchlist import filter_items, suggestions, watchlist_stats
from dashboard.state import session_slices
from dashboard.visualizations import bar_chart

SLICE = "content"
SCREEN_TIME_PREFIX = "/v1/screen-time"
WATCHLIST_EXPORT_PATH = "/v1/watchlist/export"
SCREEN_TIME_EXPORT_PATH = "/v1/screen-time/export"


def _add_item(ctx):
    state = st.session_state
    title = (state.get("content.title") or "").strip()
    if not title:
        st.warning("Give it a title first.")
        return
    payload = {
        "title": title,
        "type": state.get("content.type", "movie"),
        "source": (state.get("content.source") or "").strip() or None,
        "link": (state.get("content.link") or "").strip() or None,
        "length": int(state.get("content.length") or 0) or None,
    }
    if mutate(ctx, "POST", WATCHLIST_PATH, json=payload, invalidates=[WATCHLIST_PATH], success="Added to watchlist"):
        state["content.title"] = ""
        state["content.link"] = ""


def _set_item_status(ctx, item_id, widget_key):
    mutate(
        ctx,
        "PATCH",
        f"{WATCHLIST_PATH}/{item_id}",
        json={"status": st.session_state.get(widget_key)},
        invalidates=[WATCHLIST_PATH],
    )


def _delete_item(ctx, item_id):
    mutate(ctx, "DELETE", f"{WATCHLIST_PATH}/{item_id}", invalidates=[WATCHLIST_PATH])


def _reshuffle():
    session_slices.set_value(SLICE, "suggestions", None)


def _add_app(ctx):
    state = st.session_state
    name = (state.get("content.app_name") or "").strip()
    if not name:
        return
    payload = {
        "name": name,
        "category": (state.get("content.app_category") or "").strip() or None,
        "is_excluded": bool(state.get("content.app_excluded")),
    }
    if mutate(ctx, "POST", SCREEN_APPS_PATH, json=payload, invalidates=[SCREEN_TIME_PREFIX]):
        state["content.app_name"] = ""


def _toggle_excluded(ctx, app):
    mutate(
        ctx,
        "PATCH",
        f"{SCREEN_APPS_PATH}/{app['id']}",
        json={"is_excluded": not app.get("is_excluded")},
        invalidates=[SCREEN_TIME_PREFIX],
    )


def _log_usage(ctx, app_ids):
    state = st.session_state
    name = state.get("content.usage_app")
    minutes = int(state.get("content.usage_minutes") or 0)
    if name not in app_ids or minutes <= 0:
        return
    day = state.get("content.usage_day") or ctx.today
    payload = {"app_id": app_ids[name], "date": format_day(day), "minutes": minutes}
    mutate(ctx, "POST", SCREEN_ENTRIES_PATH, json=payload, invalidates=[SCREEN_TIME_PREFIX], success="Usage logged")


def _add_limit(ctx, app_ids):
    state = st.session_state
    name = state.get("content.limit_app")
    minutes = int(state.get("content.limit_minutes") or 0)
    if minutes <= 0:
        return
    payload = {"app_id": app_ids.get(name), "limit_minutes": minutes}
    mutate(ctx, "POST", SCREEN_LIMITS_PATH, json=payload, invalidates=[SCREEN_LIMITS_PATH])


def _toggle_limit(ctx, limit):
    mutate(
        ctx,
        "PATCH",
        f"{SCREEN_LIMITS_PATH}/{limit['id']}",
        json={"is_active": not limit.get("is_active", True)},
        invalidates=[SCREEN_LIMITS_PATH],
    )


def _render_suggestions(items):
    by_id = {item.get("id"): item for item in items}
    picked = session_slices.get_value(SLICE, "suggestions")
    if picked is None or any(item_id not in by_id for item_id in picked):
        picked = [item.get("id") for item in suggestions(items)]
        session_slices.set_value(SLICE, "suggestions", picked)
    if not picked:
        return
    st.markdown("<div class='small-label'>Up next</div>", unsafe_allow_html=True)
    for item_id in picked:
        item = by_id[item_id]
        icon = WATCHLIST_TYPE_ICONS.get(item.get("type"), "")
        st.markdown(f"{icon} {html.escape(item.get('title') or '')}")
    st.button("Shuffle", key="content.shuffle", on_click=_reshuffle)


def _render_watchlist(ctx, items):
    stats = watchlist_stats(items, tz_name=ctx.tz_name)
    cols = st.columns(4)
    cols[0].metric("To watch", stats.to_watch)
    cols[1].metric("In progress", stats.in_progress)
    cols[2].metric("Done this week", stats.finished_this_week)
    cols[3].metric("Streak", f"{stats.streak} d")

    _render_suggestions(items)

    filters = st.columns(2)
    status = filters[0].selectbox("Status", ["all", *WATCHLIST_STATUSES], key="content.filter_status")
    item_type = filters[1].selectbox("Type", ["all", *WATCHLIST_TYPES], key="content.filter_type")
    visible = filter_items(items, status, item_type)
    if not visible:
        st.caption("Nothing here yet.")
    for item in visible:
        widget_key = f"content.status.{item['id']}"
        row = st.columns([0.55, 0.3, 0.15])
        title = html.escape(item.get("title") or "")
        if item.get("link"):
            title = f"<a href='{html.escape(item['link'])}' target='_blank'>{title}</a>"
        row[0].markdown(f"{WATCHLIST_TYPE_ICONS.get(item.get('type'), '')} {title}", unsafe_allow_html=True)
        row[1].selectbox(
            "Status",
            WATCHLIST_STATUSES,
            index=WATCHLIST_STATUSES.index(item.get("status") or "To Watch"),
            key=widget_key,
            label_visibility="collapsed",
            on_change=_set_item_status,
            args=(ctx, item["id"], widget_key),
        )
        row[2].button("🗑", key=f"content.delete.{item['id']}", on_click=_delete_item, args=(ctx, item["id"]))

    with st.expander("Add to watchlist"):
        st.text_input("Title", key="content.title")
        form = st.columns(3)
        form[0].selectbox("Type", WATCHLIST_TYPES, key="content.type")
        form[1].text_input("Source", key="content.source")
        form[2].number_input("Length (min)", 0, 10000, 0, key="content.length")
        st.text_input("Link", key="content.link")
        st.button("Add", key="content.add", on_click=_add_item, args=(ctx,))

    csv_text = ctx.cache.fetch(WATCHLIST_EXPORT_PATH) if items else None
    if csv_text:
        st.download_button("Export CSV", csv_text, file_name="watchlist.csv", mime="text/csv", key="content.export")


def _render_usage(title, usage, apps, limits):
    ranked = top_apps(usage, apps)
    st.metric(title, f"{total_minutes(usage, apps)} min")
    if ranked:
        st.plotly_chart(
            bar_chart([item.name for item in ranked], [item.minutes for item in ranked], f"Top apps · {title.lower()}", horizontal=True),
            use_container_width=True,
        )
    for warning in limit_warnings(usage, apps, limits):
        st.markdown(
            f"<div class='warning-row'>⚠️ {html.escape(warning.app_name)}: {warning.usage}/{warning.limit} min"
            f" ({warning.percentage}%)</div>",
            unsafe_allow_html=True,
        )


def _render_screen_time(ctx, apps, entries, limits):
    app_ids = {app.get("name"): app.get("id") for app in apps}
    period = st.segmented_control("Period", ["Today", "This week"], default="Today", key="content.period")
    if period == "This week":
        _render_usage("This week", app_usage(entries_for_week(entries, ctx.today)), apps, limits)
    else:
        _render_usage("Today", app_usage(entries_for_day(entries, ctx.today)), apps, limits)

    if apps:
        with st.expander("Log usage"):
            cols = st.columns(3)
            cols[0].selectbox("App", list(app_ids), key="content.usage_app")
            cols[1].number_input("Minutes", 0, 1440, 0, key="content.usage_minutes")
            cols[2].date_input("Day", value=ctx.today, max_value=ctx.today, key="content.usage_day")
            st.button("Log", key="content.usage_log", on_click=_log_usage, args=(ctx, app_ids))

    with st.expander("Apps"):
        for app in apps:
            label = f"{app.get('name')}" + (" (excluded)" if app.get("is_excluded") else "")
            st.checkbox(
                label,
                value=not app.get("is_excluded"),
                key=f"content.app.{app['id']}",
                on_change=_toggle_excluded,
                args=(ctx, app),
            )
        cols = st.columns([0.45, 0.35, 0.2])
        cols[0].text_input("Name", key="content.app_name")
        cols[1].text_input("Category", key="content.app_category")
        cols[2].checkbox("Exclude", key="content.app_excluded")
        st.button("Add app", key="content.app_add", on_click=_add_app, args=(ctx,))

    with st.expander("Limits"):
        names = {app_id: name for name, app_id in app_ids.items()}
        for limit in limits:
            label = names.get(limit.get("app_id"), "Total screen time")
            st.checkbox(
                f"{label}: {limit.get('limit_minutes')} min/day",
                value=bool(limit.get("is_active", True)),
                key=f"content.limit.{limit['id']}",
                on_change=_toggle_limit,
                args=(ctx, limit),
            )
        cols = st.columns(2)
        cols[0].selectbox("Applies to", ["Total screen time", *app_ids], key="content.limit_app")
        cols[1].number_input("Minutes per day", 0, 1440, 60, key="content.limit_minutes")
        st.button("Add limit", key="content.limit_add", on_click=_add_limit, args=(ctx, app_ids))

    csv_text = ctx.cache.fetch(SCREEN_TIME_EXPORT_PATH) if entries else None
    if csv_text:
        st.download_button("Export CSV", csv_text, file_name="screen_time.csv", mime="text/csv", key="content.screen_export")


def render_content_tab(ctx):
    data = load_content(ctx.cache, ctx.today)
    left, right = st.columns([0.55, 0.45])
    with left:
        st.markdown("<div class='section-title'>Watchlist</div>", unsafe_allow_html=True)
        _render_watchlist(ctx, data["watchlist"])
    with right:
        st.markdown("<div class='section-title'>Screen time</div>", unsafe_allow_html=True)
        _render_screen_time(ctx, data["apps"], data["entries"], data["limits"])
