import html

import streamlit as st

from dashboard.actions import mutate
from dashboard.constants import PRIORITY_META, QUADRANTS, TODO_PRIORITIES, TODO_STATUSES
from dashboard.data.loaders import TODO_CATEGORIES_PATH, TODOS_PATH, load_todos
from dashboard.metrics.completion import todo_completion
from dashboard.metrics.eisenhower import classify, is_overdue, priority_score
from dashboard.metrics.dates import format_day
from dashboard.state import session_slices
from dashboard.visualizations import pill_html

SLICE = "todos"


def _create_todo(ctx, categories):
    state = st.session_state
    title = (state.get("todos.new_title") or "").strip()
    if not title:
        st.warning("Give the task a title first.")
        return
    category_name = state.get("todos.new_category")
    category_id = next((c["id"] for c in categories if c.get("name") == category_name), None)
    due = state.get("todos.new_due")
    payload = {
        "title": title,
        "description": (state.get("todos.new_description") or "").strip() or None,
        "priority": state.get("todos.new_priority", "medium"),
        "is_urgent": bool(state.get("todos.new_urgent")),
        "is_important": bool(state.get("todos.new_important")),
        "priority_score": int(state.get("todos.new_score", 3)),
        "due_date": format_day(due) if due else None,
        "category_id": category_id,
    }
    if mutate(ctx, "POST", TODOS_PATH, json=payload, invalidates=[TODOS_PATH], success="Task added"):
        state["todos.new_title"] = ""
        state["todos.new_description"] = ""


def _set_status(ctx, todo_id, widget_key):
    status = st.session_state.get(widget_key)
    mutate(ctx, "PATCH", f"{TODOS_PATH}/{todo_id}", json={"status": status}, invalidates=[TODOS_PATH])


def _delete_todo(ctx, todo_id):
    mutate(ctx, "DELETE", f"{TODOS_PATH}/{todo_id}", invalidates=[TODOS_PATH], success="Task deleted")


def _create_category(ctx):
    name = (st.session_state.get("todos.category_name") or "").strip()
    if not name:
        return
    payload = {"name": name, "color": st.session_state.get("todos.category_color")}
    if mutate(ctx, "POST", TODO_CATEGORIES_PATH, json=payload, invalidates=[TODO_CATEGORIES_PATH]):
        st.session_state["todos.category_name"] = ""


def _render_card(ctx, todo):
    priority = todo.get("priority") or "medium"
    color = PRIORITY_META.get(priority, {}).get("color")
    due = todo.get("due_date")
    badges = [pill_html(priority, color), pill_html(f"score {priority_score(todo)}")]
    if due:
        badges.append(pill_html(f"due {due}", "#D95252" if is_overdue(todo, ctx.today) else None))
    st.markdown(
        f"<div class='card'><strong>{html.escape(todo.get('title') or '')}</strong><br>{''.join(badges)}</div>",
        unsafe_allow_html=True,
    )


def _render_matrix(ctx, todos):
    quadrants = classify(todos).as_dict()
    rows = [QUADRANTS[:2], QUADRANTS[2:]]
    for row in rows:
        cols = st.columns(2)
        for col, (key, label, description) in zip(cols, row):
            with col:
                items = quadrants[key]
                st.markdown(
                    f"<div class='section-title'>{label} · {len(items)}</div>"
                    f"<div class='small-label'>{description}</div>",
                    unsafe_allow_html=True,
                )
                for todo in items:
                    _render_card(ctx, todo)


def _render_list(ctx, todos, categories):
    filters = st.columns(2)
    status_filter = filters[0].selectbox("Status", ["all", *TODO_STATUSES], key="todos.filter_status")
    category_names = ["all", *[c.get("name") for c in categories]]
    category_filter = filters[1].selectbox("Category", category_names, key="todos.filter_category")
    session_slices.update_slice(SLICE, {"status": status_filter, "category": category_filter})

    category_ids = {c.get("name"): c.get("id") for c in categories}
    visible = [
        todo
        for todo in todos
        if (status_filter == "all" or todo.get("status") == status_filter)
        and (category_filter == "all" or todo.get("category_id") == category_ids.get(category_filter))
    ]
    if not visible:
        st.caption("No tasks match these filters.")
    for todo in visible:
        cols = st.columns([0.55, 0.3, 0.15])
        cols[0].markdown(html.escape(todo.get("title") or ""))
        widget_key = f"todos.status.{todo['id']}"
        cols[1].selectbox(
            "Status",
            TODO_STATUSES,
            index=TODO_STATUSES.index(todo.get("status") or "pending"),
            key=widget_key,
            label_visibility="collapsed",
            on_change=_set_status,
            args=(ctx, todo["id"], widget_key),
        )
        cols[2].button("🗑", key=f"todos.delete.{todo['id']}", on_click=_delete_todo, args=(ctx, todo["id"]))


def render_todos_tab(ctx):
    data = load_todos(ctx.cache)
    todos, categories = data["todos"], data["categories"]

    summary = todo_completion(todos)
    st.markdown("<div class='section-title'>Tasks</div>", unsafe_allow_html=True)
    cols = st.columns(3)
    cols[0].metric("Total", summary.total)
    cols[1].metric("Completed", summary.completed)
    cols[2].metric("Completion", f"{summary.rate}%")

    with st.expander("New task"):
        st.text_input("Title", key="todos.new_title")
        st.text_area("Description", key="todos.new_description", height=70)
        form_cols = st.columns(3)
        form_cols[0].selectbox("Priority", TODO_PRIORITIES, index=1, key="todos.new_priority")
        form_cols[1].slider("Priority score", 1, 5, 3, key="todos.new_score")
        form_cols[2].date_input("Due date", value=None, key="todos.new_due")
        flag_cols = st.columns(3)
        flag_cols[0].checkbox("Urgent", key="todos.new_urgent")
        flag_cols[1].checkbox("Important", key="todos.new_important")
        flag_cols[2].selectbox("Category", [None, *[c.get("name") for c in categories]], key="todos.new_category")
        st.button("Add task", key="todos.add", on_click=_create_todo, args=(ctx, categories))

    view = st.segmented_control("View", ["Matrix", "List"], default="Matrix", key="todos.view")
    if view == "List":
        _render_list(ctx, todos, categories)
    else:
        _render_matrix(ctx, todos)

    with st.expander("Categories"):
        for category in categories:
            st.markdown(pill_html(category.get("name"), category.get("color")), unsafe_allow_html=True)
        cat_cols = st.columns([0.6, 0.2, 0.2])
        cat_cols[0].text_input("Name", key="todos.category_name")
        cat_cols[1].color_picker("Color", "#8FB6D9", key="todos.category_color")
        cat_cols[2].button("Add", key="todos.category_add", on_click=_create_category, args=(ctx,))
