import html

import streamlit as st

from dashboard.actions import mutate
from dashboard.constants import MEAL_TYPES, NUTRIENT_KEYS
from dashboard.data.loaders import MEALS_PATH, NUTRITION_GOAL_PATH, load_nutrition, search_foods
from dashboard.metrics.dates import format_day
from dashboard.metrics.nutrition import (
    daily_totals_by_type,
    food_totals,
    goal_progress,
    meal_totals,
    scale_nutrients,
    serving_grams,
)
from dashboard.visualizations import bar_chart, progress_html

UNITS = {"calories": "kcal", "protein": "g", "carbs": "g", "fat": "g", "fiber": "g"}


def _per_100g():
    return {key: float(st.session_state.get(f"nutrition.per100.{key}") or 0) for key in NUTRIENT_KEYS}


def _log_meal(ctx, day):
    state = st.session_state
    food = (state.get("nutrition.food") or "").strip()
    if not food:
        st.warning("Name the food first.")
        return
    grams = float(state.get("nutrition.grams") or 100)
    payload = {
        "date": format_day(day),
        "meal_type": state.get("nutrition.meal_type", "breakfast"),
        "items": [{"food_name": food, "quantity": 1, "serving_grams": grams}],
        "totals": scale_nutrients(_per_100g(), grams),
    }
    if mutate(ctx, "POST", MEALS_PATH, json=payload, invalidates=[MEALS_PATH], success="Meal logged"):
        state["nutrition.food"] = ""


def _searched_grams(food):
    state = st.session_state
    return serving_grams(food, state.get("nutrition.serving_unit"), float(state.get("nutrition.quantity") or 1))


def _log_searched_food(ctx, day, food):
    state = st.session_state
    grams = _searched_grams(food)
    payload = {
        "date": format_day(day),
        "meal_type": state.get("nutrition.meal_type", "breakfast"),
        "items": [
            {
                "food_name": food["name"],
                "food_id": food["id"],
                "quantity": float(state.get("nutrition.quantity") or 1),
                "serving_grams": grams,
            }
        ],
        "source": "search",
        "totals": food_totals(food, grams),
    }
    mutate(ctx, "POST", MEALS_PATH, json=payload, invalidates=[MEALS_PATH], success=f"{food['name']} logged")


def _delete_meal(ctx, meal_id):
    mutate(ctx, "DELETE", f"{MEALS_PATH}/{meal_id}", invalidates=[MEALS_PATH])


def _save_goal(ctx):
    state = st.session_state

    def _target(name):
        value = state.get(f"nutrition.goal.{name}")
        return value if value else None

    payload = {
        "calorie_target": _target("calories"),
        "protein_target": _target("protein"),
        "carbs_target": _target("carbs"),
        "fat_target": _target("fat"),
        "fiber_target": _target("fiber") or 25,
    }
    mutate(ctx, "PUT", NUTRITION_GOAL_PATH, json=payload, invalidates=[NUTRITION_GOAL_PATH], success="Goal saved")


def _render_progress(totals, goal):
    progress = goal_progress(totals, goal)
    for key in NUTRIENT_KEYS:
        st.markdown(
            progress_html(f"{key.title()} · {totals[key]} {UNITS[key]} · {progress[key]}%", progress[key]),
            unsafe_allow_html=True,
        )


def _render_food_search(ctx, day):
    query = st.text_input("Search foods", key="nutrition.search", placeholder="banana, chicken breast")
    results = search_foods(ctx.cache, query)
    if not query or not results:
        if query:
            st.caption("No foods found.")
        return
    names = [food["name"] + (f" ({food['brand']})" if food.get("brand") else "") for food in results]
    index = st.selectbox("Food", range(len(results)), format_func=names.__getitem__, key="nutrition.search_pick")
    food = results[index or 0]
    units = [serving["unit"] for serving in food.get("servings") or []] + ["100 g"]
    cols = st.columns(2)
    cols[0].selectbox("Serving", units, key="nutrition.serving_unit")
    cols[1].number_input("Servings", 0.25, 20.0, 1.0, 0.25, key="nutrition.quantity")
    grams = _searched_grams(food)
    preview = food_totals(food, grams)
    st.caption(f"{grams} g · " + " · ".join(f"{key} {preview[key]}" for key in NUTRIENT_KEYS))
    st.button("Log food", key="nutrition.log_search", on_click=_log_searched_food, args=(ctx, day, food))


def _render_meal_form(ctx, day):
    st.selectbox("Meal", MEAL_TYPES, key="nutrition.meal_type")
    mode = st.segmented_control("Entry", ["Search", "Manual"], default="Search", key="nutrition.entry_mode")
    if mode != "Manual":
        _render_food_search(ctx, day)
        return
    cols = st.columns([0.6, 0.4])
    cols[0].text_input("Food", key="nutrition.food")
    cols[1].number_input("Grams", 1.0, 2000.0, 100.0, 10.0, key="nutrition.grams")
    st.caption("Per 100 g")
    per_cols = st.columns(len(NUTRIENT_KEYS))
    for col, key in zip(per_cols, NUTRIENT_KEYS):
        col.number_input(f"{key.title()} ({UNITS[key]})", 0.0, 1000.0, 0.0, key=f"nutrition.per100.{key}")
    preview = scale_nutrients(_per_100g(), float(st.session_state.get("nutrition.grams") or 100))
    st.caption(" · ".join(f"{key} {preview[key]}" for key in NUTRIENT_KEYS))
    st.button("Log meal", key="nutrition.log", on_click=_log_meal, args=(ctx, day))


def _render_goal_form(ctx, goal):
    goal = goal or {}
    fields = {
        "calories": goal.get("calorie_target"),
        "protein": goal.get("protein_target"),
        "carbs": goal.get("carbs_target"),
        "fat": goal.get("fat_target"),
        "fiber": goal.get("fiber_target") or 25,
    }
    cols = st.columns(len(fields))
    for col, (key, value) in zip(cols, fields.items()):
        col.number_input(key.title(), 0.0, 10000.0, float(value or 0), key=f"nutrition.goal.{key}")
    st.button("Save goal", key="nutrition.goal_save", on_click=_save_goal, args=(ctx,))


def render_nutrition_tab(ctx):
    day = st.date_input("Day", value=ctx.today, max_value=ctx.today, key="nutrition.day")
    data = load_nutrition(ctx.cache, day)
    meals, goal = data["meals"], data["goal"]
    totals = meal_totals(meals)

    left, right = st.columns([0.55, 0.45])
    with left:
        st.markdown("<div class='section-title'>Meals</div>", unsafe_allow_html=True)
        by_type = daily_totals_by_type(meals)
        for meal_type in MEAL_TYPES:
            typed = [meal for meal in meals if meal.get("meal_type") == meal_type]
            if not typed:
                continue
            st.markdown(f"**{meal_type.title()}** · {by_type[meal_type]['calories']} kcal")
            for meal in typed:
                names = ", ".join(item.get("food_name") or "" for item in meal.get("items") or [])
                cols = st.columns([0.85, 0.15])
                cols[0].markdown(f"<span class='small-label'>{html.escape(names)}</span>", unsafe_allow_html=True)
                cols[1].button("🗑", key=f"nutrition.delete.{meal['id']}", on_click=_delete_meal, args=(ctx, meal["id"]))
        if not meals:
            st.caption("Nothing logged for this day.")
        with st.expander("Log a meal", expanded=not meals):
            _render_meal_form(ctx, day)

    with right:
        st.markdown("<div class='section-title'>Daily totals</div>", unsafe_allow_html=True)
        _render_progress(totals, goal)
        calories = [by_type[meal_type]["calories"] for meal_type in MEAL_TYPES] if meals else []
        if any(calories):
            st.plotly_chart(bar_chart(MEAL_TYPES, calories, "Calories by meal"), use_container_width=True)
        with st.expander("Daily goal", expanded=not goal):
            _render_goal_form(ctx, goal)
