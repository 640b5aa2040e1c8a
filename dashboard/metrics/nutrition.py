from __future__ import annotations

from dashboard.constants import DEFAULT_FIBER_TARGET, MEAL_TYPES, NUTRIENT_KEYS
from dashboard.metrics.completion import round_half_up


def empty_totals() -> dict:
    return {key: 0 for key in NUTRIENT_KEYS}


def scale_nutrients(per_100g: dict, grams: float) -> dict:
    """Nutrients for ``grams`` of a food described per 100 g."""
    multiplier = grams / 100
    return {
        "calories": round_half_up((per_100g.get("calories") or 0) * multiplier),
        "protein": round_half_up((per_100g.get("protein") or 0) * multiplier, 1),
        "carbs": round_half_up((per_100g.get("carbs") or 0) * multiplier, 1),
        "fat": round_half_up((per_100g.get("fat") or 0) * multiplier, 1),
        "fiber": round_half_up((per_100g.get("fiber") or 0) * multiplier, 1),
    }


def meal_totals(meals, meal_type: str | None = None) -> dict:
    totals = empty_totals()
    for meal in meals:
        if meal_type is not None and meal.get("meal_type") != meal_type:
            continue
        cached = meal.get("totals")
        if not cached:
            continue
        for key in NUTRIENT_KEYS:
            totals[key] += cached.get(key) or 0
    totals["calories"] = round_half_up(totals["calories"])
    for key in NUTRIENT_KEYS[1:]:
        totals[key] = round_half_up(totals[key], 1)
    return totals


def daily_totals_by_type(meals) -> dict:
    return {meal_type: meal_totals(meals, meal_type) for meal_type in MEAL_TYPES}


def goal_progress(totals: dict, goal: dict | None) -> dict:
    """Percent of each daily target reached; 0 where no target is set."""
    if not goal:
        return {key: 0 for key in NUTRIENT_KEYS}
    targets = {
        "calories": goal.get("calorie_target"),
        "protein": goal.get("protein_target"),
        "carbs": goal.get("carbs_target"),
        "fat": goal.get("fat_target"),
        "fiber": goal.get("fiber_target") or DEFAULT_FIBER_TARGET,
    }
    progress = {}
    for key, target in targets.items():
        if not target or target <= 0:
            progress[key] = 0
            continue
        progress[key] = round_half_up(100 * (totals.get(key) or 0) / target)
    return progress


def serving_grams(food: dict, unit: str | None, quantity: float = 1) -> float:
    """Grams for ``quantity`` servings; unknown units fall back to 100 g."""
    grams = 100
    for serving in food.get("servings") or []:
        if serving.get("unit") == unit:
            grams = serving.get("grams") or 100
            break
    return round_half_up(grams * quantity, 1)


def food_totals(food: dict, grams: float) -> dict:
    return scale_nutrients(food.get("nutrients") or {}, grams)
