from dashboard.constants import MEAL_TYPES
from dashboard.metrics.nutrition import (
    daily_totals_by_type,
    food_totals,
    goal_progress,
    meal_totals,
    scale_nutrients,
    serving_grams,
)

BANANA = {
    "name": "Banana, raw",
    "servings": [{"unit": "medium", "grams": 118}],
    "nutrients": {"calories": 89, "protein": 1.1, "carbs": 22.8, "fat": 0.3, "fiber": 2.6},
}

MEALS = [
    {"meal_type": "breakfast", "totals": {"calories": 300, "protein": 20, "carbs": 30, "fat": 10, "fiber": 5}},
    {"meal_type": "lunch", "totals": {"calories": 500.6, "protein": 30.5, "carbs": 50, "fat": 20, "fiber": 8}},
    {"meal_type": "snack", "totals": None},
]


class TestScaling:
    def test_scales_per_100g_values(self):
        per_100g = {"calories": 200, "protein": 10, "carbs": 30, "fat": 5, "fiber": 4}
        assert scale_nutrients(per_100g, 150) == {
            "calories": 300,
            "protein": 15.0,
            "carbs": 45.0,
            "fat": 7.5,
            "fiber": 6.0,
        }

    def test_missing_nutrients_scale_to_zero(self):
        assert scale_nutrients({"calories": 100}, 50)["protein"] == 0


class TestTotals:
    def test_day_totals_skip_meals_without_totals(self):
        totals = meal_totals(MEALS)
        assert totals == {"calories": 801, "protein": 50.5, "carbs": 80.0, "fat": 30.0, "fiber": 13.0}

    def test_totals_for_one_meal_type(self):
        assert meal_totals(MEALS, "breakfast")["calories"] == 300

    def test_totals_by_type_cover_every_meal_type(self):
        by_type = daily_totals_by_type(MEALS)
        assert list(by_type) == MEAL_TYPES
        assert by_type["dinner"]["calories"] == 0


class TestGoalProgress:
    def test_percent_of_each_target(self):
        goal = {"calorie_target": 2000, "protein_target": 100, "carbs_target": None, "fat_target": 0}
        totals = {"calories": 1000, "protein": 50.5, "carbs": 80, "fat": 30, "fiber": 12.5}
        progress = goal_progress(totals, goal)
        assert progress == {"calories": 50, "protein": 51, "carbs": 0, "fat": 0, "fiber": 50}

    def test_no_goal_gives_zero_progress(self):
        assert set(goal_progress({"calories": 500}, None).values()) == {0}


class TestFoodDatabase:
    def test_serving_grams_use_the_named_unit(self):
        assert serving_grams(BANANA, "medium", 2) == 236.0
        assert serving_grams(BANANA, "cup", 1.5) == 150.0
        assert serving_grams({"servings": None}, None) == 100

    def test_totals_for_one_serving(self):
        totals = food_totals(BANANA, serving_grams(BANANA, "medium"))
        assert totals == {"calories": 105, "protein": 1.3, "carbs": 26.9, "fat": 0.4, "fiber": 3.1}

    def test_food_without_nutrients(self):
        assert food_totals({"name": "Water"}, 250)["calories"] == 0
