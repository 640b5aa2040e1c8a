"""Common foods loaded into an empty ``food_items`` table.

Nutrients are per 100 g (USDA FoodData Central reference values, rounded).
"""

SEED_FOODS = [
    {
        "name": "Banana, raw",
        "servings": [{"unit": "medium", "grams": 118}],
        "nutrients": {"calories": 89, "protein": 1.1, "carbs": 22.8, "fat": 0.3, "fiber": 2.6},
    },
    {
        "name": "Apple, raw",
        "servings": [{"unit": "medium", "grams": 182}],
        "nutrients": {"calories": 52, "protein": 0.3, "carbs": 13.8, "fat": 0.2, "fiber": 2.4},
    },
    {
        "name": "Avocado, raw",
        "servings": [{"unit": "fruit", "grams": 150}],
        "nutrients": {"calories": 160, "protein": 2.0, "carbs": 8.5, "fat": 14.7, "fiber": 6.7},
    },
    {
        "name": "Chicken breast, roasted",
        "servings": [{"unit": "piece", "grams": 120}],
        "nutrients": {"calories": 165, "protein": 31.0, "carbs": 0, "fat": 3.6, "fiber": 0},
    },
    {
        "name": "Salmon, cooked",
        "servings": [{"unit": "fillet", "grams": 154}],
        "nutrients": {"calories": 206, "protein": 22.1, "carbs": 0, "fat": 12.4, "fiber": 0},
    },
    {
        "name": "Egg, hard-boiled",
        "servings": [{"unit": "large", "grams": 50}],
        "nutrients": {"calories": 155, "protein": 12.6, "carbs": 1.1, "fat": 10.6, "fiber": 0},
    },
    {
        "name": "White rice, cooked",
        "servings": [{"unit": "cup", "grams": 158}],
        "nutrients": {"calories": 130, "protein": 2.7, "carbs": 28.2, "fat": 0.3, "fiber": 0.4},
    },
    {
        "name": "Rolled oats, dry",
        "servings": [{"unit": "cup", "grams": 81}],
        "nutrients": {"calories": 379, "protein": 13.2, "carbs": 67.7, "fat": 6.5, "fiber": 10.1},
    },
    {
        "name": "Whole wheat bread",
        "servings": [{"unit": "slice", "grams": 28}],
        "nutrients": {"calories": 247, "protein": 13.0, "carbs": 41.0, "fat": 3.4, "fiber": 7.0},
    },
    {
        "name": "Sweet potato, baked",
        "servings": [{"unit": "medium", "grams": 114}],
        "nutrients": {"calories": 90, "protein": 2.0, "carbs": 20.7, "fat": 0.2, "fiber": 3.3},
    },
    {
        "name": "Broccoli, raw",
        "servings": [{"unit": "cup", "grams": 91}],
        "nutrients": {"calories": 34, "protein": 2.8, "carbs": 6.6, "fat": 0.4, "fiber": 2.6},
    },
    {
        "name": "Milk, whole",
        "servings": [{"unit": "cup", "grams": 244}],
        "nutrients": {"calories": 61, "protein": 3.2, "carbs": 4.8, "fat": 3.3, "fiber": 0},
    },
    {
        "name": "Greek yogurt, plain nonfat",
        "servings": [{"unit": "container", "grams": 170}],
        "nutrients": {"calories": 59, "protein": 10.2, "carbs": 3.6, "fat": 0.4, "fiber": 0},
    },
    {
        "name": "Almonds",
        "servings": [{"unit": "oz", "grams": 28}],
        "nutrients": {"calories": 579, "protein": 21.2, "carbs": 21.6, "fat": 49.9, "fiber": 12.5},
    },
    {
        "name": "Olive oil",
        "servings": [{"unit": "tbsp", "grams": 13.5}],
        "nutrients": {"calories": 884, "protein": 0, "carbs": 0, "fat": 100.0, "fiber": 0},
    },
]
