DAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
DAY_TO_INDEX = {label: idx for idx, label in enumerate(DAY_LABELS)}

DATE_FORMAT = "%Y-%m-%d"
DEFAULT_TIMEZONE = "UTC"

DEFAULT_TARGET_VALUE = 1
DEFAULT_PRIORITY_SCORE = 3
DEFAULT_TODO_PRIORITY = "medium"
DEFAULT_GOAL_CATEGORY = "uncategorized"

ESSENTIAL_TASKS_LIMIT = 8
ESSENTIAL_PRIORITY_THRESHOLD = 4

SCREEN_TIME_WARNING_RATIO = 0.8
TOP_APPS_LIMIT = 5

GOAL_ON_TRACK_PROGRESS = 50
RECOMMENDED_SLEEP_HOURS = 7
SLEEP_INSIGHT_NIGHTS = 7

TIME_RANGES = [
    ("last7days", "Last 7 Days"),
    ("last30days", "Last 30 Days"),
    ("last90days", "Last 90 Days"),
    ("thisWeek", "This Week"),
    ("thisMonth", "This Month"),
]
TIME_RANGE_DAYS = {"last7days": 7, "last30days": 30, "last90days": 90}
TIME_RANGE_ALIASES = {"7days": "last7days", "30days": "last30days", "90days": "last90days"}
DEFAULT_TIME_RANGE = "last30days"

TODO_STATUSES = ["pending", "in_progress", "completed", "cancelled"]
TODO_PRIORITIES = ["low", "medium", "high", "urgent"]
QUADRANTS = [
    ("urgent_important", "Do first", "Urgent & important"),
    ("not_urgent_important", "Schedule", "Important, not urgent"),
    ("urgent_not_important", "Delegate", "Urgent, not important"),
    ("not_urgent_not_important", "Eliminate", "Neither urgent nor important"),
]

HABIT_FREQUENCIES = ["daily", "weekly", "custom"]
HABIT_TRACKING_TYPES = ["boolean", "numeric", "duration", "custom"]

TIMER_TYPES = ["pomodoro", "break", "long-break"]
TIMER_DURATIONS = {"pomodoro": 25, "break": 5, "long-break": 15}

MEAL_TYPES = ["breakfast", "lunch", "dinner", "snack"]
NUTRIENT_KEYS = ["calories", "protein", "carbs", "fat", "fiber"]
DEFAULT_FIBER_TARGET = 25

WATCHLIST_TYPES = ["movie", "show", "podcast", "other"]
WATCHLIST_STATUSES = ["To Watch", "In Progress", "Done"]
WATCHLIST_TYPE_ICONS = {"movie": "🎬", "show": "📺", "podcast": "🎧", "other": "📱"}

EVENT_TYPES = ["appointment", "work", "personal", "deadline", "meeting"]
GOAL_CATEGORIES = ["personal", "health", "career", "learning", "finance", "relationships"]

PRIORITY_META = {
    "urgent": {"weight": 4, "color": "#D95252"},
    "high": {"weight": 3, "color": "#E08E45"},
    "medium": {"weight": 2, "color": "#D9C979"},
    "low": {"weight": 1, "color": "#8FB6D9"},
}

CARDIO_TYPES = ["run", "ride", "row", "other"]
TIME_BLOCK_TYPES = ["work", "personal", "break", "todo", "habit"]
FOOD_SEARCH_MIN_CHARS = 2
