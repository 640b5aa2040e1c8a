from datetime import date, datetime
from typing import Optional, List, Literal

from pydantic import BaseModel, Field

TodoStatus = Literal["pending", "in_progress", "completed", "cancelled"]
TodoPriority = Literal["low", "medium", "high", "urgent"]
HabitTrackingType = Literal["boolean", "numeric", "duration", "custom"]
HabitFrequency = Literal["daily", "weekly", "custom"]
TimerType = Literal["pomodoro", "break", "long-break"]
EventType = Literal["appointment", "work", "personal", "deadline", "meeting"]
MealType = Literal["breakfast", "lunch", "dinner", "snack"]
WatchlistType = Literal["movie", "show", "podcast", "other"]
WatchlistStatus = Literal["To Watch", "In Progress", "Done"]
CardioType = Literal["run", "ride", "row", "other"]
TimeBlockType = Literal["work", "personal", "break", "todo", "habit"]

CLOCK_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class TodoCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    color: Optional[str] = None
    icon: Optional[str] = None
    description: Optional[str] = None
    order_index: int = 0
    is_archived: bool = False


class TodoCategoryPatch(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = None
    icon: Optional[str] = None
    description: Optional[str] = None
    order_index: Optional[int] = None
    is_archived: Optional[bool] = None


class TodoCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    category_id: Optional[str] = None
    status: TodoStatus = "pending"
    priority: TodoPriority = "medium"
    is_urgent: bool = False
    is_important: bool = False
    priority_score: Optional[int] = Field(None, ge=1, le=5)
    due_date: Optional[date] = None
    due_time: Optional[str] = None
    estimated_minutes: Optional[int] = Field(None, ge=0)


class TodoPatch(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category_id: Optional[str] = None
    status: Optional[TodoStatus] = None
    priority: Optional[TodoPriority] = None
    is_urgent: Optional[bool] = None
    is_important: Optional[bool] = None
    priority_score: Optional[int] = Field(None, ge=1, le=5)
    due_date: Optional[date] = None
    due_time: Optional[str] = None
    estimated_minutes: Optional[int] = Field(None, ge=0)


class HabitCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    tracking_type: HabitTrackingType = "boolean"
    frequency: HabitFrequency = "daily"
    target_value: int = Field(1, ge=1)
    unit: Optional[str] = None
    color: Optional[str] = None
    is_archived: bool = False


class HabitPatch(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    tracking_type: Optional[HabitTrackingType] = None
    frequency: Optional[HabitFrequency] = None
    target_value: Optional[int] = Field(None, ge=1)
    unit: Optional[str] = None
    color: Optional[str] = None
    is_archived: Optional[bool] = None


class HabitEntryUpsert(BaseModel):
    habit_id: str
    date: date
    value: float = Field(1, ge=0)
    notes: Optional[str] = None


class GoalCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    deadline: Optional[date] = None
    progress: int = Field(0, ge=0, le=100)


class GoalPatch(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    deadline: Optional[date] = None
    progress: Optional[int] = Field(None, ge=0, le=100)


class HealthEntryUpsert(BaseModel):
    date: date
    sleep_hours: Optional[float] = Field(None, ge=0, le=24)
    sleep_quality: Optional[int] = Field(None, ge=1, le=10)
    exercise_minutes: Optional[int] = Field(None, ge=0)
    exercise_type: Optional[str] = None
    calories_burned: Optional[int] = Field(None, ge=0)
    mood: Optional[int] = Field(None, ge=1, le=10)
    notes: Optional[str] = None


class TimerSessionCreate(BaseModel):
    date: date
    type: TimerType = "pomodoro"
    duration: int = Field(..., gt=0)
    completed: bool = False


class TimerSessionPatch(BaseModel):
    completed: Optional[bool] = None
    duration: Optional[int] = Field(None, gt=0)


class CalendarEventCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    event_type: EventType = "personal"
    start_date: date
    start_time: Optional[str] = None
    end_date: Optional[date] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    is_all_day: bool = False
    color: Optional[str] = None


class CalendarEventPatch(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    event_type: Optional[EventType] = None
    start_date: Optional[date] = None
    start_time: Optional[str] = None
    end_date: Optional[date] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    is_all_day: Optional[bool] = None
    color: Optional[str] = None


class MealItem(BaseModel):
    food_name: str
    food_id: Optional[str] = None
    quantity: float = Field(1, gt=0)
    serving_grams: float = Field(100, gt=0)


class NutritionTotals(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0


class MealCreate(BaseModel):
    date: date
    meal_type: MealType
    logged_at: Optional[datetime] = None
    items: List[MealItem] = Field(default_factory=list)
    source: str = "manual"
    totals: Optional[NutritionTotals] = None


class NutritionGoalCreate(BaseModel):
    calorie_target: Optional[int] = Field(None, gt=0)
    protein_target: Optional[float] = Field(None, gt=0)
    carbs_target: Optional[float] = Field(None, gt=0)
    fat_target: Optional[float] = Field(None, gt=0)
    fiber_target: float = Field(25, gt=0)


class WorkoutCreate(BaseModel):
    started_at: Optional[datetime] = None
    notes: Optional[str] = None


class WorkoutPatch(BaseModel):
    ended_at: Optional[datetime] = None
    notes: Optional[str] = None


class WorkoutSetCreate(BaseModel):
    exercise_name: str = Field(..., min_length=1)
    weight: float = Field(0, ge=0)
    reps: int = Field(0, ge=0)
    order_index: Optional[int] = None


class ScreenTimeAppCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category: Optional[str] = None
    is_excluded: bool = False


class ScreenTimeAppPatch(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    is_excluded: Optional[bool] = None


class ScreenTimeEntryCreate(BaseModel):
    app_id: str
    date: date
    minutes: int = Field(..., ge=0)


class ScreenTimeLimitCreate(BaseModel):
    app_id: Optional[str] = None
    limit_minutes: int = Field(..., gt=0)
    is_active: bool = True


class ScreenTimeLimitPatch(BaseModel):
    limit_minutes: Optional[int] = Field(None, gt=0)
    is_active: Optional[bool] = None


class WatchlistItemCreate(BaseModel):
    title: str = Field(..., min_length=1)
    type: WatchlistType = "movie"
    source: Optional[str] = None
    link: Optional[str] = None
    length: Optional[int] = Field(None, ge=0)
    status: WatchlistStatus = "To Watch"
    notes: Optional[str] = None


class WatchlistItemPatch(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    type: Optional[WatchlistType] = None
    source: Optional[str] = None
    link: Optional[str] = None
    length: Optional[int] = Field(None, ge=0)
    status: Optional[WatchlistStatus] = None
    notes: Optional[str] = None


class CardioEntryCreate(BaseModel):
    date: date
    type: CardioType = "run"
    duration_sec: int = Field(..., gt=0)
    distance_meters: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class FoodServing(BaseModel):
    unit: str = Field(..., min_length=1)
    grams: float = Field(..., gt=0)
    description: Optional[str] = None


class FoodNutrients(BaseModel):
    calories: float = Field(..., ge=0)
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fat: float = Field(0, ge=0)
    fiber: Optional[float] = Field(None, ge=0)
    sugar: Optional[float] = Field(None, ge=0)
    sodium: Optional[float] = Field(None, ge=0)


class FoodItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    brand: Optional[str] = None
    barcode: Optional[str] = None
    servings: List[FoodServing] = Field(default_factory=list)
    nutrients: FoodNutrients


class ChecklistItem(BaseModel):
    id: Optional[str] = None
    text: str = Field(..., min_length=1)
    completed: bool = False
    category: Optional[str] = None
    todo_id: Optional[str] = None


class TimeBlock(BaseModel):
    id: Optional[str] = None
    start_time: str = Field(..., pattern=CLOCK_PATTERN)
    end_time: str = Field(..., pattern=CLOCK_PATTERN)
    title: str = Field(..., min_length=1)
    type: TimeBlockType = "work"
    todo_id: Optional[str] = None
    habit_id: Optional[str] = None
    completed: bool = False


class WeeklyPlanCreate(BaseModel):
    week_start_date: date
    title: str = Field(..., min_length=1)
    goals: List[ChecklistItem] = Field(default_factory=list)
    priorities: List[ChecklistItem] = Field(default_factory=list)
    notes: Optional[str] = None
    reflection: Optional[str] = None


class WeeklyPlanPatch(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    goals: Optional[List[ChecklistItem]] = None
    priorities: Optional[List[ChecklistItem]] = None
    notes: Optional[str] = None
    reflection: Optional[str] = None


class DailyPlanCreate(BaseModel):
    date: date
    title: str = Field(..., min_length=1)
    weekly_plan_id: Optional[str] = None
    time_blocks: List[TimeBlock] = Field(default_factory=list)
    priorities: List[ChecklistItem] = Field(default_factory=list)
    reflection: Optional[str] = None
    energy_level: Optional[int] = Field(None, ge=1, le=10)
    mood_rating: Optional[int] = Field(None, ge=1, le=10)


class DailyPlanPatch(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    weekly_plan_id: Optional[str] = None
    time_blocks: Optional[List[TimeBlock]] = None
    priorities: Optional[List[ChecklistItem]] = None
    reflection: Optional[str] = None
    energy_level: Optional[int] = Field(None, ge=1, le=10)
    mood_rating: Optional[int] = Field(None, ge=1, le=10)
