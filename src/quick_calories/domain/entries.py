"""Domain models for logged food, workouts and saved foods."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class FoodEntry:
    """A logged food with totals already multiplied by servings."""

    id: UUID
    food_name: str
    calories: int
    protein: float
    carbs: float
    fat: float
    servings: float
    logged_at: datetime


@dataclass(frozen=True)
class WorkoutEntry:
    """A logged workout."""

    id: UUID
    workout_name: str
    calories_burned: int
    logged_at: datetime


@dataclass(frozen=True)
class SavedFood:
    """Reusable per-serving food definition."""

    id: UUID
    food_name: str
    serving_size: float
    unit: str
    calories: int
    protein: float
    carbs: float
    fat: float
    created_at: datetime
