"""Food and workout logging."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from quick_calories.domain.entries import FoodEntry, SavedFood, WorkoutEntry
from quick_calories.domain.nutrition import NutritionEstimate

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class EntryRepository(Protocol):
    """Persistence interface for logged food and workouts."""

    def add_food_entry(self, entry: FoodEntry) -> None:
        """Persist a new food entry."""

    def update_food_entry(self, entry: FoodEntry) -> None:
        """Replace a stored food entry."""

    def delete_food_entry(self, entry_id: UUID) -> None:
        """Delete a food entry."""

    def list_food_entries(self, start: datetime, end: datetime) -> list[FoodEntry]:
        """Return food entries logged in ``[start, end)``."""

    def add_workout(self, workout: WorkoutEntry) -> None:
        """Persist a new workout."""

    def update_workout(self, workout: WorkoutEntry) -> None:
        """Replace a stored workout."""

    def delete_workout(self, workout_id: UUID) -> None:
        """Delete a workout."""

    def list_workouts(self, start: datetime, end: datetime) -> list[WorkoutEntry]:
        """Return workouts logged in ``[start, end)``."""


class SavedFoodRepository(Protocol):
    """Persistence interface for saved foods."""

    def add_saved_food(self, food: SavedFood) -> None:
        """Persist a saved food."""

    def list_saved_foods(self) -> list[SavedFood]:
        """Return saved foods, newest first."""

    def delete_saved_food(self, food_id: UUID) -> None:
        """Delete a saved food."""


@dataclass
class EntryService:
    """Turns estimates, manual input and saved foods into logged entries."""

    repository: EntryRepository
    saved_foods: SavedFoodRepository
    clock: Callable[[], datetime] = _utc_now

    def log_estimate(
        self,
        estimate: NutritionEstimate,
        servings: float = 1.0,
        logged_at: datetime | None = None,
    ) -> FoodEntry:
        """Log an AI estimate multiplied by the chosen servings."""
        _check_servings(servings)
        scaled = estimate.scaled(servings)
        entry = FoodEntry(
            id=uuid4(),
            food_name=scaled.food_name,
            calories=scaled.calories,
            protein=scaled.protein,
            carbs=scaled.carbs,
            fat=scaled.fat,
            servings=servings,
            logged_at=logged_at or self.clock(),
        )
        self.repository.add_food_entry(entry)
        _logger.info(
            "Logged food: name=%s calories=%s servings=%s",
            entry.food_name,
            entry.calories,
            servings,
        )
        return entry

    def log_manual(  # noqa: PLR0913
        self,
        food_name: str,
        calories: int,
        protein: float,
        carbs: float,
        fat: float,
        servings: float = 1.0,
        logged_at: datetime | None = None,
    ) -> FoodEntry:
        """Log per-serving values typed in by the user."""
        if not food_name.strip():
            raise ValueError("food name is required")
        estimate = NutritionEstimate(
            food_name=food_name.strip(),
            calories=calories,
            protein=protein,
            carbs=carbs,
            fat=fat,
        )
        return self.log_estimate(estimate, servings, logged_at)

    def log_saved_food(
        self,
        food: SavedFood,
        servings: float = 1.0,
        logged_at: datetime | None = None,
    ) -> FoodEntry:
        """Log a saved food for the chosen servings."""
        estimate = NutritionEstimate(
            food_name=food.food_name,
            calories=food.calories,
            protein=food.protein,
            carbs=food.carbs,
            fat=food.fat,
        )
        return self.log_estimate(estimate, servings, logged_at)

    def change_servings(self, entry: FoodEntry, servings: float) -> FoodEntry:
        """Rescale an entry from its per-serving base."""
        _check_servings(servings)
        base_calories = int(entry.calories / entry.servings)
        updated = replace(
            entry,
            calories=int(base_calories * servings),
            protein=entry.protein / entry.servings * servings,
            carbs=entry.carbs / entry.servings * servings,
            fat=entry.fat / entry.servings * servings,
            servings=servings,
        )
        self.repository.update_food_entry(updated)
        return updated

    def delete_entry(self, entry_id: UUID) -> None:
        self.repository.delete_food_entry(entry_id)

    def log_workout(
        self,
        workout_name: str,
        calories_burned: int,
        logged_at: datetime | None = None,
    ) -> WorkoutEntry:
        """Log a workout; burned calories are added back to the day's budget."""
        _check_workout(workout_name, calories_burned)
        workout = WorkoutEntry(
            id=uuid4(),
            workout_name=workout_name.strip(),
            calories_burned=calories_burned,
            logged_at=logged_at or self.clock(),
        )
        self.repository.add_workout(workout)
        _logger.info(
            "Logged workout: name=%s calories_burned=%s",
            workout.workout_name,
            calories_burned,
        )
        return workout

    def update_workout(
        self, workout: WorkoutEntry, workout_name: str, calories_burned: int
    ) -> WorkoutEntry:
        """Rename a workout or correct its burned calories."""
        _check_workout(workout_name, calories_burned)
        updated = replace(
            workout, workout_name=workout_name.strip(), calories_burned=calories_burned
        )
        self.repository.update_workout(updated)
        return updated

    def delete_workout(self, workout_id: UUID) -> None:
        self.repository.delete_workout(workout_id)

    def save_food(  # noqa: PLR0913
        self,
        food_name: str,
        serving_size: float,
        unit: str,
        calories: int,
        protein: float,
        carbs: float,
        fat: float,
    ) -> SavedFood:
        """Store a reusable single-serving food definition."""
        if not food_name.strip():
            raise ValueError("food name is required")
        if serving_size <= 0:
            raise ValueError("serving size must be positive")
        food = SavedFood(
            id=uuid4(),
            food_name=food_name.strip(),
            serving_size=serving_size,
            unit=unit,
            calories=calories,
            protein=protein,
            carbs=carbs,
            fat=fat,
            created_at=self.clock(),
        )
        self.saved_foods.add_saved_food(food)
        return food

    def list_saved_foods(self) -> list[SavedFood]:
        return self.saved_foods.list_saved_foods()

    def delete_saved_food(self, food_id: UUID) -> None:
        self.saved_foods.delete_saved_food(food_id)


def _check_servings(servings: float) -> None:
    if servings <= 0:
        raise ValueError("servings must be positive")


def _check_workout(workout_name: str, calories_burned: int) -> None:
    if not workout_name.strip():
        raise ValueError("workout name is required")
    if calories_burned <= 0:
        raise ValueError("calories burned must be positive")
