"""Supabase repository for logged food and workouts."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from quick_calories.domain.entries import FoodEntry, WorkoutEntry
from quick_calories.services.entries import EntryRepository


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for food and workout entries."""

    client: Client
    owner_id: str

    def add_food_entry(self, entry: FoodEntry) -> None:
        """Insert a food entry row."""
        self.client.table("food_entries").insert(
            {"owner_id": self.owner_id, **_food_payload(entry)}
        ).execute()

    def update_food_entry(self, entry: FoodEntry) -> None:
        """Update a food entry row."""
        self.client.table("food_entries").update(_food_payload(entry)).eq(
            "id", str(entry.id)
        ).eq("owner_id", self.owner_id).execute()

    def delete_food_entry(self, entry_id: UUID) -> None:
        """Delete a food entry row."""
        self.client.table("food_entries").delete().eq("id", str(entry_id)).eq(
            "owner_id", self.owner_id
        ).execute()

    def list_food_entries(self, start: datetime, end: datetime) -> list[FoodEntry]:
        """Return food entries in the time range, newest first."""
        response = (
            self.client.table("food_entries")
            .select("id, food_name, calories, protein, carbs, fat, servings, logged_at")
            .eq("owner_id", self.owner_id)
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=True)
            .execute()
        )
        return [_parse_food_row(row) for row in response.data or []]

    def add_workout(self, workout: WorkoutEntry) -> None:
        """Insert a workout row."""
        self.client.table("workout_entries").insert(
            {
                "id": str(workout.id),
                "owner_id": self.owner_id,
                "workout_name": workout.workout_name,
                "calories_burned": workout.calories_burned,
                "logged_at": workout.logged_at.isoformat(),
            }
        ).execute()

    def update_workout(self, workout: WorkoutEntry) -> None:
        """Update a workout's name and burned calories."""
        self.client.table("workout_entries").update(
            {
                "workout_name": workout.workout_name,
                "calories_burned": workout.calories_burned,
            }
        ).eq("id", str(workout.id)).eq("owner_id", self.owner_id).execute()

    def delete_workout(self, workout_id: UUID) -> None:
        """Delete a workout row."""
        self.client.table("workout_entries").delete().eq("id", str(workout_id)).eq(
            "owner_id", self.owner_id
        ).execute()

    def list_workouts(self, start: datetime, end: datetime) -> list[WorkoutEntry]:
        """Return workouts in the time range, newest first."""
        response = (
            self.client.table("workout_entries")
            .select("id, workout_name, calories_burned, logged_at")
            .eq("owner_id", self.owner_id)
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=True)
            .execute()
        )
        return [
            WorkoutEntry(
                id=UUID(str(row["id"])),
                workout_name=str(row.get("workout_name", "")),
                calories_burned=int(row.get("calories_burned", 0)),
                logged_at=datetime.fromisoformat(str(row["logged_at"])),
            )
            for row in response.data or []
        ]


def _food_payload(entry: FoodEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "food_name": entry.food_name,
        "calories": entry.calories,
        "protein": entry.protein,
        "carbs": entry.carbs,
        "fat": entry.fat,
        "servings": entry.servings,
        "logged_at": entry.logged_at.isoformat(),
    }


def _parse_food_row(row: dict[str, object]) -> FoodEntry:
    return FoodEntry(
        id=UUID(str(row["id"])),
        food_name=str(row.get("food_name", "")),
        calories=int(row.get("calories", 0)),
        protein=float(row.get("protein", 0.0)),
        carbs=float(row.get("carbs", 0.0)),
        fat=float(row.get("fat", 0.0)),
        servings=float(row.get("servings") or 1.0),
        logged_at=datetime.fromisoformat(str(row["logged_at"])),
    )
