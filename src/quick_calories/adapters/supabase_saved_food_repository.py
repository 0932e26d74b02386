"""Supabase repository for saved foods."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from quick_calories.domain.entries import SavedFood
from quick_calories.services.entries import SavedFoodRepository


@dataclass
class SupabaseSavedFoodRepository(SavedFoodRepository):
    """Supabase implementation for saved foods."""

    client: Client
    owner_id: str

    def add_saved_food(self, food: SavedFood) -> None:
        """Insert a saved food row."""
        self.client.table("saved_foods").insert(
            {
                "id": str(food.id),
                "owner_id": self.owner_id,
                "food_name": food.food_name,
                "serving_size": food.serving_size,
                "unit": food.unit,
                "calories": food.calories,
                "protein": food.protein,
                "carbs": food.carbs,
                "fat": food.fat,
                "created_at": food.created_at.isoformat(),
            }
        ).execute()

    def list_saved_foods(self) -> list[SavedFood]:
        """Return saved foods, newest first."""
        response = (
            self.client.table("saved_foods")
            .select(
                "id, food_name, serving_size, unit, calories, protein, carbs, fat, "
                "created_at"
            )
            .eq("owner_id", self.owner_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [
            SavedFood(
                id=UUID(str(row["id"])),
                food_name=str(row.get("food_name", "")),
                serving_size=float(row.get("serving_size", 1.0)),
                unit=str(row.get("unit", "")),
                calories=int(row.get("calories", 0)),
                protein=float(row.get("protein", 0.0)),
                carbs=float(row.get("carbs", 0.0)),
                fat=float(row.get("fat", 0.0)),
                created_at=datetime.fromisoformat(str(row["created_at"])),
            )
            for row in response.data or []
        ]

    def delete_saved_food(self, food_id: UUID) -> None:
        """Delete a saved food row."""
        self.client.table("saved_foods").delete().eq("id", str(food_id)).eq(
            "owner_id", self.owner_id
        ).execute()
