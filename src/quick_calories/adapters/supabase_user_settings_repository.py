"""Supabase repository for user settings."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from quick_calories.domain.profile import DailyTargets
from quick_calories.domain.settings import RateLimitState, UserSettings
from quick_calories.services.user_settings import UserSettingsRepository


@dataclass
class SupabaseUserSettingsRepository(UserSettingsRepository):
    """Supabase implementation for user settings, one row per owner."""

    client: Client
    owner_id: str

    def get_settings(self) -> UserSettings:
        """Return the stored settings row, or defaults."""
        response = (
            self.client.table("user_settings")
            .select("*")
            .eq("owner_id", self.owner_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return UserSettings()
        return _parse_row(response.data[0])

    def save_settings(self, settings: UserSettings) -> None:
        """Upsert the settings row."""
        last_reset_at = settings.rate_limit.last_reset_at
        self.client.table("user_settings").upsert(
            {
                "owner_id": self.owner_id,
                "daily_calorie_target": settings.targets.calories,
                "protein_target": settings.targets.protein_g,
                "carbs_target": settings.targets.carbs_g,
                "fat_target": settings.targets.fat_g,
                "openai_api_key": settings.openai_api_key,
                "has_completed_onboarding": settings.has_completed_onboarding,
                "has_active_subscription": settings.has_active_subscription,
                "daily_ai_request_count": settings.rate_limit.request_count,
                "last_request_reset_at": (
                    last_reset_at.isoformat() if last_reset_at else None
                ),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="owner_id",
        ).execute()


def _parse_row(row: dict[str, object]) -> UserSettings:
    defaults = DailyTargets()
    last_reset_raw = row.get("last_request_reset_at")
    last_reset_at = (
        datetime.fromisoformat(last_reset_raw)
        if isinstance(last_reset_raw, str) and last_reset_raw
        else None
    )
    # Non-positive stored targets fall back to defaults.
    calories = int(row.get("daily_calorie_target") or 0)
    protein = float(row.get("protein_target") or 0.0)
    carbs = float(row.get("carbs_target") or 0.0)
    fat = float(row.get("fat_target") or 0.0)
    return UserSettings(
        targets=DailyTargets(
            calories=calories if calories > 0 else defaults.calories,
            protein_g=protein if protein > 0 else defaults.protein_g,
            carbs_g=carbs if carbs > 0 else defaults.carbs_g,
            fat_g=fat if fat > 0 else defaults.fat_g,
        ),
        openai_api_key=row.get("openai_api_key") or None,
        has_completed_onboarding=bool(row.get("has_completed_onboarding")),
        has_active_subscription=bool(row.get("has_active_subscription")),
        rate_limit=RateLimitState(
            request_count=int(row.get("daily_ai_request_count") or 0),
            last_reset_at=last_reset_at,
        ),
    )
