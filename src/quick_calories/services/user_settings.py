"""User settings service."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from quick_calories.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    DailyTargets,
    Goal,
    MacroPercentages,
    MacroSplit,
)
from quick_calories.domain.settings import UserSettings
from quick_calories.services.calculator import (
    compute_macro_grams,
    compute_targets,
    is_valid_custom_split,
    validate_profile,
)

_logger = logging.getLogger(__name__)


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_settings(self) -> UserSettings:
        """Return stored settings, or defaults when nothing is stored."""

    def save_settings(self, settings: UserSettings) -> None:
        """Persist settings."""


@dataclass
class UserSettingsService:
    """Service for targets, credentials and onboarding flags."""

    repository: UserSettingsRepository

    def get_settings(self) -> UserSettings:
        return self.repository.get_settings()

    def get_targets(self) -> DailyTargets:
        """Return the current daily targets."""
        return self.repository.get_settings().targets

    def apply_guided_targets(
        self,
        profile: BiometricProfile,
        activity_level: ActivityLevel,
        goal: Goal,
        split: MacroSplit,
        custom: MacroPercentages | None = None,
    ) -> DailyTargets:
        """Compute targets from a profile and persist them."""
        validate_profile(profile)
        _check_custom_split(split, custom)
        targets = compute_targets(profile, activity_level, goal, split, custom)
        self._save_targets(targets)
        _logger.info(
            "Guided targets set: calories=%s activity=%s goal=%s split=%s",
            targets.calories,
            activity_level.value,
            goal.value,
            split.value,
        )
        return targets

    def set_manual_targets(
        self,
        calories: int,
        split: MacroSplit,
        custom: MacroPercentages | None = None,
    ) -> DailyTargets:
        """Persist a user-chosen calorie target with macros from a split."""
        if calories <= 0:
            raise ValueError("calorie target must be positive")
        _check_custom_split(split, custom)
        macros = compute_macro_grams(calories, split, custom)
        targets = DailyTargets(
            calories=calories,
            protein_g=macros.protein_g,
            carbs_g=macros.carbs_g,
            fat_g=macros.fat_g,
        )
        self._save_targets(targets)
        return targets

    def set_api_key(self, api_key: str | None) -> None:
        """Store the user's own API key; blank clears it."""
        cleaned = api_key.strip() if api_key else ""
        settings = self.repository.get_settings()
        self.repository.save_settings(replace(settings, openai_api_key=cleaned or None))

    def set_subscription(self, active: bool) -> None:
        settings = self.repository.get_settings()
        self.repository.save_settings(replace(settings, has_active_subscription=active))

    def complete_onboarding(self) -> None:
        settings = self.repository.get_settings()
        self.repository.save_settings(replace(settings, has_completed_onboarding=True))

    def _save_targets(self, targets: DailyTargets) -> None:
        settings = self.repository.get_settings()
        self.repository.save_settings(replace(settings, targets=targets))


def _check_custom_split(split: MacroSplit, custom: MacroPercentages | None) -> None:
    if split is not MacroSplit.CUSTOM:
        return
    if custom is None:
        raise ValueError("custom split requires percentages")
    if not is_valid_custom_split(custom):
        raise ValueError(
            f"custom percentages must total 100% (got {custom.total * 100:.1f}%)"
        )
