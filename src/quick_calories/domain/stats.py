"""Domain models for daily progress and history."""

from dataclasses import dataclass
from datetime import date

from quick_calories.domain.profile import DailyTargets

OVER_BUDGET_GRACE = 0.1
GOAL_BAND_LOW = 0.9
GOAL_BAND_HIGH = 1.1


@dataclass(frozen=True)
class DailyTotals:
    """Daily total intake."""

    day: date
    calories: int
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class DailySummary:
    """Intake, burned calories and targets for one day."""

    totals: DailyTotals
    workout_calories: int
    targets: DailyTargets

    @property
    def calories_remaining(self) -> int:
        """Target minus eaten, with workout calories added back."""
        return self.targets.calories - self.totals.calories + self.workout_calories

    @property
    def calorie_progress(self) -> float:
        if self.targets.calories <= 0:
            return 0.0
        return (self.totals.calories - self.workout_calories) / self.targets.calories

    @property
    def is_over_budget(self) -> bool:
        """Over target by more than the grace margin."""
        remaining = self.calories_remaining
        grace = int(self.targets.calories * OVER_BUDGET_GRACE)
        return remaining < 0 and abs(remaining) > grace


@dataclass(frozen=True)
class DayHistory:
    """One calendar day in the monthly history."""

    totals: DailyTotals
    workout_calories: int
    calorie_target: int
    entry_count: int = 0

    @property
    def net_calories(self) -> int:
        return self.totals.calories - self.workout_calories

    @property
    def has_entries(self) -> bool:
        return self.entry_count > 0

    @property
    def met_goal(self) -> bool:
        """Net calories within the goal band around the target."""
        low = int(self.calorie_target * GOAL_BAND_LOW)
        high = int(self.calorie_target * GOAL_BAND_HIGH)
        return low <= self.net_calories <= high
