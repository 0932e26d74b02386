"""Biometric profile and target-setting enumerations."""

from dataclasses import dataclass
from enum import StrEnum


class Sex(StrEnum):
    """Sex category used by the Mifflin-St Jeor equation."""

    MALE = "male"
    FEMALE = "female"
    UNSPECIFIED = "unspecified"


class ActivityLevel(StrEnum):
    """Ordinal activity categories."""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATE = "moderate"
    VERY_ACTIVE = "very_active"
    EXTREMELY_ACTIVE = "extremely_active"

    @property
    def multiplier(self) -> float:
        return _ACTIVITY_TABLE[self][0]

    @property
    def label(self) -> str:
        return _ACTIVITY_TABLE[self][1]

    @property
    def description(self) -> str:
        return _ACTIVITY_TABLE[self][2]


_ACTIVITY_TABLE: dict[ActivityLevel, tuple[float, str, str]] = {
    ActivityLevel.SEDENTARY: (1.2, "Sedentary", "Little or no exercise"),
    ActivityLevel.LIGHTLY_ACTIVE: (1.375, "Lightly Active", "Exercise 1-3 days/week"),
    ActivityLevel.MODERATE: (1.55, "Moderately Active", "Exercise 3-5 days/week"),
    ActivityLevel.VERY_ACTIVE: (1.725, "Very Active", "Exercise 6-7 days/week"),
    ActivityLevel.EXTREMELY_ACTIVE: (
        1.9,
        "Extremely Active",
        "Physical job + training",
    ),
}


class Goal(StrEnum):
    """Weight goal with a fixed daily calorie adjustment."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"

    @property
    def calorie_adjustment(self) -> float:
        return _GOAL_TABLE[self][0]

    @property
    def label(self) -> str:
        return _GOAL_TABLE[self][1]

    @property
    def description(self) -> str:
        return _GOAL_TABLE[self][2]


# -500 is roughly 1 lb per week; +300 is a lean bulk.
_GOAL_TABLE: dict[Goal, tuple[float, str, str]] = {
    Goal.LOSE: (-500.0, "Lose Weight", "Create a calorie deficit"),
    Goal.MAINTAIN: (0.0, "Maintain Weight", "Balance calories in and out"),
    Goal.GAIN: (300.0, "Gain Muscle", "Create a calorie surplus"),
}


@dataclass(frozen=True)
class MacroPercentages:
    """Share of daily calories per macronutrient, as fractions of 1."""

    protein: float
    carbs: float
    fat: float

    @property
    def total(self) -> float:
        return self.protein + self.carbs + self.fat


class MacroSplit(StrEnum):
    """Preset macro distributions; CUSTOM defers to caller percentages."""

    BALANCED = "balanced"
    HIGH_PROTEIN = "high_protein"
    LOW_CARB = "low_carb"
    CUSTOM = "custom"

    @property
    def percentages(self) -> MacroPercentages:
        return _SPLIT_TABLE[self][0]

    @property
    def label(self) -> str:
        return _SPLIT_TABLE[self][1]

    @property
    def description(self) -> str:
        return _SPLIT_TABLE[self][2]


_SPLIT_TABLE: dict[MacroSplit, tuple[MacroPercentages, str, str]] = {
    MacroSplit.BALANCED: (
        MacroPercentages(protein=0.30, carbs=0.40, fat=0.30),
        "Balanced",
        "30% protein, 40% carbs, 30% fat",
    ),
    MacroSplit.HIGH_PROTEIN: (
        MacroPercentages(protein=0.35, carbs=0.35, fat=0.30),
        "High Protein",
        "35% protein, 35% carbs, 30% fat",
    ),
    MacroSplit.LOW_CARB: (
        MacroPercentages(protein=0.30, carbs=0.20, fat=0.50),
        "Low Carb",
        "30% protein, 20% carbs, 50% fat",
    ),
    MacroSplit.CUSTOM: (
        MacroPercentages(protein=0.0, carbs=0.0, fat=0.0),
        "Custom",
        "Set your own percentages",
    ),
}


@dataclass(frozen=True)
class BiometricProfile:
    """Inputs to a single BMR calculation."""

    weight_kg: float
    height_cm: float
    age: int
    sex: Sex


@dataclass(frozen=True)
class MacroGrams:
    """Daily macronutrient amounts in grams."""

    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class DailyTargets:
    """Daily calorie and macro targets."""

    calories: int = 2000
    protein_g: float = 150.0
    carbs_g: float = 200.0
    fat_g: float = 67.0
