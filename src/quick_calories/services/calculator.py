"""Calorie and macro arithmetic.

Every function here is pure: no I/O and no shared state, so callers may use
them from any thread or task without coordination.
"""

from quick_calories.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    DailyTargets,
    Goal,
    MacroGrams,
    MacroPercentages,
    MacroSplit,
    Sex,
)

KCAL_PER_GRAM_PROTEIN = 4.0
KCAL_PER_GRAM_CARBS = 4.0
KCAL_PER_GRAM_FAT = 9.0

KG_PER_LB = 0.453592
CM_PER_INCH = 2.54

CUSTOM_SPLIT_TOLERANCE = 0.005

# Mifflin-St Jeor sex constants; UNSPECIFIED is the midpoint of the other two.
_SEX_OFFSETS: dict[Sex, float] = {
    Sex.MALE: 5.0,
    Sex.FEMALE: -161.0,
    Sex.UNSPECIFIED: -78.0,
}


def compute_bmr(weight_kg: float, height_cm: float, age: int, sex: Sex) -> float:
    """Return basal metabolic rate in kcal/day (Mifflin-St Jeor).

    Inputs are not range-checked; see :func:`validate_profile`.
    """
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + _SEX_OFFSETS[sex]


def compute_tdee(bmr: float, activity_level: ActivityLevel) -> float:
    """Scale BMR by the activity multiplier."""
    return bmr * activity_level.multiplier


def adjust_for_goal(tdee: float, goal: Goal) -> float:
    """Apply the goal's fixed calorie adjustment."""
    return tdee + goal.calorie_adjustment


def compute_daily_target(
    profile: BiometricProfile, activity_level: ActivityLevel, goal: Goal
) -> int:
    """Return the daily calorie target, truncated toward zero."""
    bmr = compute_bmr(profile.weight_kg, profile.height_cm, profile.age, profile.sex)
    tdee = compute_tdee(bmr, activity_level)
    return int(adjust_for_goal(tdee, goal))


def compute_macro_grams(
    total_calories: float,
    split: MacroSplit,
    custom: MacroPercentages | None = None,
) -> MacroGrams:
    """Convert a calorie total into grams per macro for a split.

    ``custom`` is only consulted for :attr:`MacroSplit.CUSTOM`. The sum of
    custom percentages is the caller's responsibility.
    """
    percentages = split.percentages
    if split is MacroSplit.CUSTOM and custom is not None:
        percentages = custom
    return MacroGrams(
        protein_g=total_calories * percentages.protein / KCAL_PER_GRAM_PROTEIN,
        carbs_g=total_calories * percentages.carbs / KCAL_PER_GRAM_CARBS,
        fat_g=total_calories * percentages.fat / KCAL_PER_GRAM_FAT,
    )


def compute_targets(
    profile: BiometricProfile,
    activity_level: ActivityLevel,
    goal: Goal,
    split: MacroSplit,
    custom: MacroPercentages | None = None,
) -> DailyTargets:
    """Compute the calorie target and the macro grams that go with it."""
    calories = compute_daily_target(profile, activity_level, goal)
    macros = compute_macro_grams(calories, split, custom)
    return DailyTargets(
        calories=calories,
        protein_g=macros.protein_g,
        carbs_g=macros.carbs_g,
        fat_g=macros.fat_g,
    )


def is_valid_custom_split(
    percentages: MacroPercentages, tolerance: float = CUSTOM_SPLIT_TOLERANCE
) -> bool:
    """Return True when the percentages add up to 100% within tolerance."""
    return abs(percentages.total - 1.0) < tolerance


def validate_profile(profile: BiometricProfile) -> None:
    """Reject biometric inputs the formulas would turn into nonsense."""
    if profile.weight_kg <= 0:
        raise ValueError("weight must be positive")
    if profile.height_cm <= 0:
        raise ValueError("height must be positive")
    if profile.age < 0:
        raise ValueError("age must not be negative")


def lbs_to_kg(pounds: float) -> float:
    return pounds * KG_PER_LB


def kg_to_lbs(kilograms: float) -> float:
    return kilograms / KG_PER_LB


def inches_to_cm(inches: float) -> float:
    return inches * CM_PER_INCH


def cm_to_inches(centimeters: float) -> float:
    return centimeters / CM_PER_INCH
