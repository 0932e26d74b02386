"""Tests for calorie and macro arithmetic."""

import pytest

from quick_calories.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    Goal,
    MacroPercentages,
    MacroSplit,
    Sex,
)
from quick_calories.services.calculator import (
    adjust_for_goal,
    cm_to_inches,
    compute_bmr,
    compute_daily_target,
    compute_macro_grams,
    compute_targets,
    compute_tdee,
    inches_to_cm,
    is_valid_custom_split,
    kg_to_lbs,
    lbs_to_kg,
    validate_profile,
)


def test_bmr_by_sex() -> None:
    male = compute_bmr(70, 175, 30, Sex.MALE)
    female = compute_bmr(70, 175, 30, Sex.FEMALE)
    unspecified = compute_bmr(70, 175, 30, Sex.UNSPECIFIED)

    assert male == 1648.75
    assert female == 1482.75
    assert unspecified == 1565.75
    assert unspecified == (male + female) / 2


def test_bmr_does_not_validate_inputs() -> None:
    assert compute_bmr(0, 0, 0, Sex.MALE) == 5


def test_tdee_and_goal_adjustment() -> None:
    assert compute_tdee(1000, ActivityLevel.SEDENTARY) == 1200
    assert compute_tdee(1000, ActivityLevel.EXTREMELY_ACTIVE) == 1900
    assert adjust_for_goal(2000, Goal.LOSE) == 1500
    assert adjust_for_goal(2000, Goal.MAINTAIN) == 2000
    assert adjust_for_goal(2000, Goal.GAIN) == 2300


def test_activity_multipliers_are_ordered() -> None:
    multipliers = [level.multiplier for level in ActivityLevel]

    assert multipliers == [1.2, 1.375, 1.55, 1.725, 1.9]
    assert ActivityLevel.MODERATE.label == "Moderately Active"


def test_daily_target_truncates(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "quick_calories.services.calculator.adjust_for_goal",
        lambda tdee, goal: 1999.9,
    )
    profile = BiometricProfile(weight_kg=70, height_cm=175, age=30, sex=Sex.MALE)

    assert compute_daily_target(profile, ActivityLevel.MODERATE, Goal.MAINTAIN) == 1999


def test_daily_target_composes_formulas() -> None:
    profile = BiometricProfile(weight_kg=70, height_cm=175, age=30, sex=Sex.MALE)

    target = compute_daily_target(profile, ActivityLevel.SEDENTARY, Goal.LOSE)

    # 1648.75 * 1.2 - 500 = 1478.5
    assert target == 1478


@pytest.mark.parametrize(
    "split", [MacroSplit.BALANCED, MacroSplit.HIGH_PROTEIN, MacroSplit.LOW_CARB]
)
def test_preset_splits_sum_to_one(split: MacroSplit) -> None:
    assert split.percentages.total == pytest.approx(1.0, abs=1e-12)


def test_macro_grams_for_balanced_split() -> None:
    grams = compute_macro_grams(2000, MacroSplit.BALANCED)

    assert grams.protein_g == pytest.approx(150)
    assert grams.carbs_g == pytest.approx(200)
    assert grams.fat_g == pytest.approx(66.67, abs=0.01)


def test_macro_grams_for_custom_split() -> None:
    custom = MacroPercentages(protein=0.40, carbs=0.30, fat=0.30)

    grams = compute_macro_grams(1800, MacroSplit.CUSTOM, custom)

    assert grams.protein_g == pytest.approx(180)
    assert grams.carbs_g == pytest.approx(135)
    assert grams.fat_g == pytest.approx(60)


def test_custom_split_without_percentages_is_zero() -> None:
    grams = compute_macro_grams(2000, MacroSplit.CUSTOM)

    assert (grams.protein_g, grams.carbs_g, grams.fat_g) == (0, 0, 0)


def test_custom_percentages_ignored_for_presets() -> None:
    custom = MacroPercentages(protein=1.0, carbs=0.0, fat=0.0)

    grams = compute_macro_grams(2000, MacroSplit.BALANCED, custom)

    assert grams.protein_g == pytest.approx(150)


def test_compute_targets() -> None:
    profile = BiometricProfile(weight_kg=70, height_cm=175, age=30, sex=Sex.FEMALE)

    targets = compute_targets(
        profile, ActivityLevel.MODERATE, Goal.MAINTAIN, MacroSplit.LOW_CARB
    )

    # 1482.75 * 1.55 = 2298.2625
    assert targets.calories == 2298
    assert targets.carbs_g == pytest.approx(2298 * 0.20 / 4)
    assert targets.fat_g == pytest.approx(2298 * 0.50 / 9)


@pytest.mark.parametrize("value", [0.001, 1.0, 72.5, 180.0, 12345.678])
def test_unit_round_trips(value: float) -> None:
    assert kg_to_lbs(lbs_to_kg(value)) == pytest.approx(value, rel=1e-9)
    assert lbs_to_kg(kg_to_lbs(value)) == pytest.approx(value, rel=1e-9)
    assert inches_to_cm(cm_to_inches(value)) == pytest.approx(value, rel=1e-9)
    assert cm_to_inches(inches_to_cm(value)) == pytest.approx(value, rel=1e-9)


def test_unit_factors() -> None:
    assert lbs_to_kg(1) == 0.453592
    assert inches_to_cm(1) == 2.54


def test_custom_split_tolerance() -> None:
    assert is_valid_custom_split(MacroPercentages(0.30, 0.40, 0.30))
    assert is_valid_custom_split(MacroPercentages(0.302, 0.40, 0.30))
    assert not is_valid_custom_split(MacroPercentages(0.35, 0.40, 0.30))


def test_validate_profile_rejects_degenerate_inputs() -> None:
    validate_profile(BiometricProfile(70, 175, 0, Sex.MALE))

    with pytest.raises(ValueError, match="weight"):
        validate_profile(BiometricProfile(0, 175, 30, Sex.MALE))
    with pytest.raises(ValueError, match="height"):
        validate_profile(BiometricProfile(70, -1, 30, Sex.MALE))
    with pytest.raises(ValueError, match="age"):
        validate_profile(BiometricProfile(70, 175, -1, Sex.MALE))
