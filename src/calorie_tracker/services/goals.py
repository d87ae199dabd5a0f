"""Daily goal computation from biometric inputs.

1. BMR  (Mifflin-St Jeor)
2. TDEE (BMR x activity multiplier)
3. Macro grams: protein from body weight, carbs and fat from kcal splits
"""

from dataclasses import dataclass, replace

from calorie_tracker.domain.goals import BiometricProfile, Goal, GoalPreview, Sex
from calorie_tracker.services.macros import coerce_numeric, round_half_up

KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9

_NUMERIC_PROFILE_FIELDS = (
    "age",
    "height",
    "weight",
    "activity",
    "protein_per_kg",
    "carb_split",
    "fat_split",
)


@dataclass(frozen=True)
class GoalEngine:
    """Stateless calculator for daily energy and macro targets."""

    def bmr(self, profile: BiometricProfile) -> float:
        base = 10 * profile.weight + 6.25 * profile.height - 5 * profile.age
        return base + (5 if profile.sex == Sex.MALE else -161)

    def tdee(self, profile: BiometricProfile) -> float:
        return self.bmr(profile) * profile.activity

    def preview(self, profile: BiometricProfile) -> GoalPreview:
        """Derive the goal for a profile without touching any stored goal."""
        bmr = self.bmr(profile)
        tdee = self.tdee(profile)
        protein = round_half_up(profile.weight * profile.protein_per_kg)
        fat = round_half_up((profile.fat_split / 100 * tdee) / KCAL_PER_GRAM_FAT)
        carbs = round_half_up(
            (profile.carb_split / 100 * tdee) / KCAL_PER_GRAM_CARBS
        )
        return GoalPreview(
            bmr=round_half_up(bmr, 2),
            tdee=round_half_up(tdee, 2),
            goal=Goal(
                kcal=round_half_up(tdee, 0),
                protein=protein,
                carbs=carbs,
                fat=fat,
            ),
        )


def update_profile(
    profile: BiometricProfile, changes: dict[str, object]
) -> BiometricProfile:
    """Return a copy of ``profile`` with coerced field changes applied.

    Unknown keys are ignored. Any sex other than "male" maps to female.
    """
    values: dict[str, object] = {}
    for key, raw in changes.items():
        if key == "sex":
            is_male = str(raw).strip().lower() == Sex.MALE.value
            values["sex"] = Sex.MALE if is_male else Sex.FEMALE
        elif key in _NUMERIC_PROFILE_FIELDS:
            values[key] = coerce_numeric(raw)
    return replace(profile, **values)
