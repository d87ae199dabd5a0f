"""Domain models for daily goals and biometric inputs."""

from dataclasses import dataclass
from enum import Enum, StrEnum


class Sex(StrEnum):
    """Sex used by the Mifflin-St Jeor equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """PAL multipliers from sedentary to extra active."""

    SEDENTARY = 1.2
    LIGHT = 1.375
    MODERATE = 1.55
    VERY_ACTIVE = 1.725
    EXTRA_ACTIVE = 1.9


@dataclass(frozen=True)
class Goal:
    """Daily energy and macro targets."""

    kcal: float
    protein: float
    carbs: float
    fat: float


DEFAULT_GOAL = Goal(kcal=2200, protein=120, carbs=250, fat=70)


@dataclass(frozen=True)
class BiometricProfile:
    """Inputs for goal computation.

    Protein is mass-based (grams per kg of body weight) while carbs and fat
    are percentages of TDEE, so the three shares need not add up to 100%.
    """

    sex: Sex = Sex.MALE
    age: float = 25
    height: float = 175
    weight: float = 70
    activity: float = ActivityLevel.MODERATE.value
    protein_per_kg: float = 1.6
    carb_split: float = 50
    fat_split: float = 25


@dataclass(frozen=True)
class GoalPreview:
    """Derived goal along with the intermediate energy figures."""

    bmr: float
    tdee: float
    goal: Goal
