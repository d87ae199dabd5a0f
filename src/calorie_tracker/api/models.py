"""Pydantic models for API request payloads."""

from pydantic import BaseModel

from calorie_tracker.domain.log import Meal
from calorie_tracker.domain.preferences import Theme, Unit


class CustomFoodRequest(BaseModel):
    """User-submitted food; numbers may arrive as free-form strings."""

    name: str = ""
    kcal: float | str | None = None
    protein: float | str | None = None
    carbs: float | str | None = None
    fat: float | str | None = None


class LogEntryRequest(BaseModel):
    """Portion of a catalog food to log."""

    food: str
    grams: float | str | None = None
    meal: Meal = Meal.ANY


class GoalRequest(BaseModel):
    """Full goal replacement."""

    kcal: float
    protein: float
    carbs: float
    fat: float


class GoalPatchRequest(BaseModel):
    """Partial goal edit."""

    kcal: float | str | None = None
    protein: float | str | None = None
    carbs: float | str | None = None
    fat: float | str | None = None


class ProfileRequest(BaseModel):
    """Biometric inputs; omitted fields keep their current value."""

    sex: str | None = None
    age: float | str | None = None
    height: float | str | None = None
    weight: float | str | None = None
    activity: float | str | None = None
    protein_per_kg: float | str | None = None
    carb_split: float | str | None = None
    fat_split: float | str | None = None


class PreferencesRequest(BaseModel):
    """Display preferences."""

    unit: Unit = "g"
    theme: Theme = "light"
