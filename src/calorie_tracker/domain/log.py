"""Domain models for the consumption log."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from calorie_tracker.domain.foods import MacroProfile


class Meal(StrEnum):
    """Meal slot an entry is logged under."""

    ANY = "Any"
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


@dataclass(frozen=True)
class LogEntry:
    """Logged portion with absolute macros."""

    id: UUID
    name: str
    meal: Meal
    grams: float
    kcal: float
    protein: float
    carbs: float
    fat: float
    ts: int

    @property
    def macros(self) -> MacroProfile:
        """Return the entry's macros as a profile."""
        return MacroProfile(
            kcal=self.kcal, protein=self.protein, carbs=self.carbs, fat=self.fat
        )
