"""Domain models for foods and macro values."""

from dataclasses import dataclass

MACRO_FIELDS = ("kcal", "protein", "carbs", "fat")


@dataclass(frozen=True)
class FoodRecord:
    """Food entry with macros per 100 g."""

    name: str
    kcal: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


@dataclass(frozen=True)
class MacroProfile:
    """Absolute energy and macro values."""

    kcal: float
    protein: float
    carbs: float
    fat: float

    @classmethod
    def zero(cls) -> "MacroProfile":
        """Return a profile with every field set to zero."""
        return cls(kcal=0.0, protein=0.0, carbs=0.0, fat=0.0)
