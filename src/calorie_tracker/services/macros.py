"""Numeric helpers for macro arithmetic."""

import math
import re

from calorie_tracker.domain.foods import FoodRecord, MacroProfile

_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def round_half_up(value: float, precision: int = 1) -> float:
    """Round to ``precision`` decimals, halves rounding towards +infinity."""
    if not math.isfinite(value):
        return 0.0
    factor = 10**precision
    return math.floor(value * factor + 0.5) / factor


def coerce_numeric(value: object) -> float:
    """Parse free-form input into a float, returning 0 when unparseable."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value.strip())
        if match is None:
            return 0.0
        number = float(match.group())
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def scale(record: FoodRecord, grams: float) -> MacroProfile:
    """Scale per-100 g macros to a portion, rounded to one decimal."""
    return MacroProfile(
        kcal=round_half_up(record.kcal * grams / 100, 1),
        protein=round_half_up(record.protein * grams / 100, 1),
        carbs=round_half_up(record.carbs * grams / 100, 1),
        fat=round_half_up(record.fat * grams / 100, 1),
    )


def sum_profiles(profiles: list[MacroProfile]) -> MacroProfile:
    """Sum profiles field by field, rounding totals to one decimal."""
    kcal = protein = carbs = fat = 0.0
    for profile in profiles:
        kcal += profile.kcal
        protein += profile.protein
        carbs += profile.carbs
        fat += profile.fat
    return MacroProfile(
        kcal=round_half_up(kcal, 1),
        protein=round_half_up(protein, 1),
        carbs=round_half_up(carbs, 1),
        fat=round_half_up(fat, 1),
    )
