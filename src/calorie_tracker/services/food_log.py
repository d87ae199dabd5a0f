"""Consumption log with on-demand totals."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from calorie_tracker.domain.foods import FoodRecord, MacroProfile
from calorie_tracker.domain.goals import Goal
from calorie_tracker.domain.log import LogEntry, Meal
from calorie_tracker.services.macros import (
    coerce_numeric,
    round_half_up,
    scale,
    sum_profiles,
)

_logger = logging.getLogger(__name__)

PROGRESS_CAP = 100.0


def now_ms() -> int:
    """Return the current time as epoch milliseconds."""
    return int(datetime.now(tz=UTC).timestamp() * 1000)


@dataclass
class FoodLog:
    """Newest-first list of logged portions."""

    entries: list[LogEntry] = field(default_factory=list)
    default_portion_grams: float = 100.0
    id_factory: Callable[[], UUID] = uuid4
    clock: Callable[[], int] = now_ms

    def add_entry(
        self, record: FoodRecord, grams: object, meal: Meal | str = Meal.ANY
    ) -> LogEntry:
        """Scale a food to a portion and put it at the top of the log.

        Unparseable or non-positive grams fall back to the default portion.
        """
        portion = coerce_numeric(grams)
        if portion <= 0:
            portion = self.default_portion_grams
        macros = scale(record, portion)
        entry = LogEntry(
            id=self.id_factory(),
            name=record.name,
            meal=Meal(meal),
            grams=portion,
            kcal=macros.kcal,
            protein=macros.protein,
            carbs=macros.carbs,
            fat=macros.fat,
            ts=self.clock(),
        )
        self.entries.insert(0, entry)
        _logger.info(
            "Logged %sg of %s (%s kcal) meal=%s",
            entry.grams,
            entry.name,
            entry.kcal,
            entry.meal,
        )
        return entry

    def extend(self, entries: Iterable[LogEntry]) -> None:
        """Put a batch of entries at the top of the log, keeping batch order."""
        self.entries[:0] = list(entries)

    def get(self, entry_id: UUID) -> LogEntry | None:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def remove_entry(self, entry_id: UUID) -> bool:
        """Remove an entry by id; returns False when it was not present."""
        remaining = [entry for entry in self.entries if entry.id != entry_id]
        removed = len(remaining) != len(self.entries)
        self.entries[:] = remaining
        return removed

    def clear(self) -> None:
        self.entries.clear()

    def totals(self) -> MacroProfile:
        """Sum macros over the current entries."""
        return sum_profiles([entry.macros for entry in self.entries])

    def progress(self, goal: Goal) -> MacroProfile:
        """Return percent of goal reached per field, capped at 100."""
        totals = self.totals()
        return MacroProfile(
            kcal=_percent(totals.kcal, goal.kcal),
            protein=_percent(totals.protein, goal.protein),
            carbs=_percent(totals.carbs, goal.carbs),
            fat=_percent(totals.fat, goal.fat),
        )

    def remaining(self, goal: Goal) -> MacroProfile:
        """Return goal minus totals per field; negative when over target."""
        totals = self.totals()
        return MacroProfile(
            kcal=round_half_up(goal.kcal - totals.kcal, 1),
            protein=round_half_up(goal.protein - totals.protein, 1),
            carbs=round_half_up(goal.carbs - totals.carbs, 1),
            fat=round_half_up(goal.fat - totals.fat, 1),
        )


def _percent(total: float, target: float | None) -> float:
    denominator = target or 1
    return min(PROGRESS_CAP, round_half_up(total / denominator * 100, 1))
