"""Tracker session owning catalog, log, goal and preferences."""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID

from calorie_tracker.domain.foods import MACRO_FIELDS, FoodRecord, MacroProfile
from calorie_tracker.domain.goals import BiometricProfile, Goal, GoalPreview
from calorie_tracker.domain.log import LogEntry, Meal
from calorie_tracker.domain.preferences import Preferences
from calorie_tracker.services.catalog import FoodCatalog
from calorie_tracker.services.csv_codec import decode_csv, encode_csv, export_filename
from calorie_tracker.services.food_log import FoodLog
from calorie_tracker.services.goals import GoalEngine, update_profile
from calorie_tracker.services.macros import coerce_numeric
from calorie_tracker.services.persistence import SnapshotStore

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CsvExport:
    """Exported log ready to be offered as a download."""

    filename: str
    content: str


@dataclass
class TrackerSession:
    """Single active session; every mutation is persisted right after it."""

    snapshots: SnapshotStore
    catalog: FoodCatalog
    food_log: FoodLog
    goal: Goal
    preferences: Preferences
    profile: BiometricProfile = field(default_factory=BiometricProfile)
    goal_engine: GoalEngine = field(default_factory=GoalEngine)

    @classmethod
    def load(
        cls, snapshots: SnapshotStore, default_portion_grams: float = 100.0
    ) -> "TrackerSession":
        """Restore a session from persisted snapshots, falling back to defaults."""
        session = cls(
            snapshots=snapshots,
            catalog=FoodCatalog(snapshots.load_catalog()),
            food_log=FoodLog(
                entries=snapshots.load_log(),
                default_portion_grams=default_portion_grams,
            ),
            goal=snapshots.load_goal(),
            preferences=snapshots.load_preferences(),
        )
        _logger.info(
            "Session loaded: foods=%s entries=%s",
            len(session.catalog.foods),
            len(session.food_log.entries),
        )
        return session

    # Catalog
    def search(self, query: str | None, limit: int | None = None) -> list[FoodRecord]:
        return self.catalog.search(query, limit)

    def find_food(self, name: str) -> FoodRecord | None:
        return self.catalog.find(name)

    def add_custom_food(self, payload: dict[str, object]) -> FoodRecord:
        food = self.catalog.add_custom(payload)
        self.snapshots.save_catalog(self.catalog.foods)
        return food

    # Log
    @property
    def entries(self) -> list[LogEntry]:
        return list(self.food_log.entries)

    def add_entry(
        self, food: FoodRecord, grams: object, meal: Meal | str = Meal.ANY
    ) -> LogEntry:
        entry = self.food_log.add_entry(food, grams, meal)
        self._save_log()
        return entry

    def remove_entry(self, entry_id: UUID) -> bool:
        removed = self.food_log.remove_entry(entry_id)
        if removed:
            self._save_log()
        return removed

    def clear_log(self) -> None:
        self.food_log.clear()
        self._save_log()

    def totals(self) -> MacroProfile:
        return self.food_log.totals()

    def progress(self) -> MacroProfile:
        return self.food_log.progress(self.goal)

    def remaining(self) -> MacroProfile:
        return self.food_log.remaining(self.goal)

    def import_csv(self, text: str) -> list[LogEntry]:
        """Import exported CSV; on any parse error the log is left untouched."""
        entries = decode_csv(
            text, id_factory=self.food_log.id_factory, clock=self.food_log.clock
        )
        if entries:
            self.food_log.extend(entries)
            self._save_log()
        _logger.info("Imported %s entries from CSV", len(entries))
        return entries

    def export_csv(self, today: date | None = None) -> CsvExport:
        return CsvExport(
            filename=export_filename(today),
            content=encode_csv(self.food_log.entries),
        )

    # Goal
    def set_goal(self, goal: Goal) -> Goal:
        """Overwrite the daily goal."""
        self.goal = goal
        self.snapshots.save_goal(goal)
        return goal

    def update_goal(self, changes: dict[str, object]) -> Goal:
        """Edit individual goal fields; values are numeric-coerced."""
        values = {
            key: coerce_numeric(value)
            for key, value in changes.items()
            if key in MACRO_FIELDS
        }
        return self.set_goal(replace(self.goal, **values))

    def update_profile(self, changes: dict[str, object]) -> GoalPreview:
        """Apply biometric edits and return the recomputed preview.

        The stored goal is left alone; use commit_goal_preview to adopt it.
        """
        self.profile = update_profile(self.profile, changes)
        return self.preview_goal()

    def preview_goal(self) -> GoalPreview:
        return self.goal_engine.preview(self.profile)

    def commit_goal_preview(self) -> Goal:
        """Adopt the goal derived from the current profile."""
        preview = self.preview_goal()
        _logger.info("Committing computed goal: %s", preview.goal)
        return self.set_goal(preview.goal)

    # Preferences
    def set_preferences(self, preferences: Preferences) -> Preferences:
        self.preferences = preferences
        self.snapshots.save_preferences(preferences)
        return preferences

    def _save_log(self) -> None:
        self.snapshots.save_log(self.food_log.entries)
