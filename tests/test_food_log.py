"""Tests for the consumption log."""

from uuid import UUID

import pytest

from calorie_tracker.domain.foods import FoodRecord, MacroProfile
from calorie_tracker.domain.goals import Goal
from calorie_tracker.domain.log import LogEntry, Meal
from calorie_tracker.services.food_log import FoodLog
from calorie_tracker.services.macros import round_half_up, scale
from tests.conftest import SequentialIds

EGG = FoodRecord("Egg, whole", kcal=155, protein=13, carbs=1.1, fat=11)
RICE = FoodRecord("Rice, white, cooked", kcal=130, protein=2.4, carbs=28, fat=0.3)


def _log() -> FoodLog:
    return FoodLog(id_factory=SequentialIds(), clock=lambda: 1_700_000_000_000)


def test_add_entry_scales_and_prepends() -> None:
    log = _log()

    first = log.add_entry(EGG, 150, Meal.BREAKFAST)
    second = log.add_entry(RICE, "200", "Lunch")

    assert log.entries == [second, first]
    assert first == LogEntry(
        id=UUID(int=1),
        name="Egg, whole",
        meal=Meal.BREAKFAST,
        grams=150,
        kcal=232.5,
        protein=19.5,
        carbs=1.7,
        fat=16.5,
        ts=1_700_000_000_000,
    )
    assert second.meal == Meal.LUNCH
    assert second.macros == scale(RICE, 200)


def test_add_entry_assigns_unique_ids() -> None:
    log = FoodLog()

    ids = {log.add_entry(EGG, 100).id for _ in range(50)}

    assert len(ids) == 50


@pytest.mark.parametrize("grams", [0, -20, "", "abc", None])
def test_add_entry_falls_back_to_default_portion(grams: object) -> None:
    log = FoodLog(default_portion_grams=100)

    entry = log.add_entry(EGG, grams)

    assert entry.grams == 100
    assert entry.kcal == 155
    assert entry.meal == Meal.ANY


def test_add_then_remove_restores_state() -> None:
    log = _log()
    log.add_entry(EGG, 50)
    before_entries = list(log.entries)
    before_totals = log.totals()

    entry = log.add_entry(RICE, 120)
    assert log.remove_entry(entry.id) is True

    assert log.entries == before_entries
    assert log.totals() == before_totals


def test_remove_unknown_id_is_noop() -> None:
    log = _log()
    log.add_entry(EGG, 50)

    assert log.remove_entry(UUID(int=999)) is False
    assert len(log.entries) == 1


def test_clear_empties_log() -> None:
    log = _log()
    log.add_entry(EGG, 50)
    log.add_entry(RICE, 50)

    log.clear()

    assert log.entries == []
    assert log.totals() == MacroProfile.zero()


def test_totals_empty_log_is_zero() -> None:
    assert FoodLog().totals() == MacroProfile(0, 0, 0, 0)


def test_totals_sum_scaled_entries() -> None:
    log = _log()
    log.add_entry(EGG, 150)
    log.add_entry(RICE, 200)
    removed = log.add_entry(EGG, 30)
    log.remove_entry(removed.id)

    totals = log.totals()

    egg, rice = scale(EGG, 150), scale(RICE, 200)
    assert totals.kcal == round_half_up(egg.kcal + rice.kcal, 1) == 492.5
    assert totals.protein == round_half_up(egg.protein + rice.protein, 1) == 24.3
    assert totals.carbs == round_half_up(egg.carbs + rice.carbs, 1)
    assert totals.fat == round_half_up(egg.fat + rice.fat, 1)


def test_progress_against_goal() -> None:
    log = _log()
    log.add_entry(EGG, 150)
    log.add_entry(RICE, 200)

    progress = log.progress(Goal(kcal=2200, protein=120, carbs=250, fat=70))

    assert progress.kcal == 22.4
    assert progress.protein == 20.3
    assert progress.carbs == 23.1
    assert progress.fat == 24.4


def test_progress_caps_at_100_and_guards_zero_goal() -> None:
    log = _log()
    log.add_entry(FoodRecord("Tiny", kcal=1, protein=0, carbs=0, fat=0), 50)

    progress = log.progress(Goal(kcal=0, protein=0, carbs=0, fat=0))

    assert progress.kcal == 50.0
    assert progress.protein == 0

    log.add_entry(EGG, 500)
    assert log.progress(Goal(kcal=0, protein=10, carbs=0, fat=1)).kcal == 100


def test_remaining_goes_negative_when_over() -> None:
    log = _log()
    log.add_entry(EGG, 100)

    remaining = log.remaining(Goal(kcal=100, protein=20, carbs=10, fat=5))

    assert remaining == MacroProfile(kcal=-55, protein=7, carbs=8.9, fat=-6)


def test_extend_keeps_batch_order_on_top() -> None:
    log = _log()
    existing = log.add_entry(EGG, 100)
    source = _log()
    batch = [source.add_entry(RICE, 100), source.add_entry(EGG, 10)]

    log.extend(batch)

    assert log.entries == [*batch, existing]
