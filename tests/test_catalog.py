"""Tests for the food catalog."""

import pytest

from calorie_tracker.domain.errors import ValidationError
from calorie_tracker.domain.foods import FoodRecord
from calorie_tracker.services.catalog import SEED_FOODS, FoodCatalog


def test_search_rice_returns_both_variants_in_order() -> None:
    catalog = FoodCatalog()

    results = catalog.search("rice")

    assert [food.name for food in results] == [
        "Rice, white, cooked",
        "Rice, basmati, cooked",
    ]


def test_search_is_case_insensitive_and_trims() -> None:
    catalog = FoodCatalog()

    assert catalog.search("  RICE ") == catalog.search("rice")


def test_empty_query_returns_full_catalog() -> None:
    catalog = FoodCatalog()

    assert catalog.search("") == list(SEED_FOODS)
    assert catalog.search(None) == list(SEED_FOODS)
    assert len(SEED_FOODS) == 20


def test_search_limit() -> None:
    catalog = FoodCatalog()

    assert len(catalog.search("", limit=12)) == 12


def test_search_with_no_match() -> None:
    assert FoodCatalog().search("pizza") == []


def test_add_custom_defaults_missing_macros_to_zero() -> None:
    catalog = FoodCatalog()

    food = catalog.add_custom({"name": "Test Bar", "kcal": "400"})
    results = catalog.search("test")

    assert results == [food]
    assert food == FoodRecord("Test Bar", kcal=400, protein=0, carbs=0, fat=0)


def test_add_custom_clamps_negative_values_to_zero() -> None:
    food = FoodCatalog().add_custom({"name": "X", "kcal": "-5", "fat": -2})

    assert food.kcal == 0
    assert food.fat == 0


def test_add_custom_prepends_and_trims_name() -> None:
    catalog = FoodCatalog()

    catalog.add_custom({"name": "  Oat milk ", "kcal": "46", "protein": "1"})
    catalog.add_custom({"name": "Granola", "kcal": "470abc", "fat": "junk"})

    assert catalog.foods[0].name == "Granola"
    assert catalog.foods[0].kcal == 470
    assert catalog.foods[0].fat == 0
    assert catalog.foods[1].name == "Oat milk"
    assert len(catalog.foods) == len(SEED_FOODS) + 2


@pytest.mark.parametrize("name", ["", "   ", None])
def test_add_custom_rejects_empty_name(name: object) -> None:
    catalog = FoodCatalog()

    with pytest.raises(ValidationError):
        catalog.add_custom({"name": name, "kcal": "100"})

    assert catalog.foods == list(SEED_FOODS)


def test_find_matches_exact_name_case_insensitively() -> None:
    catalog = FoodCatalog()

    assert catalog.find("banana") == FoodRecord(
        "Banana", kcal=89, protein=1.1, carbs=23, fat=0.3
    )
    assert catalog.find("Ban") is None


def test_catalogs_do_not_share_state() -> None:
    first = FoodCatalog()
    second = FoodCatalog()

    first.add_custom({"name": "Only here"})

    assert second.search("only here") == []
