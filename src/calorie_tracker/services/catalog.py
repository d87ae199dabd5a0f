"""Searchable in-memory food catalog."""

import logging
from dataclasses import dataclass, field

from calorie_tracker.domain.errors import ValidationError
from calorie_tracker.domain.foods import FoodRecord
from calorie_tracker.services.macros import coerce_numeric

_logger = logging.getLogger(__name__)

SEED_FOODS: tuple[FoodRecord, ...] = (
    FoodRecord("Egg, whole", kcal=155, protein=13, carbs=1.1, fat=11),
    FoodRecord("Chicken breast, skinless", kcal=165, protein=31, carbs=0, fat=3.6),
    FoodRecord("Rice, white, cooked", kcal=130, protein=2.4, carbs=28, fat=0.3),
    FoodRecord("Rice, basmati, cooked", kcal=121, protein=3.5, carbs=25.2, fat=0.4),
    FoodRecord("Chapati/roti (atta)", kcal=297, protein=9.6, carbs=54, fat=3.2),
    FoodRecord("Dal (lentils), cooked", kcal=116, protein=9, carbs=20, fat=0.4),
    FoodRecord("Beef, lean", kcal=250, protein=26, carbs=0, fat=15),
    FoodRecord("Mutton, lean", kcal=294, protein=25, carbs=0, fat=21),
    FoodRecord("Fish, rohu", kcal=97, protein=17, carbs=0, fat=3),
    FoodRecord("Milk, cow, 3.5%", kcal=64, protein=3.4, carbs=4.8, fat=3.6),
    FoodRecord("Yogurt, plain", kcal=59, protein=10, carbs=3.6, fat=0.4),
    FoodRecord("Banana", kcal=89, protein=1.1, carbs=23, fat=0.3),
    FoodRecord("Apple", kcal=52, protein=0.3, carbs=14, fat=0.2),
    FoodRecord("Dates, dried", kcal=282, protein=2.5, carbs=75, fat=0.4),
    FoodRecord("Peanut butter", kcal=588, protein=25, carbs=20, fat=50),
    FoodRecord("Almonds", kcal=579, protein=21, carbs=22, fat=50),
    FoodRecord("Oil, vegetable", kcal=884, protein=0, carbs=0, fat=100),
    FoodRecord("Potato, boiled", kcal=87, protein=1.9, carbs=20, fat=0.1),
    FoodRecord("Biryani (avg)", kcal=185, protein=6.5, carbs=22, fat=7),
    FoodRecord("Samosa (avg)", kcal=308, protein=7, carbs=34, fat=17),
)


@dataclass
class FoodCatalog:
    """Food collection that only grows; records are never edited or removed."""

    foods: list[FoodRecord] = field(default_factory=lambda: list(SEED_FOODS))

    def search(self, query: str | None, limit: int | None = None) -> list[FoodRecord]:
        """Return foods whose name contains the query, in catalog order."""
        needle = (query or "").strip().lower()
        results = [food for food in self.foods if needle in food.name.lower()]
        if limit is not None:
            return results[:limit]
        return results

    def find(self, name: str) -> FoodRecord | None:
        """Return the first food with an exact (case-insensitive) name."""
        wanted = name.strip().lower()
        for food in self.foods:
            if food.name.lower() == wanted:
                return food
        return None

    def add_custom(self, payload: dict[str, object]) -> FoodRecord:
        """Validate a user-submitted food and put it at the top of the catalog."""
        name = str(payload.get("name") or "").strip()
        if not name:
            raise ValidationError("Enter a food name")
        food = FoodRecord(
            name=name,
            kcal=max(0.0, coerce_numeric(payload.get("kcal"))),
            protein=max(0.0, coerce_numeric(payload.get("protein"))),
            carbs=max(0.0, coerce_numeric(payload.get("carbs"))),
            fat=max(0.0, coerce_numeric(payload.get("fat"))),
        )
        self.foods.insert(0, food)
        _logger.info("Custom food added: name=%s", food.name)
        return food
