"""In-session food catalog."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from little_ladle.domain.foods import Food
from little_ladle.errors import CatalogError, UnknownFoodError

_logger = logging.getLogger(__name__)


class FoodCatalogSource(Protocol):
    """Source of the base food catalog."""

    def load_foods(self) -> list[Food]:
        """Return catalog foods in catalog order."""


@dataclass
class FoodCatalog:
    """Ordered, append-only collection of foods keyed by food id."""

    _foods: list[Food] = field(default_factory=list)
    _by_id: dict[int, Food] = field(default_factory=dict)

    @classmethod
    def from_source(cls, source: FoodCatalogSource) -> "FoodCatalog":
        """Build a catalog from a source, rejecting duplicate ids."""
        catalog = cls()
        for food in source.load_foods():
            catalog._append(food)
        _logger.info("Loaded food catalog with %s foods", len(catalog))
        return catalog

    def __len__(self) -> int:
        return len(self._foods)

    def foods(self) -> list[Food]:
        """Return a snapshot of the catalog in order."""
        return list(self._foods)

    def get(self, food_id: int) -> Food:
        """Return a food by id."""
        food = self._by_id.get(food_id)
        if food is None:
            raise UnknownFoodError(f"Unknown food id: {food_id}")
        return food

    def add_custom_food(self, food: Food) -> Food:
        """Append a custom food; existing foods are never replaced."""
        self._append(food)
        _logger.info("Added custom food %s (%s)", food.short_name, food.food_id)
        return food

    def _append(self, food: Food) -> None:
        if food.food_id in self._by_id:
            raise CatalogError(f"Duplicate food id in catalog: {food.food_id}")
        self._foods.append(food)
        self._by_id[food.food_id] = food
