"""File-backed food catalog source."""

import json
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from little_ladle.domain.foods import AgeGroup, Food, FoodCategory, NutrientAmount
from little_ladle.errors import CatalogError


class NutrientDocument(BaseModel):
    """Nutrient entry of a catalog food."""

    name: str | None = None
    amount: float = Field(ge=0)
    unit: str


class FoodDocument(BaseModel):
    """Catalog food payload."""

    fdc_id: int = Field(alias="fdcId")
    name: str
    short_name: str = Field(alias="shortName")
    category: FoodCategory
    age_group: AgeGroup = Field(alias="ageGroup")
    nutrients: dict[str, NutrientDocument] = Field(default_factory=dict)

    def to_food(self) -> Food:
        return Food(
            food_id=self.fdc_id,
            name=self.name,
            short_name=self.short_name,
            category=self.category,
            age_group=self.age_group,
            nutrients={
                key: NutrientAmount(amount=value.amount, unit=value.unit)
                for key, value in self.nutrients.items()
            },
        )


class CatalogDocument(BaseModel):
    foods: list[FoodDocument]


def parse_food(payload: dict[str, object]) -> Food:
    """Validate a single catalog food payload."""
    try:
        return FoodDocument.model_validate(payload).to_food()
    except ValidationError as exc:
        raise CatalogError(f"Malformed catalog food: {exc}") from exc


def parse_catalog(payload: object) -> list[Food]:
    """Validate a catalog document and return its foods in order."""
    try:
        document = CatalogDocument.model_validate(payload)
    except ValidationError as exc:
        raise CatalogError(f"Malformed food catalog: {exc}") from exc
    return [food.to_food() for food in document.foods]


@dataclass
class JsonFoodCatalogSource:
    """Reads the food catalog from a JSON document."""

    path: Path

    def load_foods(self) -> list[Food]:
        """Return catalog foods in document order."""
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise CatalogError(f"Cannot read food catalog {self.path}: {exc}") from exc
        return parse_catalog(payload)
