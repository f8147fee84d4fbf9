"""Food catalog and meal domain models."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from little_ladle.errors import InvalidServingError

MAX_SERVING_GRAMS = 200.0


class NutrientKey(str, Enum):
    """Nutrient keys understood by the unit reconciler."""

    CALORIES = "calories"
    PROTEIN = "protein"
    FAT = "fat"
    CARBS = "carbs"
    CALCIUM = "calcium"
    IRON = "iron"
    VITAMIN_A = "vitaminA"
    VITAMIN_C = "vitaminC"
    POTASSIUM = "potassium"
    ZINC = "zinc"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: str) -> "NutrientKey":
        """Return the matching key, or UNKNOWN for keys outside the set."""
        for member in cls:
            if member is not cls.UNKNOWN and member.value == raw:
                return member
        return cls.UNKNOWN


class FoodCategory(str, Enum):
    """Closed set of food categories."""

    FRUIT = "fruit"
    VEGETABLE = "vegetable"
    PROTEIN = "protein"
    GRAIN = "grain"
    DAIRY = "dairy"
    OTHER = "other"


PRODUCE = frozenset({FoodCategory.FRUIT, FoodCategory.VEGETABLE})

NUTRIENT_LABELS = {
    NutrientKey.IRON.value: "iron",
    NutrientKey.VITAMIN_A.value: "vitamin A",
}


def nutrient_label(key: str) -> str:
    """Return the human-readable name of a nutrient key."""
    return NUTRIENT_LABELS.get(key, key)


class AgeGroup(str, Enum):
    """Minimum age at which a food is normally introduced."""

    SIX_PLUS = "6+ months"
    EIGHT_PLUS = "8+ months"
    TWELVE_PLUS = "12+ months"

    @property
    def min_months(self) -> int:
        return int(self.value.split("+", 1)[0])


@dataclass(frozen=True)
class NutrientAmount:
    """Nutrient amount per 100g of food."""

    amount: float
    unit: str


@dataclass(frozen=True)
class Food:
    """Food from the catalog with its per-100g nutrient table."""

    food_id: int
    name: str
    short_name: str
    category: FoodCategory
    age_group: AgeGroup
    nutrients: dict[str, NutrientAmount] = field(default_factory=dict)

    def nutrient_amount(self, key: NutrientKey) -> float:
        """Return the per-100g amount of a nutrient, or 0 when absent."""
        nutrient = self.nutrients.get(key.value)
        return nutrient.amount if nutrient else 0.0


@dataclass(frozen=True)
class MealFood:
    """A food placed in the meal with a serving size in grams."""

    food: Food
    serving_grams: float
    added_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def __post_init__(self) -> None:
        if not 0 < self.serving_grams <= MAX_SERVING_GRAMS:
            raise InvalidServingError(
                f"Serving for {self.food.short_name} must be in (0, "
                f"{MAX_SERVING_GRAMS:g}] grams, got {self.serving_grams}"
            )
