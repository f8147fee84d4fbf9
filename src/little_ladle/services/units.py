"""Reconciliation of food-composition units with WHO guideline units."""

import logging
from dataclasses import dataclass, field

from little_ladle.domain.foods import NutrientKey

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NutrientConversion:
    """How one nutrient moves from the food table onto the guideline table."""

    source_unit: str
    target_unit: str
    factor: float
    valid_range: tuple[float, float]


# USDA FoodData Central already reports vitamin A as RAE, so every factor is 1.0.
NUTRIENT_CONVERSIONS: dict[NutrientKey, NutrientConversion] = {
    NutrientKey.CALORIES: NutrientConversion("kcal", "kcal", 1.0, (0.0, 900.0)),
    NutrientKey.PROTEIN: NutrientConversion("g", "g", 1.0, (0.0, 100.0)),
    NutrientKey.FAT: NutrientConversion("g", "g", 1.0, (0.0, 100.0)),
    NutrientKey.CARBS: NutrientConversion("g", "g", 1.0, (0.0, 100.0)),
    NutrientKey.CALCIUM: NutrientConversion("mg", "mg", 1.0, (0.0, 2000.0)),
    NutrientKey.IRON: NutrientConversion("mg", "mg", 1.0, (0.0, 30.0)),
    NutrientKey.VITAMIN_A: NutrientConversion("µg", "µg RAE", 1.0, (0.0, 1500.0)),
    NutrientKey.VITAMIN_C: NutrientConversion("mg", "mg", 1.0, (0.0, 500.0)),
    NutrientKey.POTASSIUM: NutrientConversion("mg", "mg", 1.0, (0.0, 2000.0)),
    NutrientKey.ZINC: NutrientConversion("mg", "mg", 1.0, (0.0, 50.0)),
}


@dataclass
class UnitReconciler:
    """Converts and sanity-checks per-100g nutrient readings."""

    conversions: dict[NutrientKey, NutrientConversion] = field(
        default_factory=lambda: dict(NUTRIENT_CONVERSIONS)
    )

    def convert(self, nutrient_key: str, amount: float) -> float:
        """Convert an amount into the guideline unit."""
        conversion = self._lookup(nutrient_key)
        if conversion is None:
            _logger.warning("No conversion available for nutrient: %s", nutrient_key)
            return amount
        return amount * conversion.factor

    def validate(self, nutrient_key: str, amount: float) -> bool:
        """Check a converted per-100g amount against its plausible range."""
        conversion = self._lookup(nutrient_key)
        if conversion is None:
            return True
        low, high = conversion.valid_range
        if low <= amount <= high:
            return True
        _logger.warning(
            "Nutrient %s value %.2f outside expected range %s-%s, using anyway",
            nutrient_key,
            amount,
            low,
            high,
        )
        return False

    def target_unit(self, nutrient_key: str, source_unit: str) -> str:
        """Return the guideline unit for a nutrient, or the source unit."""
        conversion = self._lookup(nutrient_key)
        return conversion.target_unit if conversion else source_unit

    def _lookup(self, nutrient_key: str) -> NutrientConversion | None:
        key = NutrientKey.parse(nutrient_key)
        if key is NutrientKey.UNKNOWN:
            return None
        return self.conversions.get(key)
