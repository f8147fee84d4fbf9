"""Nutrient intake aggregation for a meal."""

from dataclasses import dataclass, field

from little_ladle.domain.compliance import IntakeMap, NutrientIntake, RequirementTable
from little_ladle.domain.foods import MealFood
from little_ladle.errors import ReferenceDataError
from little_ladle.services.units import UnitReconciler


@dataclass
class IntakeAggregator:
    """Sums per-100g nutrient tables scaled by serving size."""

    reconciler: UnitReconciler = field(default_factory=UnitReconciler)

    def aggregate(self, meal_foods: list[MealFood]) -> IntakeMap:
        """Return total intake per nutrient for the meal."""
        amounts: dict[str, float] = {}
        units: dict[str, str] = {}
        for meal_food in meal_foods:
            multiplier = meal_food.serving_grams / 100.0
            for key, nutrient in meal_food.food.nutrients.items():
                per_100g = self.reconciler.convert(key, nutrient.amount)
                self.reconciler.validate(key, per_100g)
                amounts[key] = amounts.get(key, 0.0) + per_100g * multiplier
                units.setdefault(key, self.reconciler.target_unit(key, nutrient.unit))
        return {
            key: NutrientIntake(amount=amount, unit=units[key])
            for key, amount in amounts.items()
        }

    @staticmethod
    def percent_of_daily(intake: IntakeMap, table: RequirementTable) -> IntakeMap:
        """Express each nutrient as a percentage of the daily requirement."""
        result: IntakeMap = {}
        for key, nutrient in intake.items():
            requirement = table.requirements.get(key)
            if requirement is None:
                result[key] = nutrient
                continue
            if requirement.value <= 0:
                raise ReferenceDataError(
                    f"Requirement for {key} in {table.bracket.value} must be positive"
                )
            result[key] = NutrientIntake(
                amount=nutrient.amount,
                unit=nutrient.unit,
                percent_daily=nutrient.amount / requirement.value * 100.0,
            )
        return result
