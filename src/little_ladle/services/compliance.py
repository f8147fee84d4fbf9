"""WHO complementary-feeding compliance scoring."""

import logging
import math
from dataclasses import dataclass, field
from datetime import date

from little_ladle.domain.compliance import (
    AgeAppropriateCheck,
    ComplianceBreakdown,
    ComplianceScore,
    DiversityCheck,
    IntakeMap,
    KeyNutrientCheck,
    RiskAlert,
    RubricCheck,
    Severity,
)
from little_ladle.domain.foods import (
    PRODUCE,
    Food,
    FoodCategory,
    MealFood,
    nutrient_label,
)
from little_ladle.domain.profiles import AgeCalculation, ChildProfile
from little_ladle.domain.rules import ScoringRules
from little_ladle.services.ages import calculate_age
from little_ladle.services.intake import IntakeAggregator
from little_ladle.services.requirements import RequirementGuide

_logger = logging.getLogger(__name__)

_NOT_APPLICABLE = "No WHO guidelines for this age"


def is_age_appropriate(
    food: Food, age: AgeCalculation, rules: ScoringRules | None = None
) -> bool:
    """Whether a food may be offered, allowing early introduction by the buffer."""
    rules = rules or ScoringRules()
    required = max(
        food.age_group.min_months - rules.age_buffer_months,
        rules.min_feeding_age_months,
    )
    return age.months >= required


@dataclass
class ComplianceScorer:
    """Scores a meal against the WHO rubric for a child's age."""

    guide: RequirementGuide
    aggregator: IntakeAggregator = field(default_factory=IntakeAggregator)
    rules: ScoringRules = field(default_factory=ScoringRules)

    def score(
        self,
        meal_foods: list[MealFood],
        profile: ChildProfile,
        today: date | None = None,
    ) -> ComplianceScore:
        """Score a meal for a child profile."""
        return self.score_for_age(meal_foods, calculate_age(profile.birth_date, today))

    def score_for_age(
        self, meal_foods: list[MealFood], age: AgeCalculation
    ) -> ComplianceScore:
        """Score a meal for a precomputed age."""
        table = self.guide.for_bracket(age.bracket)
        if table is None:
            _logger.debug("No WHO guidelines for bracket %s", age.bracket.value)
            return self._not_applicable()

        rules = self.rules
        intake = self.aggregator.percent_of_daily(
            self.aggregator.aggregate(meal_foods), table
        )
        categories = {meal_food.food.category for meal_food in meal_foods}

        has_animal = FoodCategory.PROTEIN in categories
        has_produce = bool(categories & PRODUCE)
        diversity = len(categories)
        inappropriate = sum(
            1
            for meal_food in meal_foods
            if not is_age_appropriate(meal_food.food, age, rules)
        )
        adequate = [
            key.value
            for key, threshold in rules.adequate_thresholds.items()
            if _percent(intake, key.value) >= threshold
        ]
        deficient = [
            key.value
            for key, threshold in rules.deficient_thresholds.items()
            if _percent(intake, key.value) < threshold
        ]

        breakdown = ComplianceBreakdown(
            animal_source_foods=RubricCheck(
                score=rules.animal_points if has_animal else 0.0,
                max_score=rules.animal_points,
                met=has_animal,
                message=(
                    "Animal foods included" if has_animal else "No animal foods found"
                ),
            ),
            fruits_and_vegetables=RubricCheck(
                score=rules.produce_points if has_produce else 0.0,
                max_score=rules.produce_points,
                met=has_produce,
                message=(
                    "Fruits/vegetables included"
                    if has_produce
                    else "No fruits or vegetables found"
                ),
            ),
            food_diversity=DiversityCheck(
                score=min(diversity / rules.diversity_saturation, 1.0)
                * rules.diversity_points,
                max_score=rules.diversity_points,
                met=diversity >= rules.diversity_saturation,
                message=(
                    f"{diversity} food categories "
                    f"(target: {rules.diversity_saturation}+)"
                ),
                count=diversity,
            ),
            age_appropriate=AgeAppropriateCheck(
                score=max(
                    rules.age_points - inappropriate * rules.inappropriate_penalty, 0.0
                ),
                max_score=rules.age_points,
                met=inappropriate == 0,
                message=(
                    "All foods age-appropriate"
                    if inappropriate == 0
                    else f"{inappropriate} foods may be too advanced"
                ),
                inappropriate=inappropriate,
            ),
            key_nutrients=KeyNutrientCheck(
                score=len(adequate) / len(rules.key_nutrients) * rules.nutrient_points,
                max_score=rules.nutrient_points,
                met=len(adequate) == len(rules.key_nutrients),
                message=(
                    f"{len(adequate)}/{len(rules.key_nutrients)} "
                    "key nutrients adequate"
                ),
                adequate=adequate,
                deficient=deficient,
            ),
        )
        overall = min(max(_round_half_up(breakdown.total), 0), int(rules.max_score))
        alerts = _risk_alerts(breakdown, rules)
        _logger.debug(
            "Scored meal of %s foods for %s: %s",
            len(meal_foods),
            age.display_age,
            overall,
        )
        return ComplianceScore(
            overall_score=overall,
            breakdown=breakdown,
            risk_alerts=alerts,
            recommendations=_recommendations(overall, breakdown, alerts, rules),
            applicable=True,
            intake=intake,
        )

    def _not_applicable(self) -> ComplianceScore:
        rules = self.rules
        breakdown = ComplianceBreakdown(
            animal_source_foods=RubricCheck(
                0.0, rules.animal_points, False, _NOT_APPLICABLE
            ),
            fruits_and_vegetables=RubricCheck(
                0.0, rules.produce_points, False, _NOT_APPLICABLE
            ),
            food_diversity=DiversityCheck(
                0.0, rules.diversity_points, False, _NOT_APPLICABLE, count=0
            ),
            age_appropriate=AgeAppropriateCheck(
                0.0, rules.age_points, False, _NOT_APPLICABLE, inappropriate=0
            ),
            key_nutrients=KeyNutrientCheck(
                0.0,
                rules.nutrient_points,
                False,
                _NOT_APPLICABLE,
                adequate=[],
                deficient=[],
            ),
        )
        return ComplianceScore(
            overall_score=0,
            breakdown=breakdown,
            risk_alerts=[],
            recommendations=[
                "Child is outside WHO complementary feeding age range (6-23 months)"
            ],
            applicable=False,
        )


def _percent(intake: IntakeMap, key: str) -> float:
    nutrient = intake.get(key)
    return nutrient.percent_daily if nutrient else 0.0


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _risk_alerts(
    breakdown: ComplianceBreakdown, rules: ScoringRules
) -> list[RiskAlert]:
    alerts: list[RiskAlert] = []
    if not breakdown.animal_source_foods.met:
        alerts.append(
            RiskAlert(
                Severity.HIGH,
                "No animal source foods in meal",
                "Add meat, fish, eggs, or dairy for essential nutrients",
            )
        )
    if not breakdown.fruits_and_vegetables.met:
        alerts.append(
            RiskAlert(
                Severity.HIGH,
                "No fruits or vegetables in meal",
                "Add colorful fruits or vegetables for vitamins and minerals",
            )
        )
    diversity = breakdown.food_diversity.count
    if diversity < rules.diversity_saturation:
        alerts.append(
            RiskAlert(
                Severity.MEDIUM,
                f"Low food diversity ({diversity} categories)",
                "Include foods from more categories for balanced nutrition",
            )
        )
    inappropriate = breakdown.age_appropriate.inappropriate
    if inappropriate:
        alerts.append(
            RiskAlert(
                Severity.MEDIUM,
                f"{inappropriate} food(s) may be too advanced for child's age",
                "Consider age-appropriate alternatives",
            )
        )
    deficient = [nutrient_label(key) for key in breakdown.key_nutrients.deficient]
    if deficient:
        alerts.append(
            RiskAlert(
                Severity.HIGH,
                f"Low intake of critical nutrients: {', '.join(deficient)}",
                "Add iron-rich and vitamin A-rich foods",
            )
        )
    return alerts


def _recommendations(
    overall: int,
    breakdown: ComplianceBreakdown,
    alerts: list[RiskAlert],
    rules: ScoringRules,
) -> list[str]:
    recommendations: list[str] = []
    if overall < rules.needs_improvement_below:
        recommendations.append("Meal needs improvement to meet WHO guidelines")
    if not breakdown.animal_source_foods.met:
        recommendations.append("Add a protein source like meat, fish, or eggs")
    if not breakdown.fruits_and_vegetables.met:
        recommendations.append("Include fruits or vegetables for essential vitamins")
    if breakdown.food_diversity.count < rules.diversity_saturation:
        recommendations.append("Add more food variety for balanced nutrition")
    if breakdown.age_appropriate.inappropriate:
        recommendations.append("Swap advanced foods for age-appropriate alternatives")
    deficient = [nutrient_label(key) for key in breakdown.key_nutrients.deficient]
    if deficient:
        recommendations.append("Boost " + " and ".join(deficient) + " intake")
    if overall >= rules.excellent_from and not alerts:
        recommendations.append("Excellent meal composition following WHO guidelines!")
    return recommendations
