"""Named constants for the compliance rubric and the recommendation search."""

from dataclasses import dataclass, field

from little_ladle.domain.foods import FoodCategory, NutrientKey


@dataclass(frozen=True)
class ScoringRules:
    """Point budget and thresholds of the WHO compliance rubric."""

    animal_points: float = 25.0
    produce_points: float = 25.0
    diversity_points: float = 25.0
    age_points: float = 15.0
    nutrient_points: float = 10.0
    diversity_saturation: int = 3
    age_buffer_months: int = 2
    min_feeding_age_months: int = 6
    inappropriate_penalty: float = 5.0
    # percent of daily requirement
    adequate_thresholds: dict[NutrientKey, float] = field(
        default_factory=lambda: {NutrientKey.IRON: 5.0, NutrientKey.VITAMIN_A: 3.0}
    )
    deficient_thresholds: dict[NutrientKey, float] = field(
        default_factory=lambda: {NutrientKey.IRON: 3.0, NutrientKey.VITAMIN_A: 2.0}
    )
    needs_improvement_below: int = 60
    excellent_from: int = 80

    @property
    def key_nutrients(self) -> list[NutrientKey]:
        return list(self.adequate_thresholds)

    @property
    def max_score(self) -> float:
        return (
            self.animal_points
            + self.produce_points
            + self.diversity_points
            + self.age_points
            + self.nutrient_points
        )


@dataclass(frozen=True)
class SearchRules:
    """Tunable limits of the recommendation search."""

    quick_fix_limit: int = 3
    quick_fix_serving_grams: float = 10.0
    nutrient_candidate_pool: int = 5
    suggestion_limit: int = 3
    suggestion_min_foods: int = 3
    suggestion_max_foods: int = 5
    suggestion_max_additions: int = 3
    suggestion_margin: int = 10
    intro_max_age_months: int = 8
    intro_serving_grams: float = 5.0
    default_serving_grams: float = 10.0
    category_serving_grams: dict[FoodCategory, float] = field(
        default_factory=lambda: {FoodCategory.PROTEIN: 15.0}
    )
    # fill order when building a meal from scratch
    category_order: tuple[FoodCategory, ...] = (
        FoodCategory.PROTEIN,
        FoodCategory.VEGETABLE,
        FoodCategory.FRUIT,
        FoodCategory.GRAIN,
        FoodCategory.DAIRY,
    )

    def serving_for(self, category: FoodCategory) -> float:
        return self.category_serving_grams.get(category, self.default_serving_grams)
