"""Gap-driven meal recommendations.

Two kinds of results are produced for a meal:

* quick fixes: single foods that, added at a default serving, raise the
  compliance score the most;
* suggestions: small complete meals built greedily from the catalog, one
  food per under-represented category, kept when their predicted score meets
  or comes close to the feeding mode's target.

The search is deterministic. Candidates are always visited in catalog order
and every ranking breaks ties by that order.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from little_ladle.domain.compliance import ComplianceScore, Gaps, RequirementTable
from little_ladle.domain.foods import (
    PRODUCE,
    Food,
    FoodCategory,
    MealFood,
    NutrientKey,
    nutrient_label,
)
from little_ladle.domain.profiles import AgeCalculation, ChildProfile
from little_ladle.domain.recommendations import (
    FeedingMode,
    QuickFix,
    Recommendation,
    SuggestedFood,
    Suggestion,
)
from little_ladle.domain.rules import SearchRules
from little_ladle.errors import PreconditionError
from little_ladle.services.ages import calculate_age
from little_ladle.services.compliance import ComplianceScorer, is_age_appropriate
from little_ladle.services.gaps import analyze_gaps

_logger = logging.getLogger(__name__)

_CATEGORY_REASONS = {
    FoodCategory.PROTEIN: "Essential protein and iron source",
    FoodCategory.VEGETABLE: "Vitamins and minerals",
    FoodCategory.FRUIT: "Natural sweetness and vitamin C",
    FoodCategory.GRAIN: "Energy from whole grains",
    FoodCategory.DAIRY: "Calcium for growing bones",
}


@dataclass(frozen=True)
class _Candidate:
    index: int
    food: Food


@dataclass
class RecommendationEngine:
    """Searches the catalog for additions that close a meal's gaps."""

    scorer: ComplianceScorer
    rules: SearchRules = field(default_factory=SearchRules)

    def generate(
        self,
        meal_foods: list[MealFood],
        catalog: list[Food],
        profile: ChildProfile | None,
        mode: FeedingMode,
        today: date | None = None,
    ) -> Recommendation:
        """Return quick fixes and complete meal suggestions for a meal."""
        if profile is None:
            _logger.error("Recommendations requested without a child profile")
            raise PreconditionError("A child profile is required for recommendations")

        age = calculate_age(profile.birth_date, today)
        current = self.scorer.score_for_age(meal_foods, age)
        gaps = analyze_gaps(current)
        result = Recommendation(
            current_meal_score=current.overall_score,
            target_score=mode.target_compliance,
            mode=mode,
            gaps=gaps,
            quick_fixes=[],
            suggestions=[],
        )
        if not current.applicable:
            _logger.info(
                "Skipping recommendations for %s: no WHO guidelines", age.display_age
            )
            return result

        in_meal = {meal_food.food.food_id for meal_food in meal_foods}
        candidates = [
            _Candidate(index, food)
            for index, food in enumerate(catalog)
            if food.food_id not in in_meal
            and is_age_appropriate(food, age, self.scorer.rules)
        ]
        table = self.scorer.guide.for_bracket(age.bracket)
        search = _Search(self.scorer, self.rules, age, table, candidates)
        quick_fixes = search.quick_fixes(meal_foods, gaps, current.overall_score)
        suggestions = search.suggestions(meal_foods, gaps, mode)
        _logger.debug(
            "Recommendations for score %s: %s quick fixes, %s suggestions",
            current.overall_score,
            len(quick_fixes),
            len(suggestions),
        )
        return Recommendation(
            current_meal_score=result.current_meal_score,
            target_score=result.target_score,
            mode=mode,
            gaps=gaps,
            quick_fixes=quick_fixes,
            suggestions=suggestions,
        )


@dataclass
class _Search:
    """State of one recommendation run."""

    scorer: ComplianceScorer
    rules: SearchRules
    age: AgeCalculation
    table: RequirementTable | None
    candidates: list[_Candidate]

    # ---- quick fixes -------------------------------------------------

    def quick_fixes(
        self, meal_foods: list[MealFood], gaps: Gaps, current_score: int
    ) -> list[QuickFix]:
        reasons = self._gap_reasons(meal_foods, gaps)
        grams = self.rules.quick_fix_serving_grams
        ranked: list[tuple[int, int, QuickFix]] = []
        for candidate in self.candidates:
            food_reasons = reasons.get(candidate.food.food_id)
            if not food_reasons:
                continue
            simulated = self._score([*meal_foods, MealFood(candidate.food, grams)])
            improvement = simulated.overall_score - current_score
            if improvement <= 0:
                continue
            ranked.append(
                (
                    -improvement,
                    candidate.index,
                    QuickFix(
                        food=candidate.food,
                        serving_grams=grams,
                        expected_improvement=improvement,
                        predicted_score=simulated.overall_score,
                        reason="; ".join(food_reasons),
                    ),
                )
            )
        ranked.sort(key=lambda entry: (entry[0], entry[1]))
        return [fix for _, _, fix in ranked[: self.rules.quick_fix_limit]]

    def _gap_reasons(
        self, meal_foods: list[MealFood], gaps: Gaps
    ) -> dict[int, list[str]]:
        reasons: dict[int, list[str]] = {}

        def add(foods: list[Food], reason: Callable[[Food], str]) -> None:
            for food in foods:
                reasons.setdefault(food.food_id, []).append(reason(food))

        if gaps.animal_foods:
            add(
                self._in_categories({FoodCategory.PROTEIN}),
                lambda _: "Adds an animal-source food",
            )
        if gaps.fruits_vegetables:
            add(self._in_categories(PRODUCE), lambda _: "Adds a fruit or vegetable")
        if gaps.diversity < self.scorer.rules.diversity_saturation:
            present = _categories(meal_foods)
            missing = set(FoodCategory) - present
            add(
                self._in_categories(missing),
                lambda food: f"Adds a new food group ({food.category.value})",
            )
        for key in gaps.key_nutrients:
            nutrient = NutrientKey.parse(key)
            richest = self._richest(nutrient)[: self.rules.nutrient_candidate_pool]
            add(
                richest,
                lambda food, nutrient=nutrient: _rich_in_reason(food, nutrient),
            )
        return reasons

    # ---- suggestions -------------------------------------------------

    def suggestions(
        self, meal_foods: list[MealFood], gaps: Gaps, mode: FeedingMode
    ) -> list[Suggestion]:
        built: list[Suggestion | None] = []
        if meal_foods:
            built.append(self._complete_meal(meal_foods, gaps))
        else:
            built.append(self._balanced_meal())
        built.append(self._power_meal())
        if self.age.months <= self.rules.intro_max_age_months:
            built.append(self._introduction_meal())

        floor = mode.target_compliance - self.rules.suggestion_margin
        kept = [
            suggestion
            for suggestion in built
            if suggestion is not None and suggestion.predicted_score >= floor
        ]
        # sorted() is stable, so equal scores keep template order
        kept = sorted(kept, key=lambda suggestion: -suggestion.predicted_score)
        return kept[: self.rules.suggestion_limit]

    def _balanced_meal(self) -> Suggestion | None:
        chosen: list[SuggestedFood] = []
        for category in self.rules.category_order:
            if len(chosen) >= self.rules.suggestion_min_foods and self._complete(
                [item.food for item in chosen]
            ):
                break
            food = self._best({category}, chosen)
            if food is not None:
                chosen.append(self._serve(food, _CATEGORY_REASONS[category]))
        if not chosen:
            return None
        return self._suggestion(
            "balanced",
            "Balanced Starter Meal",
            "A well-rounded meal with protein, vegetables, and fruits",
            chosen,
        )

    def _complete_meal(
        self, meal_foods: list[MealFood], gaps: Gaps
    ) -> Suggestion | None:
        limit = self.rules.suggestion_max_additions
        additions: list[SuggestedFood] = []
        if gaps.animal_foods:
            self._add_best(
                additions, {FoodCategory.PROTEIN}, "Adds an animal-source food", limit
            )
        if gaps.fruits_vegetables:
            self._add_best(additions, PRODUCE, "Adds essential vitamins", limit)
        present = [meal_food.food for meal_food in meal_foods]
        self._fill_categories(present, additions, limit)
        for key in gaps.key_nutrients:
            nutrient = NutrientKey.parse(key)
            richest = self._richest(nutrient)
            if len(additions) >= limit or not richest:
                continue
            if _contains(additions, richest[0]):
                continue
            additions.append(
                self._serve(richest[0], _rich_in_reason(richest[0], nutrient))
            )
        if not additions:
            return None
        existing = [
            SuggestedFood(
                meal_food.food, meal_food.serving_grams, "Already in your meal"
            )
            for meal_food in meal_foods
        ]
        names = ", ".join(item.food.short_name for item in additions)
        return self._suggestion(
            "complete-meal",
            "Complete My Meal",
            f"Add {names} to round out your meal",
            [*existing, *additions],
        )

    def _power_meal(self) -> Suggestion | None:
        chosen: list[SuggestedFood] = []
        iron = self._richest(NutrientKey.IRON)
        if iron:
            chosen.append(
                self._serve(iron[0], "High iron content for brain development")
            )
        vitamin_a = [
            food
            for food in self._richest(NutrientKey.VITAMIN_A)
            if not _contains(chosen, food)
        ]
        if vitamin_a:
            chosen.append(
                self._serve(vitamin_a[0], "Rich in vitamin A for vision and immunity")
            )
        if not chosen:
            return None
        limit = self.rules.suggestion_max_foods
        foods = [item.food for item in chosen]
        if not _categories_of(foods) & {FoodCategory.PROTEIN}:
            self._add_best(
                chosen, {FoodCategory.PROTEIN}, "Adds an animal-source food", limit
            )
        if not _categories_of([item.food for item in chosen]) & PRODUCE:
            self._add_best(chosen, PRODUCE, "Adds essential vitamins", limit)
        self._fill_categories([], chosen, limit)
        return self._suggestion(
            "power",
            "Nutrition Power Meal",
            "Nutrient-dense foods for optimal development",
            chosen,
        )

    def _introduction_meal(self) -> Suggestion | None:
        grams = self.rules.intro_serving_grams
        chosen: list[SuggestedFood] = []
        for category in (
            FoodCategory.FRUIT,
            FoodCategory.VEGETABLE,
            FoodCategory.PROTEIN,
        ):
            foods = self._in_categories({category})
            if foods:
                chosen.append(
                    SuggestedFood(
                        foods[0], grams, f"Gentle introduction to {category.value}"
                    )
                )
        if not chosen:
            return None
        return self._suggestion(
            "intro",
            "Gentle Introduction Meal",
            "Perfect for new eaters - simple and gentle foods",
            chosen,
        )

    # ---- helpers -----------------------------------------------------

    def _suggestion(
        self,
        suggestion_id: str,
        name: str,
        description: str,
        foods: list[SuggestedFood],
    ) -> Suggestion:
        score = self._score([MealFood(item.food, item.serving_grams) for item in foods])
        return Suggestion(
            suggestion_id=suggestion_id,
            name=name,
            description=description,
            foods=foods,
            predicted_score=score.overall_score,
            compliance_gaps=[alert.message for alert in score.risk_alerts],
            nutritional_highlights=_highlights(score),
            age_appropriate=score.breakdown.age_appropriate.met,
            total_grams=sum(item.serving_grams for item in foods),
        )

    def _score(self, meal_foods: list[MealFood]) -> ComplianceScore:
        return self.scorer.score_for_age(meal_foods, self.age)

    def _serve(self, food: Food, reason: str) -> SuggestedFood:
        return SuggestedFood(food, self.rules.serving_for(food.category), reason)

    def _fill_categories(
        self, present: list[Food], chosen: list[SuggestedFood], limit: int
    ) -> None:
        """Add one food per missing category until diversity saturates."""
        saturation = self.scorer.rules.diversity_saturation
        for category in self.rules.category_order:
            foods = [*present, *(item.food for item in chosen)]
            if len(_categories_of(foods)) >= saturation or len(chosen) >= limit:
                return
            if category in _categories_of(foods):
                continue
            food = self._best({category}, chosen)
            if food is not None:
                chosen.append(self._serve(food, _CATEGORY_REASONS[category]))

    def _add_best(
        self,
        chosen: list[SuggestedFood],
        categories: set[FoodCategory] | frozenset[FoodCategory],
        reason: str,
        limit: int,
    ) -> None:
        if len(chosen) >= limit:
            return
        food = self._best(categories, chosen)
        if food is not None:
            chosen.append(self._serve(food, reason))

    def _best(
        self,
        categories: set[FoodCategory] | frozenset[FoodCategory],
        chosen: list[SuggestedFood],
    ) -> Food | None:
        """Return the food covering the most key nutrients in the categories."""
        pool = [
            candidate
            for candidate in self.candidates
            if candidate.food.category in categories
            and not _contains(chosen, candidate.food)
        ]
        if not pool:
            return None
        best = min(
            pool,
            key=lambda candidate: (-self._coverage(candidate.food), candidate.index),
        )
        return best.food

    def _coverage(self, food: Food) -> float:
        """Percent of daily iron and vitamin A one default serving provides."""
        if self.table is None:
            return 0.0
        grams = self.rules.serving_for(food.category)
        total = 0.0
        for key in self.scorer.rules.key_nutrients:
            requirement = self.table.requirements.get(key.value)
            if requirement is None:
                continue
            amount = food.nutrient_amount(key) * grams / 100.0
            total += amount / requirement.value * 100.0
        return total

    def _richest(self, nutrient: NutrientKey) -> list[Food]:
        """Candidates containing the nutrient, richest first."""
        rich = [
            candidate
            for candidate in self.candidates
            if candidate.food.nutrient_amount(nutrient) > 0
        ]
        rich.sort(
            key=lambda candidate: (
                -candidate.food.nutrient_amount(nutrient),
                candidate.index,
            )
        )
        return [candidate.food for candidate in rich]

    def _in_categories(
        self, categories: set[FoodCategory] | frozenset[FoodCategory]
    ) -> list[Food]:
        return [
            candidate.food
            for candidate in self.candidates
            if candidate.food.category in categories
        ]

    def _complete(self, foods: list[Food]) -> bool:
        categories = _categories_of(foods)
        return (
            FoodCategory.PROTEIN in categories
            and bool(categories & PRODUCE)
            and len(categories) >= self.scorer.rules.diversity_saturation
        )


def _categories(meal_foods: list[MealFood]) -> set[FoodCategory]:
    return _categories_of([meal_food.food for meal_food in meal_foods])


def _categories_of(foods: list[Food]) -> set[FoodCategory]:
    return {food.category for food in foods}


def _contains(chosen: list[SuggestedFood], food: Food) -> bool:
    return any(item.food.food_id == food.food_id for item in chosen)


def _rich_in_reason(food: Food, nutrient: NutrientKey) -> str:
    label = nutrient_label(nutrient.value)
    amount = food.nutrients[nutrient.value]
    return f"Rich in {label} ({amount.amount:g} {amount.unit} per 100g)"


def _highlights(score: ComplianceScore) -> list[str]:
    breakdown = score.breakdown
    highlights: list[str] = []
    if breakdown.animal_source_foods.met:
        highlights.append("Animal-source food")
    if breakdown.fruits_and_vegetables.met:
        highlights.append("Fruits & vegetables")
    if breakdown.food_diversity.met:
        highlights.append(f"{breakdown.food_diversity.count} food groups")
    if breakdown.age_appropriate.met:
        highlights.append("Age-appropriate")
    highlights.extend(
        f"Good {nutrient_label(key)} coverage"
        for key in breakdown.key_nutrients.adequate
    )
    return highlights
