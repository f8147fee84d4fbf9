"""Domain models for meal recommendations."""

from dataclasses import dataclass

from little_ladle.domain.compliance import Gaps
from little_ladle.domain.foods import Food, MealFood
from little_ladle.errors import InvalidFeedingModeError

MAX_COMPLIANCE = 100


@dataclass(frozen=True)
class FeedingMode:
    """Named compliance target selected by the caller."""

    key: str
    name: str
    target_compliance: int
    description: str

    def __post_init__(self) -> None:
        if not 0 <= self.target_compliance <= MAX_COMPLIANCE:
            raise InvalidFeedingModeError(
                f"Target compliance for {self.key} must be within 0-100, "
                f"got {self.target_compliance}"
            )


FEEDING_MODES: dict[str, FeedingMode] = {
    "complementary": FeedingMode(
        key="complementary",
        name="Complementary Feeding",
        target_compliance=60,
        description=(
            "Complementary to breast/formula feeding "
            "(recommended for 6-23 months)"
        ),
    ),
    "full": FeedingMode(
        key="full",
        name="Full Nutrition",
        target_compliance=80,
        description="Complete nutritional requirements from solid foods",
    ),
}


def get_feeding_mode(key: str) -> FeedingMode:
    """Return a built-in feeding mode by key."""
    mode = FEEDING_MODES.get(key)
    if mode is None:
        raise InvalidFeedingModeError(f"Unknown feeding mode: {key}")
    return mode


@dataclass(frozen=True)
class QuickFix:
    """Single food addition and its effect on the score."""

    food: Food
    serving_grams: float
    expected_improvement: int
    predicted_score: int
    reason: str


@dataclass(frozen=True)
class SuggestedFood:
    food: Food
    serving_grams: float
    reason: str


@dataclass(frozen=True)
class Suggestion:
    """Complete candidate meal with its predicted score."""

    suggestion_id: str
    name: str
    description: str
    foods: list[SuggestedFood]
    predicted_score: int
    compliance_gaps: list[str]
    nutritional_highlights: list[str]
    age_appropriate: bool
    total_grams: float

    def to_meal_foods(self) -> list[MealFood]:
        """Build the meal that applying this suggestion produces."""
        return [MealFood(item.food, item.serving_grams) for item in self.foods]


@dataclass(frozen=True)
class Recommendation:
    """Result of a recommendation run for one meal."""

    current_meal_score: int
    target_score: int
    mode: FeedingMode
    gaps: Gaps
    quick_fixes: list[QuickFix]
    suggestions: list[Suggestion]
