"""Shared test fixtures."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date

import pytest

from little_ladle.config import Settings
from little_ladle.containers import AppContainer
from little_ladle.domain.compliance import Requirement, RequirementTable
from little_ladle.domain.foods import (
    AgeGroup,
    Food,
    FoodCategory,
    MealFood,
    NutrientAmount,
)
from little_ladle.domain.profiles import AgeBracket, ChildProfile, Sex
from little_ladle.services.catalog import FoodCatalog, FoodCatalogSource
from little_ladle.services.compliance import ComplianceScorer
from little_ladle.services.recommendations import RecommendationEngine
from little_ladle.services.requirements import GuidelineSource, RequirementGuide

TODAY = date(2026, 1, 15)

_UNITS = {
    "calories": "kcal",
    "protein": "g",
    "iron": "mg",
    "calcium": "mg",
    "vitaminA": "µg",
    "vitaminC": "mg",
}


def make_food(
    food_id: int,
    short_name: str,
    category: FoodCategory,
    age_group: AgeGroup = AgeGroup.SIX_PLUS,
    **nutrients: float,
) -> Food:
    """Build a catalog food with per-100g nutrients given as keyword arguments."""
    return Food(
        food_id=food_id,
        name=short_name,
        short_name=short_name,
        category=category,
        age_group=age_group,
        nutrients={
            key: NutrientAmount(amount=amount, unit=_UNITS.get(key, "mg"))
            for key, amount in nutrients.items()
        },
    )


CHICKEN = make_food(1, "Chicken breast", FoodCategory.PROTEIN, iron=1.04, vitaminA=6)
LIVER = make_food(
    2, "Beef liver", FoodCategory.PROTEIN, AgeGroup.EIGHT_PLUS, iron=6.17, vitaminA=9442
)
CARROT = make_food(3, "Carrot", FoodCategory.VEGETABLE, iron=0.34, vitaminA=852)
SPINACH = make_food(
    4, "Spinach", FoodCategory.VEGETABLE, AgeGroup.EIGHT_PLUS, iron=3.57, vitaminA=524
)
BANANA = make_food(5, "Banana", FoodCategory.FRUIT, iron=0.26, vitaminA=3)
OATS = make_food(6, "Oats", FoodCategory.GRAIN, iron=4.25)
YOGURT = make_food(7, "Yogurt", FoodCategory.DAIRY, vitaminA=27, calcium=121)
COWS_MILK = make_food(
    8, "Cow's milk", FoodCategory.DAIRY, AgeGroup.TWELVE_PLUS, vitaminA=46
)
HONEY = make_food(9, "Honey", FoodCategory.OTHER, AgeGroup.TWELVE_PLUS, iron=0.42)

CATALOG = [CHICKEN, LIVER, CARROT, SPINACH, BANANA, OATS, YOGURT, COWS_MILK, HONEY]


def requirement_tables() -> list[RequirementTable]:
    """Round-number requirement tables for predictable percentages."""
    return [
        RequirementTable(
            bracket=AgeBracket.MONTHS_6_12,
            label="6-12 months",
            requirements={
                "iron": Requirement(10.0, "mg"),
                "vitaminA": Requirement(400.0, "µg RAE"),
                "calcium": Requirement(260.0, "mg"),
                "protein": Requirement(11.0, "g"),
            },
        ),
        RequirementTable(
            bracket=AgeBracket.MONTHS_12_24,
            label="12-24 months",
            requirements={
                "iron": Requirement(7.0, "mg"),
                "vitaminA": Requirement(300.0, "µg RAE"),
            },
        ),
    ]


def child_born(birth_date: date, name: str = "Sophie") -> ChildProfile:
    return ChildProfile(name=name, birth_date=birth_date, sex=Sex.FEMALE)


def serve(food: Food, grams: float) -> MealFood:
    return MealFood(food, grams)


@dataclass
class InMemoryGuidelineSource(GuidelineSource):
    """In-memory guideline source for tests."""

    tables: list[RequirementTable] = field(default_factory=requirement_tables)
    loads: int = 0

    def load_tables(self) -> list[RequirementTable]:
        self.loads += 1
        return list(self.tables)


@dataclass
class InMemoryCatalogSource(FoodCatalogSource):
    """In-memory catalog source for tests."""

    foods: list[Food] = field(default_factory=lambda: list(CATALOG))

    def load_foods(self) -> list[Food]:
        return list(self.foods)


@pytest.fixture(autouse=True)
def _reset_app_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("little_ladle")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def profile() -> ChildProfile:
    """A ten-month-old child on TODAY."""
    return child_born(date(2025, 3, 15))


@pytest.fixture
def guide() -> RequirementGuide:
    return RequirementGuide.from_source(InMemoryGuidelineSource())


@pytest.fixture
def scorer(guide: RequirementGuide) -> ComplianceScorer:
    return ComplianceScorer(guide)


@pytest.fixture
def engine(scorer: ComplianceScorer) -> RecommendationEngine:
    return RecommendationEngine(scorer)


@pytest.fixture
def settings() -> Settings:
    return Settings(debug=False)


@pytest.fixture
def container(
    settings: Settings, guide: RequirementGuide, scorer: ComplianceScorer
) -> AppContainer:
    return AppContainer(
        settings=settings,
        catalog=FoodCatalog.from_source(InMemoryCatalogSource()),
        guide=guide,
        scorer=scorer,
        recommendation_engine=RecommendationEngine(
            scorer=scorer, rules=settings.search_rules()
        ),
    )
