"""Dependency container wiring for the application."""

from dataclasses import dataclass

from little_ladle.adapters.json_food_catalog import JsonFoodCatalogSource
from little_ladle.adapters.json_guidelines import JsonGuidelineSource
from little_ladle.config import Settings
from little_ladle.services.catalog import FoodCatalog
from little_ladle.services.compliance import ComplianceScorer
from little_ladle.services.recommendations import RecommendationEngine
from little_ladle.services.requirements import RequirementGuide


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog: FoodCatalog
    guide: RequirementGuide
    scorer: ComplianceScorer
    recommendation_engine: RecommendationEngine


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    catalog = FoodCatalog.from_source(
        JsonFoodCatalogSource(resolved_settings.catalog_path)
    )
    guide = RequirementGuide.from_source(
        JsonGuidelineSource(resolved_settings.guidelines_path)
    )
    scorer = ComplianceScorer(guide)
    recommendation_engine = RecommendationEngine(
        scorer=scorer,
        rules=resolved_settings.search_rules(),
    )
    return AppContainer(
        settings=resolved_settings,
        catalog=catalog,
        guide=guide,
        scorer=scorer,
        recommendation_engine=recommendation_engine,
    )
