"""FastAPI application factory."""

import logging
from dataclasses import asdict

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from little_ladle.adapters.json_food_catalog import parse_food
from little_ladle.api.schemas import (
    ComplianceRequest,
    MealItemPayload,
    RecommendationRequest,
)
from little_ladle.app_logging import configure_logging
from little_ladle.containers import AppContainer
from little_ladle.domain.foods import MealFood
from little_ladle.domain.recommendations import FEEDING_MODES, get_feeding_mode
from little_ladle.errors import (
    CatalogError,
    InvalidInputError,
    PreconditionError,
    ReferenceDataError,
    UnknownFoodError,
)
from little_ladle.services.catalog import FoodCatalog


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(logging.DEBUG if container.settings.debug else logging.INFO)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Little Ladle")
    app.state.container = container

    @app.exception_handler(InvalidInputError)
    async def invalid_input(_: Request, exc: InvalidInputError) -> JSONResponse:
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, exc)

    @app.exception_handler(PreconditionError)
    async def precondition(_: Request, exc: PreconditionError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(UnknownFoodError)
    async def unknown_food(_: Request, exc: UnknownFoodError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(CatalogError)
    @app.exception_handler(ReferenceDataError)
    async def bad_reference_data(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("Reference data error: %s", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/feeding-modes")
    async def feeding_modes() -> dict[str, object]:
        """Return the built-in feeding modes."""
        return {"modes": [asdict(mode) for mode in FEEDING_MODES.values()]}

    @app.get("/foods/{food_id}")
    async def get_food(food_id: int, request: Request) -> dict[str, object]:
        """Return one catalog food."""
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.catalog.get(food_id))

    @app.post("/foods", status_code=status.HTTP_201_CREATED)
    async def add_custom_food(
        payload: dict[str, object], request: Request
    ) -> dict[str, object]:
        """Append a custom food to the catalog."""
        state_container: AppContainer = request.app.state.container
        try:
            food = state_container.catalog.add_custom_food(parse_food(payload))
        except CatalogError as exc:
            return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, exc)
        return asdict(food)

    @app.post("/compliance")
    async def compliance(
        payload: ComplianceRequest, request: Request
    ) -> dict[str, object]:
        """Score a meal against WHO complementary-feeding guidelines."""
        state_container: AppContainer = request.app.state.container
        meal = _resolve_meal(state_container.catalog, payload.meal)
        score = state_container.scorer.score(
            meal, payload.profile.to_profile(), today=payload.today
        )
        return asdict(score)

    @app.post("/recommendations")
    async def recommendations(
        payload: RecommendationRequest, request: Request
    ) -> dict[str, object]:
        """Return quick fixes and meal suggestions for a meal."""
        state_container: AppContainer = request.app.state.container
        mode = get_feeding_mode(payload.mode or state_container.settings.default_mode)
        meal = _resolve_meal(state_container.catalog, payload.meal)
        profile = payload.profile.to_profile() if payload.profile else None
        result = state_container.recommendation_engine.generate(
            meal,
            state_container.catalog.foods(),
            profile,
            mode,
            today=payload.today,
        )
        return asdict(result)

    return app


def _resolve_meal(
    catalog: FoodCatalog, items: list[MealItemPayload]
) -> list[MealFood]:
    return [MealFood(catalog.get(item.food_id), item.serving_grams) for item in items]


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})
