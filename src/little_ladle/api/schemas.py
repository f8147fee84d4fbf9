"""Pydantic models for API request payloads."""

from datetime import date

from pydantic import BaseModel, Field

from little_ladle.domain.profiles import ChildProfile, Sex


class ProfilePayload(BaseModel):
    """Child profile payload."""

    name: str
    birth_date: date
    sex: Sex

    def to_profile(self) -> ChildProfile:
        return ChildProfile(name=self.name, birth_date=self.birth_date, sex=self.sex)


class MealItemPayload(BaseModel):
    food_id: int
    serving_grams: float


class ComplianceRequest(BaseModel):
    """Request to score a meal."""

    profile: ProfilePayload
    meal: list[MealItemPayload] = Field(default_factory=list)
    today: date | None = None


class RecommendationRequest(BaseModel):
    """Request for quick fixes and meal suggestions."""

    profile: ProfilePayload | None = None
    meal: list[MealItemPayload] = Field(default_factory=list)
    mode: str | None = None
    today: date | None = None
