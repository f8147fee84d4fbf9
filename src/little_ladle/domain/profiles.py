"""Child profile and age domain models."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from enum import Enum


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"


class AgeBracket(str, Enum):
    """WHO age brackets used to select a requirement table."""

    UNDER_6_MONTHS = "under_6_months"
    MONTHS_6_12 = "6-12_months"
    MONTHS_12_24 = "12-24_months"
    OVER_24_MONTHS = "over_24_months"

    @property
    def has_guidelines(self) -> bool:
        """Whether complementary-feeding guidelines exist for the bracket."""
        return self in {AgeBracket.MONTHS_6_12, AgeBracket.MONTHS_12_24}


@dataclass(frozen=True)
class ChildProfile:
    """Profile of the child a meal is prepared for."""

    name: str
    birth_date: date
    sex: Sex
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))


@dataclass(frozen=True)
class AgeCalculation:
    """Age of a child on a given day."""

    total_days: int
    months: int
    days: int
    bracket: AgeBracket
    display_age: str
