"""Domain models for requirement tables and compliance scores."""

from dataclasses import dataclass, field
from enum import Enum

from little_ladle.domain.profiles import AgeBracket


@dataclass(frozen=True)
class Requirement:
    """Daily requirement for one nutrient."""

    value: float
    unit: str
    note: str | None = None


@dataclass(frozen=True)
class RequirementTable:
    """Daily requirements for one age bracket."""

    bracket: AgeBracket
    label: str
    requirements: dict[str, Requirement]


@dataclass(frozen=True)
class NutrientIntake:
    """Aggregated intake of one nutrient for a meal."""

    amount: float
    unit: str
    percent_daily: float = 0.0


IntakeMap = dict[str, NutrientIntake]


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class RiskAlert:
    """Alert raised for a meal that misses part of the rubric."""

    severity: Severity
    message: str
    recommendation: str


@dataclass(frozen=True)
class RubricCheck:
    """Score for one rubric dimension."""

    score: float
    max_score: float
    met: bool
    message: str


@dataclass(frozen=True)
class DiversityCheck(RubricCheck):
    count: int


@dataclass(frozen=True)
class AgeAppropriateCheck(RubricCheck):
    inappropriate: int


@dataclass(frozen=True)
class KeyNutrientCheck(RubricCheck):
    adequate: list[str]
    deficient: list[str]


@dataclass(frozen=True)
class ComplianceBreakdown:
    """The five rubric dimensions that make up the overall score."""

    animal_source_foods: RubricCheck
    fruits_and_vegetables: RubricCheck
    food_diversity: DiversityCheck
    age_appropriate: AgeAppropriateCheck
    key_nutrients: KeyNutrientCheck

    def checks(self) -> list[RubricCheck]:
        return [
            self.animal_source_foods,
            self.fruits_and_vegetables,
            self.food_diversity,
            self.age_appropriate,
            self.key_nutrients,
        ]

    @property
    def total(self) -> float:
        return sum(check.score for check in self.checks())


@dataclass(frozen=True)
class ComplianceScore:
    """WHO compliance score of a meal."""

    overall_score: int
    breakdown: ComplianceBreakdown
    risk_alerts: list[RiskAlert]
    recommendations: list[str]
    applicable: bool = True
    intake: IntakeMap = field(default_factory=dict)


@dataclass(frozen=True)
class Gaps:
    """Rubric dimensions a meal leaves unmet."""

    animal_foods: bool
    fruits_vegetables: bool
    diversity: int
    key_nutrients: list[str]
