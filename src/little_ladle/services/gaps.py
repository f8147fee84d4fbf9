"""Projection of a compliance score into unmet rubric dimensions."""

from little_ladle.domain.compliance import ComplianceScore, Gaps


def analyze_gaps(score: ComplianceScore) -> Gaps:
    """Return the rubric dimensions the scored meal leaves unmet."""
    breakdown = score.breakdown
    return Gaps(
        animal_foods=not breakdown.animal_source_foods.met,
        fruits_vegetables=not breakdown.fruits_and_vegetables.met,
        diversity=breakdown.food_diversity.count,
        key_nutrients=list(breakdown.key_nutrients.deficient),
    )
