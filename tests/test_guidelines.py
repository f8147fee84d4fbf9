"""Tests for the WHO guideline source."""

import json

import pytest

from little_ladle.adapters.json_guidelines import JsonGuidelineSource, parse_guidelines
from little_ladle.config import DATA_DIR
from little_ladle.domain.compliance import Requirement, RequirementTable
from little_ladle.domain.profiles import AgeBracket
from little_ladle.errors import ReferenceDataError
from little_ladle.services.requirements import RequirementGuide
from tests.conftest import InMemoryGuidelineSource, requirement_tables

GUIDELINES = {
    "ageGroups": {
        "6-12_months": {
            "label": "6-12 months",
            "dailyRequirements": {
                "iron": {"value": 11, "unit": "mg", "note": "Critical"},
            },
        }
    }
}


def test_parse_guidelines() -> None:
    tables = parse_guidelines(GUIDELINES)

    assert len(tables) == 1
    assert tables[0].bracket is AgeBracket.MONTHS_6_12
    assert tables[0].requirements["iron"].value == 11
    assert tables[0].requirements["iron"].note == "Critical"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"ageGroups": {"3-6_months": {"dailyRequirements": {}}}},
        {
            "ageGroups": {
                "6-12_months": {
                    "dailyRequirements": {"iron": {"value": 0, "unit": "mg"}}
                }
            }
        },
    ],
    ids=["missing", "unknown-bracket", "zero-requirement"],
)
def test_parse_guidelines_rejects_malformed_document(payload) -> None:
    with pytest.raises(ReferenceDataError):
        parse_guidelines(payload)


def test_json_source_wraps_read_errors(tmp_path) -> None:
    with pytest.raises(ReferenceDataError):
        JsonGuidelineSource(tmp_path / "missing.json").load_tables()


def test_json_source_reads_document(tmp_path) -> None:
    path = tmp_path / "guidelines.json"
    path.write_text(json.dumps(GUIDELINES), encoding="utf-8")

    guide = RequirementGuide.from_source(JsonGuidelineSource(path))

    assert guide.for_bracket(AgeBracket.MONTHS_6_12).label == "6-12 months"


def test_packaged_guidelines_cover_both_brackets() -> None:
    path = DATA_DIR / "who_nutrition_guidelines.json"

    guide = RequirementGuide.from_source(JsonGuidelineSource(path))

    infant = guide.for_bracket(AgeBracket.MONTHS_6_12)
    toddler = guide.for_bracket(AgeBracket.MONTHS_12_24)
    assert infant.requirements["iron"].value == 9.3
    assert infant.requirements["vitaminA"].unit == "µg RAE"
    assert toddler.requirements["iron"].value == 5.8


def test_guide_loads_source_once() -> None:
    source = InMemoryGuidelineSource()

    guide = RequirementGuide.from_source(source)
    guide.for_bracket(AgeBracket.MONTHS_6_12)
    guide.for_bracket(AgeBracket.MONTHS_12_24)

    assert source.loads == 1


def test_guide_has_no_table_outside_who_range() -> None:
    guide = RequirementGuide.from_source(InMemoryGuidelineSource())

    assert guide.for_bracket(AgeBracket.UNDER_6_MONTHS) is None
    assert guide.for_bracket(AgeBracket.OVER_24_MONTHS) is None


@pytest.mark.parametrize("value", [0.0, -1.0])
def test_guide_rejects_non_positive_requirement(value: float) -> None:
    tables = requirement_tables()
    tables[0] = RequirementTable(
        bracket=AgeBracket.MONTHS_6_12,
        label="6-12 months",
        requirements={
            "iron": Requirement(value, "mg"),
            "vitaminA": Requirement(400.0, "µg RAE"),
        },
    )

    with pytest.raises(ReferenceDataError, match="iron"):
        RequirementGuide.from_source(InMemoryGuidelineSource(tables=tables))
