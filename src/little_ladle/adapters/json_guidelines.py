"""File-backed WHO guideline source."""

import json
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from little_ladle.domain.compliance import Requirement, RequirementTable
from little_ladle.domain.profiles import AgeBracket
from little_ladle.errors import ReferenceDataError


class RequirementDocument(BaseModel):
    value: float = Field(gt=0)
    unit: str
    note: str | None = None


class AgeGroupDocument(BaseModel):
    """Guidelines for one age bracket."""

    label: str = ""
    daily_requirements: dict[str, RequirementDocument] = Field(
        alias="dailyRequirements"
    )


class GuidelineDocument(BaseModel):
    age_groups: dict[AgeBracket, AgeGroupDocument] = Field(alias="ageGroups")


def parse_guidelines(payload: object) -> list[RequirementTable]:
    """Validate a guideline document and return its requirement tables."""
    try:
        document = GuidelineDocument.model_validate(payload)
    except ValidationError as exc:
        raise ReferenceDataError(f"Malformed guideline document: {exc}") from exc
    return [
        RequirementTable(
            bracket=bracket,
            label=group.label or bracket.value,
            requirements={
                key: Requirement(value=item.value, unit=item.unit, note=item.note)
                for key, item in group.daily_requirements.items()
            },
        )
        for bracket, group in document.age_groups.items()
    ]


@dataclass
class JsonGuidelineSource:
    """Reads WHO requirement tables from a JSON document."""

    path: Path

    def load_tables(self) -> list[RequirementTable]:
        """Return the requirement tables in the document."""
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ReferenceDataError(
                f"Cannot read guideline document {self.path}: {exc}"
            ) from exc
        return parse_guidelines(payload)
