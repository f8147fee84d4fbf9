"""WHO requirement lookup by age bracket."""

from dataclasses import dataclass
from typing import Protocol

from little_ladle.domain.compliance import RequirementTable
from little_ladle.domain.profiles import AgeBracket
from little_ladle.errors import ReferenceDataError


class GuidelineSource(Protocol):
    """Source of the WHO guideline document."""

    def load_tables(self) -> list[RequirementTable]:
        """Return one requirement table per age bracket in the document."""


@dataclass(frozen=True)
class RequirementGuide:
    """Read-only requirement tables keyed by age bracket."""

    tables: dict[AgeBracket, RequirementTable]

    def __post_init__(self) -> None:
        for table in self.tables.values():
            for key, requirement in table.requirements.items():
                if requirement.value <= 0:
                    raise ReferenceDataError(
                        f"Requirement for {key} in {table.bracket.value} "
                        "must be positive"
                    )

    @classmethod
    def from_source(cls, source: GuidelineSource) -> "RequirementGuide":
        """Load the guide once from a guideline source."""
        return cls({table.bracket: table for table in source.load_tables()})

    def for_bracket(self, bracket: AgeBracket) -> RequirementTable | None:
        """Return the bracket's table, or None when no guidelines apply."""
        if not bracket.has_guidelines:
            return None
        table = self.tables.get(bracket)
        if table is None:
            raise ReferenceDataError(
                f"Guideline document has no requirements for {bracket.value}"
            )
        return table
