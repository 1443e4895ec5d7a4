"""Score breakdown and ranked result models."""

from typing import Optional
from pydantic import BaseModel, Field

from .company import CompanyRecord


class CriterionContribution(BaseModel):
    """Outcome of one active criterion for one company."""

    matched: bool
    contribution: float = Field(description="Weight added to the raw score (0 when unmatched)")
    weight: float = Field(description="Clamped weight of the criterion")


class ScoreBreakdown(BaseModel):
    """Per-company scoring detail."""

    company_id: Optional[str] = None
    criterion_contributions: dict[str, CriterionContribution] = Field(default_factory=dict)
    signal_adjustments: dict[str, int] = Field(
        default_factory=dict,
        description="Signal key -> adjustment applied to the raw score",
    )
    raw_score: float = 0.0
    max_possible_score: float = 0.0
    normalized_score: int = Field(default=0, ge=0, le=100)

    @property
    def matched_criteria(self) -> list[str]:
        return [key for key, c in self.criterion_contributions.items() if c.matched]

    @property
    def signal_total(self) -> int:
        return sum(self.signal_adjustments.values())


class RankedEntry(BaseModel):
    """A scored company in its final ranked position."""

    company: CompanyRecord
    breakdown: ScoreBreakdown
    rank: int = Field(ge=1, description="1-based position after filtering and sorting")
