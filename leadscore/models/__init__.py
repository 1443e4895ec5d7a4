"""Data models for lead scoring."""

from .company import (
    CompanyRecord,
    CompanySize,
    VerificationStatus,
)
from .criteria import (
    CRITERION_SPECS,
    CriterionKind,
    ScoringConfiguration,
    ScoringCriterion,
    ScoringCriterionSpec,
    ScoringOptions,
)
from .result import (
    CriterionContribution,
    RankedEntry,
    ScoreBreakdown,
)

__all__ = [
    "CompanyRecord",
    "CompanySize",
    "VerificationStatus",
    "CRITERION_SPECS",
    "CriterionKind",
    "ScoringConfiguration",
    "ScoringCriterion",
    "ScoringCriterionSpec",
    "ScoringOptions",
    "CriterionContribution",
    "RankedEntry",
    "ScoreBreakdown",
]
