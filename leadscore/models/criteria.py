"""Scoring criteria and configuration schema."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from .company import CompanySize, VerificationStatus, coerce_verification_status


class CriterionKind(str, Enum):
    """How a criterion is evaluated against a record."""

    MATCH = "match"
    KEYWORD = "keyword"


@dataclass(frozen=True)
class ScoringCriterionSpec:
    """Bounds and wiring for one criterion key."""

    key: str
    kind: CriterionKind
    label: str
    max_weight: float
    step: float
    default_weight: float
    attribute: Optional[str] = None  # CompanyRecord attribute for match criteria


CRITERION_SPECS: dict[str, ScoringCriterionSpec] = {
    spec.key: spec
    for spec in (
        ScoringCriterionSpec(
            key="keyword",
            kind=CriterionKind.KEYWORD,
            label="Keyword",
            max_weight=50,
            step=5,
            default_weight=25,
        ),
        ScoringCriterionSpec(
            key="industrial",
            kind=CriterionKind.MATCH,
            label="Industrial",
            max_weight=50,
            step=5,
            default_weight=25,
            attribute="industry",
        ),
        ScoringCriterionSpec(
            key="province",
            kind=CriterionKind.MATCH,
            label="Province",
            max_weight=50,
            step=5,
            default_weight=20,
            attribute="province",
        ),
        ScoringCriterionSpec(
            key="company_size",
            kind=CriterionKind.MATCH,
            label="Company Size",
            max_weight=30,
            step=5,
            default_weight=15,
            attribute="company_size",
        ),
        ScoringCriterionSpec(
            key="verification_status",
            kind=CriterionKind.MATCH,
            label="Verification Status",
            max_weight=20,
            step=2,
            default_weight=10,
            attribute="verification_status",
        ),
    )
}


class ScoringCriterion(BaseModel):
    """One weighted rule contributing to a score."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    key: str = Field(description="Criterion key from CRITERION_SPECS")
    kind: CriterionKind = CriterionKind.MATCH
    weight: float = Field(default=0.0, description="Raw weight; clamped during normalization")
    target_value: Optional[str] = Field(
        default=None,
        description="Value to match, or the keyword text for keyword criteria",
    )

    @field_validator("target_value", mode="before")
    @classmethod
    def _accept_status_label(cls, value, info: ValidationInfo):
        if info.data.get("key") == "verification_status":
            status = coerce_verification_status(value)
            if isinstance(status, VerificationStatus):
                return status.value
        return value

    @property
    def spec(self) -> Optional[ScoringCriterionSpec]:
        return CRITERION_SPECS.get(self.key)

    @property
    def has_target(self) -> bool:
        return bool(self.target_value and self.target_value.strip())


class ScoringOptions(BaseModel):
    """Flat option set authored by the filtering panel."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    keyword: Optional[str] = None
    keyword_weight: Optional[float] = None
    industrial: Optional[str] = None
    industrial_weight: Optional[float] = None
    province: Optional[str] = None
    province_weight: Optional[float] = None
    company_size: Optional[CompanySize] = None
    company_size_weight: Optional[float] = None
    verification_status: Optional[VerificationStatus] = None
    verification_status_weight: Optional[float] = None
    minimum_score_threshold: int = 0

    @field_validator("verification_status", mode="before")
    @classmethod
    def _accept_status_label(cls, value):
        return coerce_verification_status(value)


class ScoringConfiguration(BaseModel):
    """Ordered criteria plus a minimum score threshold."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    name: Optional[str] = None
    description: Optional[str] = None
    criteria: list[ScoringCriterion] = Field(default_factory=list)
    minimum_score_threshold: int = Field(
        default=0,
        description="Inclusive 0-100 cut-off on the normalized score",
    )

    @classmethod
    def from_options(cls, options: ScoringOptions) -> "ScoringConfiguration":
        """Build a configuration from the panel's flat options.

        Options are visited in CRITERION_SPECS order. A criterion is emitted
        when either its target or its weight is set; a target without a
        weight takes the default weight from CRITERION_SPECS.
        """
        criteria = []
        for key, spec in CRITERION_SPECS.items():
            target = getattr(options, key)
            weight = getattr(options, f"{key}_weight")
            if target is None and weight is None:
                continue
            if isinstance(target, Enum):
                target = target.value
            criteria.append(
                ScoringCriterion(
                    key=key,
                    kind=spec.kind,
                    weight=spec.default_weight if weight is None else weight,
                    target_value=target,
                )
            )
        return cls(
            criteria=criteria,
            minimum_score_threshold=options.minimum_score_threshold,
        )

    def with_threshold(self, threshold: int) -> "ScoringConfiguration":
        """Copy of this configuration with a different threshold."""
        return self.model_copy(update={"minimum_score_threshold": threshold})
