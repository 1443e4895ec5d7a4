"""API routes for lead scoring."""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from leadscore.config import settings
from leadscore.export import to_csv_string
from leadscore.models import (
    CRITERION_SPECS,
    CompanyRecord,
    RankedEntry,
    ScoringConfiguration,
    ScoringOptions,
)
from leadscore.presets import PRESETS, get_preset
from leadscore.score import RankedResultBuilder, RankingResult, SignalPolicy, recommend_improvements

logger = logging.getLogger(__name__)

router = APIRouter()


class ScoreRequest(BaseModel):
    """Request body for scoring a batch of companies."""
    options: ScoringOptions = Field(default_factory=ScoringOptions)
    preset: Optional[str] = None
    minimum_score_threshold: Optional[int] = Field(
        default=None,
        description="Overrides the threshold of the options or preset",
    )
    companies: list[CompanyRecord] = Field(default_factory=list)
    as_of: Optional[datetime] = None


class ScoreResponse(BaseModel):
    """Ranked companies for one scoring pass."""
    as_of: datetime
    total_companies: int
    total_ranked: int
    filtered_out: int
    minimum_score_threshold: int
    active_criteria: list[str]
    total_active_weight: float
    warnings: list[str]
    results: list[RankedEntry]


class CriterionSpecItem(BaseModel):
    """Slider bounds for one criterion."""
    key: str
    kind: str
    label: str
    max_weight: float
    step: float
    default_weight: float


class PresetItem(BaseModel):
    """A built-in scoring preset."""
    key: str
    configuration: ScoringConfiguration


class RecommendationsRequest(BaseModel):
    """Request body for improvement recommendations."""
    companies: list[CompanyRecord] = Field(default_factory=list)
    as_of: Optional[datetime] = None


class RecommendationItem(BaseModel):
    """Recommendations for one company."""
    company_id: Optional[str]
    name: str
    recommendations: list[str]


@router.post("/score", response_model=ScoreResponse, response_model_by_alias=False)
def score_companies(request: ScoreRequest):
    """Score, threshold-filter and rank a batch of companies."""
    result = _run_scoring(request)
    criteria = result.criteria
    return ScoreResponse(
        as_of=result.as_of,
        total_companies=result.total_scored,
        total_ranked=len(result.entries),
        filtered_out=result.filtered_out,
        minimum_score_threshold=criteria.minimum_score_threshold,
        active_criteria=criteria.describe(),
        total_active_weight=criteria.total_active_weight,
        warnings=result.warnings,
        results=result.entries,
    )


@router.post("/export")
def export_results(request: ScoreRequest):
    """Export ranked results as CSV."""
    result = _run_scoring(request)
    stamp = result.as_of.strftime("%Y%m%d_%H%M%S")
    return StreamingResponse(
        iter([to_csv_string(result.entries)]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=ranked_companies_{stamp}.csv"},
    )


@router.post("/recommendations", response_model=list[RecommendationItem])
def get_recommendations(request: RecommendationsRequest):
    """Suggest data fixes that would raise each company's score."""
    _check_batch_size(request.companies)
    as_of = request.as_of or datetime.now(timezone.utc)
    policy = SignalPolicy.from_settings(settings)
    return [
        RecommendationItem(
            company_id=company.id,
            name=company.name,
            recommendations=recommend_improvements(company, as_of, policy),
        )
        for company in request.companies
    ]


@router.get("/criteria", response_model=list[CriterionSpecItem])
async def list_criteria():
    """Per-criterion weight bounds shared by every caller."""
    return [
        CriterionSpecItem(
            key=spec.key,
            kind=spec.kind.value,
            label=spec.label,
            max_weight=spec.max_weight,
            step=spec.step,
            default_weight=spec.default_weight,
        )
        for spec in CRITERION_SPECS.values()
    ]


@router.get("/presets", response_model=list[PresetItem])
async def list_presets():
    """Built-in scoring presets."""
    return [PresetItem(key=key, configuration=config) for key, config in PRESETS.items()]


def resolve_configuration(request: ScoreRequest) -> ScoringConfiguration:
    """Pick the preset or the panel options, then apply any threshold override."""
    if request.preset:
        configuration = get_preset(request.preset)
        if configuration is None:
            raise HTTPException(status_code=404, detail=f"Unknown preset: {request.preset}")
    else:
        configuration = ScoringConfiguration.from_options(request.options)

    if request.minimum_score_threshold is not None:
        configuration = configuration.with_threshold(request.minimum_score_threshold)
    return configuration


def _check_batch_size(companies: list[CompanyRecord]):
    if len(companies) > settings.max_batch_size:
        raise HTTPException(
            status_code=413,
            detail=f"Batch of {len(companies)} companies exceeds limit of {settings.max_batch_size}",
        )


def _run_scoring(request: ScoreRequest) -> RankingResult:
    _check_batch_size(request.companies)
    configuration = resolve_configuration(request)
    builder = RankedResultBuilder()
    result = builder.build(request.companies, configuration, as_of=request.as_of)
    if result.warnings:
        logger.info(f"Scoring request completed with warnings: {', '.join(result.warnings)}")
    return result
