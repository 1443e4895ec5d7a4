"""Combine criterion matches and signals into raw and normalized scores."""

import logging
import math
from datetime import datetime, timezone
from typing import Optional

from leadscore.config import settings
from leadscore.models import CompanyRecord, CriterionContribution, ScoreBreakdown
from .matcher import AttributeMatcher
from .normalizer import NormalizedCriteria
from .signals import SignalEvaluator, SignalPolicy

logger = logging.getLogger(__name__)


def normalize_score(raw_score: float, max_possible_score: float) -> int:
    """Scale a raw score onto 0-100 against the ceiling, rounding half up."""
    if max_possible_score <= 0:
        return 0
    clamped = max(0.0, min(raw_score, max_possible_score))
    return int(math.floor(100 * clamped / max_possible_score + 0.5))


class ScoreAggregator:
    """Score one company against normalized criteria and the signal policy."""

    def __init__(
        self,
        policy: Optional[SignalPolicy] = None,
        matcher: Optional[AttributeMatcher] = None,
    ):
        self.policy = policy or SignalPolicy.from_settings(settings)
        self.matcher = matcher or AttributeMatcher()
        self.signals = SignalEvaluator(self.policy)

    def max_possible_score(self, criteria: NormalizedCriteria) -> float:
        """Ceiling for a configuration; penalties never lower it."""
        return sum(c.weight for c in criteria.active) + self.policy.max_signal_total

    def score(
        self,
        record: CompanyRecord,
        criteria: NormalizedCriteria,
        as_of: Optional[datetime] = None,
    ) -> ScoreBreakdown:
        as_of = as_of or datetime.now(timezone.utc)
        contributions = {}
        raw_score = 0.0

        for criterion in criteria.active:
            try:
                matched = self.matcher.matches(record, criterion)
            except Exception as e:
                logger.warning(
                    f"Could not evaluate {criterion.key} for {record.name}: {e}"
                )
                matched = False

            contribution = criterion.weight if matched else 0.0
            contributions[criterion.key] = CriterionContribution(
                matched=matched,
                contribution=contribution,
                weight=criterion.weight,
            )
            raw_score += contribution

        adjustments = self.signals.evaluate(record, as_of)
        raw_score += sum(adjustments.values())

        max_possible = self.max_possible_score(criteria)
        normalized = normalize_score(raw_score, max_possible)

        logger.debug(
            f"{record.name}: raw={raw_score:g} max={max_possible:g} normalized={normalized}"
        )

        return ScoreBreakdown(
            company_id=record.id,
            criterion_contributions=contributions,
            signal_adjustments=adjustments,
            raw_score=raw_score,
            max_possible_score=max_possible,
            normalized_score=normalized,
        )
