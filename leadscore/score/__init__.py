"""Scoring engine for ranking company records."""

from .matcher import AttributeMatcher
from .signals import SignalEvaluator, SignalPolicy
from .normalizer import ConfigurationError, CriteriaNormalizer, NormalizedCriteria, NO_ACTIVE_CRITERIA
from .aggregator import ScoreAggregator
from .ranking import RankedResultBuilder, RankingResult
from .recommendations import recommend_improvements

__all__ = [
    "AttributeMatcher",
    "SignalEvaluator",
    "SignalPolicy",
    "ConfigurationError",
    "CriteriaNormalizer",
    "NormalizedCriteria",
    "NO_ACTIVE_CRITERIA",
    "ScoreAggregator",
    "RankedResultBuilder",
    "RankingResult",
    "recommend_improvements",
]
