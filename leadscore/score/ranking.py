"""Threshold filtering and deterministic ranking over a batch."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from leadscore.config import settings
from leadscore.models import CompanyRecord, RankedEntry, ScoreBreakdown, ScoringConfiguration
from .aggregator import ScoreAggregator
from .normalizer import CriteriaNormalizer, NormalizedCriteria

logger = logging.getLogger(__name__)


@dataclass
class RankingResult:
    """Ranked entries plus metadata about the scoring pass."""

    entries: list[RankedEntry]
    criteria: NormalizedCriteria
    as_of: datetime
    total_scored: int = 0
    filtered_out: int = 0
    warnings: list[str] = field(default_factory=list)

    @property
    def error_code(self) -> Optional[str]:
        return self.criteria.error_code


def sort_key(position: int, record: CompanyRecord, breakdown: ScoreBreakdown) -> tuple:
    """Score desc, raw score desc, name asc, then batch position."""
    return (
        -breakdown.normalized_score,
        -breakdown.raw_score,
        record.name.casefold(),
        record.name,
        position,
    )


class RankedResultBuilder:
    """Score, filter and order a batch of companies for one configuration."""

    def __init__(
        self,
        aggregator: Optional[ScoreAggregator] = None,
        normalizer: Optional[CriteriaNormalizer] = None,
        workers: Optional[int] = None,
        parallel_min_batch_size: Optional[int] = None,
    ):
        self.aggregator = aggregator or ScoreAggregator()
        self.normalizer = normalizer or CriteriaNormalizer()
        self.workers = workers if workers is not None else settings.batch_workers
        self.parallel_min_batch_size = (
            parallel_min_batch_size
            if parallel_min_batch_size is not None
            else settings.parallel_min_batch_size
        )

    def build(
        self,
        companies: list[CompanyRecord],
        configuration: ScoringConfiguration,
        as_of: Optional[datetime] = None,
    ) -> RankingResult:
        """Score every company and return the filtered, ranked result."""
        as_of = as_of or datetime.now(timezone.utc)
        criteria = self.normalizer.normalize(configuration)

        warnings = []
        if criteria.error:
            logger.info(f"{criteria.error.code}: ranking by intrinsic quality only")
            warnings.append(criteria.error.code)

        breakdowns = self._score_all(companies, criteria, as_of)

        threshold = criteria.minimum_score_threshold
        kept = [
            (position, record, breakdown)
            for position, (record, breakdown) in enumerate(zip(companies, breakdowns))
            if breakdown.normalized_score >= threshold
        ]
        kept.sort(key=lambda item: sort_key(*item))

        entries = [
            RankedEntry(company=record, breakdown=breakdown, rank=i + 1)
            for i, (_, record, breakdown) in enumerate(kept)
        ]

        filtered_out = len(companies) - len(entries)
        logger.info(
            f"Scored {len(companies)} companies with {len(criteria.active)} active criteria; "
            f"{len(entries)} at or above threshold {threshold}, {filtered_out} filtered out"
        )

        return RankingResult(
            entries=entries,
            criteria=criteria,
            as_of=as_of,
            total_scored=len(companies),
            filtered_out=filtered_out,
            warnings=warnings,
        )

    def rank(
        self,
        companies: list[CompanyRecord],
        configuration: ScoringConfiguration,
        as_of: Optional[datetime] = None,
    ) -> list[RankedEntry]:
        """Ranked entries only."""
        return self.build(companies, configuration, as_of).entries

    def _score_all(
        self,
        companies: list[CompanyRecord],
        criteria: NormalizedCriteria,
        as_of: datetime,
    ) -> list[ScoreBreakdown]:
        """Score in input order, partitioning large batches across threads."""
        if self.workers <= 1 or len(companies) < self.parallel_min_batch_size:
            return [self.aggregator.score(c, criteria, as_of) for c in companies]

        chunk_size = -(-len(companies) // self.workers)
        chunks = [
            companies[i:i + chunk_size]
            for i in range(0, len(companies), chunk_size)
        ]
        logger.debug(f"Scoring {len(companies)} companies in {len(chunks)} partitions")

        def score_chunk(chunk):
            return [self.aggregator.score(c, criteria, as_of) for c in chunk]

        breakdowns = []
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            for chunk_result in executor.map(score_chunk, chunks):
                breakdowns.extend(chunk_result)
        return breakdowns
