"""Reduce a raw scoring configuration to its active, clamped criteria."""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from leadscore.models import CRITERION_SPECS, CriterionKind, ScoringConfiguration, ScoringCriterion

logger = logging.getLogger(__name__)

NO_ACTIVE_CRITERIA = "NO_ACTIVE_CRITERIA"


class ConfigurationError(Exception):
    """A scoring request that carries no usable criteria.

    Returned on NormalizedCriteria rather than raised; callers fall back to
    an unscored or intrinsic-quality listing.
    """

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


@dataclass
class NormalizedCriteria:
    """Active criteria for one scoring pass."""

    active: list[ScoringCriterion]
    skipped: list[str] = field(default_factory=list)
    total_active_weight: float = 0.0
    minimum_score_threshold: int = 0
    error: Optional[ConfigurationError] = None

    @property
    def has_active_criteria(self) -> bool:
        return bool(self.active)

    @property
    def error_code(self) -> Optional[str]:
        return self.error.code if self.error else None

    def require_active(self) -> "NormalizedCriteria":
        """Raise the configuration error, if any."""
        if self.error:
            raise self.error
        return self

    def describe(self) -> list[str]:
        """Human-readable lines for the active criteria preview."""
        lines = []
        for criterion in self.active:
            spec = CRITERION_SPECS[criterion.key]
            target = criterion.target_value.strip()
            if criterion.kind == CriterionKind.KEYWORD:
                lines.append(f'{spec.label} contains "{target}" (weight {criterion.weight:g})')
            else:
                lines.append(f"{spec.label} = {target} (weight {criterion.weight:g})")
        if self.active and self.total_active_weight != 100:
            lines.append(
                f"Total weight {self.total_active_weight:g}; "
                "weights don't need to total 100, results are normalized"
            )
        return lines


def clamp_weight(weight, max_weight: float) -> float:
    """Clamp a raw weight into [0, max_weight], defaulting junk to 0."""
    try:
        value = float(weight)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(value):
        return 0.0
    return max(0.0, min(value, max_weight))


def clamp_threshold(threshold) -> int:
    """Clamp a threshold into [0, 100]."""
    try:
        value = int(threshold)
    except (TypeError, ValueError):
        return 0
    return max(0, min(value, 100))


class CriteriaNormalizer:
    """Validate a configuration and keep only its active criteria."""

    def normalize(self, configuration: ScoringConfiguration) -> NormalizedCriteria:
        active = []
        skipped = []
        seen = set()

        for criterion in configuration.criteria:
            spec = CRITERION_SPECS.get(criterion.key)
            if spec is None:
                logger.warning(f"Ignoring unknown scoring criterion: {criterion.key}")
                skipped.append(criterion.key)
                continue

            if criterion.key in seen:
                logger.warning(f"Ignoring duplicate scoring criterion: {criterion.key}")
                skipped.append(criterion.key)
                continue
            seen.add(criterion.key)

            weight = clamp_weight(criterion.weight, spec.max_weight)
            if weight != criterion.weight:
                logger.debug(f"Clamped {criterion.key} weight {criterion.weight} -> {weight}")

            if not criterion.has_target or weight <= 0:
                skipped.append(criterion.key)
                continue

            active.append(
                criterion.model_copy(update={"weight": weight, "kind": spec.kind})
            )

        total_weight = sum(c.weight for c in active)
        error = None
        if not active:
            error = ConfigurationError(
                NO_ACTIVE_CRITERIA,
                "No active scoring criteria; set a target value and a weight above 0",
            )

        return NormalizedCriteria(
            active=active,
            skipped=skipped,
            total_active_weight=total_weight,
            minimum_score_threshold=clamp_threshold(configuration.minimum_score_threshold),
            error=error,
        )
