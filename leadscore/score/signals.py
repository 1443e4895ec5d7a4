"""Query-independent record quality signals."""

import logging
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from leadscore.config import Settings, settings
from leadscore.models import CompanyRecord

logger = logging.getLogger(__name__)


class SignalPolicy(BaseModel):
    """Fixed bonuses and penalties applied to every record."""

    model_config = ConfigDict(frozen=True)

    phone_bonus: int = Field(default=8, ge=0)
    email_bonus: int = Field(default=6, ge=0)
    decision_maker_bonus: int = Field(default=10, ge=0)

    freshness_bonus: int = Field(default=6, ge=0)
    freshness_window_days: int = Field(default=90, ge=0)
    staleness_penalty: int = Field(default=-10, le=0)
    staleness_after_days: int = Field(default=180, ge=0)

    low_completeness_penalty: int = Field(default=-8, le=0)
    low_completeness_below: int = Field(default=50, ge=0, le=100)
    completeness_bonus_divisor: int = Field(default=10, ge=1)

    @model_validator(mode="after")
    def _disjoint_age_ranges(self):
        if self.freshness_window_days > self.staleness_after_days:
            raise ValueError("freshness_window_days must not exceed staleness_after_days")
        return self

    @classmethod
    def from_settings(cls, settings: Settings) -> "SignalPolicy":
        return cls(
            freshness_window_days=settings.freshness_window_days,
            staleness_after_days=settings.staleness_after_days,
            low_completeness_below=settings.low_completeness_below,
        )

    @property
    def max_completeness_bonus(self) -> int:
        return 100 // self.completeness_bonus_divisor

    @property
    def max_signal_total(self) -> int:
        """Highest attainable sum of signal adjustments."""
        return (
            self.phone_bonus
            + self.email_bonus
            + self.decision_maker_bonus
            + self.freshness_bonus
            + self.max_completeness_bonus
        )


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def age_in_days(last_updated_at: Optional[datetime], as_of: datetime) -> Optional[int]:
    """Whole days since the record was updated; None when unknown."""
    if last_updated_at is None:
        return None
    delta = _as_utc(as_of) - _as_utc(last_updated_at)
    return max(delta.days, 0)


class SignalEvaluator:
    """Compute signal adjustments for one record."""

    def __init__(self, policy: Optional[SignalPolicy] = None):
        self.policy = policy or SignalPolicy.from_settings(settings)

    def evaluate(
        self,
        record: CompanyRecord,
        as_of: Optional[datetime] = None,
    ) -> dict[str, int]:
        """Return signal key -> adjustment for every signal that applies."""
        policy = self.policy
        as_of = as_of or datetime.now(timezone.utc)
        adjustments = {}

        # Contactability
        if record.has_phone:
            adjustments["phone"] = policy.phone_bonus
        if record.has_email:
            adjustments["email"] = policy.email_bonus
        if record.has_decision_maker:
            adjustments["decision_maker"] = policy.decision_maker_bonus

        # Freshness
        age = age_in_days(record.last_updated_at, as_of)
        if age is not None:
            if age <= policy.freshness_window_days:
                adjustments["freshness"] = policy.freshness_bonus
            elif age > policy.staleness_after_days:
                adjustments["staleness"] = policy.staleness_penalty

        # Completeness
        completeness = max(0, min(record.data_completeness_percent, 100))
        if completeness < policy.low_completeness_below:
            adjustments["low_completeness"] = policy.low_completeness_penalty
        adjustments["completeness"] = completeness // policy.completeness_bonus_divisor

        return adjustments

    def total(self, record: CompanyRecord, as_of: Optional[datetime] = None) -> int:
        return sum(self.evaluate(record, as_of).values())
