"""Suggestions for raising a company's intrinsic quality score."""

from datetime import datetime
from typing import Optional

from leadscore.config import settings
from leadscore.models import CompanyRecord, VerificationStatus
from .signals import SignalPolicy, age_in_days


def recommend_improvements(
    record: CompanyRecord,
    as_of: datetime,
    policy: Optional[SignalPolicy] = None,
) -> list[str]:
    """List data fixes that would earn missing signal bonuses."""
    policy = policy or SignalPolicy.from_settings(settings)
    recommendations = []

    if not record.has_phone and not record.has_email:
        recommendations.append("Add primary contact information (email or phone)")
    elif not record.has_phone:
        recommendations.append(f"Add a phone number (+{policy.phone_bonus})")
    elif not record.has_email:
        recommendations.append(f"Add an email address (+{policy.email_bonus})")

    if not record.has_decision_maker:
        recommendations.append(
            f"Add a decision-maker contact (+{policy.decision_maker_bonus})"
        )

    age = age_in_days(record.last_updated_at, as_of)
    if age is None:
        recommendations.append("Record has no update date; review and refresh it")
    elif age > policy.staleness_after_days:
        recommendations.append(
            f"Data is {age} days old; refresh it to remove the staleness penalty"
        )
    elif age > policy.freshness_window_days:
        recommendations.append(
            f"Refresh data within {policy.freshness_window_days} days to earn the freshness bonus"
        )

    if record.data_completeness_percent < policy.low_completeness_below:
        recommendations.append(
            "Complete missing company information (description, contact details, address)"
        )

    if not record.industries:
        recommendations.append("Specify industry classification for better targeting")

    if record.verification_status != VerificationStatus.ACTIVE:
        recommendations.append("Verify company information to increase trust score")

    return recommendations
