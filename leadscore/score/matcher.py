"""Binary attribute and keyword matching."""

from enum import Enum
from typing import Any, Optional

from leadscore.models import CRITERION_SPECS, CompanyRecord, CriterionKind, ScoringCriterion


def _normalize(value: Any) -> Optional[str]:
    """Comparable form of an attribute value, or None if it has none."""
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    text = str(value).strip().casefold()
    return text or None


class AttributeMatcher:
    """Evaluate one criterion against one company record.

    Matching is strictly binary: an exact case-insensitive equality for
    attribute criteria, a case-insensitive substring for keywords. Missing
    attributes never match.
    """

    def matches(self, record: CompanyRecord, criterion: ScoringCriterion) -> bool:
        target = _normalize(criterion.target_value)
        if target is None:
            return False

        spec = CRITERION_SPECS.get(criterion.key)
        if criterion.kind == CriterionKind.KEYWORD or (spec and spec.kind == CriterionKind.KEYWORD):
            return self._matches_keyword(record, target)

        if spec is None or spec.attribute is None:
            return False

        value = getattr(record, spec.attribute, None)
        if isinstance(value, (list, tuple, set, frozenset)):
            return any(_normalize(v) == target for v in value)
        return _normalize(value) == target

    def _matches_keyword(self, record: CompanyRecord, keyword: str) -> bool:
        """Substring match against name and registration number."""
        return any(keyword in text.casefold() for text in record.search_text)
