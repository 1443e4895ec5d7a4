"""Tests for attribute and keyword matching."""

import pytest

from leadscore.models import (
    CompanyRecord,
    CriterionKind,
    ScoringConfiguration,
    ScoringCriterion,
    ScoringOptions,
)
from leadscore.score.matcher import AttributeMatcher


def make_company(**kwargs) -> CompanyRecord:
    """Create test company with defaults."""
    defaults = {
        "name": "Siam Freight Co., Ltd.",
        "registration_number": "0105551234567",
        "industry": "Logistics",
        "province": "Bangkok",
        "company_size": "M",
        "verification_status": "Active",
    }
    defaults.update(kwargs)
    return CompanyRecord(**defaults)


def make_criterion(key: str, target, weight: float = 10) -> ScoringCriterion:
    kind = CriterionKind.KEYWORD if key == "keyword" else CriterionKind.MATCH
    return ScoringCriterion(key=key, kind=kind, target_value=target, weight=weight)


class TestAttributeMatching:
    """Tests for exact, case-insensitive attribute matching."""

    def test_exact_match(self):
        matcher = AttributeMatcher()
        assert matcher.matches(make_company(), make_criterion("industrial", "Logistics"))

    def test_case_insensitive(self):
        matcher = AttributeMatcher()
        assert matcher.matches(make_company(), make_criterion("province", "BANGKOK"))

    def test_surrounding_whitespace_ignored(self):
        matcher = AttributeMatcher()
        assert matcher.matches(make_company(), make_criterion("province", "  Bangkok "))

    def test_no_partial_credit(self):
        matcher = AttributeMatcher()
        assert not matcher.matches(make_company(), make_criterion("industrial", "Logist"))

    def test_different_value(self):
        matcher = AttributeMatcher()
        assert not matcher.matches(make_company(), make_criterion("province", "Phuket"))

    def test_enum_attribute(self):
        matcher = AttributeMatcher()
        assert matcher.matches(make_company(), make_criterion("company_size", "m"))
        assert matcher.matches(make_company(), make_criterion("verification_status", "active"))
        assert not matcher.matches(make_company(), make_criterion("company_size", "L"))

    def test_set_valued_industry(self):
        matcher = AttributeMatcher()
        company = make_company(industry=["Manufacturing", "Logistics"])
        assert matcher.matches(company, make_criterion("industrial", "logistics"))
        assert not matcher.matches(company, make_criterion("industrial", "Tourism"))

    @pytest.mark.parametrize("field,key", [
        ("industry", "industrial"),
        ("province", "province"),
        ("company_size", "company_size"),
        ("verification_status", "verification_status"),
    ])
    def test_missing_attribute_is_non_match(self, field, key):
        matcher = AttributeMatcher()
        company = make_company(**{field: None})
        assert not matcher.matches(company, make_criterion(key, "Logistics"))

    def test_empty_industry_list(self):
        matcher = AttributeMatcher()
        company = make_company(industry=[])
        assert not matcher.matches(company, make_criterion("industrial", "Logistics"))

    def test_missing_target_is_non_match(self):
        matcher = AttributeMatcher()
        assert not matcher.matches(make_company(), make_criterion("province", None))

    def test_unknown_key_is_non_match(self):
        matcher = AttributeMatcher()
        assert not matcher.matches(make_company(), make_criterion("revenue", "Bangkok"))

    def test_status_label_matches_through_both_inputs(self):
        matcher = AttributeMatcher()
        company = make_company(verification_status="Needs Verification")
        from_options = ScoringConfiguration.from_options(
            ScoringOptions(verification_status="Needs Verification")
        ).criteria[0]
        direct = ScoringCriterion.model_validate(
            {"key": "verification_status", "targetValue": "Needs Verification", "weight": 10}
        )
        assert direct.target_value == "NeedsVerification"
        assert matcher.matches(company, from_options)
        assert matcher.matches(company, direct)

    def test_status_label_left_alone_for_other_keys(self):
        criterion = make_criterion("keyword", "Needs Verification")
        assert criterion.target_value == "Needs Verification"


class TestKeywordMatching:
    """Tests for keyword substring matching."""

    def test_keyword_in_name(self):
        matcher = AttributeMatcher()
        assert matcher.matches(make_company(), make_criterion("keyword", "freight"))

    def test_keyword_in_registration_number(self):
        matcher = AttributeMatcher()
        assert matcher.matches(make_company(), make_criterion("keyword", "5551234"))

    def test_keyword_case_insensitive(self):
        matcher = AttributeMatcher()
        assert matcher.matches(make_company(), make_criterion("keyword", "SIAM FREIGHT"))

    def test_keyword_not_matched_against_industry(self):
        matcher = AttributeMatcher()
        assert not matcher.matches(make_company(), make_criterion("keyword", "logistics"))

    def test_keyword_without_registration_number(self):
        matcher = AttributeMatcher()
        company = make_company(registration_number=None)
        assert matcher.matches(company, make_criterion("keyword", "siam"))
        assert not matcher.matches(company, make_criterion("keyword", "0105"))

    def test_blank_keyword_is_non_match(self):
        matcher = AttributeMatcher()
        assert not matcher.matches(make_company(), make_criterion("keyword", "  "))
