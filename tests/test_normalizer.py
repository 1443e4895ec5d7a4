"""Tests for criteria normalization."""

import pytest

from leadscore.models import CriterionKind, ScoringConfiguration, ScoringCriterion, ScoringOptions
from leadscore.score.normalizer import (
    NO_ACTIVE_CRITERIA,
    ConfigurationError,
    CriteriaNormalizer,
    clamp_weight,
)


def make_criterion(key: str, target, weight: float, kind=None) -> ScoringCriterion:
    """Create a test criterion."""
    if kind is None:
        kind = CriterionKind.KEYWORD if key == "keyword" else CriterionKind.MATCH
    return ScoringCriterion(key=key, kind=kind, target_value=target, weight=weight)


def make_config(*criteria, threshold: int = 0) -> ScoringConfiguration:
    return ScoringConfiguration(criteria=list(criteria), minimum_score_threshold=threshold)


class TestActiveCriteria:
    """Tests for deciding which criteria are active."""

    def test_target_and_weight_is_active(self):
        result = CriteriaNormalizer().normalize(
            make_config(make_criterion("industrial", "Logistics", 35))
        )
        assert [c.key for c in result.active] == ["industrial"]
        assert result.error is None

    def test_zero_weight_is_inactive(self):
        result = CriteriaNormalizer().normalize(
            make_config(make_criterion("industrial", "Logistics", 0))
        )
        assert result.active == []
        assert "industrial" in result.skipped

    def test_negative_weight_is_inactive(self):
        result = CriteriaNormalizer().normalize(
            make_config(make_criterion("province", "Bangkok", -10))
        )
        assert result.active == []

    def test_missing_target_is_inactive(self):
        result = CriteriaNormalizer().normalize(
            make_config(make_criterion("province", None, 20))
        )
        assert result.active == []

    def test_blank_keyword_is_inactive(self):
        result = CriteriaNormalizer().normalize(
            make_config(make_criterion("keyword", "   ", 25))
        )
        assert result.active == []

    def test_unknown_key_is_skipped(self):
        result = CriteriaNormalizer().normalize(
            make_config(
                make_criterion("revenue", "1M", 20),
                make_criterion("province", "Bangkok", 20),
            )
        )
        assert [c.key for c in result.active] == ["province"]
        assert "revenue" in result.skipped

    def test_duplicate_key_keeps_first(self):
        result = CriteriaNormalizer().normalize(
            make_config(
                make_criterion("province", "Bangkok", 20),
                make_criterion("province", "Phuket", 40),
            )
        )
        assert len(result.active) == 1
        assert result.active[0].target_value == "Bangkok"

    def test_order_is_preserved(self):
        result = CriteriaNormalizer().normalize(
            make_config(
                make_criterion("province", "Bangkok", 20),
                make_criterion("keyword", "siam", 10),
                make_criterion("industrial", "Logistics", 35),
            )
        )
        assert [c.key for c in result.active] == ["province", "keyword", "industrial"]

    def test_kind_follows_spec_table(self):
        result = CriteriaNormalizer().normalize(
            make_config(make_criterion("keyword", "siam", 10, kind=CriterionKind.MATCH))
        )
        assert result.active[0].kind == CriterionKind.KEYWORD


class TestWeightClamping:
    """Tests for clamping weights to per-criterion maxima."""

    def test_keyword_clamped_to_50(self):
        result = CriteriaNormalizer().normalize(
            make_config(make_criterion("keyword", "siam", 80))
        )
        assert result.active[0].weight == 50

    def test_company_size_clamped_to_30(self):
        result = CriteriaNormalizer().normalize(
            make_config(make_criterion("company_size", "M", 45))
        )
        assert result.active[0].weight == 30

    def test_verification_status_clamped_to_20(self):
        result = CriteriaNormalizer().normalize(
            make_config(make_criterion("verification_status", "Active", 50))
        )
        assert result.active[0].weight == 20

    def test_weight_within_bounds_untouched(self):
        result = CriteriaNormalizer().normalize(
            make_config(make_criterion("industrial", "Logistics", 35))
        )
        assert result.active[0].weight == 35

    def test_clamp_weight_handles_junk(self):
        assert clamp_weight(float("nan"), 50) == 0.0
        assert clamp_weight(None, 50) == 0.0
        assert clamp_weight("abc", 50) == 0.0
        assert clamp_weight(12.5, 50) == 12.5

    def test_input_configuration_not_mutated(self):
        config = make_config(make_criterion("keyword", "siam", 80))
        CriteriaNormalizer().normalize(config)
        assert config.criteria[0].weight == 80


class TestTotalsAndThreshold:
    """Tests for informational totals and threshold handling."""

    def test_total_active_weight(self):
        result = CriteriaNormalizer().normalize(
            make_config(
                make_criterion("industrial", "Logistics", 35),
                make_criterion("province", "Bangkok", 25),
                make_criterion("company_size", "M", 0),
            )
        )
        assert result.total_active_weight == 60

    def test_weights_need_not_sum_to_100(self):
        result = CriteriaNormalizer().normalize(
            make_config(make_criterion("industrial", "Logistics", 10))
        )
        assert result.total_active_weight == 10
        assert result.error is None

    def test_threshold_clamped(self):
        normalizer = CriteriaNormalizer()
        assert normalizer.normalize(make_config(threshold=150)).minimum_score_threshold == 100
        assert normalizer.normalize(make_config(threshold=-5)).minimum_score_threshold == 0
        assert normalizer.normalize(make_config(threshold=55)).minimum_score_threshold == 55


class TestNoActiveCriteria:
    """Tests for the NO_ACTIVE_CRITERIA signal."""

    def test_empty_configuration_signals_error(self):
        result = CriteriaNormalizer().normalize(ScoringConfiguration())
        assert result.error_code == NO_ACTIVE_CRITERIA
        assert not result.has_active_criteria

    def test_error_is_returned_not_raised(self):
        # Must not raise
        result = CriteriaNormalizer().normalize(
            make_config(make_criterion("industrial", None, 0))
        )
        assert isinstance(result.error, ConfigurationError)

    def test_require_active_raises(self):
        result = CriteriaNormalizer().normalize(ScoringConfiguration())
        with pytest.raises(ConfigurationError) as exc_info:
            result.require_active()
        assert exc_info.value.code == NO_ACTIVE_CRITERIA

    def test_require_active_passes_through(self):
        result = CriteriaNormalizer().normalize(
            make_config(make_criterion("keyword", "siam", 10))
        )
        assert result.require_active() is result


class TestDescribe:
    """Tests for the active criteria preview."""

    def test_describe_lines(self):
        result = CriteriaNormalizer().normalize(
            make_config(
                make_criterion("keyword", "siam", 20),
                make_criterion("industrial", "Logistics", 35),
            )
        )
        lines = result.describe()
        assert lines[0] == 'Keyword contains "siam" (weight 20)'
        assert lines[1] == "Industrial = Logistics (weight 35)"
        assert "normalized" in lines[2]

    def test_describe_no_hint_at_100(self):
        result = CriteriaNormalizer().normalize(
            make_config(
                make_criterion("industrial", "Logistics", 50),
                make_criterion("province", "Bangkok", 50),
            )
        )
        assert len(result.describe()) == 2

    def test_describe_empty(self):
        assert CriteriaNormalizer().normalize(ScoringConfiguration()).describe() == []


class TestFromOptions:
    """Tests for converting panel options into a configuration."""

    def test_options_in_spec_order(self):
        options = ScoringOptions(
            verification_status="Active",
            verification_status_weight=10,
            keyword="siam",
            keyword_weight=20,
        )
        config = ScoringConfiguration.from_options(options)
        assert [c.key for c in config.criteria] == ["keyword", "verification_status"]
        assert config.criteria[1].target_value == "Active"

    def test_target_without_weight_uses_default(self):
        config = ScoringConfiguration.from_options(ScoringOptions(province="Bangkok"))
        assert config.criteria[0].weight == 20

    def test_camel_case_aliases(self):
        options = ScoringOptions.model_validate({
            "industrial": "Logistics",
            "industrialWeight": 35,
            "companySize": "M",
            "companySizeWeight": 10,
            "minimumScoreThreshold": 40,
        })
        config = ScoringConfiguration.from_options(options)
        assert config.minimum_score_threshold == 40
        assert config.criteria[1].key == "company_size"
        assert config.criteria[1].target_value == "M"

    def test_status_label_with_space(self):
        options = ScoringOptions.model_validate({"verificationStatus": "Needs Verification"})
        config = ScoringConfiguration.from_options(options)
        assert config.criteria[0].target_value == "NeedsVerification"

    def test_weight_only_option_is_inactive(self):
        config = ScoringConfiguration.from_options(ScoringOptions(province_weight=20))
        result = CriteriaNormalizer().normalize(config)
        assert result.active == []
