"""
Decision Policy Tests.

Recommendation ladder: block > review > monitor > approve.
"""

import pytest
from hypothesis import given, settings as hyp_settings
from hypothesis import strategies as st

from fraudrisk.engine import RiskFlag, RiskFlagCollection, RiskLevel
from fraudrisk.schemas import Recommendation

flag_lists = st.lists(st.sampled_from(list(RiskFlag)), max_size=15)


class TestRecommendation:
    """Test the strict priority order of the decision policy."""

    def test_empty_approves(self):
        assert RiskFlagCollection().get_recommendation() == "approve"

    def test_low_flag_monitors(self):
        collection = RiskFlagCollection([RiskFlag.PROXY_DETECTED])
        assert collection.get_recommendation() is Recommendation.MONITOR

    def test_moderate_flag_monitors(self):
        collection = RiskFlagCollection([RiskFlag.REPEAT_ID, RiskFlag.VPN_DETECTED])
        assert collection.get_recommendation() == "monitor"

    def test_high_flag_reviews(self):
        collection = RiskFlagCollection([RiskFlag.HIGH_DEVICE_RISK])
        assert collection.get_recommendation() == "review"

    def test_blocking_flag_blocks(self):
        collection = RiskFlagCollection([RiskFlag.LIKELY_FAKE_ID])
        assert collection.get_recommendation() == "block"

    def test_blocking_dominates_lower_severity(self):
        collection = RiskFlagCollection.from_values([
            "proxy_detected", "repeat_face", "high_device_risk", "likely_fake_id",
        ])
        assert collection.get_recommendation() == "block"

    def test_recommendation_from_raw_upstream_values(self):
        collection = RiskFlagCollection.from_values(["vpn_detected", "something_new_upstream"])
        assert collection.get_recommendation() == "monitor"


class TestRecommendationPropertyBased:
    @given(flags=flag_lists)
    @hyp_settings(max_examples=100)
    def test_ladder(self, flags):
        collection = RiskFlagCollection(flags)
        recommendation = collection.get_recommendation()
        if any(f.should_block for f in flags):
            assert recommendation == "block"
        elif any(f.risk_level in (RiskLevel.HIGH, RiskLevel.CRITICAL) for f in flags):
            assert recommendation == "review"
        elif flags:
            assert recommendation == "monitor"
        else:
            assert recommendation == "approve"

    @given(flags=flag_lists)
    @hyp_settings(max_examples=100)
    def test_low_and_high_risk_are_exclusive_when_non_empty(self, flags):
        collection = RiskFlagCollection(flags)
        if flags:
            assert not (collection.is_low_risk() and collection.is_high_risk())
        assert collection.is_high_risk() == (collection.get_recommendation() in ("block", "review"))

    @given(a=flag_lists, b=flag_lists)
    @hyp_settings(max_examples=100)
    def test_inclusion_exclusion(self, a, b):
        left = RiskFlagCollection(a).unique_flags()
        right = RiskFlagCollection(b).unique_flags()
        union = left.merge_flags(right)
        intersection = left.intersect_flags(right)
        assert len(union) == len(left) + len(right) - len(intersection)
        assert len(left.diff_flags(right)) == len(left) - len(intersection)

    @given(flags=flag_lists, limit=st.integers(min_value=0, max_value=20))
    @hyp_settings(max_examples=100)
    def test_most_severe_length_and_blocking_first(self, flags, limit):
        ranked = RiskFlagCollection(flags).get_most_severe(limit)
        assert len(ranked) == min(limit, len(flags))
        blocking = [f.should_block for f in ranked]
        assert blocking == sorted(blocking, reverse=True)

    @given(flags=flag_lists)
    @hyp_settings(max_examples=100)
    def test_values_round_trip(self, flags):
        collection = RiskFlagCollection(flags)
        assert RiskFlagCollection.from_values(collection.to_values()) == collection

    @given(flags=flag_lists)
    @hyp_settings(max_examples=50)
    def test_distribution_counts_every_flag(self, flags):
        distribution = RiskFlagCollection(flags).get_risk_level_distribution()
        assert set(distribution) == {"low", "moderate", "high", "critical", "unknown"}
        assert sum(distribution.values()) == len(flags)
        assert distribution["unknown"] == 0
