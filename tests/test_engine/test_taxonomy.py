"""
Risk Flag Taxonomy Tests.
"""

import pytest

from fraudrisk.engine import FLAG_REGISTRY, RiskCategory, RiskFlag, RiskLevel


class TestFlagRegistry:
    """The registry is total and consistent."""

    def test_every_flag_has_metadata(self):
        for flag in RiskFlag:
            meta = FLAG_REGISTRY[flag]
            assert meta.categories
            assert meta.display_name
            assert meta.description
            assert meta.level is not RiskLevel.UNKNOWN

    def test_primary_category_is_first(self):
        assert RiskFlag.ID_AGE_BELOW_16.category is RiskCategory.ID_FRAUD
        assert RiskCategory.COPPA in RiskFlag.ID_AGE_BELOW_16.categories

    def test_blocking_flags(self):
        assert set(RiskFlag.blocking_flags()) == {
            RiskFlag.LIKELY_FAKE_ID,
            RiskFlag.LOW_ID_FACE_MATCH_SCORE,
            RiskFlag.KNOWN_FRAUD_FACE,
            RiskFlag.KNOWN_FRAUD_ID,
        }

    def test_blocking_flags_are_high_or_critical(self):
        for flag in RiskFlag.blocking_flags():
            assert flag.risk_level in (RiskLevel.HIGH, RiskLevel.CRITICAL)

    def test_known_levels(self):
        assert RiskFlag.PROXY_DETECTED.risk_level is RiskLevel.LOW
        assert RiskFlag.HIGH_DEVICE_RISK.risk_level is RiskLevel.HIGH
        assert RiskFlag.KNOWN_FRAUD_ID.risk_level is RiskLevel.CRITICAL
        assert RiskFlag.REPEAT_FACE.risk_level is RiskLevel.MODERATE


class TestRiskFlagLookup:
    def test_values_are_machine_values(self):
        assert "high_device_risk" in RiskFlag.values()
        assert len(RiskFlag.values()) == len(RiskFlag)

    def test_from_value(self):
        assert RiskFlag.from_value("vpn_detected") is RiskFlag.VPN_DETECTED
        assert RiskFlag.from_value("not_a_flag") is None
        assert RiskFlag.from_value(42) is None

    @pytest.mark.parametrize("name", ["HighDeviceRisk", "highdevicerisk", "HIGH_DEVICE_RISK"])
    def test_from_name_is_case_insensitive(self, name):
        assert RiskFlag.from_name(name) is RiskFlag.HIGH_DEVICE_RISK

    def test_from_name_unknown(self):
        assert RiskFlag.from_name("NotAFlag") is None

    def test_variant_name(self):
        assert RiskFlag.HIGH_DEVICE_RISK.variant_name == "HighDeviceRisk"
        assert RiskFlag.ID_AGE_BELOW_16.variant_name == "IdAgeBelow16"

    def test_by_category(self):
        network = RiskFlag.by_category("network")
        assert RiskFlag.PROXY_DETECTED in network
        assert RiskFlag.HIGH_DEVICE_RISK not in network

    def test_by_risk_level(self):
        critical = RiskFlag.by_risk_level(RiskLevel.CRITICAL)
        assert set(critical) == {RiskFlag.KNOWN_FRAUD_FACE, RiskFlag.KNOWN_FRAUD_ID}

    def test_category_flags(self):
        assert RiskCategory.FRAUD_FARM.flags() == [RiskFlag.KNOWN_FRAUD_FACE, RiskFlag.KNOWN_FRAUD_ID]


class TestEnumCoercion:
    def test_level_from_value_and_name(self):
        assert RiskLevel.coerce("HIGH") is RiskLevel.HIGH
        assert RiskLevel.coerce(" moderate ") is RiskLevel.MODERATE
        assert RiskLevel.coerce("extreme") is None

    def test_category_from_name_variants(self):
        assert RiskCategory.coerce("MultiAccounting") is RiskCategory.MULTI_ACCOUNTING
        assert RiskCategory.coerce("multi_accounting") is RiskCategory.MULTI_ACCOUNTING

    def test_severity_order(self):
        ranks = [level.severity for level in (
            RiskLevel.UNKNOWN, RiskLevel.LOW, RiskLevel.MODERATE, RiskLevel.HIGH, RiskLevel.CRITICAL,
        )]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == 5
