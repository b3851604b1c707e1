"""
Pytest Configuration and Fixtures.

Provides reusable signal payloads and flag collections for engine tests.
"""

import pytest

from fraudrisk.engine import RiskFlag, RiskFlagCollection, RiskSignalCollection, SignalScope


# ============================================================================
# SIGNAL FIXTURES
# ============================================================================


@pytest.fixture
def signal_payload() -> dict:
    """Decoded upstream name → score map, including a zero score."""
    return {
        "device_risk": 0.8,
        "proxy": 0.6,
        "id_face_match_score": 0.9,
        "impossible_travel": 0.7,
        "tor": 0.0,
    }


@pytest.fixture
def signals() -> RiskSignalCollection:
    collection = RiskSignalCollection()
    collection.add_signal("device_risk", 0.8, SignalScope.DEVICE_NETWORK)
    collection.add_signal("proxy", 0.6, SignalScope.DEVICE_NETWORK)
    collection.add_signal("id_face_match", 0.9, SignalScope.DOCUMENT)
    collection.add_signal("impossible_travel", 0.7, SignalScope.REFERRING_SESSION)
    return collection


# ============================================================================
# FLAG FIXTURES
# ============================================================================


@pytest.fixture
def mixed_flags() -> RiskFlagCollection:
    """One flag of each severity band, blocking ones included."""
    return RiskFlagCollection([
        RiskFlag.PROXY_DETECTED,            # low
        RiskFlag.REPEAT_FACE,               # moderate
        RiskFlag.HIGH_DEVICE_RISK,          # high
        RiskFlag.LIKELY_FAKE_ID,            # high, blocking
        RiskFlag.KNOWN_FRAUD_FACE,          # critical, blocking
    ])


@pytest.fixture
def low_flags() -> RiskFlagCollection:
    return RiskFlagCollection([RiskFlag.PROXY_DETECTED, RiskFlag.VPN_DETECTED])
