"""
RiskSignal & Signal Registry Tests.
"""

import pytest

from fraudrisk.engine import RiskSignal, Score, SignalScope
from fraudrisk.exceptions import InvalidArgumentError, ScoreValidationError


class TestSignalScope:
    @pytest.mark.parametrize(
        "name,scope",
        [
            ("device_risk", SignalScope.DEVICE_NETWORK),
            ("id_face_match_score", SignalScope.DOCUMENT),
            ("impossible_travel", SignalScope.REFERRING_SESSION),
            ("multi_accounting", SignalScope.ACCOUNT),
            ("session_risk", SignalScope.SESSION),
            ("something_new", SignalScope.DEVICE_NETWORK),
        ],
    )
    def test_for_signal(self, name, scope):
        assert SignalScope.for_signal(name) is scope

    def test_scope_metadata(self):
        assert SignalScope.DOCUMENT.display_name == "Document Signals"
        assert SignalScope.DEVICE_NETWORK.color == "red"
        assert SignalScope.SESSION.description

    def test_coerce(self):
        assert SignalScope.coerce("document") is SignalScope.DOCUMENT
        assert SignalScope.coerce("REFERRING_SESSION") is SignalScope.REFERRING_SESSION
        assert SignalScope.coerce("nope") is None


class TestRiskSignal:
    def test_from_score_resolves_scope(self):
        signal = RiskSignal.from_score("id_face_match_score", 0.4)
        assert signal.scope is SignalScope.DOCUMENT
        assert signal.score == Score(0.4)

    def test_from_score_rejects_out_of_range(self):
        with pytest.raises(ScoreValidationError):
            RiskSignal.from_score("vpn", 1.5)

    def test_known_display_name_and_description(self):
        signal = RiskSignal.from_score("spoofed_ip", 0.3)
        assert signal.display_name == "Spoofed IP"
        assert signal.description == "IP address spoofing detected"

    def test_unknown_display_name_is_synthesized(self):
        signal = RiskSignal.from_score("emulator_cluster_hit", 0.3)
        assert signal.display_name == "Emulator Cluster Hit"
        assert signal.description == "Risk signal: emulator_cluster_hit"

    def test_scope_accepts_string(self):
        signal = RiskSignal(name="x", score=0.2, scope="session")
        assert signal.scope is SignalScope.SESSION
        assert isinstance(signal.score, Score)

    def test_unknown_scope_fails(self):
        with pytest.raises(InvalidArgumentError):
            RiskSignal(name="x", score=0.2, scope="galaxy")

    def test_is_flagged(self):
        assert RiskSignal.from_score("vpn", 0.5).is_flagged()
        assert not RiskSignal.from_score("vpn", 0.49).is_flagged()
        assert RiskSignal.from_score("vpn", 0.3).is_flagged(threshold=0.2)

    def test_to_dict(self):
        record = RiskSignal.from_score("vpn", 0.25).to_dict()
        assert record == {
            "name": "vpn",
            "score": 0.25,
            "scope": "device_network",
            "display_name": "VPN",
            "description": "VPN usage detected",
        }

    def test_immutable(self):
        signal = RiskSignal.from_score("vpn", 0.25)
        with pytest.raises(AttributeError):
            signal.name = "proxy"
