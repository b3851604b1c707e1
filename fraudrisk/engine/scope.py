"""
Signal Scope & Signal Registry.

Static lookup tables for continuous risk signals:
  - which scope a known signal name belongs to
  - its display name and description
  - per-scope display name, description and UI color

Unknown signal names are valid: they default to DEVICE_NETWORK scope and
get a synthesized display name / description from RiskSignal.
"""

from enum import StrEnum
from types import MappingProxyType
from typing import Any, Optional

from fraudrisk.exceptions import InvalidArgumentError


class SignalScope(StrEnum):
    DEVICE_NETWORK = "device_network"
    DOCUMENT = "document"
    REFERRING_SESSION = "referring_session"
    ACCOUNT = "account"
    SESSION = "session"

    @classmethod
    def values(cls) -> list[str]:
        return [scope.value for scope in cls]

    @classmethod
    def names(cls) -> list[str]:
        return [scope.name for scope in cls]

    @classmethod
    def coerce(cls, value: Any) -> Optional["SignalScope"]:
        """Member for an enum or a value / name string; None if unrecognized."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidArgumentError.wrong_type("SignalScope or str", value)
        token = value.strip().lower()
        for scope in cls:
            if token in (scope.value, scope.name.lower()):
                return scope
        return None

    @classmethod
    def for_signal(cls, name: str) -> "SignalScope":
        """Scope of a known signal name; DEVICE_NETWORK otherwise."""
        return SIGNAL_SCOPES.get(name, cls.DEVICE_NETWORK)

    @property
    def display_name(self) -> str:
        return _SCOPE_INFO[self][0]

    @property
    def description(self) -> str:
        return _SCOPE_INFO[self][1]

    @property
    def color(self) -> str:
        return _SCOPE_INFO[self][2]


_SCOPE_INFO: dict[SignalScope, tuple[str, str, str]] = {
    SignalScope.DEVICE_NETWORK: (
        "Device & Network Signals",
        "Device fingerprinting, network risk, proxy/VPN detection, and location spoofing",
        "red",
    ),
    SignalScope.DOCUMENT: (
        "Document Signals",
        "ID document authenticity, validity, face matching, and document-specific signals",
        "blue",
    ),
    SignalScope.REFERRING_SESSION: (
        "Referring Session Signals",
        "Cross-session analysis including impossible travel and session mismatches",
        "orange",
    ),
    SignalScope.ACCOUNT: (
        "Account Signals",
        "Account-level risk assessment and persistent identity signals",
        "green",
    ),
    SignalScope.SESSION: (
        "Session Signals",
        "Session-level risk assessment and temporary interaction signals",
        "purple",
    ),
}


# ── Signal registry ───────────────────────────────────────────────────────
# name → (scope, display name, description)

_SIGNALS: dict[str, tuple[SignalScope, str, str]] = {
    # Device & network
    "device_risk": (SignalScope.DEVICE_NETWORK, "Device Risk", "Overall device risk assessment"),
    "proxy": (SignalScope.DEVICE_NETWORK, "Proxy", "Connection through proxy server detected"),
    "vpn": (SignalScope.DEVICE_NETWORK, "VPN", "VPN usage detected"),
    "datacenter": (SignalScope.DEVICE_NETWORK, "Datacenter", "Connection from datacenter IP address"),
    "tor": (SignalScope.DEVICE_NETWORK, "Tor", "Connection through Tor network"),
    "spoofed_ip": (SignalScope.DEVICE_NETWORK, "Spoofed IP", "IP address spoofing detected"),
    "recent_fraud_ip": (
        SignalScope.DEVICE_NETWORK, "Recent Fraud IP", "IP address recently associated with fraud",
    ),
    "device_network_mismatch": (
        SignalScope.DEVICE_NETWORK, "Device Network Mismatch", "Device and network information mismatch",
    ),
    "location_spoofing": (SignalScope.DEVICE_NETWORK, "Location Spoofing", "Location spoofing detected"),

    # Document
    "id_age": (SignalScope.DOCUMENT, "ID Age", "Age of the identity document"),
    "id_face_match_score": (
        SignalScope.DOCUMENT, "ID Face Match Score", "Face match score between selfie and ID",
    ),
    "id_barcode_status": (SignalScope.DOCUMENT, "ID Barcode Status", "Status of ID barcode verification"),
    "id_face_status": (SignalScope.DOCUMENT, "ID Face Status", "Status of face on ID document"),
    "id_text_status": (SignalScope.DOCUMENT, "ID Text Status", "Status of text on ID document"),
    "is_id_digital_spoof": (
        SignalScope.DOCUMENT, "ID Digital Spoof", "Whether ID appears to be digitally spoofed",
    ),
    "is_full_id_captured": (SignalScope.DOCUMENT, "Full ID Captured", "Whether full ID was captured"),
    "id_validity": (SignalScope.DOCUMENT, "ID Validity", "Overall validity of the ID document"),

    # Referring session
    "impossible_travel": (
        SignalScope.REFERRING_SESSION, "Impossible Travel", "Impossible travel pattern detected",
    ),
    "ip_mismatch": (SignalScope.REFERRING_SESSION, "IP Mismatch", "IP address mismatch between sessions"),
    "user_agent_mismatch": (
        SignalScope.REFERRING_SESSION, "User Agent Mismatch", "User agent mismatch between sessions",
    ),
    "device_timezone_mismatch": (
        SignalScope.REFERRING_SESSION, "Device Timezone Mismatch", "Device timezone mismatch",
    ),
    "ip_timezone_mismatch": (SignalScope.REFERRING_SESSION, "IP Timezone Mismatch", "IP timezone mismatch"),

    # Account
    "account_score": (SignalScope.ACCOUNT, "Account Score", "Overall account-level risk score"),
    "multi_accounting": (
        SignalScope.ACCOUNT, "Multi Accounting", "Likelihood the user controls multiple accounts",
    ),
    "bot": (SignalScope.ACCOUNT, "Bot", "Likelihood the account is automated"),

    # Session
    "session_risk": (SignalScope.SESSION, "Session Risk", "Session-level risk assessment"),
}

SIGNAL_SCOPES: MappingProxyType[str, SignalScope] = MappingProxyType(
    {name: entry[0] for name, entry in _SIGNALS.items()}
)
SIGNAL_DISPLAY_NAMES: MappingProxyType[str, str] = MappingProxyType(
    {name: entry[1] for name, entry in _SIGNALS.items()}
)
SIGNAL_DESCRIPTIONS: MappingProxyType[str, str] = MappingProxyType(
    {name: entry[2] for name, entry in _SIGNALS.items()}
)
