"""
Risk Flag Taxonomy — closed flag enumeration plus its authoritative metadata.

Every RiskFlag resolves to exactly one FlagMetadata entry in FLAG_REGISTRY:
  - categories:   which risk categories the flag belongs to (primary first)
  - level:        severity band (low | moderate | high | critical)
  - blocking:     whether the flag alone forces a "block" recommendation
  - display_name: human-readable label
  - description:  one-line explanation

The registry is checked for totality at import time, so no flag can ever
resolve to missing metadata.
"""

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Optional

from fraudrisk.exceptions import InvalidArgumentError


def _coerce_member(enum_cls, value: Any, expected: str):
    """Resolve an enum member from a member, a value or a name (case-insensitive)."""
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise InvalidArgumentError.wrong_type(expected, value)
    token = value.strip().lower()
    folded = token.replace("_", "")
    for member in enum_cls:
        if member.value == token or member.name.replace("_", "").lower() == folded:
            return member
    return None


# ── Severity ──────────────────────────────────────────────────────────────


class RiskLevel(StrEnum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"
    UNKNOWN = "unknown"  # distribution bucket only, never assigned to a flag

    @classmethod
    def values(cls) -> list[str]:
        return [level.value for level in cls]

    @classmethod
    def coerce(cls, value: Any) -> Optional["RiskLevel"]:
        """Member for an enum / value / name; None for an unknown string."""
        return _coerce_member(cls, value, "RiskLevel or str")

    @classmethod
    def from_score(cls, score: float) -> "RiskLevel":
        """Map a 0-1 score onto a severity band."""
        if score >= 0.9:
            return cls.CRITICAL
        elif score >= 0.7:
            return cls.HIGH
        elif score >= 0.4:
            return cls.MODERATE
        elif score > 0:
            return cls.LOW
        return cls.UNKNOWN

    @property
    def severity(self) -> int:
        """Ordinal rank, higher is more severe."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK: dict[RiskLevel, int] = {
    RiskLevel.UNKNOWN: 0,
    RiskLevel.LOW: 1,
    RiskLevel.MODERATE: 2,
    RiskLevel.HIGH: 3,
    RiskLevel.CRITICAL: 4,
}


# ── Categories ────────────────────────────────────────────────────────────


class RiskCategory(StrEnum):
    DEVICE = "device"
    NETWORK = "network"
    IMPERSONATION = "impersonation"
    MULTI_ACCOUNTING = "multi_accounting"
    ID_SELLING = "id_selling"
    ID_FRAUD = "id_fraud"
    FACE_MATCH = "face_match"
    FRAUD_FARM = "fraud_farm"
    COPPA = "coppa"

    @classmethod
    def values(cls) -> list[str]:
        return [category.value for category in cls]

    @classmethod
    def coerce(cls, value: Any) -> Optional["RiskCategory"]:
        """Member for an enum / value / name; None for an unknown string."""
        return _coerce_member(cls, value, "RiskCategory or str")

    def flags(self) -> list["RiskFlag"]:
        """Every flag that belongs to this category, in declaration order."""
        return [flag for flag in RiskFlag if self in FLAG_REGISTRY[flag].categories]


# ── Flags ─────────────────────────────────────────────────────────────────


class RiskFlag(StrEnum):
    # Device
    HIGH_DEVICE_RISK = "high_device_risk"
    REPEAT_DEVICE = "repeat_device"

    # Network
    PROXY_DETECTED = "proxy_detected"
    VPN_DETECTED = "vpn_detected"
    DATACENTER_DETECTED = "datacenter_detected"
    RECENT_FRAUD_IP = "recent_fraud_ip"

    # ID fraud
    CANNOT_CONFIRM_ID_IS_AUTHENTIC = "cannot_confirm_id_is_authentic"
    LIKELY_FAKE_ID = "likely_fake_id"
    ID_EXPIRED = "id_expired"
    ID_AGE_BELOW_16 = "id_age_below_16"

    # Face match
    LOW_ID_FACE_MATCH_SCORE = "low_id_face_match_score"
    MODERATE_ID_FACE_MATCH_SCORE = "moderate_id_face_match_score"

    # Multi-accounting
    REPEAT_FACE = "repeat_face"
    REPEAT_ID = "repeat_id"

    # Fraud farm
    KNOWN_FRAUD_FACE = "known_fraud_face"
    KNOWN_FRAUD_ID = "known_fraud_id"

    # ID selling
    IMPOSSIBLE_TRAVEL_DETECTED = "impossible_travel_detected"
    IP_DOCUMENT_COUNTRY_MISMATCH = "ip_document_country_mismatch"
    LOCATION_SPOOFING = "location_spoofing"

    # Impersonation / referring session
    DIFFERENT_DEVICE_TYPE_SAME_CATEGORY = "different_device_type_same_category"
    SAME_DEVICE_TYPE_DIFFERENT_IP = "same_device_type_different_ip"
    POTENTIAL_LINK_SHARING = "potential_link_sharing"
    REFERRING_IP_MISMATCH = "referring_ip_mismatch"
    REFERRING_USER_AGENT_MISMATCH = "referring_user_agent_mismatch"
    REFERRING_DEVICE_TIMEZONE_MISMATCH = "referring_device_timezone_mismatch"
    REFERRING_IP_TIMEZONE_MISMATCH = "referring_ip_timezone_mismatch"

    # ── Lookup helpers ──

    @classmethod
    def values(cls) -> list[str]:
        return [flag.value for flag in cls]

    @classmethod
    def from_value(cls, value: Any) -> Optional["RiskFlag"]:
        """Flag for an exact machine value, or None."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def from_name(cls, name: Any) -> Optional["RiskFlag"]:
        """
        Flag for a variant name, case-insensitive.

        "HighDeviceRisk", "HIGH_DEVICE_RISK" and "highDeviceRisk" all
        resolve to HIGH_DEVICE_RISK.
        """
        if not isinstance(name, str):
            return None
        return _FLAGS_BY_FOLDED_NAME.get(name.strip().replace("_", "").lower())

    @classmethod
    def by_category(cls, category: RiskCategory | str) -> list["RiskFlag"]:
        resolved = RiskCategory.coerce(category)
        return [flag for flag in cls if resolved in flag.categories]

    @classmethod
    def by_risk_level(cls, level: RiskLevel | str) -> list["RiskFlag"]:
        resolved = RiskLevel.coerce(level)
        return [flag for flag in cls if flag.risk_level is resolved]

    @classmethod
    def blocking_flags(cls) -> list["RiskFlag"]:
        return [flag for flag in cls if flag.should_block]

    # ── Metadata accessors ──

    @property
    def metadata(self) -> "FlagMetadata":
        return FLAG_REGISTRY[self]

    @property
    def variant_name(self) -> str:
        """PascalCase variant name as used by upstream SDKs, e.g. "HighDeviceRisk"."""
        return "".join(part.capitalize() for part in self.name.split("_"))

    @property
    def categories(self) -> tuple[RiskCategory, ...]:
        return FLAG_REGISTRY[self].categories

    @property
    def category(self) -> RiskCategory:
        return FLAG_REGISTRY[self].category

    @property
    def risk_level(self) -> RiskLevel:
        return FLAG_REGISTRY[self].level

    @property
    def should_block(self) -> bool:
        return FLAG_REGISTRY[self].blocking

    @property
    def display_name(self) -> str:
        return FLAG_REGISTRY[self].display_name

    @property
    def description(self) -> str:
        return FLAG_REGISTRY[self].description


@dataclass(frozen=True)
class FlagMetadata:
    """Static classification of one risk flag."""
    categories: tuple[RiskCategory, ...]
    level: RiskLevel
    blocking: bool
    display_name: str
    description: str

    @property
    def category(self) -> RiskCategory:
        """Primary category."""
        return self.categories[0]


# ── Registry ──────────────────────────────────────────────────────────────

_C = RiskCategory
_L = RiskLevel

FLAG_REGISTRY: MappingProxyType[RiskFlag, FlagMetadata] = MappingProxyType({
    # Device
    RiskFlag.HIGH_DEVICE_RISK: FlagMetadata(
        (_C.DEVICE,), _L.HIGH, False,
        "High Device Risk", "Device likely emulator, VM",
    ),
    RiskFlag.REPEAT_DEVICE: FlagMetadata(
        (_C.DEVICE, _C.MULTI_ACCOUNTING), _L.LOW, False,
        "Repeat Device", "Device has been used for multiple ID Checks",
    ),

    # Network
    RiskFlag.PROXY_DETECTED: FlagMetadata(
        (_C.NETWORK,), _L.LOW, False,
        "Proxy Detected", "ID Check on a proxy IP",
    ),
    RiskFlag.VPN_DETECTED: FlagMetadata(
        (_C.NETWORK,), _L.LOW, False,
        "VPN Detected", "ID Check on a VPN",
    ),
    RiskFlag.DATACENTER_DETECTED: FlagMetadata(
        (_C.NETWORK,), _L.LOW, False,
        "Datacenter Detected", "ID Check on a datacenter IP",
    ),
    RiskFlag.RECENT_FRAUD_IP: FlagMetadata(
        (_C.NETWORK,), _L.MODERATE, False,
        "Recent Fraud IP", "IP recently reported as fraud",
    ),

    # ID fraud
    RiskFlag.CANNOT_CONFIRM_ID_IS_AUTHENTIC: FlagMetadata(
        (_C.ID_FRAUD, _C.IMPERSONATION), _L.MODERATE, False,
        "Cannot Confirm ID is Authentic", "ID may be spoofed or digital media",
    ),
    RiskFlag.LIKELY_FAKE_ID: FlagMetadata(
        (_C.ID_FRAUD, _C.IMPERSONATION), _L.HIGH, True,
        "Likely Fake ID", "ID very likely fake",
    ),
    RiskFlag.ID_EXPIRED: FlagMetadata(
        (_C.ID_FRAUD, _C.IMPERSONATION), _L.LOW, False,
        "ID Expired", "ID Expiration date is past",
    ),
    RiskFlag.ID_AGE_BELOW_16: FlagMetadata(
        (_C.ID_FRAUD, _C.IMPERSONATION, _C.COPPA), _L.LOW, False,
        "ID Age Below 16", "DOB on ID indicates user is below 16 years old",
    ),

    # Face match
    RiskFlag.LOW_ID_FACE_MATCH_SCORE: FlagMetadata(
        (_C.FACE_MATCH, _C.ID_FRAUD), _L.HIGH, True,
        "Low ID Face Match Score", "Face does not match ID Photo",
    ),
    RiskFlag.MODERATE_ID_FACE_MATCH_SCORE: FlagMetadata(
        (_C.FACE_MATCH, _C.ID_FRAUD), _L.MODERATE, False,
        "Moderate ID Face Match Score", "Face may not match ID photo",
    ),

    # Multi-accounting
    RiskFlag.REPEAT_FACE: FlagMetadata(
        (_C.MULTI_ACCOUNTING,), _L.MODERATE, False,
        "Repeat Face", "Face has been seen in your application under a different account",
    ),
    RiskFlag.REPEAT_ID: FlagMetadata(
        (_C.MULTI_ACCOUNTING,), _L.MODERATE, False,
        "Repeat ID", "ID has been seen in your application under a different account",
    ),

    # Fraud farm
    RiskFlag.KNOWN_FRAUD_FACE: FlagMetadata(
        (_C.FRAUD_FARM,), _L.CRITICAL, True,
        "Known Fraud Face", "Face is associated with fraud",
    ),
    RiskFlag.KNOWN_FRAUD_ID: FlagMetadata(
        (_C.FRAUD_FARM,), _L.CRITICAL, True,
        "Known Fraud ID", "ID is associated with fraud",
    ),

    # ID selling
    RiskFlag.IMPOSSIBLE_TRAVEL_DETECTED: FlagMetadata(
        (_C.ID_SELLING, _C.IMPERSONATION), _L.MODERATE, False,
        "Impossible Travel Detected",
        "Referring session geolocation is far from ID Check geolocation",
    ),
    RiskFlag.IP_DOCUMENT_COUNTRY_MISMATCH: FlagMetadata(
        (_C.ID_SELLING,), _L.LOW, False,
        "IP Document Country Mismatch",
        "Current IP geolocation country does not match document geolocation",
    ),
    RiskFlag.LOCATION_SPOOFING: FlagMetadata(
        (_C.ID_SELLING, _C.IMPERSONATION), _L.MODERATE, False,
        "Location Spoofing", "User is actively trying to obfuscate their current location",
    ),

    # Impersonation / referring session
    RiskFlag.DIFFERENT_DEVICE_TYPE_SAME_CATEGORY: FlagMetadata(
        (_C.IMPERSONATION,), _L.LOW, False,
        "Different Device Type Same Category",
        "Referring session used a different device type of the same category",
    ),
    RiskFlag.SAME_DEVICE_TYPE_DIFFERENT_IP: FlagMetadata(
        (_C.IMPERSONATION,), _L.LOW, False,
        "Same Device Type Different IP",
        "Referring session used the same device type from a different IP",
    ),
    RiskFlag.POTENTIAL_LINK_SHARING: FlagMetadata(
        (_C.IMPERSONATION, _C.ID_SELLING), _L.MODERATE, False,
        "Potential Link Sharing", "Verification link appears to have been shared with another person",
    ),
    RiskFlag.REFERRING_IP_MISMATCH: FlagMetadata(
        (_C.ID_SELLING, _C.IMPERSONATION), _L.LOW, False,
        "Referring IP Mismatch", "IP differs from the referring session IP",
    ),
    RiskFlag.REFERRING_USER_AGENT_MISMATCH: FlagMetadata(
        (_C.ID_SELLING, _C.IMPERSONATION), _L.LOW, False,
        "Referring User Agent Mismatch", "User agent differs from the referring session",
    ),
    RiskFlag.REFERRING_DEVICE_TIMEZONE_MISMATCH: FlagMetadata(
        (_C.ID_SELLING, _C.IMPERSONATION), _L.LOW, False,
        "Referring Device Timezone Mismatch",
        "Device timezone differs from the referring session device timezone",
    ),
    RiskFlag.REFERRING_IP_TIMEZONE_MISMATCH: FlagMetadata(
        (_C.ID_SELLING, _C.IMPERSONATION), _L.LOW, False,
        "Referring IP Timezone Mismatch",
        "IP timezone differs from the referring session IP timezone",
    ),
})

_missing = [flag.name for flag in RiskFlag if flag not in FLAG_REGISTRY]
if _missing:
    raise RuntimeError(f"FLAG_REGISTRY is missing metadata for: {', '.join(_missing)}")
if any(meta.level is RiskLevel.UNKNOWN for meta in FLAG_REGISTRY.values()):
    raise RuntimeError("FLAG_REGISTRY must not assign RiskLevel.UNKNOWN to a flag")

_FLAGS_BY_FOLDED_NAME: dict[str, RiskFlag] = {
    flag.name.replace("_", "").lower(): flag for flag in RiskFlag
}
