"""
Engine Output Schemas — the records response DTOs read.

Key names here are a stable external contract:
consumers depend on `total_flags`, `risk_level_distribution`,
`should_block`, `weighted_risk_score`, etc.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Recommendation(StrEnum):
    BLOCK = "block"
    REVIEW = "review"
    MONITOR = "monitor"
    APPROVE = "approve"


class SignalRecord(BaseModel):
    """One risk signal as exposed to consumers."""
    model_config = ConfigDict(frozen=True)

    name: str
    score: float = Field(ge=0.0, le=1.0)
    scope: str
    display_name: str
    description: str


class SignalSummary(BaseModel):
    """Aggregate statistics over a RiskSignalCollection."""
    total_signals: int = Field(ge=0)
    overall_risk_score: float = Field(ge=0.0, le=1.0)
    weighted_risk_score: float = Field(ge=0.0, le=1.0)
    max_score: float = Field(ge=0.0, le=1.0)
    min_score: float = Field(ge=0.0, le=1.0)
    avg_score: float = Field(ge=0.0, le=1.0)
    by_scope: dict[str, list[SignalRecord]] = Field(default_factory=dict)


class FlagDetail(BaseModel):
    """Canonical external record for one risk flag."""
    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    display_name: str
    description: str
    risk_level: str
    categories: list[str]
    should_block: bool


class FlagSummary(BaseModel):
    """Aggregate classification of a RiskFlagCollection."""
    total_flags: int = Field(ge=0)
    blocking_flags: int = Field(ge=0)
    non_blocking_flags: int = Field(ge=0)
    risk_level_distribution: dict[str, int]
    category_distribution: dict[str, int]
    has_critical_flags: bool
    has_high_risk_flags: bool
    has_blocking_flags: bool
