"""
fraudrisk Configuration.

Pydantic Settings v2 — loads from .env, environment variables.

Engine code never reads these settings on its own. Callers that want
environment-driven weights pass ``settings.scope_weights()`` explicitly
into ``RiskSignalCollection.get_weighted_risk_score``.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fraudrisk.engine.scope import SignalScope
from fraudrisk.engine.signal_collection import DEFAULT_SCOPE_WEIGHTS


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Operational ────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="console", alias="LOG_FORMAT")  # json or console

    # ── Weighted scoring ───────────────────────────────────────────────────
    weight_device_network: float = Field(
        default=DEFAULT_SCOPE_WEIGHTS[SignalScope.DEVICE_NETWORK],
        ge=0.0, alias="FRAUDRISK_WEIGHT_DEVICE_NETWORK",
    )
    weight_document: float = Field(
        default=DEFAULT_SCOPE_WEIGHTS[SignalScope.DOCUMENT],
        ge=0.0, alias="FRAUDRISK_WEIGHT_DOCUMENT",
    )
    weight_referring_session: float = Field(
        default=DEFAULT_SCOPE_WEIGHTS[SignalScope.REFERRING_SESSION],
        ge=0.0, alias="FRAUDRISK_WEIGHT_REFERRING_SESSION",
    )
    weight_account: float = Field(
        default=DEFAULT_SCOPE_WEIGHTS[SignalScope.ACCOUNT],
        ge=0.0, alias="FRAUDRISK_WEIGHT_ACCOUNT",
    )
    weight_session: float = Field(
        default=DEFAULT_SCOPE_WEIGHTS[SignalScope.SESSION],
        ge=0.0, alias="FRAUDRISK_WEIGHT_SESSION",
    )

    def scope_weights(self) -> dict[SignalScope, float]:
        """Per-scope weight table for weighted risk scoring."""
        return {
            SignalScope.DEVICE_NETWORK: self.weight_device_network,
            SignalScope.DOCUMENT: self.weight_document,
            SignalScope.REFERRING_SESSION: self.weight_referring_session,
            SignalScope.ACCOUNT: self.weight_account,
            SignalScope.SESSION: self.weight_session,
        }


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
