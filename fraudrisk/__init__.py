"""
fraudrisk — Fraud-risk signal & flag decisioning engine.

Architecture:
    fraudrisk/
    ├── engine/          # Score, signals, flag taxonomy, collections
    ├── schemas.py       # Pydantic records exposed to response DTOs
    ├── config.py        # Settings (weights, thresholds, logging)
    ├── exceptions.py    # Error codes + exception hierarchy
    └── observability.py # structlog configuration

Module Boundaries:
    - The upstream fraud service is the SIGNAL SOURCE — it sends scores and flag names
    - fraudrisk is the DECISION ENGINE — it aggregates them and recommends
    - No network I/O, no persistence; every collection lives for one decision

Data Flow:
    name→float map / flag names → RiskSignalCollection / RiskFlagCollection
    → summaries, severity ranking → block | review | monitor | approve

Version: 1.0.0
"""

from fraudrisk.engine import (  # noqa: F401
    DEFAULT_SCOPE_WEIGHTS,
    FlagMetadata,
    RiskCategory,
    RiskFlag,
    RiskFlagCollection,
    RiskLevel,
    RiskSignal,
    RiskSignalCollection,
    Score,
    SignalScope,
)
from fraudrisk.exceptions import (  # noqa: F401
    ErrorCode,
    FraudRiskError,
    InvalidArgumentError,
    ScoreValidationError,
    ValidationError,
)
from fraudrisk.schemas import Recommendation  # noqa: F401

__version__ = "1.0.0"
