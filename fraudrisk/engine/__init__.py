"""
fraudrisk Engine — risk-signal aggregation and risk-flag decisioning.

Components:
- score: Score value object, a probability in [0, 1]
- taxonomy: RiskFlag / RiskCategory / RiskLevel and the flag metadata registry
- scope: SignalScope and the signal name registry
- signal: RiskSignal, one named and scoped continuous indicator
- signal_collection: mean / weighted / distribution aggregation over signals
- flag_collection: classification, severity ranking, recommendation over flags
"""

from fraudrisk.engine.taxonomy import (  # noqa: F401
    FLAG_REGISTRY,
    FlagMetadata,
    RiskCategory,
    RiskFlag,
    RiskLevel,
)
from fraudrisk.engine.scope import SignalScope  # noqa: F401
from fraudrisk.engine.score import Score  # noqa: F401
from fraudrisk.engine.signal import RiskSignal  # noqa: F401
from fraudrisk.engine.signal_collection import (  # noqa: F401
    DEFAULT_SCOPE_WEIGHTS,
    RiskSignalCollection,
)
from fraudrisk.engine.flag_collection import RiskFlagCollection  # noqa: F401
