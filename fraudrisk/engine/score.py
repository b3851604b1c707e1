"""
Score — immutable probability value object.

Every continuous risk indicator in the engine is carried as a Score in
the closed interval [0, 1]. Construction is the only validation point:
once a Score exists, its value is in range.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fraudrisk.engine.taxonomy import RiskLevel
from fraudrisk.exceptions import InvalidArgumentError, ScoreValidationError


@dataclass(frozen=True)
class Score:
    """A probability in [0, 1]. Equal when values are equal."""
    value: float

    def __post_init__(self):
        raw = self.value
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise InvalidArgumentError.wrong_type("a number", raw)
        value = float(raw)
        if math.isnan(value) or value < 0.0 or value > 1.0:
            raise ScoreValidationError(raw)
        object.__setattr__(self, "value", value)

    @classmethod
    def of(cls, raw: Any) -> "Score":
        """
        Parse any accepted score shape into a Score.

        Accepted shapes:
          - Score           → returned unchanged
          - int / float     → Score(raw)
          - {"value": x}    → Score(x)
        """
        if isinstance(raw, Score):
            return raw
        if isinstance(raw, Mapping):
            if "value" not in raw:
                raise InvalidArgumentError(
                    "Score record is missing the 'value' key",
                    field="value",
                    details={"keys": sorted(str(k) for k in raw)},
                )
            return cls(raw["value"])
        return cls(raw)

    @classmethod
    def zero(cls) -> "Score":
        return cls(0.0)

    def risk_level(self) -> RiskLevel:
        """Severity band this score falls in."""
        return RiskLevel.from_score(self.value)

    def __float__(self) -> float:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
