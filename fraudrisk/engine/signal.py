"""
RiskSignal — a named, scoped, continuous fraud-risk indicator.
"""

from dataclasses import dataclass
from typing import Any

from fraudrisk.engine.scope import SIGNAL_DESCRIPTIONS, SIGNAL_DISPLAY_NAMES, SignalScope
from fraudrisk.engine.score import Score
from fraudrisk.exceptions import InvalidArgumentError

DEFAULT_FLAG_THRESHOLD: float = 0.5


def synthesize_display_name(name: str) -> str:
    """Title-case each `_`-separated token, e.g. spoofed_ip → Spoofed Ip."""
    return " ".join(token[:1].upper() + token[1:] for token in name.split("_") if token)


@dataclass(frozen=True)
class RiskSignal:
    """One upstream risk signal. Scores are always in [0, 1]."""
    name: str
    score: Score
    scope: SignalScope = SignalScope.DEVICE_NETWORK

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise InvalidArgumentError.wrong_type("a non-empty signal name", self.name)
        object.__setattr__(self, "score", Score.of(self.score))
        scope = SignalScope.coerce(self.scope)
        if scope is None:
            raise InvalidArgumentError(
                f"Unknown signal scope: {self.scope!r}",
                field="scope",
                details={"allowed": SignalScope.values()},
            )
        object.__setattr__(self, "scope", scope)

    @classmethod
    def from_score(cls, name: str, score: float | Score) -> "RiskSignal":
        """Build a signal, resolving its scope from the signal registry."""
        return cls(name=name, score=Score.of(score), scope=SignalScope.for_signal(name))

    @property
    def display_name(self) -> str:
        return SIGNAL_DISPLAY_NAMES.get(self.name) or synthesize_display_name(self.name)

    @property
    def description(self) -> str:
        return SIGNAL_DESCRIPTIONS.get(self.name) or f"Risk signal: {self.name}"

    def with_score(self, score: float | Score) -> "RiskSignal":
        """Copy with a new score, same name and scope."""
        return RiskSignal(name=self.name, score=Score.of(score), scope=self.scope)

    def is_flagged(self, threshold: float = DEFAULT_FLAG_THRESHOLD) -> bool:
        return self.score.value >= threshold

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score.value,
            "scope": self.scope.value,
            "display_name": self.display_name,
            "description": self.description,
        }
