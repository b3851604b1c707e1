"""
Risk Signal Aggregation Engine.

Holds the continuous risk signals for one decision and aggregates them:
- Arithmetic mean (overall risk score)
- Scope-weighted mean (weighted risk score)
- Distribution statistics and per-scope grouping
- Top-N most critical signals

Invariants:
- Signal names are unique; adding an existing name updates its score in place
- A signal whose score is exactly 0 is never stored
- Insertion order is preserved
"""

import json
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Callable, Optional

import structlog

from fraudrisk.engine.scope import SignalScope
from fraudrisk.engine.score import Score
from fraudrisk.engine.signal import DEFAULT_FLAG_THRESHOLD, RiskSignal
from fraudrisk.exceptions import InvalidArgumentError
from fraudrisk.schemas import SignalRecord, SignalSummary

logger = structlog.get_logger(__name__)


# ── Configuration ─────────────────────────────────────────────────────────
# Device/network and document evidence weigh more than referring-session,
# account and session evidence. Only the relative ordering is a contract.

DEFAULT_SCOPE_WEIGHTS: dict[SignalScope, float] = {
    SignalScope.DEVICE_NETWORK: 0.3,
    SignalScope.DOCUMENT: 0.3,
    SignalScope.REFERRING_SESSION: 0.2,
    SignalScope.ACCOUNT: 0.1,
    SignalScope.SESSION: 0.1,
}

# Weight for a scope missing from both the default and the caller's table
FALLBACK_SCOPE_WEIGHT: float = 0.1


def _camel_case(name: str) -> str:
    """snake_case → camelCase, e.g. device_network_mismatch → deviceNetworkMismatch."""
    joined = "".join(token[:1].upper() + token[1:] for token in name.split("_"))
    return joined[:1].lower() + joined[1:]


def _clamp_unit(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def _is_number(raw: Any) -> bool:
    return isinstance(raw, (int, float)) and not isinstance(raw, bool)


def _carries_score(raw: Any) -> bool:
    """True for a Score, a plain number or a {"value": number} record."""
    if isinstance(raw, Mapping):
        return _is_number(raw.get("value"))
    return isinstance(raw, Score) or _is_number(raw)


def _parse_entry(key: Any, data: Any) -> Optional[tuple[str, Score, Optional[SignalScope]]]:
    """
    Normalize one upstream signal entry.

    Accepted shapes:
      - RiskSignal                        → its name / score / scope
      - key → float                       → (key, score, None)
      - key → {"name", "score", "scope"}  → record fields; name defaults to key
      - {"name", "score", "scope"}        → record fields (iterable payloads)

    Returns None for shapes that cannot carry a signal, including records
    whose score is not a number. A None scope means "resolve from the
    signal registry". Numeric scores outside [0, 1] raise.
    """
    if isinstance(data, RiskSignal):
        return data.name, data.score, data.scope

    if isinstance(data, Mapping):
        name = data.get("name", key)
        if not isinstance(name, str) or not name or not _carries_score(data.get("score")):
            return None
        raw_scope = data.get("scope")
        scope = SignalScope.coerce(raw_scope) if isinstance(raw_scope, (str, SignalScope)) else None
        return name, Score.of(data["score"]), scope

    if isinstance(key, str) and key and (isinstance(data, Score) or _is_number(data)):
        return key, Score.of(data), None

    return None


class RiskSignalCollection:
    """
    Ordered, name-unique set of risk signals for one decision.

    Owned by a single decision computation; not shared across threads.
    """

    def __init__(self, signals: Optional[Iterable[RiskSignal]] = None):
        self._signals: list[RiskSignal] = []
        if signals is None:
            return
        if not isinstance(signals, Iterable) or isinstance(signals, (str, bytes)):
            raise InvalidArgumentError.not_iterable("signals", signals)
        for signal in signals:
            if not isinstance(signal, RiskSignal):
                raise InvalidArgumentError.wrong_type("RiskSignal", signal)
            self._upsert(signal)

    # ── Construction ──────────────────────────────────────────────────

    @classmethod
    def from_scores(cls, payload: Mapping[str, Any] | Iterable[Any]) -> "RiskSignalCollection":
        """
        Build a collection from a decoded upstream payload.

        Accepts a name → float map, a name → record map, or an iterable of
        records / RiskSignal objects. Zero scores and unusable entries
        (including records with a non-numeric score) are dropped and logged.
        A non-iterable payload raises InvalidArgumentError; a numeric score
        outside [0, 1] raises ScoreValidationError.
        """
        if isinstance(payload, Mapping):
            entries = list(payload.items())
        elif isinstance(payload, Iterable) and not isinstance(payload, (str, bytes)):
            entries = [(None, item) for item in payload]
        else:
            raise InvalidArgumentError.not_iterable("payload", payload)

        collection = cls()
        for key, data in entries:
            parsed = _parse_entry(key, data)
            if parsed is None:
                logger.warning(
                    "risk_signal_dropped",
                    key=key,
                    entry_type=type(data).__name__,
                )
                continue
            name, score, scope = parsed
            collection.add_signal(name, score, scope or SignalScope.for_signal(name))

        logger.debug("risk_signals_loaded", received=len(entries), kept=len(collection))
        return collection

    @classmethod
    def from_sources(
        cls,
        device_network: Optional[Mapping[str, float]] = None,
        document: Optional[Mapping[str, float]] = None,
        referring_session: Optional[Mapping[str, float]] = None,
        account: Optional[Mapping[str, float]] = None,
        session: Optional[Mapping[str, float]] = None,
    ) -> "RiskSignalCollection":
        """
        Merge per-source name → score maps, forcing each map's scope.

        Later sources update same-named signals from earlier ones.
        """
        collection = cls()
        sources = (
            (SignalScope.DEVICE_NETWORK, device_network),
            (SignalScope.DOCUMENT, document),
            (SignalScope.REFERRING_SESSION, referring_session),
            (SignalScope.ACCOUNT, account),
            (SignalScope.SESSION, session),
        )
        for scope, scores in sources:
            if scores is None:
                continue
            if not isinstance(scores, Mapping):
                raise InvalidArgumentError.wrong_type(f"mapping of {scope.value} scores", scores)
            for name, score in scores.items():
                collection.add_signal(name, score, scope)
        return collection

    @classmethod
    def _of(cls, signals: Iterable[RiskSignal]) -> "RiskSignalCollection":
        collection = cls()
        collection._signals = list(signals)
        return collection

    # ── Mutation ──────────────────────────────────────────────────────

    def add_signal(
        self,
        name: str,
        score: float | Score,
        scope: Optional[SignalScope | str] = SignalScope.DEVICE_NETWORK,
    ) -> "RiskSignalCollection":
        """
        Add or update a signal.

        A zero score is a no-op. An existing name keeps its position and
        scope and takes the new score; a new name is appended.
        """
        score = Score.of(score)
        if score.value == 0:
            logger.debug("signal_ignored_zero_score", signal=name)
            return self
        self._upsert(RiskSignal(name=name, score=score, scope=scope or SignalScope.DEVICE_NETWORK))
        return self

    def update_signal(self, name: str, score: float | Score) -> "RiskSignalCollection":
        """Update an existing signal's score, or insert it with its registry scope."""
        return self.add_signal(name, score, SignalScope.for_signal(name))

    def remove_signal(self, name: str) -> "RiskSignalCollection":
        self._signals = [s for s in self._signals if s.name != name]
        return self

    def _upsert(self, signal: RiskSignal) -> None:
        if signal.score.value == 0:
            return
        for index, existing in enumerate(self._signals):
            if existing.name == signal.name:
                self._signals[index] = existing.with_score(signal.score)
                return
        self._signals.append(signal)

    # ── Lookup ────────────────────────────────────────────────────────

    def by_scope(self, scope: SignalScope | str) -> "RiskSignalCollection":
        resolved = SignalScope.coerce(scope)
        return self._of(s for s in self._signals if s.scope is resolved)

    def by_name(self, name: str) -> Optional[RiskSignal]:
        return next((s for s in self._signals if s.name == name), None)

    def by_names(self, names: Iterable[str]) -> "RiskSignalCollection":
        wanted = set(names)
        return self._of(s for s in self._signals if s.name in wanted)

    def filter(self, predicate: Callable[[RiskSignal], bool]) -> "RiskSignalCollection":
        return self._of(s for s in self._signals if predicate(s))

    def scores(self) -> list[float]:
        return [s.score.value for s in self._signals]

    # ── Aggregation ───────────────────────────────────────────────────

    def get_overall_risk_score(self) -> float:
        """Arithmetic mean of all scores; 0.0 for an empty collection."""
        if not self._signals:
            return 0.0
        values = self.scores()
        return _clamp_unit(sum(values) / len(values))

    def get_weighted_risk_score(
        self,
        weights: Optional[Mapping[SignalScope | str, float]] = None,
    ) -> float:
        """
        Scope-weighted mean of all scores.

        Formula:
          weighted = Σ(score_i × w(scope_i)) / Σ w(scope_i)

        `weights` overrides DEFAULT_SCOPE_WEIGHTS per scope. Returns 0.0
        when the weight total is 0, including the empty collection.
        """
        table = self._resolve_weights(weights)

        weighted_sum = 0.0
        total_weight = 0.0
        for signal in self._signals:
            w = table.get(signal.scope, FALLBACK_SCOPE_WEIGHT)
            weighted_sum += signal.score.value * w
            total_weight += w

        if total_weight <= 0:
            return 0.0
        return _clamp_unit(weighted_sum / total_weight)

    @staticmethod
    def _resolve_weights(
        weights: Optional[Mapping[SignalScope | str, float]],
    ) -> dict[SignalScope, float]:
        table = dict(DEFAULT_SCOPE_WEIGHTS)
        if not weights:
            return table
        for key, value in weights.items():
            scope = SignalScope.coerce(key)
            if scope is None:
                raise InvalidArgumentError(
                    f"Unknown scope in weights: {key!r}",
                    field="weights",
                    details={"allowed": SignalScope.values()},
                )
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                raise InvalidArgumentError(
                    f"Weight for {scope.value} must be a non-negative number, got {value!r}",
                    field="weights",
                )
            table[scope] = float(value)
        return table

    def grouped_by_scope(self) -> dict[SignalScope, list[RiskSignal]]:
        """Every scope → its signals in collection order (possibly empty)."""
        grouped: dict[SignalScope, list[RiskSignal]] = {scope: [] for scope in SignalScope}
        for signal in self._signals:
            grouped[signal.scope].append(signal)
        return grouped

    def summary(self, weights: Optional[Mapping[SignalScope | str, float]] = None) -> SignalSummary:
        values = self.scores()
        by_scope = {
            scope.value: [SignalRecord(**s.to_dict()) for s in signals]
            for scope, signals in self.grouped_by_scope().items()
        }
        if not values:
            return SignalSummary(
                total_signals=0,
                overall_risk_score=0.0,
                weighted_risk_score=0.0,
                max_score=0.0,
                min_score=0.0,
                avg_score=0.0,
                by_scope=by_scope,
            )

        overall = self.get_overall_risk_score()
        return SignalSummary(
            total_signals=len(values),
            overall_risk_score=overall,
            weighted_risk_score=self.get_weighted_risk_score(weights),
            max_score=max(values),
            min_score=min(values),
            avg_score=overall,
            by_scope=by_scope,
        )

    def get_summary(self, weights: Optional[Mapping[SignalScope | str, float]] = None) -> dict[str, Any]:
        """
        Summary statistics:
            {
                "total_signals": int,
                "overall_risk_score": float,
                "weighted_risk_score": float,
                "max_score": float,
                "min_score": float,
                "avg_score": float,
                "by_scope": {scope: [signal dict, ...]}
            }
        """
        return self.summary(weights).model_dump(mode="json")

    def get_most_critical(self, limit: int = 5) -> "RiskSignalCollection":
        """Top `limit` signals by descending score; ties keep insertion order."""
        ranked = sorted(self._signals, key=lambda s: s.score.value, reverse=True)
        return self._of(ranked[:max(limit, 0)])

    # ── Conversion ────────────────────────────────────────────────────

    def to_list(self) -> list[dict[str, Any]]:
        return [s.to_dict() for s in self._signals]

    def to_json(self) -> str:
        return json.dumps(self.to_list())

    def to_legacy_risk_signal_scores(self) -> dict[str, float]:
        """camelCase name → raw score, for older consumers."""
        return {_camel_case(s.name): s.score.value for s in self._signals}

    def to_legacy_risk_signals(self, threshold: float = DEFAULT_FLAG_THRESHOLD) -> dict[str, bool]:
        """camelCase name → whether the score reaches `threshold`."""
        return {_camel_case(s.name): s.is_flagged(threshold) for s in self._signals}

    # ── Container protocol ────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._signals)

    def __iter__(self) -> Iterator[RiskSignal]:
        return iter(list(self._signals))

    def __contains__(self, item: object) -> bool:
        if isinstance(item, RiskSignal):
            return item in self._signals
        return any(s.name == item for s in self._signals)

    def __getitem__(self, index: int) -> RiskSignal:
        return self._signals[index]

    def __repr__(self) -> str:
        names = ", ".join(f"{s.name}={s.score}" for s in self._signals)
        return f"RiskSignalCollection({names})"
