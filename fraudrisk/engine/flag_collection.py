"""
Risk Flag Classification & Decision Engine.

Holds the discrete risk flags returned for one decision and classifies them:
- Filtering by category, risk level, blocking status, display name
- Level / category distributions and grouping
- Severity ranking (blocking first, then level)
- Set algebra between flag collections
- The final recommendation

Decision policy (evaluated in strict priority order):
1. Any blocking flag                → block
2. Any High or Critical flag        → review
3. Any other flag (Low / Moderate)  → monitor
4. No flags                         → approve
"""

import json
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Callable, Optional

import structlog

from fraudrisk.engine.taxonomy import RiskCategory, RiskFlag, RiskLevel
from fraudrisk.exceptions import InvalidArgumentError
from fraudrisk.schemas import FlagDetail, FlagSummary, Recommendation

logger = structlog.get_logger(__name__)

_HIGH_LEVELS = (RiskLevel.HIGH, RiskLevel.CRITICAL)


def _parse_flag(item: Any) -> Optional[RiskFlag]:
    """
    Normalize one upstream flag token.

    Accepted shapes:
      - RiskFlag            → itself
      - "proxy_detected"    → machine value lookup
      - {"value": "..."}    → machine value lookup
    Anything else → None.
    """
    if isinstance(item, RiskFlag):
        return item
    if isinstance(item, Mapping):
        item = item.get("value")
    return RiskFlag.from_value(item)


def _require_iterable(argument: str, value: Any) -> None:
    if not isinstance(value, Iterable) or isinstance(value, (str, bytes)):
        raise InvalidArgumentError.not_iterable(argument, value)


def _require_collection(other: Any) -> None:
    if not isinstance(other, RiskFlagCollection):
        raise InvalidArgumentError.wrong_type("RiskFlagCollection", other)


class RiskFlagCollection:
    """
    Ordered collection of risk flags for one decision.

    Duplicates are permitted unless explicitly removed with unique_flags().
    Owned by a single decision computation; not shared across threads.
    """

    def __init__(self, flags: Optional[Iterable[RiskFlag]] = None):
        self._flags: list[RiskFlag] = []
        if flags is None:
            return
        _require_iterable("flags", flags)
        for flag in flags:
            if not isinstance(flag, RiskFlag):
                raise InvalidArgumentError.wrong_type("RiskFlag", flag)
            self._flags.append(flag)

    # ── Construction ──────────────────────────────────────────────────

    @classmethod
    def from_items(cls, items: Iterable[Any]) -> "RiskFlagCollection":
        """From machine values, RiskFlag members or {"value"} records; unknown items dropped."""
        return cls._lenient(items, _parse_flag, source="items")

    @classmethod
    def from_values(cls, values: Iterable[str]) -> "RiskFlagCollection":
        """From snake_case machine values; unknown values dropped."""
        return cls._lenient(values, RiskFlag.from_value, source="values")

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "RiskFlagCollection":
        """From variant names, case-insensitive; unknown names dropped."""
        return cls._lenient(names, RiskFlag.from_name, source="names")

    @classmethod
    def _lenient(
        cls,
        tokens: Iterable[Any],
        parse: Callable[[Any], Optional[RiskFlag]],
        source: str,
    ) -> "RiskFlagCollection":
        _require_iterable(source, tokens)
        collection = cls()
        for token in tokens:
            flag = parse(token)
            if flag is None:
                logger.warning("risk_flag_dropped", token=repr(token), source=source)
                continue
            collection._flags.append(flag)
        return collection

    @classmethod
    def _of(cls, flags: Iterable[RiskFlag]) -> "RiskFlagCollection":
        collection = cls()
        collection._flags = list(flags)
        return collection

    # ── Filtering ─────────────────────────────────────────────────────

    def by_category(self, category: RiskCategory | str) -> "RiskFlagCollection":
        resolved = RiskCategory.coerce(category)
        return self._of(f for f in self._flags if resolved in f.categories)

    def by_categories(self, categories: Iterable[RiskCategory | str]) -> "RiskFlagCollection":
        wanted = {RiskCategory.coerce(c) for c in categories} - {None}
        return self._of(f for f in self._flags if wanted.intersection(f.categories))

    def by_risk_level(self, level: RiskLevel | str) -> "RiskFlagCollection":
        resolved = RiskLevel.coerce(level)
        return self._of(f for f in self._flags if f.risk_level is resolved)

    def by_risk_levels(self, levels: Iterable[RiskLevel | str]) -> "RiskFlagCollection":
        wanted = {RiskLevel.coerce(level) for level in levels} - {None}
        return self._of(f for f in self._flags if f.risk_level in wanted)

    def blocking(self) -> "RiskFlagCollection":
        return self._of(f for f in self._flags if f.should_block)

    def non_blocking(self) -> "RiskFlagCollection":
        return self._of(f for f in self._flags if not f.should_block)

    def by_display_name_pattern(self, pattern: str) -> "RiskFlagCollection":
        """Flags whose display name contains `pattern`, case-insensitive."""
        needle = pattern.lower()
        return self._of(f for f in self._flags if needle in f.display_name.lower())

    def apply_rule(self, rule: Callable[[RiskFlag], bool]) -> "RiskFlagCollection":
        """Flags matching an arbitrary decision rule."""
        return self._of(f for f in self._flags if rule(f))

    # ── Grouping & distributions ──────────────────────────────────────

    def group_by_category(self) -> dict[RiskCategory, "RiskFlagCollection"]:
        """Every category → its flags. A multi-category flag appears under each."""
        grouped: dict[RiskCategory, list[RiskFlag]] = {c: [] for c in RiskCategory}
        for flag in self._flags:
            for category in flag.categories:
                grouped[category].append(flag)
        return {c: self._of(flags) for c, flags in grouped.items()}

    def group_by_risk_level(self) -> dict[RiskLevel, "RiskFlagCollection"]:
        grouped: dict[RiskLevel, list[RiskFlag]] = {level: [] for level in RiskLevel}
        for flag in self._flags:
            grouped[flag.risk_level].append(flag)
        return {level: self._of(flags) for level, flags in grouped.items()}

    def get_risk_level_distribution(self) -> dict[str, int]:
        """Counts for low / moderate / high / critical / unknown."""
        distribution = {level.value: 0 for level in RiskLevel}
        for flag in self._flags:
            distribution[flag.risk_level.value] += 1
        return distribution

    def get_category_distribution(self) -> dict[str, int]:
        """Counts per category; a multi-category flag counts once in each."""
        distribution = {category.value: 0 for category in RiskCategory}
        for flag in self._flags:
            for category in flag.categories:
                distribution[category.value] += 1
        return distribution

    def get_unique_categories(self) -> list[RiskCategory]:
        """Categories present, in order of first appearance."""
        seen: dict[RiskCategory, None] = {}
        for flag in self._flags:
            for category in flag.categories:
                seen.setdefault(category, None)
        return list(seen)

    def get_unique_risk_levels(self) -> list[RiskLevel]:
        return list(dict.fromkeys(f.risk_level for f in self._flags))

    # ── Analysis ──────────────────────────────────────────────────────

    def summary(self) -> FlagSummary:
        blocking = sum(1 for f in self._flags if f.should_block)
        distribution = self.get_risk_level_distribution()
        return FlagSummary(
            total_flags=len(self._flags),
            blocking_flags=blocking,
            non_blocking_flags=len(self._flags) - blocking,
            risk_level_distribution=distribution,
            category_distribution=self.get_category_distribution(),
            has_critical_flags=distribution[RiskLevel.CRITICAL.value] > 0,
            has_high_risk_flags=distribution[RiskLevel.HIGH.value] > 0,
            has_blocking_flags=blocking > 0,
        )

    def get_summary(self) -> dict[str, Any]:
        """
        Summary statistics:
            {
                "total_flags": int,
                "blocking_flags": int,
                "non_blocking_flags": int,
                "risk_level_distribution": {level: count},
                "category_distribution": {category: count},
                "has_critical_flags": bool,
                "has_high_risk_flags": bool,
                "has_blocking_flags": bool
            }
        """
        return self.summary().model_dump(mode="json")

    def get_most_severe(self, limit: int = 10) -> "RiskFlagCollection":
        """
        Top `limit` flags by severity.

        Blocking flags rank first, then descending risk level. Equal
        flags keep their collection order.
        """
        ranked = sorted(
            self._flags,
            key=lambda f: (0 if f.should_block else 1, -f.risk_level.severity),
        )
        return self._of(ranked[:max(limit, 0)])

    def has_blocking_flags(self) -> bool:
        return any(f.should_block for f in self._flags)

    def has_category(self, category: RiskCategory | str) -> bool:
        resolved = RiskCategory.coerce(category)
        return any(resolved in f.categories for f in self._flags)

    def has_risk_level(self, level: RiskLevel | str) -> bool:
        resolved = RiskLevel.coerce(level)
        return any(f.risk_level is resolved for f in self._flags)

    def is_low_risk(self) -> bool:
        """Empty, or only Low non-blocking flags."""
        return all(
            f.risk_level.severity <= RiskLevel.LOW.severity and not f.should_block
            for f in self._flags
        )

    def is_high_risk(self) -> bool:
        """Any High / Critical flag, or any blocking flag."""
        return any(f.risk_level in _HIGH_LEVELS or f.should_block for f in self._flags)

    def get_recommendation(self) -> Recommendation:
        if self.has_blocking_flags():
            recommendation = Recommendation.BLOCK
        elif any(f.risk_level in _HIGH_LEVELS for f in self._flags):
            recommendation = Recommendation.REVIEW
        elif self._flags:
            recommendation = Recommendation.MONITOR
        else:
            recommendation = Recommendation.APPROVE

        logger.debug(
            "recommendation_computed",
            recommendation=recommendation.value,
            n_flags=len(self._flags),
        )
        return recommendation

    # ── Set algebra ───────────────────────────────────────────────────

    def add_flag(self, flag: RiskFlag) -> "RiskFlagCollection":
        """Append `flag` unless already present."""
        if not isinstance(flag, RiskFlag):
            raise InvalidArgumentError.wrong_type("RiskFlag", flag)
        if flag not in self._flags:
            self._flags.append(flag)
        return self

    def remove_flag(self, flag: RiskFlag) -> "RiskFlagCollection":
        """Remove every occurrence of `flag`."""
        self._flags = [f for f in self._flags if f != flag]
        return self

    def unique_flags(self) -> "RiskFlagCollection":
        return self._of(dict.fromkeys(self._flags))

    def merge_flags(self, other: "RiskFlagCollection") -> "RiskFlagCollection":
        """Deduplicated union, self's order first."""
        _require_collection(other)
        return self._of(dict.fromkeys([*self._flags, *other]))

    def intersect_flags(self, other: "RiskFlagCollection") -> "RiskFlagCollection":
        _require_collection(other)
        theirs = set(other)
        return self._of(f for f in self._flags if f in theirs)

    def diff_flags(self, other: "RiskFlagCollection") -> "RiskFlagCollection":
        """Flags in self that are not in `other`."""
        _require_collection(other)
        theirs = set(other)
        return self._of(f for f in self._flags if f not in theirs)

    # ── Conversion ────────────────────────────────────────────────────

    def to_values(self) -> list[str]:
        return [f.value for f in self._flags]

    def to_names(self) -> list[str]:
        return [f.variant_name for f in self._flags]

    def to_display_names(self) -> list[str]:
        return [f.display_name for f in self._flags]

    def to_detailed_list(self) -> list[dict[str, Any]]:
        """One {name, value, display_name, description, risk_level, categories, should_block} per flag."""
        return [
            FlagDetail(
                name=f.variant_name,
                value=f.value,
                display_name=f.display_name,
                description=f.description,
                risk_level=f.risk_level.value,
                categories=[c.value for c in f.categories],
                should_block=f.should_block,
            ).model_dump()
            for f in self._flags
        ]

    def to_json(self) -> str:
        return json.dumps(self.to_values())

    # ── Container protocol ────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._flags)

    def __iter__(self) -> Iterator[RiskFlag]:
        return iter(list(self._flags))

    def __contains__(self, item: object) -> bool:
        return item in self._flags

    def __getitem__(self, index: int) -> RiskFlag:
        return self._flags[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RiskFlagCollection):
            return NotImplemented
        return self._flags == other._flags

    def __repr__(self) -> str:
        return f"RiskFlagCollection({', '.join(self.to_values())})"
