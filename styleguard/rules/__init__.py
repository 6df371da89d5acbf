"""Rule registry for the style checker."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from styleguard.errors import DuplicateRuleError, InvalidRuleError, NotFoundError
from styleguard.severity import Severity

logger = logging.getLogger(__name__)

Predicate = Callable[[str], Optional[str]]
RulePattern = Union[str, re.Pattern, Predicate]


@dataclass(frozen=True)
class RuleDefinition:
    """Declarative check mapping a pattern to a severity and description.

    ``pattern`` is a regular expression (source text or compiled) or a
    predicate that receives one line and returns the offending snippet,
    or ``None`` when the line is clean. Source text is compiled on
    construction, so a malformed rule raises :class:`InvalidRuleError`
    before it can reach an evaluator.
    """

    id: str
    description: str
    pattern: RulePattern
    severity: Severity = Severity.WARN

    def __post_init__(self) -> None:
        pattern, severity = _compile(self)
        object.__setattr__(self, "pattern", pattern)
        object.__setattr__(self, "severity", severity)

    @property
    def is_regex(self) -> bool:
        return isinstance(self.pattern, re.Pattern)

    def describe(self) -> str:
        if isinstance(self.pattern, re.Pattern):
            return self.pattern.pattern
        return getattr(self.pattern, "__name__", repr(self.pattern))


def _compile(rule: RuleDefinition) -> Tuple[Union[re.Pattern, Predicate], Severity]:
    if not isinstance(rule.id, str) or not rule.id.strip():
        raise InvalidRuleError(repr(rule.id), "rule id must be a non-empty string")
    try:
        severity = Severity.parse(rule.severity)
    except ValueError as exc:
        raise InvalidRuleError(rule.id, str(exc)) from None
    pattern = rule.pattern
    if isinstance(pattern, str):
        if not pattern:
            raise InvalidRuleError(rule.id, "pattern is empty")
        try:
            pattern = re.compile(pattern)
        except re.error as exc:
            raise InvalidRuleError(rule.id, f"pattern does not compile: {exc}") from None
    elif not isinstance(pattern, re.Pattern) and not callable(pattern):
        raise InvalidRuleError(rule.id, f"unsupported pattern type {type(pattern).__name__}")
    return pattern, severity


class Registry:
    """Immutable, ordered collection of rules used by a run."""

    def __init__(self, rules: Tuple[RuleDefinition, ...]) -> None:
        self._rules = rules
        self._by_id: Dict[str, RuleDefinition] = {rule.id: rule for rule in rules}

    @classmethod
    def load(cls, rule_specs: Iterable[RuleDefinition]) -> "Registry":
        """Collect ``rule_specs`` in order, rejecting duplicate ids."""

        loaded = []
        seen = set()
        for spec in rule_specs:
            if spec.id in seen:
                raise DuplicateRuleError(spec.id)
            seen.add(spec.id)
            loaded.append(spec)
        logger.debug("Loaded %d rules", len(loaded))
        return cls(tuple(loaded))

    def get(self, rule_id: str) -> RuleDefinition:
        try:
            return self._by_id[rule_id]
        except KeyError:
            raise NotFoundError(rule_id) from None

    def all(self) -> Tuple[RuleDefinition, ...]:
        return self._rules

    def without(self, rule_ids: Iterable[str]) -> "Registry":
        """Return a registry with the named rules removed."""

        dropped = set()
        for rule_id in rule_ids:
            self.get(rule_id)
            dropped.add(rule_id)
        return Registry(tuple(rule for rule in self._rules if rule.id not in dropped))

    def with_severities(self, overrides: Mapping[str, Union[str, Severity]]) -> "Registry":
        """Return a registry with per-rule severity overrides applied."""

        parsed: Dict[str, Severity] = {}
        for rule_id, value in overrides.items():
            self.get(rule_id)
            try:
                parsed[rule_id] = Severity.parse(value)
            except ValueError as exc:
                raise InvalidRuleError(rule_id, str(exc)) from None
        return Registry(
            tuple(replace(rule, severity=parsed[rule.id]) if rule.id in parsed else rule for rule in self._rules)
        )

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[RuleDefinition]:
        return iter(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._by_id


def load(rule_specs: Iterable[RuleDefinition]) -> Registry:
    return Registry.load(rule_specs)


__all__ = ["Predicate", "Registry", "RuleDefinition", "RulePattern", "load"]
