"""Load rule definitions from rule-spec files and plain records."""

from __future__ import annotations

import json
import logging
import re
from functools import reduce
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Sequence

import yaml

from styleguard.errors import InvalidRuleError, RuleFileError
from styleguard.severity import Severity

from . import Registry, RuleDefinition

logger = logging.getLogger(__name__)

BUILTIN_RULES = "java_conventions.yaml"
KNOWN_FIELDS = {"id", "description", "pattern", "severity", "flags"}


def _parse_flags(rule_id: str, flags: Any, origin: str) -> int:
    if flags is None:
        return 0
    if isinstance(flags, str):
        flags = [flags]
    if not isinstance(flags, (list, tuple)):
        raise InvalidRuleError(rule_id, "flags must be a list of names", origin)
    values = []
    for name in flags:
        value = getattr(re, str(name).upper(), None)
        if not isinstance(value, re.RegexFlag):
            raise InvalidRuleError(rule_id, f"unknown regex flag {name!r}", origin)
        values.append(value)
    return reduce(lambda left, right: left | right, values, 0)


def rule_from_record(record: Any, origin: str = "<records>", index: int = 0) -> RuleDefinition:
    """Build a :class:`RuleDefinition` from one ``{id, description, pattern, severity}`` mapping."""

    if not isinstance(record, Mapping):
        raise InvalidRuleError(f"#{index}", "rule record must be a mapping", origin)
    rule_id = record.get("id")
    if not isinstance(rule_id, str) or not rule_id.strip():
        raise InvalidRuleError(f"#{index}", "missing rule id", origin)
    unknown = sorted(set(record) - KNOWN_FIELDS)
    if unknown:
        logger.warning("Rule %s (%s) has unknown fields: %s", rule_id, origin, ", ".join(map(str, unknown)))
    pattern = record.get("pattern")
    if not isinstance(pattern, str) or not pattern:
        raise InvalidRuleError(rule_id, "pattern must be a non-empty string", origin)
    try:
        severity = Severity.parse(record.get("severity", Severity.WARN))
    except ValueError as exc:
        raise InvalidRuleError(rule_id, str(exc), origin) from None
    flags = _parse_flags(rule_id, record.get("flags"), origin)
    try:
        compiled = re.compile(pattern, flags)
    except re.error as exc:
        raise InvalidRuleError(rule_id, f"pattern does not compile: {exc}", origin) from None
    return RuleDefinition(
        id=rule_id,
        description=str(record.get("description") or rule_id),
        pattern=compiled,
        severity=severity,
    )


def rules_from_records(records: Iterable[Any], origin: str = "<records>") -> List[RuleDefinition]:
    return [rule_from_record(record, origin, index) for index, record in enumerate(records)]


def _records_from_document(document: Any, origin: str) -> Sequence[Any]:
    if document is None:
        return []
    if isinstance(document, Mapping):
        document = document.get("rules", [])
    if not isinstance(document, list):
        raise RuleFileError(origin, "expected a list of rules or a mapping with a 'rules' list")
    return document


def parse_rule_text(text: str, origin: str, fmt: str = "yaml") -> List[RuleDefinition]:
    try:
        document = json.loads(text) if fmt == "json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise RuleFileError(origin, str(exc)) from None
    return rules_from_records(_records_from_document(document, origin), origin)


def load_rule_file(path: str | Path) -> List[RuleDefinition]:
    """Read rule records from a YAML or JSON file (chosen by suffix)."""

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RuleFileError(path, getattr(exc, "strerror", None) or str(exc)) from None
    fmt = "json" if path.suffix.lower() == ".json" else "yaml"
    rules = parse_rule_text(text, str(path), fmt)
    logger.debug("Read %d rules from %s", len(rules), path)
    return rules


def builtin_rules() -> List[RuleDefinition]:
    """Return the packaged Java convention rules."""

    text = resources.files("styleguard.rules").joinpath(BUILTIN_RULES).read_text(encoding="utf-8")
    return parse_rule_text(text, f"builtin:{BUILTIN_RULES}")


def load_registry(paths: Iterable[str | Path] = (), include_builtin: bool = True) -> Registry:
    """Load built-in rules (optionally) followed by each rule file, in order."""

    rules: List[RuleDefinition] = builtin_rules() if include_builtin else []
    for path in paths:
        rules.extend(load_rule_file(path))
    return Registry.load(rules)
