"""Apply a single rule to the lines of one input."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Union

from .result import Violation
from .rules import RuleDefinition
from .utils import normalize_lines


def match_line(rule: RuleDefinition, line: str) -> Optional[str]:
    """Return the offending snippet of ``line``, or ``None`` when it is clean."""

    pattern = rule.pattern
    if isinstance(pattern, re.Pattern):
        match = pattern.search(line)
        if match is None:
            return None
        return match.group(0)
    snippet = pattern(line)
    if snippet is None or snippet is False:
        return None
    if snippet is True:
        return line.strip()
    return str(snippet)


def evaluate(
    rule: RuleDefinition,
    source_lines: Sequence[Union[str, bytes]],
    source: str = "<input>",
) -> List[Violation]:
    """Yield one violation per line that ``rule`` matches, in line order."""

    violations: List[Violation] = []
    for number, line in enumerate(normalize_lines(source_lines, source), start=1):
        snippet = match_line(rule, line)
        if snippet is None:
            continue
        violations.append(
            Violation(
                rule_id=rule.id,
                line=number,
                snippet=snippet,
                severity=rule.severity,
                message=rule.description,
            )
        )
    return violations
