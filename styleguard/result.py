"""Core result data structures for the style checker."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .severity import Severity

SEVERITY_ORDER: Sequence[Severity] = (
    Severity.ERROR,
    Severity.WARN,
    Severity.INFO,
)

EVALUATOR_FAILURE = "evaluator failure"


@dataclass(frozen=True)
class Violation:
    """Capture a single place where a rule pattern matched."""

    rule_id: str
    line: int
    snippet: str
    severity: Severity
    message: str = ""

    @property
    def synthetic(self) -> bool:
        return self.line == 0

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


@dataclass
class Summary:
    """Aggregate violation counts by severity."""

    error: int = 0
    warn: int = 0
    info: int = 0

    def increment(self, severity: Severity) -> None:
        attr = severity.value.lower()
        setattr(self, attr, getattr(self, attr) + 1)

    def merge(self, other: "Summary") -> None:
        for severity in SEVERITY_ORDER:
            attr = severity.value.lower()
            setattr(self, attr, getattr(self, attr) + getattr(other, attr))

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def as_rows(self) -> List[Tuple[str, int]]:
        """Return severity/count pairs ordered for reporting."""

        return [(severity.value, getattr(self, severity.value.lower())) for severity in SEVERITY_ORDER]

    @property
    def total(self) -> int:
        return sum(getattr(self, severity.value.lower()) for severity in SEVERITY_ORDER)


@dataclass
class EvaluationReport:
    """Ordered violations for one input source plus their severity counts."""

    source: str = "<input>"
    summary: Summary = field(default_factory=Summary)
    violations: List[Violation] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.error is None and self.summary.error == 0

    def add_violation(self, violation: Violation) -> None:
        self.summary.increment(violation.severity)
        self.violations.append(violation)

    def extend(self, violations: Iterable[Violation]) -> None:
        for violation in violations:
            self.add_violation(violation)

    def to_dict(self) -> Dict[str, object]:
        return {
            "source": self.source,
            "summary": self.summary.to_dict(),
            "violations": [violation.to_dict() for violation in self.violations],
            "passed": self.passed,
            "error": self.error,
        }

    def exit_code(self) -> int:
        if self.error is not None:
            return 2
        if self.summary.error > 0:
            return 1
        return 0

    def top_violations(self, limit: int = 5) -> List[Violation]:
        """Return violations ordered by severity ranking, then position."""

        ordered = sorted(
            self.violations,
            key=lambda violation: (-violation.severity.rank, violation.line, violation.rule_id),
        )
        return ordered[:limit]


def combine_summaries(reports: Iterable[EvaluationReport]) -> Summary:
    total = Summary()
    for report in reports:
        total.merge(report.summary)
    return total


def overall_exit_code(reports: Iterable[EvaluationReport]) -> int:
    """ERROR anywhere maps to 1, an unreadable input to 2, otherwise 0."""

    return max((report.exit_code() for report in reports), default=0)


def reports_to_dict(reports: Sequence[EvaluationReport]) -> Dict[str, object]:
    return {
        "reports": [report.to_dict() for report in reports],
        "summary": combine_summaries(reports).to_dict(),
        "passed": all(report.passed for report in reports),
    }


def format_violation(source: str, violation: Violation) -> str:
    location = f"{source}:{violation.line}" if not violation.synthetic else source
    text = f"{location}: [{violation.severity.value}] {violation.rule_id} {violation.message}"
    if violation.snippet:
        text += f": {violation.snippet}"
    return text


def format_summary_table(reports: Sequence[EvaluationReport], max_violations: int = 5) -> str:
    """Create a human-readable summary table for console output."""

    summary = combine_summaries(reports)
    lines: List[str] = []
    lines.append("Style Check Summary")
    lines.append("=" * 40)
    header = f"{'Severity':<10} | {'Count':>5}"
    lines.append(header)
    lines.append("-" * len(header))
    for severity, count in summary.as_rows():
        lines.append(f"{severity:<10} | {count:>5}")
    lines.append("-" * len(header))
    status = "PASS" if all(report.passed for report in reports) else "FAIL"
    lines.append(f"Status    : {status}")
    lines.append(f"Files     : {len(reports)}")
    lines.append(f"Violations: {summary.total}")

    errored = [report for report in reports if report.error is not None]
    if errored:
        lines.append("")
        lines.append("Unreadable Inputs")
        lines.append("-" * 40)
        for report in errored:
            lines.append(f"{report.source}: {report.error}")

    flagged = [report for report in reports if report.violations] if max_violations > 0 else []
    if flagged:
        lines.append("")
        lines.append("Top Violations")
        lines.append("-" * 40)
        for report in flagged:
            for violation in report.top_violations(max_violations):
                lines.append(format_violation(report.source, violation))
    return "\n".join(lines)
