"""Java style guard: a pattern-level checker for Java coding conventions."""

from importlib.metadata import version, PackageNotFoundError

from .errors import (
    DuplicateRuleError,
    InputDecodeError,
    InvalidRuleError,
    NotFoundError,
    StyleGuardError,
)
from .evaluator import evaluate
from .result import EvaluationReport, Violation
from .rules import Registry, RuleDefinition
from .runner import run
from .severity import Severity

try:
    __version__ = version("java-styleguard")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0-dev"

__all__ = [
    "__version__",
    "DuplicateRuleError",
    "EvaluationReport",
    "InputDecodeError",
    "InvalidRuleError",
    "NotFoundError",
    "Registry",
    "RuleDefinition",
    "Severity",
    "StyleGuardError",
    "Violation",
    "evaluate",
    "run",
]
