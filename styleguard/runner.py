"""Run a rule registry over one or more inputs and aggregate the results."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from .errors import InputDecodeError
from .evaluator import evaluate
from .result import EVALUATOR_FAILURE, EvaluationReport, Violation
from .rules import Registry
from .severity import Severity
from .utils import DEFAULT_EXTENSIONS, iter_code_files, normalize_lines, read_source_lines

logger = logging.getLogger(__name__)


def run(
    registry: Registry,
    source_lines: Sequence[Union[str, bytes]],
    source: str = "<input>",
) -> EvaluationReport:
    """Apply every rule in load order and collect the violations.

    Violations are ordered by rule, then by line. A rule that raises is
    reported as a synthetic ERROR violation and the remaining rules still
    run. Undecodable input raises :class:`InputDecodeError`.
    """

    lines = normalize_lines(source_lines, source)
    report = EvaluationReport(source=source)
    for rule in registry.all():
        try:
            violations = evaluate(rule, lines, source)
        except Exception:
            logger.warning("Rule %s failed on %s", rule.id, source, exc_info=True)
            violations = [
                Violation(
                    rule_id=rule.id,
                    line=0,
                    snippet="",
                    severity=Severity.ERROR,
                    message=EVALUATOR_FAILURE,
                )
            ]
        report.extend(violations)
    logger.debug("%s: %d violations", source, report.summary.total)
    return report


def run_file(registry: Registry, path: Union[str, Path]) -> EvaluationReport:
    """Run ``registry`` over a file; unreadable files yield an errored report."""

    path = Path(path)
    try:
        lines = read_source_lines(path)
    except InputDecodeError as exc:
        logger.error("%s", exc)
        return EvaluationReport(source=str(path), error=exc.reason)
    return run(registry, lines, source=str(path))


def run_paths(
    registry: Registry,
    paths: Iterable[str],
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    workers: int = 1,
) -> List[EvaluationReport]:
    """Scan every matching file beneath ``paths``.

    Reports come back in discovery order even when files are scanned on a
    thread pool.
    """

    files = list(dict.fromkeys(iter_code_files(paths, extensions=extensions)))
    logger.info("Scanning %d files with %d rules", len(files), len(registry))
    if workers <= 1 or len(files) <= 1:
        return [run_file(registry, path) for path in files]
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(lambda path: run_file(registry, path), files))
