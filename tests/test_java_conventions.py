from pathlib import Path

import pytest

from styleguard.evaluator import evaluate
from styleguard.rules import Registry
from styleguard.rules.spec import builtin_rules
from styleguard.runner import run_file
from styleguard.severity import Severity

SAMPLES = Path(__file__).resolve().parent.parent / "samples"


@pytest.fixture(scope="module")
def registry():
    return Registry.load(builtin_rules())


def test_clean_sample_has_no_violations(registry):
    report = run_file(registry, SAMPLES / "clean" / "InvoiceService.java")

    assert report.violations == []
    assert report.passed


def test_violating_sample_is_reported_in_rule_order(registry):
    report = run_file(registry, SAMPLES / "violating" / "OrderService.java")

    assert [(v.rule_id, v.line) for v in report.violations] == [
        ("JAVA-FMT-004", 10),
        ("JAVA-IMP-001", 3),
        ("JAVA-NAM-001", 5),
        ("JAVA-NAM-002", 7),
        ("JAVA-CMT-001", 16),
        ("JAVA-CMT-002", 16),
        ("JAVA-LOG-001", 11),
        ("JAVA-LOG-002", 23),
        ("JAVA-EXC-001", 15),
        ("JAVA-EXC-002", 22),
        ("JAVA-EXC-003", 24),
    ]
    assert report.summary.to_dict() == {"error": 4, "warn": 5, "info": 2}
    assert report.exit_code() == 1


@pytest.mark.parametrize(
    "rule_id, line, snippet",
    [
        ("JAVA-FMT-001", "\tint x = 1;", "\t"),
        ("JAVA-FMT-002", "int x = 1;   ", "   "),
        ("JAVA-FMT-003", "x" * 125, "xxxxx"),
        ("JAVA-FMT-004", "    while(running) {", "while("),
        ("JAVA-FMT-005", "    else {", "    else"),
        ("JAVA-IMP-001", "import static org.junit.Assert.*;", "import static org.junit.Assert.*;"),
        ("JAVA-NAM-001", "interface paymentGateway {", "interface paymentGateway"),
        ("JAVA-NAM-003", "long timeout = 3000l;", "3000l"),
        ("JAVA-CMT-001", "// TODO: remove", "TODO"),
        ("JAVA-LOG-003", 'log.info("user " + name);', 'log.info("user " +'),
        ("JAVA-TST-001", "    @Disabled", "@Disabled"),
    ],
)
def test_builtin_rule_matches(registry, rule_id, line, snippet):
    violations = evaluate(registry.get(rule_id), [line])

    assert [v.snippet for v in violations] == [snippet]


@pytest.mark.parametrize(
    "rule_id, line",
    [
        ("JAVA-FMT-003", "x" * 120),
        ("JAVA-FMT-004", "notify(lock);"),
        ("JAVA-NAM-001", "Class<?> type = InvoiceService.class;"),
        ("JAVA-NAM-002", "private static final Logger log = LoggerFactory.getLogger(A.class);"),
        ("JAVA-NAM-002", "private static final long serialVersionUID = 1L;"),
        ("JAVA-CMT-001", "// TODO(bob): split this method"),
        ("JAVA-CMT-002", 'String url = "http://example.com";'),
        ("JAVA-EXC-003", 'throw new IllegalStateException("closed");'),
        ("JAVA-TST-001", '@Disabled("flaky on CI, see issue 42")'),
    ],
)
def test_builtin_rule_ignores_conforming_code(registry, rule_id, line):
    assert evaluate(registry.get(rule_id), [line]) == []


def test_builtin_severities(registry):
    assert registry.get("JAVA-LOG-001").severity is Severity.ERROR
    assert registry.get("JAVA-FMT-002").severity is Severity.INFO
