import json
from pathlib import Path

from styleguard import cli

SAMPLES = Path(__file__).resolve().parent.parent / "samples"


def test_cli_generates_json_report(tmp_path, capsys):
    output_path = tmp_path / "style.json"

    exit_code = cli.main(
        [
            str(SAMPLES / "violating"),
            "--out",
            str(output_path),
        ]
    )

    captured = capsys.readouterr()
    assert "Style Check Summary" in captured.out
    assert "JAVA-LOG-001" in captured.out
    assert exit_code == 1  # ERROR violations present
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["summary"]["error"] == 4
    assert data["passed"] is False
    assert data["reports"][0]["violations"][0]["rule_id"] == "JAVA-FMT-004"


def test_cli_passes_on_clean_sources(capsys):
    exit_code = cli.main([str(SAMPLES / "clean"), "--format", "json"])

    captured = capsys.readouterr()
    data = json.loads(captured.out)
    assert exit_code == 0
    assert data["passed"] is True
    assert data["summary"] == {"error": 0, "warn": 0, "info": 0}


def test_cli_exits_zero_with_only_warnings(tmp_path, capsys):
    source = tmp_path / "Legacy.java"
    source.write_text("import java.util.*;\n", encoding="utf-8")

    exit_code = cli.main([str(source)])

    assert exit_code == 0
    assert "JAVA-IMP-001" in capsys.readouterr().out


def test_cli_custom_rules_only(tmp_path, capsys):
    rules = tmp_path / "rules.yaml"
    rules.write_text("- id: NO-VAR\n  pattern: '\\bvar\\b'\n  severity: ERROR\n", encoding="utf-8")
    source = tmp_path / "Local.java"
    source.write_text("var x = 1;\nint y = 2;\n", encoding="utf-8")

    exit_code = cli.main([str(source), "--no-builtin", "--rules", str(rules), "--format", "json"])

    data = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert data["reports"][0]["violations"] == [
        {"rule_id": "NO-VAR", "line": 1, "snippet": "var", "severity": "ERROR", "message": "NO-VAR"}
    ]


def test_cli_duplicate_rules_exit_with_usage_error(tmp_path, capsys):
    rules = tmp_path / "rules.yaml"
    rules.write_text("- id: JAVA-FMT-001\n  pattern: x\n", encoding="utf-8")

    exit_code = cli.main([str(SAMPLES / "clean"), "--rules", str(rules)])

    assert exit_code == 2
    assert "Style Check Summary" not in capsys.readouterr().out


def test_cli_unreadable_source_exits_two(tmp_path, capsys):
    source = tmp_path / "Broken.java"
    source.write_bytes(b"\xff\xfe\x00")

    exit_code = cli.main([str(source)])

    captured = capsys.readouterr()
    assert exit_code == 2
    assert "Unreadable Inputs" in captured.out


def test_cli_lists_rules(capsys):
    exit_code = cli.main(["--list-rules"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "JAVA-EXC-001" in captured.out
    assert "rules loaded" in captured.out


def test_cli_missing_path_exits_two(tmp_path):
    assert cli.main([str(tmp_path / "nowhere")]) == 2


def test_cli_text_output_lists_each_violation_once(capsys):
    cli.main([str(SAMPLES / "violating")])

    out = capsys.readouterr().out
    assert out.count("JAVA-LOG-001") == 1
    assert "Top Violations" not in out


def test_cli_reads_config_file(tmp_path, capsys):
    source = tmp_path / "Legacy.java"
    source.write_text("import java.util.*;\n", encoding="utf-8")
    config = tmp_path / "style.yaml"
    config.write_text("severity:\n  JAVA-IMP-001: ERROR\n", encoding="utf-8")

    exit_code = cli.main([str(source), "--config", str(config), "--format", "json"])

    data = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert data["reports"][0]["violations"][0]["severity"] == "ERROR"


def test_cli_config_directory_exits_two(tmp_path):
    assert cli.main([str(SAMPLES / "clean"), "--config", str(tmp_path)]) == 2


def test_cli_ext_selects_files(tmp_path, capsys):
    (tmp_path / "Skipped.java").write_text("import java.util.*;\n", encoding="utf-8")
    (tmp_path / "Script.groovy").write_text("import java.util.*;\n", encoding="utf-8")

    exit_code = cli.main([str(tmp_path), "--ext", "groovy", "--format", "json"])

    data = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert [Path(report["source"]).name for report in data["reports"]] == ["Script.groovy"]


def test_cli_workers_match_serial_report(capsys):
    cli.main([str(SAMPLES), "--format", "json"])
    serial = json.loads(capsys.readouterr().out)

    cli.main([str(SAMPLES), "--format", "json", "--workers", "4"])
    parallel = json.loads(capsys.readouterr().out)

    assert parallel == serial
    assert len(parallel["reports"]) == 2
