# ABOUTME: Tests the analysis export CLI and its programmatic entrypoint.
# ABOUTME: Uses temp directories for attempt input and the JSON/parquet/report outputs.

import json

import pandas as pd
import pytest
import typer
from typer.testing import CliRunner

from src.diagnostics.export import app, export_analysis, parse_overrides

runner = CliRunner()

ATTEMPT = {
    "student_id": "S1",
    "test_id": "T1",
    "timestamp": "2024-05-01T10:00:00Z",
    "questions": [
        {"question_id": "q1", "topic": "fractions", "max_score": 1, "score": 0, "correct": False},
        {"question_id": "q2", "topic": "fractions", "max_score": 1, "score": 1, "correct": True},
        {"question_id": "q3", "topic": "decimals", "max_score": 1, "score": 0, "correct": False},
        {"question_id": "q4", "topic": "", "max_score": 1, "score": 0, "correct": False},
    ],
    "metadata": {"grade_level": "Grade 6", "preferred_language": "ru"},
}


@pytest.fixture
def attempt_path(tmp_path):
    path = tmp_path / "attempt.json"
    path.write_text(json.dumps(ATTEMPT, ensure_ascii=False), encoding="utf-8")
    return path


def test_parse_overrides_uses_yaml_scalars():
    parsed = parse_overrides(["tone=strict", "weak_share_max=0.65", "strong_share_max=null", "video_count_strong=1"])
    assert parsed == {"tone": "strict", "weak_share_max": 0.65, "strong_share_max": None, "video_count_strong": 1}
    assert parse_overrides(None) == {}


def test_parse_overrides_rejects_missing_equals():
    with pytest.raises(typer.BadParameter):
        parse_overrides(["oops"])


def test_export_analysis_writes_artifacts(attempt_path, tmp_path):
    out_dir = tmp_path / "out"
    analysis = export_analysis(attempt_path, out_dir)

    saved = json.loads((out_dir / "analysis.json").read_text(encoding="utf-8"))
    assert saved["overall_score_pct"] == 25.0
    assert [t["topic"] for t in saved["topics"]] == ["fractions", "decimals"]

    topics = pd.read_parquet(out_dir / "topics.parquet")
    assert list(topics["topic"]) == ["fractions", "decimals"]
    assert set(topics["classification"]) == {"weak"}

    report = (out_dir / "diagnostic_report.txt").read_text(encoding="utf-8")
    assert report.startswith("Слабые темы:")
    assert analysis.student_message.startswith("Хорошая работа!")


def test_export_analysis_rejects_non_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        export_analysis(path, tmp_path / "out")


def test_analyze_command_applies_overrides(attempt_path, tmp_path):
    out_dir = tmp_path / "cli"
    result = runner.invoke(
        app,
        ["analyze", "--attempt", str(attempt_path), "--output-dir", str(out_dir), "--set", "tone=strict", "--no-report"],
    )
    assert result.exit_code == 0, result.output
    saved = json.loads((out_dir / "analysis.json").read_text(encoding="utf-8"))
    assert "!" not in saved["student_message"]
    assert not (out_dir / "diagnostic_report.txt").exists()


def test_analyze_command_with_config_file(attempt_path, tmp_path):
    config_path = tmp_path / "analysis.yaml"
    config_path.write_text("analysis:\n  tone: motivational\n", encoding="utf-8")
    out_dir = tmp_path / "cfg"
    result = runner.invoke(
        app, ["analyze", "--attempt", str(attempt_path), "--config", str(config_path), "--output-dir", str(out_dir)]
    )
    assert result.exit_code == 0, result.output
    saved = json.loads((out_dir / "analysis.json").read_text(encoding="utf-8"))
    assert saved["student_message"].endswith("🚀")


def test_analyze_command_missing_attempt(tmp_path):
    result = runner.invoke(app, ["analyze", "--attempt", str(tmp_path / "absent.json")])
    assert result.exit_code == 1


def test_analyze_command_bad_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    result = runner.invoke(app, ["analyze", "--attempt", str(path), "--output-dir", str(tmp_path / "o")])
    assert result.exit_code == 1


def test_report_command(attempt_path, tmp_path):
    out_dir = tmp_path / "rep"
    export_analysis(attempt_path, out_dir, write_report=False)
    result = runner.invoke(
        app, ["report", "--analysis", str(out_dir / "analysis.json"), "--language", "en", "--max-topics", "1"]
    )
    assert result.exit_code == 0, result.output
    assert result.output.startswith("Weak topics:\n- fractions — 50% —")
    assert "decimals" not in result.output


def test_report_command_bad_json(tmp_path):
    path = tmp_path / "analysis.json"
    path.write_text("{not json", encoding="utf-8")
    result = runner.invoke(app, ["report", "--analysis", str(path)])
    assert result.exit_code == 1
    assert not isinstance(result.exception, ValueError)


def test_report_command_missing_file(tmp_path):
    result = runner.invoke(app, ["report", "--analysis", str(tmp_path / "absent.json")])
    assert result.exit_code == 1


def test_classify_command_json(tmp_path):
    path = tmp_path / "questions.txt"
    path.write_text("Найдите log_2 8\n\nКакая сила действует на тело?\n", encoding="utf-8")
    result = runner.invoke(app, ["classify", "--input", str(path), "--json"])
    assert result.exit_code == 0, result.output
    records = json.loads(result.output)
    assert [r["topic"] for r in records] == ["Logarithms", "Dynamics (Newton's second law)"]
