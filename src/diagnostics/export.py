# ABOUTME: Provides the CLI for analyzing attempt JSON files and exporting analysis artifacts.
# ABOUTME: Writes analysis JSON, per-topic parquet, and the plain-text diagnostic report.

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import typer
import yaml
from rich.console import Console
from rich.table import Table

from src.common.config import DEFAULT_CONFIG, AnalysisConfig, load_analysis_config
from src.common.i18n import resolve_language
from src.common.schemas import AnalysisOutput, TestAttempt
from src.topic_classifier import classify_questions, localize_topic
from .aggregation import dropped_outcomes
from .engine import analyze
from .report import diagnostic_report_from_analysis

console = Console()
app = typer.Typer(help="Analyze test attempts and export diagnostic artifacts.")

TOPIC_COLUMNS = ["topic", "total_items", "percent_correct", "avg_score_pct", "classification", "confidence"]


def parse_overrides(values: Optional[List[str]]) -> Dict[str, Any]:
    """Parse repeated `key=value` options; values follow YAML scalar rules."""

    overrides: Dict[str, Any] = {}
    for raw in values or []:
        key, sep, value = raw.partition("=")
        key = key.strip()
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got {raw!r}.", param_hint="--set")
        try:
            overrides[key] = yaml.safe_load(value)
        except yaml.YAMLError:
            overrides[key] = value
    return overrides


def _read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _resolve_config(config_path: Optional[Path], overrides: Optional[Dict[str, Any]]) -> AnalysisConfig:
    if config_path is not None:
        return load_analysis_config(config_path, overrides)
    return DEFAULT_CONFIG.with_overrides(overrides)


def topics_frame(analysis: AnalysisOutput) -> pd.DataFrame:
    rows = [asdict(t) for t in analysis.topics]
    return pd.DataFrame(rows, columns=TOPIC_COLUMNS)


def export_analysis(
    attempt_path: Path,
    output_dir: Path,
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    write_report: bool = True,
) -> AnalysisOutput:
    """
    Programmatic entrypoint mirrored by the Typer CLI.

    Artifacts:
    1. analysis.json - the full analysis output
    2. topics.parquet - one row per analysed topic
    3. diagnostic_report.txt - rule-based report in the attempt's language (optional)
    """

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    print(f"[diagnostics] Loading attempt from {attempt_path}")
    payload = _read_json(attempt_path)
    if not isinstance(payload, dict):
        raise ValueError(f"Attempt at {attempt_path} must be a JSON object, got {type(payload).__name__}.")
    attempt = TestAttempt.from_dict(payload)

    cfg = _resolve_config(config_path, overrides)
    if config_path is not None:
        print(f"[diagnostics] Loaded config from {config_path}")

    dropped = dropped_outcomes(attempt.questions)
    if dropped:
        print(f"⚠️  {len(dropped)} outcome(s) without a topic were left out of topic grouping")

    analysis = analyze(attempt, cfg)
    print(
        f"[diagnostics] {len(analysis.topics)} topics, overall {analysis.overall_score_pct:.2f}%, "
        f"{len(analysis.homework)} homework tasks, {len(analysis.video_recommendations)} videos"
    )

    analysis_path = output_dir / "analysis.json"
    with open(analysis_path, "w", encoding="utf-8") as f:
        json.dump(analysis.to_dict(), f, ensure_ascii=False, indent=2)
    print(f"✅ Exported analysis to {analysis_path}")

    topics_path = output_dir / "topics.parquet"
    topics_frame(analysis).to_parquet(topics_path, index=False)
    print(f"✅ Exported {len(analysis.topics)} topics to {topics_path}")

    if write_report:
        language = resolve_language(attempt.metadata.preferred_language)
        report_path = output_dir / "diagnostic_report.txt"
        report_path.write_text(diagnostic_report_from_analysis(analysis, language=language), encoding="utf-8")
        print(f"✅ Exported diagnostic report to {report_path}")

    return analysis


@app.command("analyze")
def analyze_command(
    attempt: Path = typer.Option(..., "--attempt", help="Path to a test attempt JSON file."),
    config: Optional[Path] = typer.Option(None, "--config", help="Optional analysis config YAML."),
    overrides: Optional[List[str]] = typer.Option(None, "--set", help="Override a config knob, e.g. --set tone=strict."),
    output_dir: Path = typer.Option(Path("reports"), "--output-dir", help="Directory to write exports."),
    report: bool = typer.Option(True, "--report/--no-report", help="Also write the diagnostic report text."),
) -> None:
    """Analyze one attempt and export its artifacts."""
    parsed = parse_overrides(overrides)
    for path in (attempt, config):
        if path is not None and not path.exists():
            console.print(f"[red]Missing input file at {path}[/red]")
            raise typer.Exit(code=1)
    try:
        analysis = export_analysis(attempt, output_dir, config_path=config, overrides=parsed, write_report=report)
    except (json.JSONDecodeError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Topic")
    table.add_column("Items")
    table.add_column("Correct %")
    table.add_column("Band")
    table.add_column("Confidence")
    table.add_column("Practice share")
    shares = {item.topic: item.proportion for item in analysis.recommended_practice_distribution}
    for topic in analysis.topics:
        table.add_row(
            topic.topic,
            str(topic.total_items),
            f"{topic.percent_correct:.2f}",
            topic.classification,
            f"{topic.confidence:.2f}",
            f"{shares.get(topic.topic, 0.0):.0%}",
        )
    console.print(table)


@app.command("report")
def report_command(
    analysis: Path = typer.Option(..., "--analysis", help="Path to an analysis JSON file."),
    language: str = typer.Option("en", "--language", help="Report language: en, ru, or kz."),
    max_topics: int = typer.Option(10, "--max-topics", help="Maximum topics to list (1-10)."),
) -> None:
    """Print the rule-based diagnostic report for an exported analysis."""
    if not analysis.exists():
        console.print(f"[red]Missing analysis file at {analysis}[/red]")
        raise typer.Exit(code=1)
    try:
        payload = _read_json(analysis)
    except (json.JSONDecodeError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)
    typer.echo(diagnostic_report_from_analysis(payload, language=language, max_topics=max_topics))


@app.command("classify")
def classify_command(
    input_path: Path = typer.Option(..., "--input", help="Text file with one question per line."),
    language: str = typer.Option("en", "--language", help="Language for topic labels: en, ru, or kz."),
    as_json: bool = typer.Option(False, "--json", help="Emit classifications as JSON."),
) -> None:
    """Classify question texts into subjects and topics."""
    if not input_path.exists():
        console.print(f"[red]Missing input file at {input_path}[/red]")
        raise typer.Exit(code=1)
    lines = [line.strip() for line in input_path.read_text(encoding="utf-8").splitlines()]
    records = classify_questions([line for line in lines if line])

    if as_json:
        typer.echo(json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=2))
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#")
    table.add_column("Subject")
    table.add_column("Topic")
    table.add_column("Difficulty")
    table.add_column("Confidence")
    table.add_column("Action")
    for idx, record in enumerate(records, start=1):
        table.add_row(
            str(idx),
            record.subject,
            localize_topic(record.topic, language),
            str(record.difficulty),
            f"{record.confidence:.2f}",
            record.recommended_action,
        )
    console.print(table)


if __name__ == "__main__":
    app()
