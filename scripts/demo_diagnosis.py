# ABOUTME: Provides a CLI that narrates a sample test attempt through the diagnostic engine.
# ABOUTME: Renders topic bands, practice shares, homework, and messages with Rich.

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.common.config import DEFAULT_CONFIG, load_analysis_config
from src.common.schemas import TestAttempt
from src.diagnostics.engine import analyze
from src.diagnostics.report import diagnostic_report_from_analysis
from src.topic_classifier import classify_questions, localize_topic, summarize_questions

console = Console()
app = typer.Typer(help="Walk a sample attempt through topic banding, practice planning, and feedback.")

SAMPLE_QUESTIONS = [
    "Решите квадратное уравнение x^2 - 5x + 6 = 0",
    "Найдите log_2 8",
    "В каком веке произошло монгольское нашествие на территорию Казахстана?",
    "Какова вероятность вытащить красный шар из урны?",
    "Найдите производную функции f(x) = 3x + 2",
    "Когда была принята Конституция Республики Казахстан?",
]


def demo_attempt(language: str = "en") -> dict:
    return {
        "student_id": "S1",
        "test_id": "T1",
        "questions": [
            {"question_id": "q1", "topic": "fractions", "max_score": 1, "score": 0, "correct": False},
            {"question_id": "q2", "topic": "fractions", "max_score": 1, "score": 1, "correct": True},
            {"question_id": "q3", "topic": "decimals", "max_score": 1, "score": 0, "correct": False},
        ],
        "metadata": {"grade_level": "Grade 6", "preferred_language": language},
    }


@app.command()
def run(
    language: str = typer.Option("en", "--language", help="Preferred language: en, ru, or kz."),
    config: Optional[Path] = typer.Option(None, "--config", help="Optional analysis config YAML."),
    tone: Optional[str] = typer.Option(None, "--tone", help="neutral, supportive, strict, or motivational."),
) -> None:
    """
    Analyze the built-in sample attempt and print every part of the output.
    """
    cfg = load_analysis_config(config) if config else DEFAULT_CONFIG
    if tone:
        cfg = cfg.with_overrides({"tone": tone})
    attempt = TestAttempt.from_dict(demo_attempt(language))
    analysis = analyze(attempt, cfg)

    console.rule("[bold blue]Test Result Diagnosis[/bold blue]")
    console.print(f"[bold]Student:[/] {analysis.student_id}")
    console.print(f"[bold]Test:[/] {analysis.test_id}")
    console.print(f"[bold]Overall:[/] {analysis.overall_score_pct:.2f}%")
    console.print()

    shares = {item.topic: item.proportion for item in analysis.recommended_practice_distribution}
    console.print("[bold green]Topics[/bold green]")
    topic_table = Table(show_header=True, header_style="bold magenta")
    topic_table.add_column("Topic")
    topic_table.add_column("Items")
    topic_table.add_column("Correct %")
    topic_table.add_column("Score %")
    topic_table.add_column("Band")
    topic_table.add_column("Confidence")
    topic_table.add_column("Practice share")
    for t in analysis.topics:
        topic_table.add_row(
            t.topic,
            str(t.total_items),
            f"{t.percent_correct:.2f}",
            f"{t.avg_score_pct:.2f}",
            t.classification,
            f"{t.confidence:.2f}",
            f"{shares.get(t.topic, 0.0):.0%}",
        )
    console.print(topic_table)

    console.print()
    console.print("[bold yellow]Homework[/bold yellow]")
    hw_table = Table(show_header=True, header_style="bold magenta")
    hw_table.add_column("Task ID")
    hw_table.add_column("Title")
    hw_table.add_column("Difficulty")
    hw_table.add_column("Minutes")
    for task in analysis.homework:
        hw_table.add_row(task.task_id, task.title, task.difficulty, str(task.estimated_time_minutes))
    console.print(hw_table)

    console.print()
    console.print("[bold yellow]Videos[/bold yellow]")
    for video in analysis.video_recommendations:
        console.print(f"  {video.title} ({video.recommended_length_min} min, {video.difficulty}) → {' '.join(video.query_terms)}")

    console.print()
    console.print(Panel(analysis.teacher_notes, title="Teacher notes"))
    console.print(Panel(analysis.student_message, title="Student message"))
    console.print(Panel(diagnostic_report_from_analysis(analysis, language=language), title="Diagnostic report"))


@app.command()
def classify(
    language: str = typer.Option("en", "--language", help="Language for topic labels: en, ru, or kz."),
) -> None:
    """
    Classify a handful of sample ENT questions and summarize the batch.
    """
    records = classify_questions(SAMPLE_QUESTIONS)
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Question")
    table.add_column("Subject")
    table.add_column("Topic")
    table.add_column("Century")
    table.add_column("Action")
    for r in records:
        century = "" if r.history_century is None else str(r.history_century)
        table.add_row(r.question_text, r.subject, localize_topic(r.topic, language), century, r.recommended_action)
    console.print(table)

    summary = summarize_questions(records)
    console.print()
    console.print("[bold green]Recommendations[/bold green]")
    for rec in summary["recommendations"]:
        console.print(f"  → {rec}")


if __name__ == "__main__":
    app()
