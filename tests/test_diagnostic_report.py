# ABOUTME: Tests the rule-based diagnostic report: sections, bands, estimates, and languages.
# ABOUTME: Also covers building the report from an exported analysis payload.

from src.common.schemas import TopicClassification
from src.diagnostics.report import (
    REPORT_STRINGS,
    TopicPerformance,
    diagnostic_report_from_analysis,
    generate_diagnostic_report,
    performances_from_analysis,
    report_band,
)


def test_two_section_layout_in_russian():
    report = generate_diagnostic_report(
        [TopicPerformance("Algebra", 45), TopicPerformance("Geometry", 85)], language="ru"
    )
    lines = report.split("\n")
    assert lines[0] == "Слабые темы:"
    assert lines[1].startswith("- Algebra — 45% — Требуется полное повторение. Кратко: ")
    assert lines[1].endswith("Время: 3–4 часа.")
    assert lines[2] == ""
    assert lines[3] == "Сильные темы:"
    assert lines[4].startswith("- Geometry — 85% — Поддерживать.")
    assert lines[4].endswith("Время: 1–2 часа.")
    assert lines[5] == ""
    assert lines[6] == REPORT_STRINGS["ru"].plan
    assert len(lines) == 7


def test_english_line_format():
    report = generate_diagnostic_report([TopicPerformance("Algebra", 45)])
    assert report.split("\n")[1] == (
        "- Algebra — 45% — Needs full review. Summary: gaps in basic steps/rules are visible. "
        "Recommendations: 1) Review key definitions and formulas; "
        "2) Solve 10–15 typical problems with self-check; "
        "3) Go through 3 typical mistakes on the topic. Time: 3–4 hours."
    )


def test_borderline_topics_listed_under_weak_header():
    report = generate_diagnostic_report([TopicPerformance("Ratios", 70)])
    lines = report.split("\n")
    assert lines[0] == "Weak topics:"
    assert "Needs brief review" in lines[1]
    assert "Strong topics:" not in report


def test_only_strong_topics():
    report = generate_diagnostic_report([TopicPerformance("Geometry", 95)])
    assert report.startswith("Strong topics:\n")
    assert "Weak topics:" not in report


def test_band_edges():
    assert report_band(59.9) == TopicClassification.WEAK
    assert report_band(60) == TopicClassification.BORDERLINE
    assert report_band(80) == TopicClassification.BORDERLINE
    assert report_band(80.5) == TopicClassification.STRONG
    assert report_band(None, "strong") == TopicClassification.STRONG
    assert report_band(None, None) == TopicClassification.BORDERLINE
    assert report_band(95, "weak") == TopicClassification.STRONG


def test_estimated_percent_from_band_only():
    report = generate_diagnostic_report(
        [TopicPerformance("Optics", classification="weak"), TopicPerformance("Kinematics")]
    )
    assert "- Optics — ≈50% (estimate) — Needs full review." in report
    assert "- Kinematics — ≈70% (estimate) — Needs brief review." in report


def test_note_replaces_default_rationale():
    report = generate_diagnostic_report([TopicPerformance("Algebra", 40, note="confuses signs")])
    assert "Summary: confuses signs." in report


def test_percent_rounds_half_up():
    report = generate_diagnostic_report([TopicPerformance("Algebra", 44.5)])
    assert "- Algebra — 45% —" in report


def test_max_topics_is_clamped():
    topics = [TopicPerformance(f"T{i}", 40) for i in range(15)]
    assert generate_diagnostic_report(topics, max_topics=50).count("\n- ") == 10
    assert generate_diagnostic_report(topics, max_topics=0).count("\n- ") == 1
    assert generate_diagnostic_report(topics, max_topics=3).count("\n- ") == 3


def test_empty_topics_only_plan():
    assert generate_diagnostic_report([]) == REPORT_STRINGS["en"].plan


def test_kazakh_and_unknown_language():
    kz = generate_diagnostic_report([TopicPerformance("Алгебра", 30)], language="kz")
    assert kz.startswith("Әлсіз тақырыптар:")
    fr = generate_diagnostic_report([TopicPerformance("Algebra", 30)], language="fr")
    assert fr.startswith("Weak topics:")


def test_performances_from_analysis_payload():
    payload = {
        "topics": [
            {"topic": "fractions", "percent_correct": 50.0, "avg_score_pct": 50.0,
             "classification": "weak", "total_items": 2},
            {"topic": "", "percent_correct": None, "avg_score_pct": 75.0, "classification": "weak"},
            "junk",
        ]
    }
    performances = performances_from_analysis(payload, language="ru")
    assert [p.topic for p in performances] == ["fractions", "Тема"]
    assert performances[0].sample_size == 2
    assert performances[1].percent == 75.0

    report = diagnostic_report_from_analysis(payload, language="ru")
    assert "- Тема — 75% — Требуется небольшое повторение." in report


def test_report_from_payload_without_topics():
    assert diagnostic_report_from_analysis({}, language="en") == REPORT_STRINGS["en"].plan
    assert performances_from_analysis({"topics": "nope"}) == []
