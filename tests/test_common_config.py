# ABOUTME: Tests shared schemas, numeric helpers, language resolution, and analysis config loading.
# ABOUTME: Covers tolerant input parsing and the defaults -> YAML -> overrides precedence.

import pytest

from src.common.config import DEFAULT_CONFIG, AnalysisConfig, load_analysis_config
from src.common.i18n import get_language_pack, resolve_language
from src.common.numeric import round2, round_half_up, safe_divide
from src.common.schemas import QuestionOutcome, TestAttempt


def test_question_outcome_from_dict_tolerates_messy_values():
    outcome = QuestionOutcome.from_dict(
        {"id": "q9", "topic": "  fractions ", "score": "abc", "max_score": None, "correct": 1, "time_spent": "12.5"}
    )
    assert outcome.question_id == "q9"
    assert outcome.topic == "fractions"
    assert outcome.score == 0.0
    assert outcome.max_score == 0.0
    assert outcome.correct is True
    assert outcome.time_spent_seconds == 12.5


def test_test_attempt_from_dict_skips_non_mapping_questions():
    attempt = TestAttempt.from_dict(
        {
            "student_id": "S1",
            "test_id": "T1",
            "timestamp": "2024-05-01T10:00:00Z",
            "questions": [{"question_id": "q1", "topic": "a", "max_score": 1, "score": 1, "correct": True}, "junk", None],
            "metadata": "not a mapping",
        }
    )
    assert len(attempt.questions) == 1
    assert attempt.timestamp == "2024-05-01T10:00:00Z"
    assert attempt.metadata.preferred_language is None
    assert attempt.metadata.grade_level is None


@pytest.mark.parametrize("questions", [5, True, "q1,q2", {"question_id": "q1"}, None])
def test_test_attempt_from_dict_ignores_non_list_questions(questions):
    attempt = TestAttempt.from_dict({"student_id": "S1", "test_id": "T1", "questions": questions})
    assert attempt.questions == []


@pytest.mark.parametrize(
    "raw, expected",
    [("false", False), ("False", False), ("0", False), ("no", False), ("", False),
     ("true", True), (" TRUE ", True), ("1", True), ("yes", True), (1, True), (0, False), (None, False)],
)
def test_question_outcome_correct_reads_string_spellings(raw, expected):
    outcome = QuestionOutcome.from_dict({"question_id": "q1", "topic": "a", "correct": raw})
    assert outcome.correct is expected


def test_test_attempt_defaults_timestamp_when_missing():
    attempt = TestAttempt.from_dict({"student_id": "S1", "test_id": "T1", "questions": []})
    assert attempt.timestamp
    assert attempt.questions == []


def test_round_half_up_rounds_halves_away_from_zero():
    assert round_half_up(12.5) == 13
    assert round_half_up(-12.5) == -13
    assert round2(0.125) == 0.13
    assert round2(33.333333) == 33.33


def test_safe_divide_returns_zero_for_zero_denominator():
    assert safe_divide(5, 0) == 0.0
    assert safe_divide(1, 4) == 0.25


@pytest.mark.parametrize(
    "code, expected",
    [("ru", "ru"), ("ru-RU", "ru"), ("KZ", "kz"), ("kk-KZ", "kz"), ("en", "en"), ("fr", "en"), (None, "en"), (7, "en")],
)
def test_resolve_language_prefix_matching(code, expected):
    assert resolve_language(code) == expected


def test_language_pack_objective_includes_grade_clause():
    assert get_language_pack("en").objective("fractions", "Grade 6") == (
        "Strengthen understanding of “fractions” at Grade 6 level and improve accuracy on tasks."
    )
    assert get_language_pack("en").objective("fractions") == (
        "Strengthen understanding of “fractions” and improve accuracy on tasks."
    )


def test_config_defaults():
    cfg = AnalysisConfig()
    assert cfg.weak_threshold == 0.6
    assert cfg.borderline_threshold == 0.8
    assert cfg.min_items_for_confidence == 3
    assert (cfg.weight_weak, cfg.weight_borderline, cfg.weight_strong) == (3.0, 1.5, 0.5)
    assert (cfg.weak_share_min, cfg.weak_share_max, cfg.strong_share_max) == (0.5, 0.7, 0.25)
    assert cfg.tone == "supportive"
    assert cfg.student_message_style == "friendly"
    assert cfg.teacher_notes_style == "brief"


def test_with_overrides_coerces_and_ignores_unknown_keys():
    cfg = DEFAULT_CONFIG.with_overrides(
        {
            "weak_threshold": "0.55",
            "min_items_for_confidence": "4",
            "video_count_weak_max": 2.0,
            "tone": "strict",
            "not_a_knob": 123,
            "borderline_threshold": "high",
        }
    )
    assert cfg.weak_threshold == 0.55
    assert cfg.min_items_for_confidence == 4
    assert cfg.video_count_weak_max == 2
    assert cfg.tone == "strict"
    assert cfg.borderline_threshold == 0.8
    assert not hasattr(cfg, "not_a_knob")


def test_with_overrides_skips_non_finite_numbers():
    cfg = DEFAULT_CONFIG.with_overrides(
        {
            "min_items_for_confidence": float("inf"),
            "video_count_weak_min": float("nan"),
            "weak_threshold": float("nan"),
            "weak_share_max": "inf",
        }
    )
    assert cfg == DEFAULT_CONFIG


def test_with_overrides_ignores_yaml_infinity_from_set_options():
    from src.diagnostics.export import parse_overrides

    cfg = DEFAULT_CONFIG.with_overrides(parse_overrides(["min_items_for_confidence=.inf", "weak_threshold=.nan"]))
    assert cfg.min_items_for_confidence == 3
    assert cfg.weak_threshold == 0.6


def test_with_overrides_none_only_clears_optional_cap():
    cfg = DEFAULT_CONFIG.with_overrides({"strong_share_max": None, "tone": None})
    assert cfg.strong_share_max is None
    assert cfg.tone == "supportive"
    restored = cfg.with_overrides({"strong_share_max": 0.3})
    assert restored.strong_share_max == 0.3


def test_with_overrides_empty_returns_same_config():
    assert DEFAULT_CONFIG.with_overrides(None) is DEFAULT_CONFIG
    assert DEFAULT_CONFIG.with_overrides({}) is DEFAULT_CONFIG


def test_load_analysis_config_nested_section_and_overrides(tmp_path):
    path = tmp_path / "analysis.yaml"
    path.write_text("analysis:\n  weak_threshold: 0.5\n  tone: motivational\n", encoding="utf-8")

    cfg = load_analysis_config(path, overrides={"tone": "neutral"})
    assert cfg.weak_threshold == 0.5
    assert cfg.tone == "neutral"
    assert cfg.borderline_threshold == 0.8


def test_load_analysis_config_flat_file(tmp_path):
    path = tmp_path / "flat.yaml"
    path.write_text("weight_weak: 4\nstrong_share_max: null\n", encoding="utf-8")

    cfg = load_analysis_config(path)
    assert cfg.weight_weak == 4.0
    assert cfg.strong_share_max is None


def test_load_analysis_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_analysis_config(path)


def test_load_analysis_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_analysis_config(tmp_path / "absent.yaml")


def test_shipped_default_config_matches_dataclass_defaults():
    from pathlib import Path

    path = Path(__file__).resolve().parents[1] / "configs" / "analysis_default.yaml"
    assert load_analysis_config(path) == DEFAULT_CONFIG
