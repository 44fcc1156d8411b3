# ABOUTME: Makes the shared common package importable across engines.
# ABOUTME: Re-exports schema types, the analysis config, and language helpers for convenience.

from .schemas import (
    AnalysisOutput,
    AttemptMetadata,
    HomeworkTask,
    PracticeDistributionItem,
    QuestionOutcome,
    TestAttempt,
    TopicAnalysis,
    TopicClassification,
    VideoRecommendation,
)
from .config import AnalysisConfig, DEFAULT_CONFIG, load_analysis_config
from .i18n import get_language_pack, resolve_language

__all__ = [
    "AnalysisOutput",
    "AttemptMetadata",
    "HomeworkTask",
    "PracticeDistributionItem",
    "QuestionOutcome",
    "TestAttempt",
    "TopicAnalysis",
    "TopicClassification",
    "VideoRecommendation",
    "AnalysisConfig",
    "DEFAULT_CONFIG",
    "load_analysis_config",
    "get_language_pack",
    "resolve_language",
]
