# ABOUTME: Exposes the test-result diagnostic engine entrypoints.
# ABOUTME: Groups aggregation, banding, practice allocation, content, narrative, and report builders.

from .engine import analyze, analyze_dict
from .report import TopicPerformance, diagnostic_report_from_analysis, generate_diagnostic_report
from .cache import LastAnalysisStore

__all__ = [
    "analyze",
    "analyze_dict",
    "TopicPerformance",
    "diagnostic_report_from_analysis",
    "generate_diagnostic_report",
    "LastAnalysisStore",
]
