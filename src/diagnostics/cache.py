# ABOUTME: In-memory store keeping the most recent analysis per student.
# ABOUTME: Last write wins; callers wanting persistence wrap or replace it.

from __future__ import annotations

from typing import Dict, Optional

from src.common.schemas import AnalysisOutput


class LastAnalysisStore:
    """Keyed by student id; holds whole AnalysisOutput objects, never partial results."""

    def __init__(self) -> None:
        self._latest: Dict[str, AnalysisOutput] = {}

    def save(self, analysis: AnalysisOutput) -> None:
        self._latest[analysis.student_id] = analysis

    def get(self, student_id: str) -> Optional[AnalysisOutput]:
        return self._latest.get(student_id)

    def __len__(self) -> int:
        return len(self._latest)
