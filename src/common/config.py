# ABOUTME: Declares the tunable knobs of the diagnostic engine and their defaults.
# ABOUTME: Loads overrides from YAML configs or flat option mappings.

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml


@dataclass(frozen=True)
class AnalysisConfig:
    """Thresholds, practice weights, output sizes, and narrative style."""

    weak_threshold: float = 0.6
    borderline_threshold: float = 0.8
    min_items_for_confidence: int = 3
    # Practice distribution knobs
    weight_weak: float = 3.0
    weight_borderline: float = 1.5
    weight_strong: float = 0.5
    # Target share constraints across all weak topics
    weak_share_min: float = 0.5
    weak_share_max: float = 0.7
    strong_share_max: Optional[float] = 0.25
    # Output sizes
    video_count_weak_min: int = 2
    video_count_weak_max: int = 3
    video_count_borderline: int = 1
    video_count_strong: int = 0
    # neutral | supportive | strict | motivational
    tone: str = "supportive"
    # short | friendly | direct
    student_message_style: str = "friendly"
    # brief | detailed
    teacher_notes_style: str = "brief"

    def with_overrides(self, overrides: Optional[Mapping[str, Any]]) -> "AnalysisConfig":
        """
        Return a copy with recognised keys replaced.

        Unknown keys, non-finite numbers, and values that cannot be coerced to
        the field's type are ignored. None only clears optional caps (strong_share_max).
        """

        if not overrides:
            return self
        updates = {}
        for knob in fields(self):
            if knob.name not in overrides:
                continue
            value = _coerce(knob.name, overrides[knob.name], getattr(self, knob.name))
            if value is not _SKIP:
                updates[knob.name] = value
        return replace(self, **updates) if updates else self


DEFAULT_CONFIG = AnalysisConfig()

_OPTIONAL_FIELDS = {"strong_share_max"}
_SKIP = object()


def _coerce(name: str, value: Any, current: Any) -> Any:
    if value is None:
        return None if name in _OPTIONAL_FIELDS else _SKIP
    reference = getattr(DEFAULT_CONFIG, name) if current is None else current
    try:
        if isinstance(reference, int):
            return int(value)
        if isinstance(reference, float):
            number = float(value)
            return number if math.isfinite(number) else _SKIP
    except (TypeError, ValueError, OverflowError):
        return _SKIP
    return str(value)


def load_analysis_config(
    config_path: Path, overrides: Optional[Mapping[str, Any]] = None
) -> AnalysisConfig:
    """Build a config from a YAML file (flat, or nested under `analysis:`) plus overrides."""

    with open(config_path, encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, Mapping):
        raise ValueError(f"Config at {config_path} must be a mapping, got {type(cfg).__name__}.")
    section = cfg.get("analysis", cfg)
    if not isinstance(section, Mapping):
        raise ValueError(f"'analysis' section in {config_path} must be a mapping.")
    return DEFAULT_CONFIG.with_overrides(section).with_overrides(overrides)
