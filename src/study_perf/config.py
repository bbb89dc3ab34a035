"""Scoring weights, classification thresholds and flagging criteria."""
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

import yaml
from loguru import logger

from study_perf.errors import InvalidInputError


@dataclass(frozen=True)
class ScoreWeights:
    study_time: float = 0.3
    quest_completion: float = 0.25
    consistency: float = 0.25
    deadline_adherence: float = 0.2

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0:
                raise InvalidInputError(f"weight {f.name} must be a non-negative number, got {value!r}")
        total = self.study_time + self.quest_completion + self.consistency + self.deadline_adherence
        if abs(total - 1.0) > 1e-6:
            # Not renormalized: scores will drift outside the intended scale.
            logger.warning("Score weights sum to {:.4f}, expected 1.0", total)


@dataclass(frozen=True)
class PerformanceThresholds:
    excellent: int = 85
    good: int = 70
    needs_attention: int = 50
    critical: int = 30

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise InvalidInputError(f"threshold {f.name} must be a number, got {value!r}")
        if not self.critical <= self.needs_attention <= self.good <= self.excellent:
            raise InvalidInputError(
                "thresholds must ascend: critical <= needs_attention <= good <= excellent"
            )


@dataclass(frozen=True)
class FlaggingCriteria:
    min_performance_score: int = 60
    max_days_since_last_study: int = 7
    min_quest_completion_rate: float = 0.4
    min_consistency_score: int = 50

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0:
                raise InvalidInputError(f"flagging criterion {f.name} must be a non-negative number, got {value!r}")
        if self.min_quest_completion_rate > 1:
            raise InvalidInputError(
                f"min_quest_completion_rate must be a fraction in [0, 1], got {self.min_quest_completion_rate!r}"
            )


@dataclass(frozen=True)
class PerformanceConfig:
    weights: ScoreWeights = field(default_factory=ScoreWeights)
    thresholds: PerformanceThresholds = field(default_factory=PerformanceThresholds)
    flagging: FlaggingCriteria = field(default_factory=FlaggingCriteria)


DEFAULT_CONFIG = PerformanceConfig()

_SECTIONS = ("weights", "thresholds", "flagging")


def _overlay(section: str, base, overrides) -> object:
    if not isinstance(overrides, dict):
        raise InvalidInputError(f"config section '{section}' must be a mapping")
    known = {f.name for f in fields(base)}
    unknown = set(overrides) - known
    if unknown:
        raise InvalidInputError(f"unknown keys in '{section}': {', '.join(sorted(unknown))}")
    return replace(base, **overrides)


def config_from_dict(data: dict | None, base: PerformanceConfig = DEFAULT_CONFIG) -> PerformanceConfig:
    """Build a config by overlaying a mapping of sections onto ``base``."""
    if not data:
        return base
    if not isinstance(data, dict):
        raise InvalidInputError("config must be a mapping")
    unknown = set(data) - set(_SECTIONS)
    if unknown:
        raise InvalidInputError(f"unknown config sections: {', '.join(sorted(unknown))}")
    parts = {
        name: _overlay(name, getattr(base, name), data[name])
        for name in _SECTIONS
        if name in data
    }
    return replace(base, **parts)


def load_config(path: str) -> PerformanceConfig:
    """Load a YAML config file. Missing sections keep their defaults."""
    data = yaml.safe_load(Path(path).read_text())
    logger.debug("Loaded config from {}", path)
    return config_from_dict(data)
