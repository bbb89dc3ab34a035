"""Data classes for courses, study activity and analysis results."""
import math
from dataclasses import dataclass, field
from datetime import datetime
from numbers import Real
from typing import Optional

from study_perf.errors import InvalidInputError

PRIORITIES = ("low", "medium", "high")
STATUSES = ("excellent", "good", "needs_attention", "critical")
GRADES = ("A", "B", "C", "F")
RECOMMENDATION_TYPES = ("study_time", "consistency", "quest_completion", "deadline")
RECOMMENDATION_CATEGORIES = ("immediate", "short_term", "long_term")
URGENCY_LEVELS = ("critical", "high", "medium", "low")
TRENDS = ("improving", "stable", "declining")

QUEST_COMPLETED = "completed"
QUEST_AVAILABLE = "available"


def _require_text(value, name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{name} must be a non-empty string, got {value!r}")


def _require_amount(value, name: str) -> None:
    # bool is a Real subclass; a True duration is a caller bug
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    if value < 0:
        raise InvalidInputError(f"{name} must be >= 0, got {value!r}")


def _require_timestamp(value, name: str, optional: bool = False) -> None:
    if value is None and optional:
        return
    if not isinstance(value, datetime):
        raise InvalidInputError(f"{name} must be a datetime, got {value!r}")
    # stored and compared as naive local time
    if value.tzinfo is not None:
        raise InvalidInputError(f"{name} must be a naive datetime, got {value!r}")


def _require_choice(value, name: str, choices: tuple) -> None:
    if value not in choices:
        raise InvalidInputError(f"{name} must be one of {', '.join(choices)}; got {value!r}")


@dataclass
class SyllabusItem:
    id: str
    title: str
    estimated_hours: float
    priority: str = "medium"
    deadline: Optional[datetime] = None
    completed: bool = False

    def __post_init__(self):
        _require_text(self.id, "syllabus item id")
        _require_text(self.title, "syllabus item title")
        _require_amount(self.estimated_hours, "estimated_hours")
        _require_choice(self.priority, "priority", PRIORITIES)
        _require_timestamp(self.deadline, "deadline", optional=True)


@dataclass
class Course:
    id: str
    name: str
    syllabus: list[SyllabusItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        _require_text(self.id, "course id")
        _require_text(self.name, "course name")
        _require_timestamp(self.created_at, "created_at")
        for item in self.syllabus:
            if not isinstance(item, SyllabusItem):
                raise InvalidInputError(f"syllabus entries must be SyllabusItem, got {item!r}")

    @property
    def estimated_minutes(self) -> float:
        return sum(item.estimated_hours * 60 for item in self.syllabus)


@dataclass
class StudySession:
    started_at: datetime
    duration_minutes: float
    course_id: Optional[str] = None

    def __post_init__(self):
        _require_timestamp(self.started_at, "started_at")
        _require_amount(self.duration_minutes, "duration_minutes")
        if self.course_id is not None:
            _require_text(self.course_id, "course_id")


@dataclass
class Quest:
    status: str
    completed_at: Optional[datetime] = None

    def __post_init__(self):
        _require_text(self.status, "quest status")
        _require_timestamp(self.completed_at, "completed_at", optional=True)

    @property
    def is_completed(self) -> bool:
        return self.status == QUEST_COMPLETED


@dataclass(frozen=True)
class Recommendation:
    id: str
    type: str
    priority: str
    title: str
    description: str
    action_items: tuple[str, ...]
    estimated_impact: str
    time_to_implement: str
    category: str = "immediate"

    def __post_init__(self):
        _require_choice(self.type, "recommendation type", RECOMMENDATION_TYPES)
        _require_choice(self.priority, "recommendation priority", PRIORITIES)
        if not self.action_items:
            raise InvalidInputError(f"recommendation {self.id} has no action items")


@dataclass(frozen=True)
class InterventionStep:
    order: int
    action: str
    duration: str


@dataclass(frozen=True)
class Intervention:
    id: str
    type: str
    urgency: str
    title: str
    description: str
    steps: tuple[InterventionStep, ...]
    expected_outcome: str
    timeframe: str
    success_metrics: tuple[str, ...] = ()


@dataclass(frozen=True)
class Acknowledgment:
    id: str
    type: str
    title: str
    message: str
    celebration_level: str
    created_at: datetime
    xp_bonus: int = 0


@dataclass(frozen=True)
class SubjectPerformance:
    """Immutable snapshot of one course's analysis."""
    course_id: str
    course_name: str
    performance_score: int
    status: str
    grade: str
    study_time_score: int
    quest_completion_score: int
    consistency_score: int
    deadline_adherence_score: int
    flagged: bool
    last_studied: Optional[datetime] = None
    total_study_time: float = 0.0
    completed_quests: int = 0
    total_quests: int = 0
    completed_topics: int = 0
    total_topics: int = 0
    average_session_length: float = 0.0
    study_frequency: float = 0.0
    study_streak: int = 0
    next_deadline: Optional[datetime] = None
    recommendations: tuple[Recommendation, ...] = ()
    interventions: tuple[Intervention, ...] = ()
    acknowledgments: tuple[Acknowledgment, ...] = ()


@dataclass(frozen=True)
class StudyPriority:
    course_id: str
    course_name: str
    priority_score: int
    urgency_level: str
    recommended_action: str
    time_allocation: int


@dataclass(frozen=True)
class PerformanceSummary:
    overall_gpa: float = 0.0
    subjects_needing_attention: int = 0
    flagged_subjects: int = 0
    total_recommendations: int = 0
    consistency_score: int = 0
    improvement_trend: str = "stable"
