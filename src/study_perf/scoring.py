"""Sub-score calculators and the weighted composite score."""
from datetime import datetime, timedelta
from typing import Optional

from study_perf.config import PerformanceThresholds, ScoreWeights
from study_perf.models import Course, Quest, StudySession
from study_perf.temporal import days_since_last_study, resolve_now

NEUTRAL_SCORE = 50
CONSISTENCY_WINDOW_DAYS = 30

# Actual/estimated study time ratio counted as on target (inclusive).
ON_TARGET_BAND = (0.8, 1.2)
STUDY_TIME_TOLERANCE = 0.2

# (days since last study greater than, multiplier), checked in order
RECENCY_PENALTIES = (
    (7, 0.5),
    (3, 0.8),
)

# (remaining share of the item's runway greater than, credit), checked in order
DEADLINE_RUNWAY_CREDIT = (
    (0.5, 80),
    (0.25, 60),
    (0.0, 30),
)

STATUS_GRADES = {
    "excellent": "A",
    "good": "B",
    "needs_attention": "C",
    "critical": "F",
}

GRADE_POINTS = {"A": 4, "B": 3, "C": 2, "F": 0}


# sub-score -> test for "nothing to judge", in which case it sits at NEUTRAL_SCORE
NO_BASIS_CHECKS = {
    "study_time": lambda course, quests: course.estimated_minutes == 0,
    "quest_completion": lambda course, quests: not quests,
    "deadline_adherence": lambda course, quests: all(item.deadline is None for item in course.syllabus),
}


def unscored_fields(course: Course, quests: list[Quest]) -> frozenset[str]:
    """Sub-scores that fell back to the neutral default for lack of data."""
    return frozenset(name for name, check in NO_BASIS_CHECKS.items() if check(course, quests))


def _clamp(score: float) -> int:
    return int(max(0, min(100, score)))


def calculate_study_time_score(course: Course, sessions: list[StudySession]) -> int:
    """Score actual study minutes against the syllabus estimate.

    On-target (within 20%) scores 100. Beyond that the score drops one point
    per percent of extra deviation, reaching 0 at 120% off.
    """
    estimated = course.estimated_minutes
    if estimated == 0:
        return NEUTRAL_SCORE
    actual = sum(s.duration_minutes for s in sessions)
    ratio = actual / estimated
    low, high = ON_TARGET_BAND
    if low <= ratio <= high:
        return 100
    deviation = abs(ratio - 1) - STUDY_TIME_TOLERANCE
    return _clamp(round(100 - deviation * 100))


def quest_completion_rate(quests: list[Quest]) -> Optional[float]:
    if not quests:
        return None
    return sum(1 for q in quests if q.is_completed) / len(quests)


def calculate_quest_completion_score(quests: list[Quest]) -> int:
    rate = quest_completion_rate(quests)
    if rate is None:
        return NEUTRAL_SCORE
    return round(rate * 100)


def calculate_consistency_score(sessions: list[StudySession], *, now: Optional[datetime] = None) -> int:
    """Score how regularly the subject was studied over the last 30 days.

    Distinct study days out of 30, reduced when the latest session is stale.
    """
    if not sessions:
        return 0
    current = resolve_now(now)
    cutoff = current - timedelta(days=CONSISTENCY_WINDOW_DAYS)
    recent = [s for s in sessions if s.started_at >= cutoff]
    if not recent:
        return 0

    study_days = len({s.started_at.date() for s in recent})
    score = study_days / CONSISTENCY_WINDOW_DAYS * 100

    gap = days_since_last_study(recent, now=current)
    for days, multiplier in RECENCY_PENALTIES:
        if gap > days:
            score *= multiplier
            break
    return _clamp(round(score))


def _runway_credit(course: Course, deadline: datetime, now: datetime) -> int:
    total = (deadline - course.created_at).total_seconds()
    if total <= 0:
        runway = 1.0
    else:
        runway = (deadline - now).total_seconds() / total
    for share, credit in DEADLINE_RUNWAY_CREDIT:
        if runway > share:
            return credit
    return DEADLINE_RUNWAY_CREDIT[-1][1]


def calculate_deadline_adherence_score(course: Course, *, now: Optional[datetime] = None) -> int:
    """Average per-item deadline credit across syllabus items that have one."""
    dated = [item for item in course.syllabus if item.deadline is not None]
    if not dated:
        return NEUTRAL_SCORE
    current = resolve_now(now)
    total = 0
    for item in dated:
        if item.completed:
            total += 100
        elif current > item.deadline:
            total += 0
        else:
            total += _runway_credit(course, item.deadline, current)
    return round(total / len(dated))


def calculate_overall_score(
    study_time_score: float,
    quest_completion_score: float,
    consistency_score: float,
    deadline_adherence_score: float,
    weights: ScoreWeights,
) -> int:
    weighted = (
        study_time_score * weights.study_time
        + quest_completion_score * weights.quest_completion
        + consistency_score * weights.consistency
        + deadline_adherence_score * weights.deadline_adherence
    )
    return _clamp(round(weighted))


def determine_performance_status(score: float, thresholds: PerformanceThresholds) -> tuple[str, str]:
    """Map a 0-100 score to (status, grade)."""
    if score >= thresholds.excellent:
        status = "excellent"
    elif score >= thresholds.good:
        status = "good"
    elif score >= thresholds.needs_attention:
        status = "needs_attention"
    else:
        status = "critical"
    return status, STATUS_GRADES[status]
