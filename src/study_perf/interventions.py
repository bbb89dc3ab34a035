"""Intervention plans for flagged subjects and acknowledgments for good progress."""
from datetime import datetime
from typing import Optional

from study_perf.config import PerformanceThresholds
from study_perf.models import (
    Acknowledgment, Course, Intervention, InterventionStep,
)
from study_perf.temporal import resolve_now

STREAK_MILESTONE_DAYS = 7


def _steps(*pairs: tuple[str, str]) -> tuple[InterventionStep, ...]:
    return tuple(InterventionStep(order=i, action=a, duration=d) for i, (a, d) in enumerate(pairs, 1))


def _intensive(course: Course) -> Intervention:
    return Intervention(
        id=f"critical-{course.id}",
        type="intensive_study",
        urgency="critical",
        title="Intensive Study Recovery Plan",
        description=f"{course.name} needs immediate attention with an intensive recovery approach.",
        steps=_steps(
            ("Assess which topics are overdue or not started", "1 day"),
            ("Study this subject every day in two focused blocks", "2 weeks"),
            ("Re-check scores and adjust the plan", "1 day"),
        ),
        expected_outcome="Bring performance score above 50 within 3 weeks",
        timeframe="3 weeks",
        success_metrics=("Performance score increase of 25+ points", "No overdue topics"),
    )


def _reschedule(course: Course) -> Intervention:
    return Intervention(
        id=f"schedule-{course.id}",
        type="schedule_adjustment",
        urgency="high",
        title="Rebalance Your Study Schedule",
        description=f"Move more weekly study time to {course.name}.",
        steps=_steps(
            ("Block three fixed sessions per week for this subject", "1 day"),
            ("Finish the nearest-deadline topic first", "1 week"),
        ),
        expected_outcome="Reach a 'good' performance status",
        timeframe="2 weeks",
        success_metrics=("Consistency score above 50",),
    )


def _adjust_goals(course: Course) -> Intervention:
    return Intervention(
        id=f"goals-{course.id}",
        type="goal_modification",
        urgency="medium",
        title="Adjust Your Study Goals",
        description=f"Recent activity on {course.name} has slipped; reset goals you can keep.",
        steps=_steps(
            ("Pick one achievable weekly goal for this subject", "1 day"),
            ("Study at least once before the end of the week", "1 week"),
        ),
        expected_outcome="Subject no longer flagged",
        timeframe="1 week",
        success_metrics=("Studied within the last 7 days",),
    )


def generate_interventions(course: Course, score: int, thresholds: PerformanceThresholds) -> list[Intervention]:
    """Pick one intervention plan for a flagged subject based on its score."""
    if score < thresholds.critical:
        return [_intensive(course)]
    if score < thresholds.needs_attention:
        return [_reschedule(course)]
    return [_adjust_goals(course)]


def generate_acknowledgments(
    course: Course,
    score: int,
    streak: int,
    thresholds: PerformanceThresholds,
    *,
    now: Optional[datetime] = None,
) -> list[Acknowledgment]:
    created = resolve_now(now)
    acknowledgments = []
    if score > thresholds.excellent:
        acknowledgments.append(Acknowledgment(
            id=f"excellent-{course.id}",
            type="achievement",
            title="Excellent Performance!",
            message=f"Outstanding work in {course.name}! You're performing at an excellent level.",
            celebration_level="large",
            created_at=created,
            xp_bonus=50,
        ))
    if streak >= STREAK_MILESTONE_DAYS:
        acknowledgments.append(Acknowledgment(
            id=f"streak-{course.id}",
            type="consistency",
            title=f"{streak}-Day Study Streak",
            message=f"You've studied {course.name} {streak} days in a row.",
            celebration_level="medium",
            created_at=created,
            xp_bonus=25,
        ))
    if course.syllabus and all(item.completed for item in course.syllabus):
        acknowledgments.append(Acknowledgment(
            id=f"syllabus-{course.id}",
            type="milestone",
            title="Syllabus Complete",
            message=f"Every topic in {course.name} is done.",
            celebration_level="medium",
            created_at=created,
        ))
    return acknowledgments
