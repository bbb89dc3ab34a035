"""Rank a user's subjects by urgency and split study time across them."""
from datetime import datetime
from fractions import Fraction

from study_perf.models import StudyPriority, SubjectPerformance

DEFAULT_TOP_N = 5
DEFAULT_WEEKLY_HOURS = 20
SESSION_MINUTES = 90

RECOMMENDED_ACTIONS = {
    "critical": "Immediate intensive study required",
    "high": "Increase focus and study time",
    "medium": "Schedule regular review sessions",
    "low": "Continue current approach",
}

TIME_SLOTS = (
    "9:00 AM - 10:30 AM",
    "10:45 AM - 12:15 PM",
    "2:00 PM - 3:30 PM",
    "4:00 PM - 5:30 PM",
    "7:00 PM - 8:30 PM",
)

# status -> (activity, priority) for non-flagged subjects
SCHEDULE_ACTIVITIES = {
    "critical": ("Intensive review and practice", "high"),
    "needs_attention": ("Focused study session", "medium"),
    "good": ("Regular study and reinforcement", "low"),
    "excellent": ("Regular study and reinforcement", "low"),
}


def urgency_level(performance: SubjectPerformance) -> str:
    critical = performance.status == "critical"
    if performance.flagged and critical:
        return "critical"
    if performance.flagged or critical:
        return "high"
    if performance.status == "needs_attention":
        return "medium"
    return "low"


def _rank_key(performance: SubjectPerformance):
    deadline = performance.next_deadline
    return (
        not performance.flagged,
        performance.performance_score,
        deadline is None,
        deadline if deadline is not None else datetime.max,
    )


def rank_subjects(performances: list[SubjectPerformance]) -> list[SubjectPerformance]:
    """Flagged first, then lowest score, then nearest upcoming deadline."""
    return sorted(performances, key=_rank_key)


def _allocations(ranked: list[SubjectPerformance], top_n: int) -> list[int]:
    """Percent of study time per ranked subject, inversely proportional to score.

    A score of 0 weighs the same as 1. Exact fractions keep the floored
    shares from summing past 100.
    """
    weights = [Fraction(1, max(p.performance_score, 1)) for p in ranked[:top_n]]
    total = sum(weights)
    shares = [weight * 100 // total for weight in weights]
    return shares + [0] * (len(ranked) - len(shares))


def prioritize_subjects(
    performances: list[SubjectPerformance], *, top_n: int = DEFAULT_TOP_N,
) -> list[StudyPriority]:
    if not performances:
        return []
    ranked = rank_subjects(performances)
    allocations = _allocations(ranked, top_n)
    priorities = []
    for performance, allocation in zip(ranked, allocations):
        urgency = urgency_level(performance)
        priorities.append(StudyPriority(
            course_id=performance.course_id,
            course_name=performance.course_name,
            priority_score=100 - performance.performance_score,
            urgency_level=urgency,
            recommended_action=RECOMMENDED_ACTIONS[urgency],
            time_allocation=allocation,
        ))
    return priorities


def calculate_time_allocation(
    priorities: list[StudyPriority], weekly_hours: float = DEFAULT_WEEKLY_HOURS,
) -> list[dict]:
    """Turn allocation percentages into recommended weekly hours."""
    return [
        {
            "course_id": p.course_id,
            "course_name": p.course_name,
            "percentage": p.time_allocation,
            "recommended_hours": round(p.time_allocation / 100 * weekly_hours, 1),
        }
        for p in priorities
    ]


def generate_schedule_suggestions(performances: list[SubjectPerformance]) -> list[dict]:
    """Daily study slots for the most urgent subjects."""
    suggestions = []
    for slot, performance in zip(TIME_SLOTS, rank_subjects(performances)):
        if performance.flagged:
            activity, priority = SCHEDULE_ACTIVITIES["critical"]
        else:
            activity, priority = SCHEDULE_ACTIVITIES[performance.status]
        suggestions.append({
            "time_slot": slot,
            "subject": performance.course_name,
            "activity": activity,
            "duration": SESSION_MINUTES,
            "priority": priority,
        })
    return suggestions
