"""Time-series helpers over study session timestamps."""
from datetime import date, datetime, timedelta
from typing import Optional

from study_perf.errors import InvalidInputError
from study_perf.models import Course, StudySession

FREQUENCY_WINDOW_WEEKS = 4


def resolve_now(now: Optional[datetime] = None) -> datetime:
    if now is None:
        return datetime.now()
    if now.tzinfo is not None:
        raise InvalidInputError(f"now must be a naive datetime, got {now!r}")
    return now


def last_studied(sessions: list[StudySession]) -> Optional[datetime]:
    if not sessions:
        return None
    return max(s.started_at for s in sessions)


def days_since_last_study(sessions: list[StudySession], *, now: Optional[datetime] = None) -> Optional[int]:
    """Whole days elapsed since the most recent session, or None without sessions."""
    latest = last_studied(sessions)
    if latest is None:
        return None
    return (resolve_now(now) - latest) // timedelta(days=1)


def study_dates(sessions: list[StudySession]) -> list[date]:
    """Distinct calendar days with at least one session, newest first."""
    return sorted({s.started_at.date() for s in sessions}, reverse=True)


def calculate_consistent_study_days(sessions: list[StudySession], *, now: Optional[datetime] = None) -> int:
    """Length of the current streak of consecutive study days.

    The streak must touch today or yesterday; otherwise it is already broken
    and the result is 0.
    """
    dates = study_dates(sessions)
    if not dates:
        return 0
    today = resolve_now(now).date()
    if dates[0] not in (today, today - timedelta(days=1)):
        return 0

    streak = 1
    for newer, older in zip(dates, dates[1:]):
        if newer - older != timedelta(days=1):
            break
        streak += 1
    return streak


def calculate_study_frequency(sessions: list[StudySession], *, now: Optional[datetime] = None) -> float:
    """Average sessions per week over the trailing four weeks."""
    if not sessions:
        return 0
    cutoff = resolve_now(now) - timedelta(weeks=FREQUENCY_WINDOW_WEEKS)
    recent = sum(1 for s in sessions if s.started_at >= cutoff)
    return round(recent / FREQUENCY_WINDOW_WEEKS, 1)


def next_deadline(course: Course, *, now: Optional[datetime] = None) -> Optional[datetime]:
    """Nearest deadline still ahead among incomplete syllabus items."""
    current = resolve_now(now)
    upcoming = [
        item.deadline for item in course.syllabus
        if item.deadline is not None and not item.completed and item.deadline >= current
    ]
    return min(upcoming, default=None)
