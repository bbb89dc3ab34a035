# tests/test_temporal.py
from datetime import timedelta, timezone

import pytest

from conftest import NOW, days_ago, daily_sessions
from study_perf.errors import InvalidInputError
from study_perf.models import Course, StudySession, SyllabusItem
from study_perf.temporal import (
    calculate_consistent_study_days,
    calculate_study_frequency,
    days_since_last_study,
    last_studied,
    next_deadline,
)


def _at(*days):
    return [StudySession(started_at=days_ago(d), duration_minutes=30) for d in days]


def test_streak_with_gap():
    assert calculate_consistent_study_days(_at(0, 1, 2, 4), now=NOW) == 3


def test_streak_no_recent_activity():
    assert calculate_consistent_study_days(_at(10), now=NOW) == 0


def test_streak_empty():
    assert calculate_consistent_study_days([], now=NOW) == 0


def test_streak_can_start_yesterday():
    assert calculate_consistent_study_days(_at(1, 2, 3), now=NOW) == 3


def test_streak_two_days_ago_is_broken():
    assert calculate_consistent_study_days(_at(2, 3, 4), now=NOW) == 0


def test_streak_counts_days_not_sessions():
    sessions = _at(0, 0, 1) + [StudySession(started_at=NOW - timedelta(hours=1), duration_minutes=10)]
    assert calculate_consistent_study_days(sessions, now=NOW) == 2


def test_streak_input_order_irrelevant():
    assert calculate_consistent_study_days(_at(2, 0, 1), now=NOW) == 3


def test_frequency_empty():
    assert calculate_study_frequency([], now=NOW) == 0


def test_frequency_sessions_per_week(sessions):
    # 3 sessions in 4 weeks
    assert calculate_study_frequency(sessions, now=NOW) == round(3 / 4, 1)


def test_frequency_ignores_sessions_outside_window():
    assert calculate_study_frequency(_at(1, 40, 50), now=NOW) == round(1 / 4, 1)


def test_frequency_daily():
    assert calculate_study_frequency(daily_sessions(28), now=NOW) == 7.0


def test_last_studied(sessions):
    assert last_studied(sessions) == days_ago(1)
    assert last_studied([]) is None


def test_days_since_last_study():
    assert days_since_last_study(_at(5, 9), now=NOW) == 5
    assert days_since_last_study([], now=NOW) is None


def test_days_since_last_study_partial_day():
    sessions = [StudySession(started_at=NOW - timedelta(hours=30), duration_minutes=20)]
    assert days_since_last_study(sessions, now=NOW) == 1


def test_next_deadline_skips_completed_and_past():
    course = Course(id="c", name="C", created_at=days_ago(10), syllabus=[
        SyllabusItem(id="a", title="A", estimated_hours=1, deadline=days_ago(1)),
        SyllabusItem(id="b", title="B", estimated_hours=1, deadline=NOW + timedelta(days=2), completed=True),
        SyllabusItem(id="c", title="C", estimated_hours=1, deadline=NOW + timedelta(days=5)),
        SyllabusItem(id="d", title="D", estimated_hours=1, deadline=NOW + timedelta(days=9)),
    ])
    assert next_deadline(course, now=NOW) == NOW + timedelta(days=5)


def test_next_deadline_none():
    assert next_deadline(Course(id="c", name="C", created_at=NOW), now=NOW) is None


def test_timezone_aware_now_rejected(sessions):
    with pytest.raises(InvalidInputError):
        days_since_last_study(sessions, now=NOW.replace(tzinfo=timezone.utc))
