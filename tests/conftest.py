from datetime import datetime, timedelta

import pytest

from study_perf.models import Course, Quest, StudySession, SyllabusItem

NOW = datetime(2026, 3, 15, 12, 0)


def days_ago(n: float) -> datetime:
    return NOW - timedelta(days=n)


def daily_sessions(days: int, minutes: float = 30, course_id=None) -> list[StudySession]:
    """One session per day for the last ``days`` days, starting today."""
    return [StudySession(started_at=days_ago(d), duration_minutes=minutes, course_id=course_id) for d in range(days)]


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_study.db")
    return db_path


@pytest.fixture
def course():
    return Course(
        id="course-1",
        name="Test Course",
        syllabus=[
            SyllabusItem(id="topic-1", title="Topic 1", estimated_hours=2, priority="high",
                         deadline=NOW + timedelta(days=7)),
            SyllabusItem(id="topic-2", title="Topic 2", estimated_hours=3, priority="medium", completed=True),
        ],
        created_at=days_ago(30),
    )


@pytest.fixture
def sessions():
    return [
        StudySession(started_at=days_ago(1), duration_minutes=60),
        StudySession(started_at=days_ago(2), duration_minutes=45),
        StudySession(started_at=days_ago(3), duration_minutes=90),
    ]


@pytest.fixture
def quests():
    return [
        Quest(status="completed", completed_at=NOW),
        Quest(status="completed", completed_at=NOW),
        Quest(status="available"),
    ]
