"""Data sources that feed courses, sessions and quests into the analysis."""
from datetime import datetime
from typing import Optional, Protocol

from study_perf.db import get_connection
from study_perf.errors import InvalidInputError
from study_perf.models import Course, Quest, StudySession, SyllabusItem


class DataSource(Protocol):
    def get_courses(self, user_id: str) -> list[Course]: ...

    def get_study_sessions(self, user_id: str, course_id: str) -> list[StudySession]: ...

    def get_quests(self, user_id: str, course_id: str) -> list[Quest]: ...


class InMemoryDataSource:
    """Dict-backed source, mostly for tests and demos."""

    def __init__(self):
        self._courses: dict[str, list[Course]] = {}
        self._sessions: dict[tuple[str, str], list[StudySession]] = {}
        self._quests: dict[tuple[str, str], list[Quest]] = {}

    def add_course(self, user_id: str, course: Course) -> None:
        self._courses.setdefault(user_id, []).append(course)

    def add_sessions(self, user_id: str, course_id: str, sessions: list[StudySession]) -> None:
        self._sessions.setdefault((user_id, course_id), []).extend(sessions)

    def add_quests(self, user_id: str, course_id: str, quests: list[Quest]) -> None:
        self._quests.setdefault((user_id, course_id), []).extend(quests)

    def get_courses(self, user_id: str) -> list[Course]:
        return list(self._courses.get(user_id, []))

    def get_study_sessions(self, user_id: str, course_id: str) -> list[StudySession]:
        return sorted(self._sessions.get((user_id, course_id), []), key=lambda s: s.started_at, reverse=True)

    def get_quests(self, user_id: str, course_id: str) -> list[Quest]:
        return list(self._quests.get((user_id, course_id), []))


def _parse_timestamp(value: Optional[str], column: str) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"bad timestamp in {column}: {value!r}") from e


class SQLiteDataSource:
    """Reads records from the schema created by ``db.init_db``."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def get_courses(self, user_id: str) -> list[Course]:
        conn = get_connection(self.db_path)
        courses = conn.execute(
            "SELECT * FROM courses WHERE user_id = ? ORDER BY created_at", (user_id,)
        ).fetchall()
        results = []
        for c in courses:
            items = conn.execute(
                "SELECT * FROM syllabus_items WHERE course_id = ? ORDER BY position, id", (c["id"],)
            ).fetchall()
            syllabus = [
                SyllabusItem(
                    id=i["id"],
                    title=i["title"],
                    estimated_hours=i["estimated_hours"],
                    priority=i["priority"] or "medium",
                    deadline=_parse_timestamp(i["deadline"], "syllabus_items.deadline"),
                    completed=bool(i["completed"]),
                )
                for i in items
            ]
            results.append(Course(
                id=c["id"],
                name=c["name"],
                syllabus=syllabus,
                created_at=_parse_timestamp(c["created_at"], "courses.created_at"),
            ))
        conn.close()
        return results

    def get_study_sessions(self, user_id: str, course_id: str) -> list[StudySession]:
        conn = get_connection(self.db_path)
        rows = conn.execute(
            """SELECT started_at, duration_minutes, course_id FROM study_sessions
            WHERE user_id = ? AND course_id = ?
            ORDER BY started_at DESC""",
            (user_id, course_id),
        ).fetchall()
        conn.close()
        return [
            StudySession(
                started_at=_parse_timestamp(r["started_at"], "study_sessions.started_at"),
                duration_minutes=r["duration_minutes"],
                course_id=r["course_id"],
            )
            for r in rows
        ]

    def get_quests(self, user_id: str, course_id: str) -> list[Quest]:
        conn = get_connection(self.db_path)
        rows = conn.execute(
            """SELECT status, completed_at FROM quests
            WHERE user_id = ? AND course_id = ?
            ORDER BY created_at DESC""",
            (user_id, course_id),
        ).fetchall()
        conn.close()
        return [
            Quest(status=r["status"], completed_at=_parse_timestamp(r["completed_at"], "quests.completed_at"))
            for r in rows
        ]
