# tests/test_sources.py
from datetime import datetime

import pytest

from conftest import NOW, days_ago
from study_perf.db import get_connection, init_db
from study_perf.errors import InvalidInputError
from study_perf.models import Course, Quest, StudySession
from study_perf.seed import DEMO_USER, is_seeded, seed_demo_data
from study_perf.sources import InMemoryDataSource, SQLiteDataSource


def test_in_memory_source_roundtrip():
    source = InMemoryDataSource()
    source.add_course("u1", Course(id="c1", name="Calc", created_at=NOW))
    source.add_sessions("u1", "c1", [
        StudySession(started_at=days_ago(3), duration_minutes=10),
        StudySession(started_at=days_ago(1), duration_minutes=20),
    ])
    source.add_quests("u1", "c1", [Quest(status="completed")])
    assert [c.id for c in source.get_courses("u1")] == ["c1"]
    assert [s.duration_minutes for s in source.get_study_sessions("u1", "c1")] == [20, 10]
    assert len(source.get_quests("u1", "c1")) == 1
    assert source.get_courses("u2") == []
    assert source.get_study_sessions("u2", "c1") == []


def test_seed_demo_data(tmp_db):
    init_db(tmp_db)
    assert not is_seeded(tmp_db)
    seed_demo_data(tmp_db, now=NOW)
    assert is_seeded(tmp_db)
    seed_demo_data(tmp_db, now=NOW)  # second call is a no-op
    conn = get_connection(tmp_db)
    assert conn.execute("SELECT COUNT(*) FROM courses").fetchone()[0] == 3
    conn.close()


def test_sqlite_source_reads_seeded_data(tmp_db):
    init_db(tmp_db)
    seed_demo_data(tmp_db, now=NOW)
    source = SQLiteDataSource(tmp_db)
    courses = source.get_courses(DEMO_USER)
    assert [c.id for c in courses] == ["calc-1", "chem-2", "hist-3"]
    calc = courses[0]
    assert [i.id for i in calc.syllabus] == ["calc-limits", "calc-deriv", "calc-integ"]
    assert calc.syllabus[0].completed is True
    assert isinstance(calc.syllabus[0].deadline, datetime)
    assert calc.created_at == days_ago(40)

    sessions = source.get_study_sessions(DEMO_USER, "chem-2")
    assert [s.started_at for s in sessions] == [days_ago(12), days_ago(15), days_ago(21)]
    assert all(s.course_id == "chem-2" for s in sessions)

    quests = source.get_quests(DEMO_USER, "chem-2")
    assert sorted(q.status for q in quests) == ["available", "available", "available", "completed", "failed"]


def test_sqlite_source_other_user_sees_nothing(tmp_db):
    init_db(tmp_db)
    seed_demo_data(tmp_db, now=NOW)
    assert SQLiteDataSource(tmp_db).get_courses("someone-else") == []


def test_sqlite_source_rejects_bad_rows(tmp_db):
    init_db(tmp_db)
    conn = get_connection(tmp_db)
    conn.execute("INSERT INTO courses (id, user_id, name, created_at) VALUES ('c1', 'u1', 'Calc', 'yesterday')")
    conn.commit()
    conn.close()
    with pytest.raises(InvalidInputError):
        SQLiteDataSource(tmp_db).get_courses("u1")


def test_sqlite_source_rejects_negative_duration(tmp_db):
    init_db(tmp_db)
    conn = get_connection(tmp_db)
    conn.execute("INSERT INTO courses (id, user_id, name, created_at) VALUES ('c1', 'u1', 'Calc', ?)", (NOW.isoformat(),))
    conn.execute(
        "INSERT INTO study_sessions (user_id, course_id, started_at, duration_minutes) VALUES ('u1', 'c1', ?, -5)",
        (NOW.isoformat(),),
    )
    conn.commit()
    conn.close()
    with pytest.raises(InvalidInputError):
        SQLiteDataSource(tmp_db).get_study_sessions("u1", "c1")
