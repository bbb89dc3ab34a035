"""Seed the database with a demo user's courses, sessions and quests."""
from datetime import datetime, timedelta
from typing import Optional

from study_perf.db import get_connection

DEMO_USER = "demo"

# id, name, days since created, syllabus rows:
# (item id, title, hours, priority, deadline offset in days or None, completed)
DEMO_COURSES = [
    ("calc-1", "Calculus I", 40, [
        ("calc-limits", "Limits", 4, "high", -20, True),
        ("calc-deriv", "Derivatives", 6, "high", -5, True),
        ("calc-integ", "Integrals", 6, "medium", 12, False),
    ]),
    ("chem-2", "Organic Chemistry", 30, [
        ("chem-bonds", "Bonding", 5, "high", -10, False),
        ("chem-react", "Reactions", 8, "high", -2, False),
        ("chem-lab", "Lab Safety", 1, "low", None, True),
    ]),
    ("hist-3", "World History", 25, [
        ("hist-ancient", "Ancient Civilizations", 3, "medium", -8, True),
        ("hist-medieval", "Middle Ages", 3, "medium", 4, False),
        ("hist-modern", "Modern Era", 4, "low", 20, False),
    ]),
]

# course id -> list of (days ago, minutes)
DEMO_SESSIONS = {
    "calc-1": [(d, 45) for d in range(0, 22)],
    "chem-2": [(12, 60), (15, 30), (21, 45)],
    "hist-3": [(1, 60), (3, 50), (6, 40), (9, 60), (13, 30)],
}

# course id -> list of statuses
DEMO_QUESTS = {
    "calc-1": ["completed", "completed", "completed", "available"],
    "chem-2": ["completed", "available", "available", "available", "failed"],
    "hist-3": ["completed", "completed", "available"],
}


def is_seeded(db_path: str, user_id: str = DEMO_USER) -> bool:
    """Check whether the database already holds courses for the user."""
    conn = get_connection(db_path)
    count = conn.execute("SELECT COUNT(*) FROM courses WHERE user_id = ?", (user_id,)).fetchone()[0]
    conn.close()
    return count > 0


def seed_demo_data(db_path: str, user_id: str = DEMO_USER, *, now: Optional[datetime] = None) -> None:
    """Insert the demo dataset relative to ``now``. Safe to call repeatedly."""
    if is_seeded(db_path, user_id):
        return
    now = now or datetime.now()
    conn = get_connection(db_path)
    for course_id, name, age_days, items in DEMO_COURSES:
        conn.execute(
            "INSERT INTO courses (id, user_id, name, created_at) VALUES (?, ?, ?, ?)",
            (course_id, user_id, name, (now - timedelta(days=age_days)).isoformat()),
        )
        for position, (item_id, title, hours, priority, offset, completed) in enumerate(items):
            deadline = (now + timedelta(days=offset)).isoformat() if offset is not None else None
            conn.execute(
                """INSERT INTO syllabus_items
                (id, course_id, title, estimated_hours, priority, deadline, completed, position)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (item_id, course_id, title, hours, priority, deadline, int(completed), position),
            )
        for days_ago, minutes in DEMO_SESSIONS[course_id]:
            conn.execute(
                "INSERT INTO study_sessions (user_id, course_id, started_at, duration_minutes) VALUES (?, ?, ?, ?)",
                (user_id, course_id, (now - timedelta(days=days_ago)).isoformat(), minutes),
            )
        for status in DEMO_QUESTS[course_id]:
            completed_at = now.isoformat() if status == "completed" else None
            conn.execute(
                "INSERT INTO quests (user_id, course_id, status, completed_at, created_at) VALUES (?, ?, ?, ?, ?)",
                (user_id, course_id, status, completed_at, now.isoformat()),
            )
    conn.commit()
    conn.close()
