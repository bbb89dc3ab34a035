"""Per-subject analysis and the cross-subject summary."""
from datetime import datetime
from typing import Optional

from loguru import logger

from study_perf.config import DEFAULT_CONFIG, PerformanceConfig
from study_perf.flagging import flag_reasons
from study_perf.interventions import generate_acknowledgments, generate_interventions
from study_perf.models import (
    Course, PerformanceSummary, Quest, StudySession, SubjectPerformance,
)
from study_perf.recommendations import SubScores, generate_recommendations
from study_perf.scoring import (
    GRADE_POINTS,
    calculate_consistency_score,
    calculate_deadline_adherence_score,
    calculate_overall_score,
    calculate_quest_completion_score,
    calculate_study_time_score,
    determine_performance_status,
    unscored_fields,
)
from study_perf.sources import DataSource
from study_perf.temporal import (
    calculate_consistent_study_days,
    calculate_study_frequency,
    last_studied,
    next_deadline,
    resolve_now,
)


def analyze_subject(
    course: Course,
    sessions: list[StudySession],
    quests: list[Quest],
    config: PerformanceConfig = DEFAULT_CONFIG,
    *,
    now: Optional[datetime] = None,
) -> SubjectPerformance:
    """Compute a fresh performance snapshot for one course."""
    now = resolve_now(now)
    sessions = [s for s in sessions if s.course_id in (None, course.id)]

    scores = SubScores(
        study_time=calculate_study_time_score(course, sessions),
        quest_completion=calculate_quest_completion_score(quests),
        consistency=calculate_consistency_score(sessions, now=now),
        deadline_adherence=calculate_deadline_adherence_score(course, now=now),
    )
    score = calculate_overall_score(*scores, config.weights)
    status, grade = determine_performance_status(score, config.thresholds)
    logger.debug("{} scored {} ({}) from {}", course.id, score, status, scores)

    reasons = flag_reasons(score, sessions, quests, config.flagging, now=now)
    flagged = bool(reasons)
    if flagged:
        logger.info("Flagged {}: {}", course.id, ", ".join(reasons))

    total_study_time = sum(s.duration_minutes for s in sessions)
    streak = calculate_consistent_study_days(sessions, now=now)
    interventions = generate_interventions(course, score, config.thresholds) if flagged else []

    return SubjectPerformance(
        course_id=course.id,
        course_name=course.name,
        performance_score=score,
        status=status,
        grade=grade,
        study_time_score=scores.study_time,
        quest_completion_score=scores.quest_completion,
        consistency_score=scores.consistency,
        deadline_adherence_score=scores.deadline_adherence,
        flagged=flagged,
        last_studied=last_studied(sessions),
        total_study_time=total_study_time,
        completed_quests=sum(1 for q in quests if q.is_completed),
        total_quests=len(quests),
        completed_topics=sum(1 for item in course.syllabus if item.completed),
        total_topics=len(course.syllabus),
        average_session_length=total_study_time / len(sessions) if sessions else 0.0,
        study_frequency=calculate_study_frequency(sessions, now=now),
        study_streak=streak,
        next_deadline=next_deadline(course, now=now),
        recommendations=tuple(generate_recommendations(
            course.id, scores, unscored=unscored_fields(course, quests),
        )),
        interventions=tuple(interventions),
        acknowledgments=tuple(generate_acknowledgments(
            course, score, streak, config.thresholds, now=now,
        )),
    )


def analyze_all_subjects(
    source: DataSource,
    user_id: str,
    config: PerformanceConfig = DEFAULT_CONFIG,
    *,
    now: Optional[datetime] = None,
) -> list[SubjectPerformance]:
    """Analyze every course a user has, best score first."""
    now = resolve_now(now)
    performances = [
        analyze_subject(
            course,
            source.get_study_sessions(user_id, course.id),
            source.get_quests(user_id, course.id),
            config,
            now=now,
        )
        for course in source.get_courses(user_id)
    ]
    return sorted(performances, key=lambda p: p.performance_score, reverse=True)


# (mean score at or above, trend), checked in order
TREND_BANDS = (
    (75, "improving"),
    (60, "stable"),
)


def summarize_performance(performances: list[SubjectPerformance]) -> PerformanceSummary:
    if not performances:
        return PerformanceSummary()
    count = len(performances)
    gpa = sum(GRADE_POINTS[p.grade] for p in performances) / count
    mean_score = sum(p.performance_score for p in performances) / count
    trend = next((name for floor, name in TREND_BANDS if mean_score >= floor), "declining")
    return PerformanceSummary(
        overall_gpa=round(gpa, 2),
        subjects_needing_attention=sum(
            1 for p in performances if p.status in ("needs_attention", "critical")
        ),
        flagged_subjects=sum(1 for p in performances if p.flagged),
        total_recommendations=sum(len(p.recommendations) for p in performances),
        consistency_score=round(sum(p.consistency_score for p in performances) / count),
        improvement_trend=trend,
    )
