"""Decide whether a subject needs urgent attention."""
from datetime import datetime
from typing import Callable, Iterator, Optional

from study_perf.config import FlaggingCriteria
from study_perf.models import Quest, StudySession
from study_perf.scoring import calculate_consistency_score, quest_completion_rate
from study_perf.temporal import days_since_last_study


def _low_performance(score, sessions, quests, criteria, now) -> bool:
    return score < criteria.min_performance_score


def _inactive(score, sessions, quests, criteria, now) -> bool:
    gap = days_since_last_study(sessions, now=now)
    return gap is None or gap > criteria.max_days_since_last_study


def _low_quest_completion(score, sessions, quests, criteria, now) -> bool:
    rate = quest_completion_rate(quests)
    return rate is not None and rate < criteria.min_quest_completion_rate


def _inconsistent(score, sessions, quests, criteria, now) -> bool:
    return calculate_consistency_score(sessions, now=now) < criteria.min_consistency_score


FLAG_CHECKS: dict[str, Callable[..., bool]] = {
    "low_performance": _low_performance,
    "inactive": _inactive,
    "low_quest_completion": _low_quest_completion,
    "inconsistent": _inconsistent,
}


def _failing(score, sessions, quests, criteria, now) -> Iterator[str]:
    for name, check in FLAG_CHECKS.items():
        if check(score, sessions, quests, criteria, now):
            yield name


def flag_reasons(
    score: float,
    sessions: list[StudySession],
    quests: list[Quest],
    criteria: FlaggingCriteria,
    *,
    now: Optional[datetime] = None,
) -> list[str]:
    """Names of every flagging check the subject fails."""
    return list(_failing(score, sessions, quests, criteria, now))


def should_flag_subject(
    score: float,
    sessions: list[StudySession],
    quests: list[Quest],
    criteria: FlaggingCriteria,
    *,
    now: Optional[datetime] = None,
) -> bool:
    """True as soon as any single check fails."""
    return next(_failing(score, sessions, quests, criteria, now), None) is not None
