"""Remediation recommendations, insights and improvement potential."""
from dataclasses import dataclass
from typing import NamedTuple

from study_perf.models import Recommendation, SubjectPerformance


class SubScores(NamedTuple):
    study_time: int
    quest_completion: int
    consistency: int
    deadline_adherence: int


@dataclass(frozen=True)
class RecommendationRule:
    type: str
    score_field: str
    threshold: int  # deficient below this
    high_at: int  # score at or below -> high priority
    medium_at: int  # score at or below -> medium priority
    title: str
    description: str
    action_items: tuple[str, ...]
    time_to_implement: str
    category: str


RULES = (
    RecommendationRule(
        type="study_time",
        score_field="study_time",
        threshold=60, high_at=40, medium_at=50,
        title="Increase Study Time",
        description="Your study time is below the recommended amount for this subject.",
        action_items=(
            "Schedule dedicated study blocks for this subject",
            "Use the Pomodoro technique for focused sessions",
            "Set daily study time goals",
            "Track your progress to stay motivated",
        ),
        time_to_implement="1-2 weeks",
        category="immediate",
    ),
    RecommendationRule(
        type="consistency",
        score_field="consistency",
        threshold=50, high_at=30, medium_at=40,
        title="Improve Study Consistency",
        description="Regular study sessions will improve retention and reduce cramming.",
        action_items=(
            "Create a weekly study schedule",
            "Set up study reminders",
            "Start with shorter, more frequent sessions",
            "Use habit stacking to build consistency",
        ),
        time_to_implement="2-3 weeks",
        category="short_term",
    ),
    RecommendationRule(
        type="quest_completion",
        score_field="quest_completion",
        threshold=60, high_at=40, medium_at=50,
        title="Complete Pending Quests",
        description="Quests give your learning structure; too many are left unfinished.",
        action_items=(
            "Pick the two easiest open quests and finish them this week",
            "Break large quests into smaller milestones",
            "Review quest deadlines every Monday",
        ),
        time_to_implement="1 week",
        category="immediate",
    ),
    RecommendationRule(
        type="deadline",
        score_field="deadline_adherence",
        threshold=60, high_at=30, medium_at=45,
        title="Get Ahead of Deadlines",
        description="Topics are overdue or close to their deadlines.",
        action_items=(
            "List overdue topics and finish the highest-priority one first",
            "Work backwards from each deadline to set weekly targets",
            "Start new topics as soon as they are assigned",
        ),
        time_to_implement="1-2 weeks",
        category="short_term",
    ),
)

_PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def _priority_for(rule: RecommendationRule, score: int) -> str:
    if score <= rule.high_at:
        return "high"
    if score <= rule.medium_at:
        return "medium"
    return "low"


def generate_recommendations(
    course_id: str, scores: SubScores, *, unscored: frozenset[str] = frozenset(),
) -> list[Recommendation]:
    """One recommendation per deficient sub-score, most urgent first.

    Sub-scores named in ``unscored`` had nothing to measure and are skipped.
    """
    recommendations = []
    for rule in RULES:
        if rule.score_field in unscored:
            continue
        score = getattr(scores, rule.score_field)
        if score >= rule.threshold:
            continue
        priority = _priority_for(rule, score)
        recommendations.append(Recommendation(
            id=f"{rule.type}-{course_id}",
            type=rule.type,
            priority=priority,
            title=rule.title,
            description=rule.description,
            action_items=rule.action_items,
            estimated_impact=priority,
            time_to_implement=rule.time_to_implement,
            category=rule.category,
        ))
    # sorted() is stable, so rule order breaks ties
    return sorted(recommendations, key=lambda r: _PRIORITY_ORDER[r.priority])


def generate_insights(performance: SubjectPerformance) -> list[str]:
    insights = []
    name = performance.course_name

    if performance.study_time_score < 50:
        insights.append(f"Study time is significantly below recommended levels for {name}")
    elif performance.study_time_score > 90:
        insights.append(f"Excellent study time allocation for {name}")

    if performance.consistency_score < 40:
        insights.append("Study sessions are irregular - consistency is key for retention")
    elif performance.consistency_score > 80:
        insights.append("Great study consistency - this builds strong learning habits")

    if performance.quest_completion_score < 50:
        insights.append("Quest completion rate is low - quests help structure your learning")
    elif performance.quest_completion_score > 85:
        insights.append("Excellent quest completion rate - you're staying on track with goals")

    if performance.deadline_adherence_score < 60:
        insights.append("Deadline management needs improvement to reduce stress")
    elif performance.deadline_adherence_score > 90:
        insights.append("Outstanding deadline management - you're well-prepared")

    if performance.performance_score > 85:
        insights.append("Overall performance is excellent - keep up the great work!")
    elif performance.performance_score < 50:
        insights.append("Performance needs immediate attention - follow the recommended interventions")

    return insights


class ImprovementPotential(NamedTuple):
    potential: int
    quick_wins: list[str]
    long_term_goals: list[str]


# (score below, max realistic gain), checked in order
POTENTIAL_CAPS = (
    (30, 40),
    (60, 25),
    (80, 15),
    (101, 10),
)


def calculate_improvement_potential(performance: SubjectPerformance) -> ImprovementPotential:
    """Estimate how many points a subject can realistically gain, and how."""
    score = performance.performance_score
    headroom = 100 - score
    cap = next(gain for below, gain in POTENTIAL_CAPS if score < below)

    quick_wins = []
    if performance.quest_completion_score < 70:
        quick_wins.append("Complete pending quests for immediate score boost")
    if performance.study_time_score < 60:
        quick_wins.append("Increase daily study time by 15-30 minutes")

    long_term = []
    if performance.consistency_score < 50:
        long_term.append("Build consistent daily study habits over 2-3 weeks")
    if performance.deadline_adherence_score < 70:
        long_term.append("Plan topic work backwards from deadlines")
    if score < 50:
        long_term.append("Achieve overall performance score above 70")
    elif score < 80:
        long_term.append("Reach excellent performance level (85+)")

    return ImprovementPotential(min(cap, headroom), quick_wins, long_term)
