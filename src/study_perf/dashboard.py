"""Terminal rendering of performance snapshots and study plans."""
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from study_perf.models import PerformanceSummary, StudyPriority, SubjectPerformance
from study_perf.recommendations import calculate_improvement_potential, generate_insights

STATUS_COLORS = {
    "excellent": "green",
    "good": "blue",
    "needs_attention": "yellow",
    "critical": "red",
}

STATUS_LABELS = {
    "excellent": "EXCELLENT",
    "good": "GOOD",
    "needs_attention": "NEEDS ATTENTION",
    "critical": "CRITICAL",
}

URGENCY_COLORS = {
    "critical": "red",
    "high": "dark_orange",
    "medium": "yellow",
    "low": "green",
}


def get_status_color(status: str) -> str:
    return STATUS_COLORS.get(status, "white")


def format_study_time(minutes: float) -> str:
    if minutes == 0:
        return "0 minutes"
    if minutes < 60:
        return f"{round(minutes)} minutes"
    hours = int(minutes // 60)
    remaining = round(minutes % 60)
    if remaining == 0:
        return "1 hour" if hours == 1 else f"{hours} hours"
    return f"{hours}h {remaining}m"


def format_study_frequency(frequency: float) -> str:
    if frequency == 0:
        return "No recent activity"
    if frequency == 1:
        return "1 time per week"
    return f"{round(frequency, 1)} times per week"


def score_bar(score: int, color: str) -> str:
    filled = int(score / 5)
    return f"[{color}]{'█' * filled}{'░' * (20 - filled)}[/{color}]"


def render_summary(console: Console, summary: PerformanceSummary) -> None:
    console.print(Panel(
        f"GPA: [bold]{summary.overall_gpa:.2f}[/bold]  |  "
        f"Needing attention: [bold]{summary.subjects_needing_attention}[/bold]  |  "
        f"Flagged: [bold]{summary.flagged_subjects}[/bold]  |  "
        f"Consistency: [bold]{summary.consistency_score}[/bold]  |  "
        f"Trend: [bold]{summary.improvement_trend}[/bold]",
        title="Performance Summary", border_style="blue",
    ))


def render_performance_table(console: Console, performances: list[SubjectPerformance]) -> None:
    table = Table(title="Subject Performance")
    table.add_column("Subject", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Grade", justify="center")
    table.add_column("Status")
    table.add_column("Study Time", justify="right")
    table.add_column("Quests", justify="right")
    table.add_column("Consistency", justify="right")
    table.add_column("Deadlines", justify="right")
    table.add_column("Flag", justify="center")
    for p in performances:
        color = get_status_color(p.status)
        table.add_row(
            p.course_name,
            f"{p.performance_score}",
            p.grade,
            f"[{color}]{STATUS_LABELS[p.status]}[/{color}]",
            str(p.study_time_score),
            str(p.quest_completion_score),
            str(p.consistency_score),
            str(p.deadline_adherence_score),
            "[red]![/red]" if p.flagged else "",
        )
    console.print(table)


def render_priorities(console: Console, priorities: list[StudyPriority]) -> None:
    if not priorities:
        console.print("[yellow]No subjects to plan yet.[/yellow]")
        return
    table = Table(title="Study Plan")
    table.add_column("#", justify="right")
    table.add_column("Subject", style="cyan")
    table.add_column("Urgency")
    table.add_column("Time Share", justify="right")
    table.add_column("Action")
    for rank, p in enumerate(priorities, 1):
        color = URGENCY_COLORS[p.urgency_level]
        table.add_row(
            str(rank),
            p.course_name,
            f"[{color}]{p.urgency_level}[/{color}]",
            f"{p.time_allocation}%",
            p.recommended_action,
        )
    console.print(table)


def render_subject(console: Console, performance: SubjectPerformance) -> None:
    color = get_status_color(performance.status)
    console.print(Panel(
        f"[bold]{performance.course_name}[/bold]  Grade {performance.grade}",
        border_style=color,
    ))
    console.print(
        f"\n  Overall: [bold]{performance.performance_score}[/bold] "
        f"{score_bar(performance.performance_score, color)} "
        f"[{color}]{STATUS_LABELS[performance.status]}[/{color}]\n"
    )
    last = performance.last_studied.strftime("%Y-%m-%d") if performance.last_studied else "never"
    console.print(
        f"  Studied: [bold]{format_study_time(performance.total_study_time)}[/bold]  |  "
        f"Frequency: [bold]{format_study_frequency(performance.study_frequency)}[/bold]  |  "
        f"Streak: [bold]{performance.study_streak}[/bold] days  |  Last: {last}"
    )
    console.print(
        f"  Quests: {performance.completed_quests}/{performance.total_quests}  |  "
        f"Topics: {performance.completed_topics}/{performance.total_topics}"
    )

    for insight in generate_insights(performance):
        console.print(f"  [dim]- {insight}[/dim]")

    for rec in performance.recommendations:
        rec_color = URGENCY_COLORS[rec.priority]
        console.print(f"\n  [{rec_color}]{rec.priority.upper()}[/{rec_color}] [bold]{rec.title}[/bold]"
                      f" [dim]({rec.time_to_implement})[/dim]")
        for item in rec.action_items:
            console.print(f"    • {item}")

    for plan in performance.interventions:
        console.print(f"\n  [red]Intervention:[/red] [bold]{plan.title}[/bold] [dim]({plan.timeframe})[/dim]")
        for step in plan.steps:
            console.print(f"    {step.order}. {step.action} [dim]({step.duration})[/dim]")

    for ack in performance.acknowledgments:
        console.print(f"\n  [green]{ack.title}[/green] {ack.message}")

    potential = calculate_improvement_potential(performance)
    if potential.potential:
        console.print(f"\n  [cyan]Room to improve: +{potential.potential} points[/cyan]")
