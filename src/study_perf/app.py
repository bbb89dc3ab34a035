"""Interactive CLI application."""
import os
import sys

from loguru import logger
from rich.console import Console
from rich.prompt import Prompt

from study_perf.analysis import analyze_all_subjects, summarize_performance
from study_perf.config import DEFAULT_CONFIG, PerformanceConfig, load_config
from study_perf.dashboard import (
    render_performance_table, render_priorities, render_subject, render_summary,
)
from study_perf.db import DEFAULT_DB_PATH, init_db
from study_perf.prioritizer import calculate_time_allocation, prioritize_subjects
from study_perf.seed import DEMO_USER, is_seeded, seed_demo_data
from study_perf.sources import DataSource, SQLiteDataSource

console = Console()


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("dashboard", "Scores for every subject"),
        ("plan", "Prioritized study plan"),
        ("subject", "Details and recommendations for one subject"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def cmd_dashboard(source: DataSource, user_id: str, config: PerformanceConfig):
    performances = analyze_all_subjects(source, user_id, config)
    if not performances:
        console.print("[yellow]No courses found.[/yellow]")
        return
    render_summary(console, summarize_performance(performances))
    render_performance_table(console, performances)


def cmd_plan(source: DataSource, user_id: str, config: PerformanceConfig):
    priorities = prioritize_subjects(analyze_all_subjects(source, user_id, config))
    render_priorities(console, priorities)
    for row in calculate_time_allocation(priorities):
        if row["recommended_hours"]:
            console.print(f"  [cyan]{row['course_name']}[/cyan]: {row['recommended_hours']} h/week")


def cmd_subject(source: DataSource, user_id: str, config: PerformanceConfig):
    performances = analyze_all_subjects(source, user_id, config)
    if not performances:
        console.print("[yellow]No courses found.[/yellow]")
        return
    for i, p in enumerate(performances, 1):
        console.print(f"  [cyan]{i}[/cyan]) {p.course_name}")
    choice = Prompt.ask("Select subject", choices=[str(i) for i in range(1, len(performances) + 1)])
    render_subject(console, performances[int(choice) - 1])


COMMANDS = {
    "dashboard": cmd_dashboard,
    "plan": cmd_plan,
    "subject": cmd_subject,
}


def main():
    logger.remove()
    logger.add(sys.stderr, level="WARNING")

    config_path = os.environ.get("STUDY_PERF_CONFIG")
    config = load_config(config_path) if config_path else DEFAULT_CONFIG

    db_path = DEFAULT_DB_PATH
    init_db(db_path)
    if not is_seeded(db_path):
        console.print("[dim]Loading demo data...[/dim]")
        seed_demo_data(db_path)
    source = SQLiteDataSource(db_path)

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="dashboard").strip().lower()
        if choice in ("quit", "exit", "q"):
            break
        command = COMMANDS.get(choice)
        if command is None:
            console.print("[red]Unknown command. Try again.[/red]")
            continue
        try:
            command(source, DEMO_USER, config)
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.exception("Command {} failed", choice)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
