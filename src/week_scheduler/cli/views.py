"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of plans and stored workouts.
"""

from rich.console import Console
from rich.table import Table

from ..core.models import DayPrescription, SetRecord, WeekPlan, WorkoutRecord

console = Console()


def format_intensity(intensity: float | None) -> str:
    """Format intensity as a percentage of the effort ceiling."""
    if intensity is None:
        return "-"
    return f"{intensity * 100:.0f}%"


def format_sets(sets) -> str:
    """One line per movement: 'Back Squat 4x6 @8'."""
    return "\n".join(
        f"{s.movement} {s.target_sets}x{s.target_reps} @{s.target_rpe:g}" for s in sets
    )


def _day_status(day: DayPrescription) -> str:
    if day.is_rest:
        return "[dim]rest[/dim]"
    if day.existed:
        return "[yellow]updated[/yellow]"
    return "[green]created[/green]"


def print_week_plan(plan: WeekPlan) -> None:
    """
    Print a generated week as a table.

    Args:
        plan: Result of generate_week()
    """
    console.print()
    console.print(
        f"[bold]Week for {plan.user_id}[/bold] from {plan.start_date} "
        f"({plan.days} days, goal: [cyan]{plan.goal_type}[/cyan], "
        f"experience: {plan.experience_level})"
    )
    if plan.plan_id:
        console.print(f"Plan: {plan.plan_id}")

    signal = plan.adherence
    mod = plan.modulation
    console.print(
        f"Last 7 days: {signal.session_count} sessions, avg volume {signal.average_volume:.1f} "
        f"→ volume x{mod.volume_factor:g}, intensity {mod.intensity_adjustment:+.2f}"
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("Date", style="cyan")
    table.add_column("Type")
    table.add_column("Intensity", justify="right")
    table.add_column("Volume", justify="right")
    table.add_column("Sets")
    table.add_column("Status")

    for day in plan.created:
        table.add_row(
            day.workout_date,
            day.type,
            format_intensity(day.target_intensity),
            str(day.target_volume),
            format_sets(day.sets),
            _day_status(day),
        )

    console.print(table)
    console.print(
        f"{plan.created_count} created, {plan.updated_count} updated"
    )


def print_workouts(workouts: list[WorkoutRecord], sets_by_workout: dict[str, list[SetRecord]]) -> None:
    """
    Print stored workouts with their sets.

    Args:
        workouts: Workouts to show, in date order
        sets_by_workout: Set rows keyed by workout id
    """
    if not workouts:
        print_info("No workouts in this range.")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Date", style="cyan")
    table.add_column("Type")
    table.add_column("Intensity", justify="right")
    table.add_column("Volume", justify="right")
    table.add_column("Sets")
    table.add_column("Notes", style="dim")
    table.add_column("Id", style="dim")

    for w in workouts:
        table.add_row(
            w.workout_date,
            w.type,
            format_intensity(w.target_intensity),
            str(w.target_volume),
            format_sets(sets_by_workout.get(w.id, [])),
            w.notes or "",
            w.id[:8],
        )

    console.print(table)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Ask user for confirmation.

    Args:
        message: Confirmation prompt

    Returns:
        True if user confirms
    """
    response = console.input(f"{message} \\[y/N]: ").strip().lower()
    return response in ("y", "yes")
