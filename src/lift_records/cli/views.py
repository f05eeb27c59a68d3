"""
CLI view formatters using Rich for pretty console output.

Renders strategy displays, PR results and lift history as tables. All text
comes from the strategies; this module only lays it out.
"""

from rich.console import Console
from rich.table import Table

from ..core.exercise_types.strategy import ExerciseTypeStrategy
from ..core.models import LiftLog
from ..core.pr_detection import PRResult

console = Console()


def format_types_table(strategies: list[ExerciseTypeStrategy]) -> Table:
    """
    Create a Rich table listing the available exercise types.

    Args:
        strategies: One instance per type

    Returns:
        Rich Table object
    """
    table = Table(title="Exercise Types")

    table.add_column("Type", style="cyan")
    table.add_column("Name")
    table.add_column("1RM", justify="center")
    table.add_column("PR types", style="magenta")
    table.add_column("Chart", style="dim")

    for strategy in strategies:
        pr_types = ", ".join(t.tag for t in sorted(strategy.supported_pr_types()))
        table.add_row(
            strategy.type_name,
            strategy.settings.display_name,
            "yes" if strategy.can_calculate_1rm() else "-",
            pr_types or "-",
            strategy.chart_title(),
        )

    return table


def format_pr_table(result: PRResult, strategy: ExerciseTypeStrategy) -> Table:
    """Create a Rich table of the records awarded in *result*."""
    table = Table(title="Personal Records")

    table.add_column("PR", style="bold")
    table.add_column("Previous", justify="right", style="dim")
    table.add_column("New", justify="right", style="green")
    table.add_column("Reason")

    for record, reason in zip(result.records, result.snapshot.pr_reasons):
        display = strategy.format_pr_display(record)
        table.add_row(display["label"], display["value"], display["comparison"], reason)

    return table


def format_history_table(
    logs: list[LiftLog],
    strategy: ExerciseTypeStrategy,
    pr_log_ids: set | None = None,
) -> Table:
    """
    Create a Rich table displaying lift history.

    Args:
        logs: Lift logs, oldest first
        strategy: Strategy for the exercise
        pr_log_ids: Ids of logs that earned a PR when logged

    Returns:
        Rich Table object
    """
    pr_log_ids = pr_log_ids or set()
    table = Table(title="Lift History")

    table.add_column("#", justify="right", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Load")
    table.add_column("Sets", justify="right")
    if strategy.can_calculate_1rm():
        table.add_column("1RM", justify="right", style="bold")
    table.add_column("PR", justify="center", style="green")

    for log in logs:
        cell = strategy.format_table_cell_display(log)
        row = [
            str(log.id) if log.id is not None else "-",
            log.logged_at.strftime("%Y-%m-%d"),
            cell["primary"],
            cell["secondary"],
        ]
        if strategy.can_calculate_1rm():
            row.append(strategy.format_1rm_display(log) or "-")
        row.append("★" if log.id in pr_log_ids else "")
        table.add_row(*row)

    return table


def print_pr_result(result: PRResult, strategy: ExerciseTypeStrategy) -> None:
    """Print the PR table and headline label, or the reasons nothing was awarded."""
    if result.is_pr:
        console.print(format_pr_table(result, strategy))
        console.print(f"[bold green]{result.best_label}[/bold green]")
        return

    console.print("[dim]No new personal records.[/dim]")
    for tag, reason in result.snapshot.why_not_pr.items():
        console.print(f"  [dim]{tag}: {reason}[/dim]")


def print_suggestion(text: str | None) -> None:
    if text:
        console.print(f"[cyan]Next time:[/cyan] {text}")


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
