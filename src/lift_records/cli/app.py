"""Shared Typer app object, shared option types, and store utilities."""

from pathlib import Path
from typing import Annotated

import typer

from ..core.exercise_types.errors import StrategyResolutionFailure
from ..core.exercise_types.resolver import ExerciseTypeResolver
from ..core.exercise_types.strategy import ExerciseTypeStrategy
from ..core.models import Exercise, LiftLog
from ..io.history_store import HistoryStore
from ..io.serializers import ValidationError
from . import views

# Shared history-file argument used across commands
HistoryArgument = Annotated[
    Path,
    typer.Argument(help="Path to the exercise history JSONL file"),
]

app = typer.Typer(
    name="lift-records",
    help="Personal-record detection and progression suggestions for logged lifts.",
    no_args_is_help=True,
)


def get_resolver() -> ExerciseTypeResolver:
    """Build a resolver from the merged YAML config, exiting on a broken config."""
    try:
        return ExerciseTypeResolver()
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def load_history(history_path: Path) -> tuple[HistoryStore, Exercise, ExerciseTypeStrategy, list[LiftLog]]:
    """
    Open a history file and resolve its exercise's strategy.

    Prints the error and exits with status 1 on any failure.
    """
    store = HistoryStore(history_path)
    try:
        exercise = store.load_exercise()
        logs = store.load_lift_logs()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    try:
        strategy = get_resolver().resolve(exercise)
    except StrategyResolutionFailure as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    return store, exercise, strategy, logs
