"""Exercise-type commands: types, validate."""

import json
from typing import Annotated, Optional

import typer

from ...core.exercise_types.errors import InvalidExerciseData
from .. import views
from ..app import app, get_resolver


@app.command("types")
def list_types() -> None:
    """
    List the configured exercise types with their 1RM and PR support.
    """
    resolver = get_resolver()
    strategies = [resolver.resolve_type_name(name) for name in resolver.available_types()]
    views.console.print(views.format_types_table(strategies))


@app.command("validate")
def validate_set(
    type_name: Annotated[str, typer.Option("--type", "-t", help="Exercise type, e.g. static_hold")],
    weight: Annotated[Optional[float], typer.Option("--weight", "-w", help="Weight or extra weight")] = None,
    reps: Annotated[Optional[int], typer.Option("--reps", "-r", help="Reps (meters for cardio)")] = None,
    time: Annotated[Optional[int], typer.Option("--time", help="Hold duration in seconds")] = None,
    band_color: Annotated[Optional[str], typer.Option("--band-color", "-b", help="Band color")] = None,
) -> None:
    """
    Validate one set for an exercise type and print its normalized form.
    """
    resolver = get_resolver()
    try:
        strategy = resolver.resolve_type_name(type_name)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    raw = {"weight": weight, "reps": reps, "time": time, "band_color": band_color}
    try:
        normalized = strategy.normalize(raw)
    except InvalidExerciseData as e:
        views.print_error(f"{e.field}: {e.reason}")
        raise typer.Exit(1)

    views.console.print(json.dumps(normalized, sort_keys=True))
