"""Record commands: init, log, check, recalc, show-history."""

from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.exercise_types.errors import InvalidExerciseData
from ...core.models import Exercise, LiftLog, LiftSet
from ...core.pr_detection import calculate_pr_log_ids, evaluate_lift_log
from ...io.history_store import HistoryStore
from ...io.serializers import ValidationError, parse_datetime
from .. import views
from ..app import HistoryArgument, app, get_resolver, load_history


@app.command("init")
def init(
    history_path: HistoryArgument,
    title: Annotated[str, typer.Option("--title", help="Exercise title, e.g. 'Plank'")],
    type_name: Annotated[
        Optional[str],
        typer.Option("--type", "-t", help="Exercise type tag (see 'types')"),
    ] = None,
    bodyweight: Annotated[bool, typer.Option("--bodyweight", help="Bodyweight movement")] = False,
    band_type: Annotated[
        Optional[str],
        typer.Option("--band-type", help="resistance or assistance"),
    ] = None,
    exercise_id: Annotated[str, typer.Option("--id", help="Exercise id")] = "1",
) -> None:
    """
    Create a history file for one exercise.
    """
    data = {
        "id": exercise_id,
        "title": title,
        "canonical_name": title.strip().lower().replace(" ", "_"),
        "is_bodyweight": bodyweight,
        "band_type": band_type,
        "exercise_type": None,
    }
    if type_name is not None:
        try:
            strategy = get_resolver().resolve_type_name(type_name)
        except ValueError as e:
            views.print_error(str(e))
            raise typer.Exit(1)
        data = strategy.process_exercise_data(data)

    try:
        exercise = Exercise(**data)
        HistoryStore(history_path).init(exercise)
    except (ValueError, FileExistsError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Created {history_path} for '{exercise.title}'")


@app.command("log")
def log_session(
    history_path: HistoryArgument,
    weight: Annotated[Optional[float], typer.Option("--weight", "-w", help="Weight or extra weight")] = None,
    reps: Annotated[Optional[int], typer.Option("--reps", "-r", help="Reps (meters for cardio)")] = None,
    time: Annotated[Optional[int], typer.Option("--time", help="Hold duration in seconds")] = None,
    band_color: Annotated[Optional[str], typer.Option("--band-color", "-b", help="Band color")] = None,
    sets: Annotated[int, typer.Option("--sets", "-s", min=1, help="Number of identical sets")] = 1,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Session date (YYYY-MM-DD or ISO datetime), default now"),
    ] = None,
    athlete_bodyweight: Annotated[
        Optional[float],
        typer.Option("--athlete-bodyweight", help="Your bodyweight at log time"),
    ] = None,
    comments: Annotated[str, typer.Option("--comments", help="Free-text note")] = "",
) -> None:
    """
    Log a session of identical sets and report any new personal records.
    """
    store, exercise, strategy, logs = load_history(history_path)

    raw = {"weight": weight, "reps": reps, "time": time, "band_color": band_color}
    try:
        normalized = strategy.normalize(raw)
        logged_at = parse_datetime(date) if date else datetime.now().replace(microsecond=0)
        lift_set = LiftSet(
            weight=float(normalized.get("weight") or 0.0),
            reps=int(normalized.get("reps") or 0),
            time=normalized.get("time"),
            band_color=normalized.get("band_color"),
        )
        log = LiftLog(
            id=store.next_log_id(),
            exercise_id=exercise.id,
            logged_at=logged_at,
            sets=[lift_set] * sets,
            comments=comments,
            bodyweight=athlete_bodyweight,
        )
    except InvalidExerciseData as e:
        views.print_error(f"{e.field}: {e.reason}")
        raise typer.Exit(1)
    except (ValidationError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    result = evaluate_lift_log(log, logs, strategy)
    store.append_lift_log(log)

    views.print_success(f"Logged #{log.id}: {strategy.format_complete_display(log)}")
    views.print_pr_result(result, strategy)
    views.print_suggestion(strategy.format_progression_suggestion(log))


@app.command("check")
def check(
    history_path: HistoryArgument,
    log_id: Annotated[
        Optional[int],
        typer.Option("--log-id", "-l", help="Session to check (default: latest)"),
    ] = None,
) -> None:
    """
    Evaluate a logged session against the sessions before it.
    """
    _, _, strategy, logs = load_history(history_path)
    if not logs:
        views.print_warning("No sessions logged yet.")
        raise typer.Exit(0)

    if log_id is None:
        log = logs[-1]
    else:
        matches = [entry for entry in logs if entry.id == log_id]
        if not matches:
            views.print_error(f"No session with id {log_id}")
            raise typer.Exit(1)
        log = matches[0]

    result = evaluate_lift_log(log, logs, strategy)
    views.console.print(f"[bold]#{log.id}[/bold] {strategy.format_complete_display(log)}")
    views.print_pr_result(result, strategy)
    views.print_suggestion(strategy.format_progression_suggestion(log))


@app.command("recalc")
def recalc(history_path: HistoryArgument) -> None:
    """
    Replay the history and list the sessions that earned a PR when logged.
    """
    _, exercise, strategy, logs = load_history(history_path)
    pr_ids = calculate_pr_log_ids(logs, strategy)
    if not pr_ids:
        views.print_info(f"No PR sessions for '{exercise.title}'.")
        return
    views.print_info(f"PR sessions for '{exercise.title}': " + ", ".join(f"#{i}" for i in pr_ids))


@app.command("show-history")
def show_history(
    history_path: HistoryArgument,
    limit: Annotated[Optional[int], typer.Option("--limit", "-n", help="Show the last N sessions")] = None,
) -> None:
    """
    Display logged sessions, marking the ones that earned a PR.
    """
    _, exercise, strategy, logs = load_history(history_path)
    if not logs:
        views.print_info(f"No sessions logged for '{exercise.title}'.")
        return

    pr_ids = set(calculate_pr_log_ids(logs, strategy))
    shown = logs[-limit:] if limit else logs
    views.console.print(views.format_history_table(shown, strategy, pr_ids))
