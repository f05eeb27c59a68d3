"""
CLI entry point using Typer.

Provides commands for personal-record tracking:
- init: Create a history file for one exercise
- log: Log a session, report PRs and a suggestion for next time
- check: Re-evaluate a logged session against the ones before it
- recalc: Replay the history and list the sessions that earned PRs
- show-history: Display the logged sessions
- types: List exercise types
- validate: Validate one set for an exercise type
"""

import logging
from typing import Annotated

import typer

from .app import app
from .commands import exercise_types, records  # noqa: F401  (registers commands)


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
) -> None:
    """
    Personal-record detection and progression suggestions for logged lifts.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    app()
