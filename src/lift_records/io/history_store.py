"""
JSONL-based lift history storage for the command line tool.

One file per exercise. The first line is the exercise record
(``"type": "exercise"``); every following line is one lift log.
"""

import json
from pathlib import Path

from ..core.models import Exercise, LiftLog
from .serializers import (
    ValidationError,
    dict_to_exercise,
    dict_to_lift_log,
    exercise_to_dict,
    lift_log_to_dict,
    record_to_json_line,
)


class HistoryStore:
    """
    Reads and appends lift logs for a single exercise.

    File layout:
    - Line 1: exercise record with type="exercise"
    - Subsequent lines: lift log records
    """

    def __init__(self, history_path: str | Path):
        """
        Initialize the history store.

        Args:
            history_path: Path to the JSONL history file
        """
        self.history_path = Path(history_path)

    def exists(self) -> bool:
        """Check if the history file exists."""
        return self.history_path.exists()

    def init(self, exercise: Exercise) -> None:
        """
        Create the history file with its exercise record.

        Raises:
            FileExistsError: If the file already exists
        """
        if self.history_path.exists():
            raise FileExistsError(f"History file already exists: {self.history_path}")
        self.history_path.parent.mkdir(parents=True, exist_ok=True)
        data = {"type": "exercise", **exercise_to_dict(exercise)}
        with open(self.history_path, "w", encoding="utf-8") as f:
            f.write(record_to_json_line(data) + "\n")

    def _records(self) -> list[tuple[int, dict]]:
        if not self.history_path.exists():
            raise FileNotFoundError(
                f"History file not found: {self.history_path}. Run 'init' first."
            )

        records: list[tuple[int, dict]] = []
        with open(self.history_path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    data = json.loads(line)
                except json.JSONDecodeError as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.history_path}: {e}"
                    ) from e
                if not isinstance(data, dict):
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.history_path}: expected an object"
                    )
                records.append((line_num, data))
        return records

    def load_exercise(self) -> Exercise:
        """
        Load the exercise record.

        Raises:
            FileNotFoundError: If the history file doesn't exist
            ValidationError: If there is no valid exercise record
        """
        for line_num, data in self._records():
            if data.get("type") == "exercise":
                try:
                    return dict_to_exercise(data)
                except ValidationError as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.history_path}: {e}"
                    ) from e
        raise ValidationError(f"No exercise record in {self.history_path}")

    def load_lift_logs(self) -> list[LiftLog]:
        """
        Load all lift logs.

        Returns:
            List of LiftLog, sorted by logged_at

        Raises:
            FileNotFoundError: If the history file doesn't exist
            ValidationError: If a line cannot be parsed
        """
        logs: list[LiftLog] = []
        for line_num, data in self._records():
            if data.get("type") == "exercise":
                continue
            try:
                logs.append(dict_to_lift_log(data))
            except ValidationError as e:
                raise ValidationError(
                    f"Error parsing line {line_num} in {self.history_path}: {e}"
                ) from e

        logs.sort(key=lambda log: log.logged_at)
        return logs

    def next_log_id(self) -> int:
        ids = [log.id for log in self.load_lift_logs() if isinstance(log.id, int)]
        return max(ids, default=0) + 1

    def append_lift_log(self, log: LiftLog) -> None:
        """
        Append one lift log.

        Raises:
            FileNotFoundError: If the history file doesn't exist
        """
        if not self.history_path.exists():
            raise FileNotFoundError(
                f"History file not found: {self.history_path}. Run 'init' first."
            )
        with open(self.history_path, "a", encoding="utf-8") as f:
            f.write(record_to_json_line(lift_log_to_dict(log)) + "\n")
