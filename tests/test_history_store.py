"""
Tests for JSONL history storage and the JSON serializers behind it.
"""

import json
from datetime import datetime, timezone

import pytest

from lift_records.core.models import Exercise, LiftLog, LiftSet
from lift_records.io.history_store import HistoryStore
from lift_records.io.serializers import (
    ValidationError,
    dict_to_lift_log,
    dict_to_lift_set,
    lift_log_to_dict,
    lift_set_to_dict,
    parse_datetime,
)


def _exercise() -> Exercise:
    return Exercise(id="plank", title="Plank", exercise_type="static_hold")


def _hold_log(log_id: int, day: int, seconds: int) -> LiftLog:
    return LiftLog(
        id=log_id,
        exercise_id="plank",
        logged_at=datetime(2026, 2, day, 7, 30),
        sets=[LiftSet(reps=1, time=seconds)],
    )


@pytest.fixture
def store(tmp_path):
    s = HistoryStore(tmp_path / "plank_history.jsonl")
    s.init(_exercise())
    return s


class TestSerializers:
    def test_set_omits_unused_columns(self):
        assert lift_set_to_dict(LiftSet(weight=100, reps=5)) == {"weight": 100, "reps": 5}
        assert lift_set_to_dict(LiftSet(reps=1, time=30)) == {"weight": 0.0, "reps": 1, "time": 30}

    def test_set_rejects_negative_reps(self):
        with pytest.raises(ValidationError, match="reps must be non-negative"):
            dict_to_lift_set({"weight": 0, "reps": -1})

    def test_set_rejects_non_numeric_weight(self):
        with pytest.raises(ValidationError):
            dict_to_lift_set({"weight": "heavy", "reps": 5})

    def test_log_keeps_optional_fields(self):
        log = LiftLog(
            id=3,
            exercise_id=1,
            logged_at=datetime(2026, 2, 1),
            sets=[LiftSet(band_color="red", reps=12)],
            comments="felt easy",
            bodyweight=180.0,
        )
        restored = dict_to_lift_log(lift_log_to_dict(log))
        assert restored == log

    def test_log_missing_date(self):
        with pytest.raises(ValidationError, match="logged_at"):
            dict_to_lift_log({"exercise_id": 1, "sets": []})

    def test_parse_datetime(self):
        assert parse_datetime("2026-02-01") == datetime(2026, 2, 1)
        assert parse_datetime("2026-02-01T07:30:00") == datetime(2026, 2, 1, 7, 30)
        with pytest.raises(ValidationError, match="Invalid date"):
            parse_datetime("yesterday")

    def test_parse_datetime_with_offset_is_naive(self):
        parsed = parse_datetime("2026-03-02T10:00:00+00:00")
        assert parsed.tzinfo is None
        expected = datetime(2026, 3, 2, 10, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert parsed == expected
        assert parsed > parse_datetime("2026-03-01")

    def test_mixed_offsets_in_history_load_sorted(self, store):
        first = lift_log_to_dict(_hold_log(1, 1, 30))
        second = lift_log_to_dict(_hold_log(2, 3, 35))
        second["logged_at"] = "2026-02-03T07:30:00+00:00"
        with open(store.history_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(second) + "\n")
            f.write(json.dumps(first) + "\n")
        assert [log.id for log in store.load_lift_logs()] == [1, 2]


class TestHistoryStore:
    def test_init_writes_exercise_record(self, store):
        first_line = store.history_path.read_text(encoding="utf-8").splitlines()[0]
        assert json.loads(first_line)["type"] == "exercise"
        assert store.load_exercise() == _exercise()
        assert store.load_lift_logs() == []

    def test_init_twice_fails(self, store):
        with pytest.raises(FileExistsError):
            store.init(_exercise())

    def test_missing_file(self, tmp_path):
        missing = HistoryStore(tmp_path / "nope.jsonl")
        assert not missing.exists()
        with pytest.raises(FileNotFoundError, match="Run 'init' first"):
            missing.load_lift_logs()
        with pytest.raises(FileNotFoundError):
            missing.append_lift_log(_hold_log(1, 1, 30))

    def test_logs_come_back_sorted(self, store):
        store.append_lift_log(_hold_log(2, 5, 45))
        store.append_lift_log(_hold_log(1, 3, 40))
        logs = store.load_lift_logs()
        assert [log.id for log in logs] == [1, 2]
        assert logs[1].sets[0].time == 45
        assert store.next_log_id() == 3

    def test_next_log_id_starts_at_one(self, store):
        assert store.next_log_id() == 1

    def test_corrupt_line_reports_line_number(self, store):
        with open(store.history_path, "a", encoding="utf-8") as f:
            f.write("{not json\n")
        with pytest.raises(ValidationError, match="Error parsing line 2"):
            store.load_lift_logs()

    def test_invalid_record_reports_line_number(self, store):
        store.append_lift_log(_hold_log(1, 1, 30))
        with open(store.history_path, "a", encoding="utf-8") as f:
            f.write(json.dumps({"exercise_id": "plank", "logged_at": "2026-02-02", "bodyweight": -1}) + "\n")
        with pytest.raises(ValidationError, match="Error parsing line 3"):
            store.load_lift_logs()

    def test_no_exercise_record(self, tmp_path):
        path = tmp_path / "h.jsonl"
        path.write_text("\n", encoding="utf-8")
        with pytest.raises(ValidationError, match="No exercise record"):
            HistoryStore(path).load_exercise()
