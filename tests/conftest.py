"""Shared fixtures for lift-records tests."""

import pytest

from lift_records.core.exercise_types.loader import load_exercise_types_config


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point HOME at an empty directory so no user override YAML is picked up."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def type_config(isolated_home):
    """Exercise-type config built from the bundled YAML and Python defaults."""
    return load_exercise_types_config()
