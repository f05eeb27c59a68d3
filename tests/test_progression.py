"""
Unit tests for the next-session progression rules.

Values are hand-computed from the thresholds in core/config.py.
"""

import pytest

from lift_records.core.models import ProgressionSuggestion
from lift_records.core.progression import (
    get_next_band,
    suggest_band,
    suggest_bodyweight,
    suggest_cardio,
    suggest_regular,
    suggest_static_hold,
)

PALETTE = {"red": 1, "blue": 2, "green": 3}


class TestNextBand:
    def test_up_and_down(self):
        assert get_next_band("red", PALETTE, "up") == "blue"
        assert get_next_band("blue", PALETTE, "down") == "red"

    def test_ends_of_palette(self):
        assert get_next_band("green", PALETTE, "up") is None
        assert get_next_band("red", PALETTE, "down") is None

    def test_unknown_color(self):
        assert get_next_band("purple", PALETTE) is None
        assert get_next_band(None, PALETTE) is None

    def test_gaps_in_order_are_skipped(self):
        assert get_next_band("a", {"a": 1, "b": 5, "c": 3}, "up") == "c"


class TestBand:
    def test_change_at_threshold(self):
        assert suggest_band("red", 15, 3, PALETTE) == ProgressionSuggestion(sets=3, reps=8, band_color="blue")

    def test_no_change_below_threshold(self):
        assert suggest_band("red", 14, 3, PALETTE) is None

    def test_top_resistance_band_has_nowhere_to_go(self):
        assert suggest_band("green", 20, 3, PALETTE, "up") is None

    def test_lightest_assistance_band_is_dropped(self):
        suggestion = suggest_band("red", 15, 2, PALETTE, "down")
        assert suggestion.drop_band
        assert suggestion.band_color is None
        assert suggestion.reps == 8


class TestBodyweight:
    @pytest.mark.parametrize("reps", [11, 0])
    def test_low_reps_no_suggestion(self, reps):
        assert suggest_bodyweight(reps, 0.0, 3) is None

    def test_first_plate_at_twelve(self):
        assert suggest_bodyweight(12, 0.0, 3).weight == 5.0

    def test_weighted_needs_fifteen(self):
        assert suggest_bodyweight(14, 20.0, 3) is None
        assert suggest_bodyweight(15, 20.0, 3).weight == 25.0


class TestCardio:
    def test_short_distance_small_step(self):
        assert suggest_cardio(450, 1) == ProgressionSuggestion(sets=1, distance=500)

    def test_long_step_from_500(self):
        assert suggest_cardio(500, 2) == ProgressionSuggestion(sets=2, distance=600)

    def test_rounds_added_from_1000(self):
        assert suggest_cardio(1000, 2) == ProgressionSuggestion(sets=3, distance=1000)

    def test_rounds_capped(self):
        assert suggest_cardio(1200, 10).sets == 10

    def test_default_when_no_distance(self):
        assert suggest_cardio(0, 0) == ProgressionSuggestion(sets=1, distance=500)


class TestStaticHold:
    def test_short_holds_grow_by_one_second(self):
        assert suggest_static_hold(20, 0.0, 3) == ProgressionSuggestion(sets=3, time=21)

    def test_medium_holds_grow_by_two_seconds(self):
        assert suggest_static_hold(45, 0.0, 3) == ProgressionSuggestion(sets=3, time=47)

    def test_weight_reset_below_threshold(self):
        assert suggest_static_hold(45, 10.0, 3).weight == 0.0

    def test_sixty_seconds_adds_weight(self):
        assert suggest_static_hold(60, 0.0, 3) == ProgressionSuggestion(sets=3, time=60, weight=5.0)

    def test_weighted_adds_a_set(self):
        assert suggest_static_hold(60, 5.0, 3) == ProgressionSuggestion(sets=4, time=60, weight=5.0)

    def test_sets_and_duration_capped(self):
        suggestion = suggest_static_hold(400, 5.0, 10)
        assert suggestion.sets == 10
        assert suggestion.time == 300

    def test_default_when_no_hold(self):
        assert suggest_static_hold(0, 0.0, 0) == ProgressionSuggestion(sets=3, time=30)


class TestRegular:
    def test_inside_range_adds_a_rep(self):
        assert suggest_regular(100.0, 9, 3) == ProgressionSuggestion(sets=3, reps=10, weight=100.0)

    def test_top_of_range_adds_weight(self):
        assert suggest_regular(100.0, 12, 3) == ProgressionSuggestion(sets=3, reps=8, weight=105.0)

    def test_outside_range_is_linear(self):
        assert suggest_regular(100.0, 5, 5) == ProgressionSuggestion(sets=5, reps=5, weight=105.0)

    def test_nothing_to_suggest_without_load(self):
        assert suggest_regular(0.0, 8, 3) is None


class TestSuggestionModel:
    def test_sets_must_be_positive(self):
        with pytest.raises(ValueError):
            ProgressionSuggestion(sets=0)
