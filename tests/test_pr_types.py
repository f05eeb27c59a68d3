"""
Tests for PRType bit flags: combining, decoding and headline labels.
"""

import pytest

from lift_records.core.pr_types import LABEL_PRIORITY, PRType


class TestFlagValues:
    def test_each_type_is_a_distinct_bit(self):
        values = [int(t) for t in PRType if t is not PRType.NONE]
        assert values == [1, 2, 4, 8, 16, 32, 64]

    def test_none_is_zero(self):
        assert int(PRType.NONE) == 0

    def test_tag_is_lower_case_name(self):
        assert PRType.REP_SPECIFIC.tag == "rep_specific"
        assert PRType.ONE_RM.tag == "one_rm"


class TestCombine:
    def test_varargs_and_iterable_agree(self):
        assert PRType.combine(PRType.ONE_RM, PRType.TIME) == 17
        assert PRType.combine([PRType.ONE_RM, PRType.TIME]) == 17

    def test_empty_is_zero(self):
        assert PRType.combine() == 0
        assert PRType.combine([]) == 0

    def test_duplicates_do_not_double_count(self):
        assert PRType.combine(PRType.VOLUME, PRType.VOLUME) == 4

    def test_get_types_round_trips_in_declaration_order(self):
        flags = PRType.combine(PRType.TIME, PRType.ONE_RM, PRType.CONSISTENCY)
        assert PRType.get_types(flags) == [PRType.ONE_RM, PRType.TIME, PRType.CONSISTENCY]

    def test_get_types_of_zero_is_empty(self):
        assert PRType.get_types(0) == []


class TestIsIn:
    def test_present_and_absent(self):
        flags = PRType.combine(PRType.ONE_RM, PRType.TIME)
        assert PRType.TIME.is_in(flags)
        assert PRType.ONE_RM.is_in(flags)
        assert not PRType.VOLUME.is_in(flags)


class TestBestLabel:
    def test_zero_flags_give_empty_label(self):
        assert PRType.get_best_label(0) == ""

    def test_one_rm_wins_over_everything(self):
        flags = PRType.combine(PRType.ONE_RM, PRType.REP_SPECIFIC, PRType.VOLUME)
        assert PRType.get_best_label(flags) == "NEW PR!"

    def test_volume_beats_time(self):
        assert PRType.get_best_label(PRType.combine(PRType.TIME, PRType.VOLUME)) == "Volume PR!"

    def test_single_types(self):
        assert PRType.get_best_label(PRType.TIME) == "Time PR!"
        assert PRType.get_best_label(PRType.ENDURANCE) == "Endurance PR!"
        assert PRType.get_best_label(PRType.DENSITY) == "Density PR!"

    def test_consistency_only_falls_back_to_generic_label(self):
        assert PRType.CONSISTENCY not in LABEL_PRIORITY
        assert PRType.get_best_label(PRType.CONSISTENCY) == "NEW PR!"
        assert PRType.CONSISTENCY.label == "Consistency PR!"


class TestFromTag:
    def test_known_tag(self):
        assert PRType.from_tag("time") is PRType.TIME
        assert PRType.from_tag(" Rep_Specific ") is PRType.REP_SPECIFIC

    def test_unknown_tag_lists_valid_tags(self):
        with pytest.raises(ValueError, match="Valid tags: one_rm"):
            PRType.from_tag("fastest")
