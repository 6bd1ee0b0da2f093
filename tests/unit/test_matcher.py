"""Unit tests for the subsequence matcher."""

import pytest
from decl_index.core.matcher import SubsequenceMatcher, match_cost


class TestSubsequenceMatcher:
    """Test cases for the SubsequenceMatcher class."""

    @pytest.fixture
    def matcher(self):
        return SubsequenceMatcher()

    @pytest.mark.parametrize("name", ["Nat.add", "List.map_id", "x", "Mathlib.Algebra.Group"])
    def test_exact_match_costs_zero(self, matcher, name):
        assert matcher.match_cost(name, name) == 0

    def test_case_mismatch_penalty(self, matcher):
        """Each position matched with a different case costs exactly 0.5."""
        assert matcher.match_cost("Nat.add", "nat.add") == 0.5
        assert matcher.match_cost("NAT.ADD", "nat.add") == 3.0
        assert matcher.match_cost("foo.Bar", "foo.bar") - matcher.match_cost("foo.Bar", "foo.Bar") == 0.5

    def test_not_a_subsequence(self, matcher):
        assert matcher.match_cost("Nat.succ", "nat.add") is None
        assert matcher.match_cost("abc", "acb") is None
        assert matcher.match_cost("ab", "abc") is None

    def test_empty_pattern(self, matcher):
        """An empty pattern matches with the trailing cost of the whole name."""
        assert matcher.match_cost("Nat.add", "") == 0.875
        assert matcher.match_cost("", "") == 0

    def test_gap_before_letter_costs_full_bytes(self, matcher):
        assert matcher.match_cost("abc", "ac") == 1.0
        assert matcher.match_cost("axxxb", "ab") == 3.0

    def test_gap_before_separator_is_cheap(self, matcher):
        assert matcher.match_cost("ab.c", "a.c") == 0.125

    def test_skipped_separator_in_name_is_cheap(self, matcher):
        assert matcher.match_cost("a_b_c", "a_c") == 0.25

    def test_trailing_suffix(self, matcher):
        assert matcher.match_cost("Nat.add", "Nat") == 0.5
        assert matcher.match_cost("Nat.add_comm", "nat.add") == 1.125

    def test_offsets_are_utf8_bytes(self, matcher):
        # "α" is two bytes long in UTF-8
        assert matcher.match_cost("αβ", "β") == 2.0
        assert matcher.match_cost("αβ", "α") == 0.25

    def test_case_folding_is_ascii_only(self, matcher):
        assert matcher.match_cost("Éa", "éa") is None
        assert matcher.match_cost("Éa", "Éa") == 0

    def test_cost_is_never_negative(self, matcher):
        for name, pattern in [("Nat.add", "n"), ("a.b.c", "abc"), ("_x_", "x")]:
            cost = matcher.match_cost(name, pattern)
            assert cost is not None
            assert cost >= 0

    def test_module_level_shortcut(self):
        assert match_cost("Nat.add", "nat.add") == 0.5
