"""Unit tests for fuzzy matching / typo tolerance."""

import pytest

from blog_search.search.fuzzy import edit_distance, get_max_edit_distance, term_distance


@pytest.mark.unit
class TestEditDistance:
    """Tests for edit_distance function."""

    def test_identical_strings(self):
        assert edit_distance("hello", "hello") == 0

    def test_empty_strings(self):
        assert edit_distance("", "") == 0
        assert edit_distance("abc", "") == 3
        assert edit_distance("", "abc") == 3

    def test_single_edits(self):
        assert edit_distance("cat", "cats") == 1
        assert edit_distance("cats", "cat") == 1
        assert edit_distance("cat", "bat") == 1

    def test_multiple_edits(self):
        assert edit_distance("kitten", "sitting") == 3

    def test_transposition_counts_as_one_edit(self):
        assert edit_distance("ca", "ac") == 1
        assert edit_distance("django", "djagno") == 1
        assert edit_distance("hello", "hlelo") == 1

    def test_case_sensitive(self):
        assert edit_distance("Hello", "hello") == 1

    def test_max_distance_short_circuits_on_length(self):
        assert edit_distance("abc", "abcdef", max_distance=1) == 2

    def test_max_distance_short_circuits_on_content(self):
        assert edit_distance("abcdef", "uvwxyz", max_distance=2) == 3

    def test_within_max_distance_returns_exact_value(self):
        assert edit_distance("configuration", "configration", max_distance=2) == 1


@pytest.mark.unit
class TestGetMaxEditDistance:
    """Tests for get_max_edit_distance function."""

    def test_very_short_terms_no_fuzzy(self):
        assert get_max_edit_distance(1) == 0
        assert get_max_edit_distance(2) == 0

    def test_short_terms_one_edit(self):
        assert get_max_edit_distance(3) == 1
        assert get_max_edit_distance(5) == 1

    def test_longer_terms_two_edits(self):
        assert get_max_edit_distance(6) == 2
        assert get_max_edit_distance(20) == 2


@pytest.mark.unit
class TestTermDistance:
    """Tests for term_distance function."""

    def test_exact_token(self):
        hit = term_distance("javascript", "javascript")

        assert hit is not None
        assert hit.kind == "exact"
        assert hit.distance == 0.0
        assert (hit.start, hit.length) == (0, 10)

    def test_prefix_of_token(self):
        hit = term_distance("prog", "programming")

        assert hit is not None
        assert hit.kind == "prefix"
        assert hit.distance == pytest.approx(0.1 * (1 - 4 / 11))
        assert (hit.start, hit.length) == (0, 4)

    def test_infix_of_token(self):
        hit = term_distance("script", "javascript")

        assert hit is not None
        assert hit.kind == "infix"
        assert hit.start == 4
        assert hit.length == 6
        assert hit.distance == pytest.approx(0.19)

    def test_typo_in_whole_token(self):
        hit = term_distance("javscript", "javascript")

        assert hit is not None
        assert hit.kind == "fuzzy"
        assert hit.distance == pytest.approx(0.2 + 0.4 / 9)

    def test_typo_in_partial_word(self):
        hit = term_distance("progrm", "programming")

        assert hit is not None
        assert hit.kind == "fuzzy"
        assert hit.length == 6

    def test_two_char_terms_are_never_fuzzy(self):
        assert term_distance("js", "jz") is None
        assert term_distance("js", "javascript") is None

    def test_unrelated_terms(self):
        assert term_distance("xyz", "abc") is None
        assert term_distance("quantumphysicsnonsense", "programming") is None

    def test_empty_inputs(self):
        assert term_distance("", "abc") is None
        assert term_distance("abc", "") is None

    def test_hit_kinds_are_ordered(self):
        exact = term_distance("react", "react")
        prefix = term_distance("react", "reactive")
        infix = term_distance("react", "unreactive")
        fuzzy = term_distance("raect", "react")

        assert exact.distance < prefix.distance < infix.distance < fuzzy.distance
