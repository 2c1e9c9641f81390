"""Tests for name matching and selectors."""

from __future__ import annotations

import re

import pytest

from embedded_resources.selectors import (
    ALL,
    NameContains,
    NameIn,
    NameMatchesRegex,
    contains_ignorable,
)

NAMES = ["a.txt", "b.txt", "ab.txt"]


def test_contains_ignorable_case_sensitive():
    """Test ordinal substring matching."""
    assert contains_ignorable("ab.txt", "a") is True
    assert contains_ignorable("ab.txt", "A") is False
    assert contains_ignorable("ab.txt", "c") is False


def test_contains_ignorable_ignore_case():
    """Test case-insensitive substring matching."""
    assert contains_ignorable("Readme.MD", "readme.md", ignore_case=True) is True
    assert contains_ignorable("ab.txt", "AB", ignore_case=True) is True
    assert contains_ignorable("ab.txt", "C", ignore_case=True) is False


def test_contains_ignorable_ignore_case_is_per_character():
    """Test that ignoring case lowercases characters without expanding them."""
    assert contains_ignorable("straße.txt", "STRAßE", ignore_case=True) is True
    assert contains_ignorable("straße.txt", "STRASSE", ignore_case=True) is False
    assert contains_ignorable("STRASSE.TXT", "straße", ignore_case=True) is False


def test_name_contains_ignore_case_does_not_fold_sharp_s():
    """Test that a selector does not treat "ss" and "ß" as equal."""
    names = ["straße.txt", "strasse.txt"]
    assert NameContains("STRASSE", ignore_case=True).select(names) == ["strasse.txt"]
    assert NameContains("Straße", ignore_case=True).select(names) == ["straße.txt"]


def test_contains_ignorable_empty_needle_matches():
    """Test that an empty or None needle matches any haystack."""
    assert contains_ignorable("anything", "") is True
    assert contains_ignorable("anything", None) is True


def test_contains_ignorable_empty_haystack_matches():
    """Test that an empty haystack matches any needle (degenerate rule kept as-is)."""
    assert contains_ignorable("", "needle") is True
    assert contains_ignorable(None, "needle", ignore_case=True) is True


def test_all_selector_keeps_order():
    """Test that All returns every name in listing order."""
    assert ALL.select(NAMES) == NAMES


def test_name_contains():
    """Test substring selection."""
    assert NameContains("a").select(NAMES) == ["a.txt", "ab.txt"]
    assert NameContains("A").select(NAMES) == []
    assert NameContains("A", ignore_case=True).select(NAMES) == ["a.txt", "ab.txt"]


@pytest.mark.parametrize("pattern", ["", None])
def test_name_contains_empty_pattern_is_match_all(pattern):
    """Test that an empty pattern selects everything."""
    assert NameContains(pattern).select(NAMES) == NAMES


def test_name_in_concatenates_with_duplicates():
    """Test that NameIn concatenates per-pattern results and keeps duplicates."""
    selector = NameIn(["a", "b"])
    assert selector.select(NAMES) == ["a.txt", "ab.txt", "b.txt", "ab.txt"]


def test_name_in_empty_patterns_selects_nothing():
    """Test that an empty pattern list selects nothing, unlike an empty pattern."""
    assert NameIn([]).select(NAMES) == []
    assert NameContains("").select(NAMES) == NAMES


def test_name_in_rejects_single_string():
    """Test that passing a bare string instead of a list raises TypeError."""
    with pytest.raises(TypeError, match="not a single string"):
        NameIn("a.txt")


def test_name_in_accepts_generator():
    """Test that NameIn materializes any iterable of patterns."""
    selector = NameIn(p for p in ["B.TXT"])
    assert selector.patterns == ("B.TXT",)
    assert NameIn(["B.TXT"], ignore_case=True).select(NAMES) == ["b.txt", "ab.txt"]


def test_name_matches_regex_searches_anywhere():
    """Test that regex matching uses search semantics."""
    assert NameMatchesRegex("^a").select(NAMES) == ["a.txt", "ab.txt"]
    assert NameMatchesRegex(r"b\.").select(NAMES) == ["b.txt", "ab.txt"]
    assert NameMatchesRegex(r"^b\.txt$").select(NAMES) == ["b.txt"]


def test_name_matches_regex_compiled_pattern():
    """Test that a precompiled pattern keeps its flags."""
    selector = NameMatchesRegex(re.compile("^AB", re.IGNORECASE))
    assert selector.select(NAMES) == ["ab.txt"]


def test_name_matches_regex_no_and_all_matches():
    """Test regex selecting nothing and everything."""
    assert NameMatchesRegex("zzz").select(NAMES) == []
    assert NameMatchesRegex(".*").select(NAMES) == NAMES


def test_name_matches_regex_invalid_pattern():
    """Test that an invalid regex string raises re.error."""
    with pytest.raises(re.error):
        NameMatchesRegex("(unclosed")


def test_selectors_are_pure():
    """Test that selecting does not modify the input listing."""
    names = list(NAMES)
    NameIn(["a", "b"]).select(names)
    NameMatchesRegex("a").select(names)
    assert names == NAMES
