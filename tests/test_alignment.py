"""
Unit Tests for Token Alignment

Tests for the LCS aligner over normalized tokens.
"""

from services.personalization.alignment import find_lcs


def test_identical_sequences_match_everywhere():
    tokens = ["a", "b", "c"]
    assert find_lcs(tokens, tokens) == [(0, 0), (1, 1), (2, 2)]


def test_matches_ignore_case_and_punctuation():
    assert find_lcs(["Hello,", "world"], ["hello", "World!"]) == [(0, 0), (1, 1)]


def test_empty_sequences():
    assert find_lcs([], []) == []
    assert find_lcs(["a"], []) == []
    assert find_lcs([], ["a"]) == []


def test_substitution_leaves_gap():
    raw = "meet me at the pub".split()
    edited = "meet me at the office".split()
    assert find_lcs(raw, edited) == [(0, 0), (1, 1), (2, 2), (3, 3)]


def test_insertion_shifts_edited_indices():
    raw = "call back tomorrow".split()
    edited = "please call back tomorrow".split()
    assert find_lcs(raw, edited) == [(0, 1), (1, 2), (2, 3)]


def test_pairs_strictly_increase():
    raw = "the cat sat on the mat today".split()
    edited = "a cat sat upon the red mat".split()
    matches = find_lcs(raw, edited)
    
    assert len(matches) == 4
    for (i1, j1), (i2, j2) in zip(matches, matches[1:]):
        assert i1 < i2 and j1 < j2


def test_tie_break_prefers_later_raw_positions():
    """
    "a" can match either raw "a"; backtracking drops edited tokens before
    raw tokens on ties, so the later raw "a" is used.
    """
    assert find_lcs(["a", "a"], ["a"]) == [(1, 0)]


def test_tie_break_between_two_candidate_alignments():
    # Both (0, 1) "x" and (1, 0) "y" are LCS of length 1; the later raw token wins
    assert find_lcs(["x", "y"], ["y", "x"]) == [(1, 0)]
