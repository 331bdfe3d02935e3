import pytest

from haiku_worker.services.lexicon import Lexicon
from haiku_worker.services.syllables import (
    diphthong_count,
    is_vowel,
    syllable_count,
    vowel_count,
)


def test_empty_and_missing_words_have_no_syllables() -> None:
    assert syllable_count("") == 0
    assert syllable_count("   ") == 0
    assert syllable_count(None) == 0


@pytest.mark.parametrize(
    ("word", "expected"),
    [
        ("rain", 1),  # A[EIUY]
        ("meat", 1),  # E[AEIUY]
        ("lion", 1),  # I[AEOU]
        ("boat", 1),  # O[AIOUY]
        ("suit", 1),  # U[AEIUY]
        ("canyon", 2),  # consonant + Y + vowel
    ],
)
def test_each_diphthong_pattern_removes_one_syllable(word: str, expected: int) -> None:
    assert diphthong_count(word) == 1
    assert syllable_count(word) == expected


def test_repeated_pattern_counts_once() -> None:
    assert diphthong_count("maintain") == 1
    assert syllable_count("maintain") == 3


def test_combined_patterns_each_count_once() -> None:
    assert diphthong_count("audio") == 2
    assert syllable_count("audio") == 2
    assert diphthong_count("queue") == 2
    assert syllable_count("queue") == 2


def test_silent_trailing_e() -> None:
    assert syllable_count("make") == 1
    assert syllable_count("table") == 1
    # a lone vowel is never silent
    assert syllable_count("the") == 1
    assert syllable_count("e") == 1
    # vowel before the trailing E keeps it voiced
    assert syllable_count("canoe") == 3


def test_estimate_ignores_case_and_padding() -> None:
    assert syllable_count("Make") == syllable_count("MAKE") == syllable_count("  make ")
    assert syllable_count("Canyon") == 2


def test_y_counts_as_vowel() -> None:
    assert is_vowel("y")
    assert is_vowel("A")
    assert not is_vowel("b")
    assert vowel_count("rhythm") == 1
    assert syllable_count("rhythm") == 1
    assert syllable_count("by") == 1


@pytest.mark.parametrize(
    "word",
    ["aeiouy", "yyyy", "'", "123", "x", "queueing", "ooo", "strengths", "aye"],
)
def test_estimate_is_never_negative(word: str) -> None:
    assert syllable_count(word) >= 0


def test_lexicon_exposes_estimator() -> None:
    assert Lexicon.syllable_count("autumn") == syllable_count("autumn") == 2
