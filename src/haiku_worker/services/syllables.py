"""Heuristic syllable estimation for lexicon words."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional

VOWELS = frozenset("AEIOUY")

# Silent-E check treats Y as a vowel.
_SILENT_E_CONSONANTS = frozenset("BCDFGHJKLMNPQRSTVWXZ")

# Each pattern subtracts at most one syllable, however often it occurs.
DIPHTHONG_PATTERNS = (
    re.compile(r"A[EIUY]"),
    re.compile(r"E[AEIUY]"),
    re.compile(r"I[AEOU]"),
    re.compile(r"O[AIOUY]"),
    re.compile(r"U[AEIUY]"),
    re.compile(r"[B-DF-HJ-NP-TV-Z]Y[AEIOU]"),
)


def is_vowel(char: str) -> bool:
    return char.upper() in VOWELS


def vowel_count(word: str) -> int:
    return sum(1 for char in word if is_vowel(char))


def diphthong_count(word: str) -> int:
    """Number of diphthong pattern types present in ``word``."""
    folded = word.upper()
    return sum(1 for pattern in DIPHTHONG_PATTERNS if pattern.search(folded))


def _silent_vowels(word: str, vowels: int) -> int:
    if len(word) > 1 and word.endswith("E") and vowels > 1:
        if word[-2] in _SILENT_E_CONSONANTS:
            return 1
    return 0


@lru_cache(maxsize=8192)
def _estimate(folded: str) -> int:
    vowels = vowel_count(folded)
    estimate = vowels - diphthong_count(folded) - _silent_vowels(folded, vowels)
    return max(0, estimate)


def syllable_count(word: Optional[str]) -> int:
    """Estimate the number of syllables in ``word``.

    This is a coarse rule set rather than a dictionary lookup: vowels are
    counted, one is removed for each diphthong pattern that appears and one
    more for a trailing silent E. Empty or missing input yields 0.
    """
    if not word:
        return 0
    folded = word.strip().upper()
    if not folded:
        return 0
    return _estimate(folded)
