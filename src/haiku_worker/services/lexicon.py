"""Word lexicon tagged by part of speech."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

import numpy as np
from loguru import logger

from ..app.models import PartOfSpeech
from .exceptions import (
    LexiconLoadError,
    LexiconNotFoundError,
    LexiconSaveError,
    NoCandidateWord,
)
from .syllables import syllable_count

DEFAULT_LEXICON_PATH = Path(__file__).resolve().parents[1] / "data" / "dictionary.txt"
DELIMITER = "|"

# Later tags in this order overwrite earlier ones on the same record.
_TAG_ORDER = (
    PartOfSpeech.NOUN,
    PartOfSpeech.VERB,
    PartOfSpeech.ADJECTIVE,
    PartOfSpeech.ADVERB,
    PartOfSpeech.PREPOSITION,
    PartOfSpeech.ARTICLE,
)


@dataclass(frozen=True)
class LexiconEntry:
    word: str
    pos: PartOfSpeech

    def to_line(self) -> str:
        return f"{self.word} {DELIMITER} {self.pos.value}"


def parse_entry(line: str) -> Optional[LexiconEntry]:
    """Parse one ``word | TAG ...`` record, returning None when malformed."""
    if DELIMITER not in line:
        return None
    word_part, _, tag_part = line.partition(DELIMITER)
    word = word_part.strip()
    if not word:
        return None
    tokens = set(tag_part.split())
    pos: Optional[PartOfSpeech] = None
    for candidate in _TAG_ORDER:
        if candidate.value in tokens:
            pos = candidate
    if pos is None:
        return None
    return LexiconEntry(word=word, pos=pos)


class Lexicon:
    """Maps each word to exactly one part of speech."""

    def __init__(self, entries: Iterable[LexiconEntry] = ()) -> None:
        self._entries: Dict[str, PartOfSpeech] = {}
        for entry in entries:
            self.add(entry.word, entry.pos)

    @classmethod
    def from_file(cls, path: Path = DEFAULT_LEXICON_PATH) -> "Lexicon":
        lexicon = cls()
        lexicon.load(path)
        return lexicon

    # ---- persistence -------------------------------------------------

    def load(self, path: Path) -> int:
        """Merge the records in ``path`` into this lexicon.

        Malformed lines are skipped with a warning. Returns the number of
        records applied.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise LexiconNotFoundError(path, f"lexicon file missing at {path}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read lexicon {}: {}", path, exc)
            raise LexiconLoadError(path, f"unable to read lexicon {path}: {exc}") from exc

        applied = 0
        for number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            entry = parse_entry(line)
            if entry is None:
                logger.warning("Skipping malformed lexicon line {} in {}: {!r}", number, path, line)
                continue
            self._entries[entry.word] = entry.pos
            applied += 1
        logger.info("Loaded {} lexicon entries from {}", applied, path)
        return applied

    def save(self, path: Path) -> None:
        path = Path(path)
        lines = [entry.to_line() for entry in self.entries()]
        payload = "\n".join(lines) + ("\n" if lines else "")
        try:
            path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            raise LexiconSaveError(path, f"unable to write lexicon {path}: {exc}") from exc
        logger.info("Saved {} lexicon entries to {}", len(lines), path)

    # ---- mutation ----------------------------------------------------

    def add(self, word: Optional[str], pos: Optional[PartOfSpeech]) -> bool:
        if not word or pos is None or pos == PartOfSpeech.BLANK:
            return False
        self._entries[word] = pos
        return True

    # ---- queries -----------------------------------------------------

    def get_pos(self, word: str) -> Optional[PartOfSpeech]:
        return self._entries.get(word)

    def contains(self, word: str) -> bool:
        return word in self._entries

    def size(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def words(self) -> List[str]:
        return list(self._entries)

    def entries(self) -> List[LexiconEntry]:
        return [LexiconEntry(word=word, pos=pos) for word, pos in self._entries.items()]

    def word_set(
        self,
        pos: PartOfSpeech,
        min_syllables: Optional[int] = None,
        max_syllables: Optional[int] = None,
    ) -> Set[str]:
        """Words tagged ``pos``, optionally limited to a syllable range.

        With only ``min_syllables`` given the match is exact; with both the
        range is inclusive.
        """
        filtered = min_syllables is not None or max_syllables is not None
        low = min_syllables if min_syllables is not None else 0
        high = max_syllables if max_syllables is not None else low
        result: Set[str] = set()
        for word, tagged in self._entries.items():
            if tagged != pos:
                continue
            if filtered and not low <= syllable_count(word) <= high:
                continue
            result.add(word)
        return result

    def choose_word(
        self,
        pos: PartOfSpeech,
        max_syllables: int,
        rng: np.random.Generator,
    ) -> str:
        """Pick a word of ``pos`` with 1..``max_syllables`` syllables uniformly."""
        candidates = sorted(self.word_set(pos, 1, max_syllables))
        if not candidates:
            raise NoCandidateWord(pos, max_syllables)
        return candidates[int(rng.integers(len(candidates)))]

    def counts(self) -> Dict[PartOfSpeech, int]:
        totals = {pos: 0 for pos in PartOfSpeech if pos != PartOfSpeech.BLANK}
        for pos in self._entries.values():
            totals[pos] += 1
        return totals

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    @staticmethod
    def syllable_count(word: Optional[str]) -> int:
        return syllable_count(word)
