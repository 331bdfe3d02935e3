"""Shared service-layer exceptions."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..app.models import PartOfSpeech


class GenerationFailure(Exception):
    """Expected failure during haiku generation."""


class DeadEnd(GenerationFailure):
    """Traversal could not complete a line from the given slot."""

    def __init__(self, slot: int, reason: str = "dead end") -> None:
        super().__init__(reason if slot < 0 else f"{reason} at slot {slot}")
        self.slot = slot
        self.reason = reason


class NoCandidateWord(DeadEnd):
    """No lexicon word fits the slot's part of speech and syllable budget."""

    def __init__(
        self, pos: PartOfSpeech, max_syllables: int, slot: int = -1
    ) -> None:
        super().__init__(slot, f"no {pos.value} within {max_syllables} syllables")
        self.pos = pos
        self.max_syllables = max_syllables


class GenerationExhausted(GenerationFailure):
    """Every attempt allowed by the retry ceiling failed."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"no haiku found after {attempts} attempts")
        self.attempts = attempts


class LexiconError(Exception):
    """Base class for lexicon persistence failures."""

    def __init__(self, path: Path, message: Optional[str] = None) -> None:
        super().__init__(message or f"lexicon error for {path}")
        self.path = path


class LexiconLoadError(LexiconError):
    """Raised when a lexicon source cannot be read."""


class LexiconNotFoundError(LexiconLoadError):
    """Raised when a lexicon source does not exist."""


class LexiconSaveError(LexiconError):
    """Raised when a lexicon cannot be written."""
