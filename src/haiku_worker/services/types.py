"""Shared service data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass
class HaikuLine:
    words: List[str]
    syllables: int

    @property
    def text(self) -> str:
        return " ".join(self.words)


@dataclass
class Haiku:
    lines: List[HaikuLine]
    attempts: int

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "text": self.text,
            "lines": [
                {"text": line.text, "words": list(line.words), "syllables": line.syllables}
                for line in self.lines
            ],
            "attempts": self.attempts,
        }
        return payload
