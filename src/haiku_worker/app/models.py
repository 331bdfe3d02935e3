from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PartOfSpeech(str, Enum):
    NOUN = "NOUN"
    VERB = "VERB"
    ADVERB = "ADVERB"
    ADJECTIVE = "ADJECTIVE"
    PREPOSITION = "PREPOSITION"
    ARTICLE = "ARTICLE"
    BLANK = "BLANK"


class HaikuRequest(BaseModel):
    seed: Optional[int] = Field(default=None, ge=0)
    max_attempts: Optional[int] = Field(default=None, ge=1, le=1_000_000)


class HaikuLineModel(BaseModel):
    text: str
    words: list[str] = Field(default_factory=list)
    syllables: int = Field(..., ge=0)


class HaikuResponse(BaseModel):
    text: str
    lines: list[HaikuLineModel]
    attempts: int = Field(..., ge=1)
    seed: Optional[int] = None


class SyllableReport(BaseModel):
    word: str
    syllables: int = Field(..., ge=0)
    part_of_speech: Optional[PartOfSpeech] = None


class WordListResponse(BaseModel):
    part_of_speech: PartOfSpeech
    min_syllables: Optional[int] = None
    max_syllables: Optional[int] = None
    count: int = 0
    words: list[str] = Field(default_factory=list)
