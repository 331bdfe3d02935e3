"""Backtracking haiku generator driven by the grammar graph."""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
from loguru import logger

from ..app.models import PartOfSpeech
from .exceptions import DeadEnd, GenerationExhausted, NoCandidateWord
from .grammar import DEFAULT_JITTER, GrammarGraph
from .lexicon import Lexicon
from .syllables import syllable_count
from .types import Haiku, HaikuLine

DEFAULT_PATTERN = (5, 7, 5)
DEFAULT_MAX_ATTEMPTS = 1000

# A line may not finish on one of these.
_DANGLING_PARTS = frozenset({PartOfSpeech.ARTICLE, PartOfSpeech.PREPOSITION})


class HaikuGenerator:
    """Walks a :class:`GrammarGraph`, filling slots with lexicon words.

    Only edge choices are retried after a dead end; the word already placed
    at a slot is kept. Each attempt resets the graph once and then builds all
    lines from the cursor the previous line left behind.
    """

    def __init__(
        self,
        lexicon: Lexicon,
        graph: Optional[GrammarGraph] = None,
        *,
        rng: Optional[np.random.Generator] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        pattern: Sequence[int] = DEFAULT_PATTERN,
        jitter: float = DEFAULT_JITTER,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if not pattern or any(target < 1 for target in pattern):
            raise ValueError("pattern needs at least one positive syllable target")
        self._lexicon = lexicon
        self._rng = rng if rng is not None else np.random.default_rng()
        self._graph = graph if graph is not None else GrammarGraph(self._rng, jitter=jitter)
        self._max_attempts = int(max_attempts)
        self._pattern = tuple(int(target) for target in pattern)

    @property
    def graph(self) -> GrammarGraph:
        return self._graph

    @property
    def pattern(self) -> tuple[int, ...]:
        return self._pattern

    def generate(self) -> str:
        return self.generate_haiku().text

    def generate_haiku(self) -> Haiku:
        for attempt in range(1, self._max_attempts + 1):
            self._graph.reset()
            try:
                lines = [self._build_line(target) for target in self._pattern]
            except DeadEnd as exc:
                logger.debug("attempt {} abandoned: {}", attempt, exc)
                continue
            logger.info("haiku generated after {} attempt(s)", attempt)
            return Haiku(lines=lines, attempts=attempt)

        logger.error("haiku generation exhausted after {} attempts", self._max_attempts)
        raise GenerationExhausted(self._max_attempts)

    def _build_line(self, target: int) -> HaikuLine:
        words = self._search(target, self._graph.get_index())
        return HaikuLine(words=words, syllables=sum(syllable_count(word) for word in words))

    def _search(self, remaining: int, slot: int) -> List[str]:
        if remaining <= 0:
            return []
        if slot == self._graph.last():
            raise DeadEnd(slot, f"{remaining} syllable(s) left at the final slot")

        pos = self._graph.get_node(slot)
        word = ""
        cost = 0
        if pos != PartOfSpeech.BLANK:
            try:
                word = self._lexicon.choose_word(pos, remaining, self._rng)
            except NoCandidateWord as exc:
                raise NoCandidateWord(pos, remaining, slot) from exc
            cost = syllable_count(word)
            if pos in _DANGLING_PARTS and (self._graph.reached_end() or remaining - cost < 1):
                raise DeadEnd(slot, f"line would end on {pos.value.lower()}")

        # Failed branches advance to the successor of the failed slot,
        # at most once per slot in the graph.
        following = self._graph.next_edge(slot)
        tries = 0
        while following is not None and tries < self._graph.size():
            tries += 1
            try:
                rest = self._search(remaining - cost, following)
            except DeadEnd:
                if not self._graph.has_next_edge(following):
                    break
                following = self._graph.next_edge(following)
                continue
            return [word, *rest] if word else rest

        raise DeadEnd(slot)
