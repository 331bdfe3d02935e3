"""Weighted part-of-speech graph walked while building haiku lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from ..app.models import PartOfSpeech

DEFAULT_JITTER = 0.2
# Positive edges never drop below this after jitter.
MIN_ADJUSTED_WEIGHT = 0.01

# Canonical sentence order: subject clause, then predicate clause.
SLOTS: Tuple[PartOfSpeech, ...] = (
    PartOfSpeech.BLANK,
    PartOfSpeech.ADVERB,
    PartOfSpeech.PREPOSITION,
    PartOfSpeech.ARTICLE,
    PartOfSpeech.ADJECTIVE,
    PartOfSpeech.NOUN,
    PartOfSpeech.VERB,
    PartOfSpeech.ADVERB,
    PartOfSpeech.PREPOSITION,
    PartOfSpeech.ARTICLE,
    PartOfSpeech.ADJECTIVE,
    PartOfSpeech.NOUN,
    PartOfSpeech.BLANK,
)

START_SLOT = 0
END_SLOT = len(SLOTS) - 1

# source slot -> {destination slot: weight}; unlisted edges are absent.
BASELINE_EDGES: Dict[int, Dict[int, float]] = {
    0: {1: 1.0, 2: 1.0, 3: 1.0, 4: 1.0, 5: 1.0},
    1: {1: 1.0, 2: 1.0, 3: 1.0, 4: 1.0},
    2: {3: 1.0, 4: 1.0, 5: 1.0},
    3: {4: 1.0, 5: 1.0},
    4: {5: 1.0},
    5: {6: 1.0, 7: 1.0},
    6: {7: 1.0, 8: 1.0, 12: 0.1},
    7: {6: 1.0, 8: 1.0, 12: 0.3},
    8: {9: 1.0, 10: 1.0, 11: 1.0, 12: 1.0},
    9: {10: 1.0, 11: 1.0},
    10: {10: 1.0, 11: 1.0},
    11: {12: 1.0},
    12: {},
}


def baseline_matrix() -> np.ndarray:
    matrix = np.zeros((len(SLOTS), len(SLOTS)), dtype=np.float64)
    for source, targets in BASELINE_EDGES.items():
        for target, weight in targets.items():
            matrix[source, target] = weight
    return matrix


@dataclass(frozen=True)
class EdgeEffect:
    source: int
    target: int
    value: float
    scale: bool = False

    def apply(self, matrix: np.ndarray) -> None:
        if self.scale:
            matrix[self.source, self.target] *= self.value
        else:
            matrix[self.source, self.target] = self.value


def set_edge(source: int, target: int, value: float) -> EdgeEffect:
    return EdgeEffect(source=source, target=target, value=value)


def scale_edge(source: int, target: int, factor: float) -> EdgeEffect:
    return EdgeEffect(source=source, target=target, value=factor, scale=True)


@dataclass(frozen=True)
class EdgeRule:
    """Effects applied after traversing ``source -> target``.

    A ``source`` of None matches any slot, so the rule fires on landing.
    """

    label: str
    target: int
    effects: Tuple[EdgeEffect, ...]
    source: Optional[int] = None

    def matches(self, current: int, following: int) -> bool:
        if following != self.target:
            return False
        return self.source is None or self.source == current


MUTATION_RULES: Tuple[EdgeRule, ...] = (
    EdgeRule(
        label="start to subject noun",
        source=0,
        target=5,
        effects=(
            set_edge(5, 7, 0.0),
            scale_edge(6, 7, 2.0),
            scale_edge(7, 6, 2.0),
            scale_edge(6, 8, 2.0),
            scale_edge(7, 8, 2.0),
            scale_edge(6, 12, 0.1),
            scale_edge(7, 12, 0.1),
        ),
    ),
    EdgeRule(
        label="opening adverb repeat",
        source=1,
        target=1,
        effects=(scale_edge(1, 1, 0.5),),
    ),
    EdgeRule(
        label="land on opening preposition",
        target=2,
        effects=(
            set_edge(5, 6, 0.0),
            set_edge(5, 7, 0.0),
            set_edge(5, 4, 0.2),
            set_edge(5, 3, 0.8),
        ),
    ),
    EdgeRule(
        label="noun back to article",
        source=5,
        target=3,
        effects=(
            scale_edge(3, 4, 0.5),
            set_edge(5, 6, 1.0),
            set_edge(5, 7, 1.0),
        ),
    ),
    EdgeRule(
        label="noun back to adjective",
        source=5,
        target=4,
        effects=(
            scale_edge(4, 3, 0.5),
            set_edge(5, 6, 1.0),
            set_edge(5, 7, 1.0),
        ),
    ),
    EdgeRule(
        label="noun to adverb before verb",
        source=5,
        target=7,
        effects=(set_edge(7, 8, 0.0), set_edge(7, 12, 0.0)),
    ),
    EdgeRule(
        label="land on verb",
        target=6,
        effects=(set_edge(7, 8, 1.0), set_edge(7, 12, 0.1)),
    ),
    EdgeRule(
        label="adverb to verb",
        source=7,
        target=6,
        effects=(scale_edge(6, 7, 0.3),),
    ),
    EdgeRule(
        label="verb to adverb",
        source=6,
        target=7,
        effects=(set_edge(7, 6, 0.0),),
    ),
    EdgeRule(
        label="predicate adverb repeat",
        source=7,
        target=7,
        effects=(scale_edge(7, 7, 0.5),),
    ),
)


def apply_rules(
    matrix: np.ndarray,
    current: int,
    following: int,
    rules: Sequence[EdgeRule] = MUTATION_RULES,
) -> np.ndarray:
    """Return a copy of ``matrix`` with every matching rule applied in order."""
    updated = np.array(matrix, dtype=np.float64, copy=True)
    for rule in rules:
        if rule.matches(current, following):
            for effect in rule.effects:
                effect.apply(updated)
    return updated


class GrammarGraph:
    """Fixed slot sequence with traversal-dependent edge weights.

    The matrix is mutated by every accepted edge and only restored by
    :meth:`reset`; the cursor records the last slot visited so consecutive
    lines of one poem continue where the previous line stopped.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        *,
        jitter: float = DEFAULT_JITTER,
        rules: Sequence[EdgeRule] = MUTATION_RULES,
    ) -> None:
        if jitter < 0:
            raise ValueError("jitter must be non-negative")
        self._rng = rng if rng is not None else np.random.default_rng()
        self._jitter = float(jitter)
        self._rules = tuple(rules)
        self._matrix = baseline_matrix()
        self._cursor = START_SLOT

    def reset(self) -> None:
        self._cursor = START_SLOT
        self._matrix = baseline_matrix()

    def size(self) -> int:
        return len(SLOTS)

    def last(self) -> int:
        return END_SLOT

    def get_index(self) -> int:
        return self._cursor

    def get_node(self, index: int) -> PartOfSpeech:
        return SLOTS[index]

    def reached_end(self) -> bool:
        return self._cursor == END_SLOT

    def has_next_edge(self, index: int) -> bool:
        return bool(np.any(self._matrix[index] > 0.0))

    def next_edge(self, index: int) -> Optional[int]:
        """Follow the heaviest jittered edge out of ``index``.

        Returns None when ``index`` has no traversable edge.
        """
        best_weight = 0.0
        target: Optional[int] = None
        for candidate in range(len(SLOTS)):
            weight = self._adjusted_weight(float(self._matrix[index, candidate]))
            if weight > best_weight:
                best_weight = weight
                target = candidate
        if target is None:
            return None

        logger.debug("edge {} -> {} ({:.3f})", index, target, best_weight)
        self._cursor = target
        self._matrix = apply_rules(self._matrix, index, target, self._rules)
        return target

    def _adjusted_weight(self, weight: float) -> float:
        if weight <= 0.0:
            return 0.0
        if self._jitter == 0.0:
            return weight
        adjusted = weight + float(self._rng.uniform(-self._jitter, self._jitter))
        if adjusted <= 0.0:
            return MIN_ADJUSTED_WEIGHT
        return adjusted

    # ---- inspection helpers ------------------------------------------

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    def get_edge(self, source: int, target: int) -> float:
        return float(self._matrix[source, target])

    def set_edge(self, source: int, target: int, value: float) -> None:
        self._matrix[source, target] = value

    def modify_edge(self, source: int, target: int, factor: float) -> None:
        self._matrix[source, target] *= factor
