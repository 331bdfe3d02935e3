"""
CLI entry point to generate haiku from a lexicon file.

Example:
    python -m haiku_worker.generate --count 3 --seed 7
    python -m haiku_worker.generate --syllables "autumn"
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

import numpy as np
from pydantic import ValidationError

from .app.settings import Settings
from .services.exceptions import GenerationExhausted, LexiconLoadError
from .services.generator import HaikuGenerator
from .services.grammar import GrammarGraph
from .services.lexicon import Lexicon
from .services.syllables import syllable_count


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate 5-7-5 haiku from a tagged lexicon.")
    parser.add_argument(
        "--lexicon",
        type=Path,
        default=None,
        help="Lexicon file in 'word | TAG' format (defaults to worker settings).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random source.")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Give up after this many full attempts (defaults to worker settings).",
    )
    parser.add_argument("--count", type=int, default=1, help="Number of haiku to print.")
    parser.add_argument(
        "--syllables",
        metavar="WORD",
        default=None,
        help="Print the syllable estimate for WORD instead of generating.",
    )
    return parser.parse_args(argv)


def _run(
    *,
    lexicon_path: Optional[Path],
    seed: Optional[int],
    max_attempts: Optional[int],
    count: int,
    word: Optional[str] = None,
) -> int:
    settings_kwargs: dict[str, object] = {}
    if lexicon_path is not None:
        settings_kwargs["lexicon_path"] = lexicon_path
    if max_attempts is not None:
        settings_kwargs["max_attempts"] = max_attempts
    if seed is not None:
        settings_kwargs["seed"] = seed
    try:
        settings = Settings(**settings_kwargs)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in exc.errors())
        print(f"error: invalid option(s): {fields}", file=sys.stderr)
        return 1

    try:
        lexicon = Lexicon.from_file(settings.lexicon_path)
    except LexiconLoadError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if word is not None:
        pos = lexicon.get_pos(word)
        print(f"word          : {word}")
        print(f"syllables     : {syllable_count(word)}")
        print(f"part_of_speech: {pos.value if pos is not None else 'unknown'}")
        return 0

    rng = np.random.default_rng(settings.seed)
    generator = HaikuGenerator(
        lexicon,
        GrammarGraph(rng, jitter=settings.edge_jitter),
        rng=rng,
        max_attempts=settings.max_attempts,
        pattern=settings.syllable_pattern,
    )
    for index in range(max(1, count)):
        try:
            haiku = generator.generate_haiku()
        except GenerationExhausted as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        if index:
            print()
        print(haiku.text)
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    args = _parse_args(argv)
    sys.exit(
        _run(
            lexicon_path=args.lexicon,
            seed=args.seed,
            max_attempts=args.max_attempts,
            count=args.count,
            word=args.syllables,
        )
    )


if __name__ == "__main__":
    main()
