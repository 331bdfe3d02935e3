from __future__ import annotations

from typing import Optional, cast

import numpy as np
from fastapi import APIRouter, HTTPException, Query, Request
from loguru import logger

from ..services.exceptions import GenerationExhausted
from ..services.generator import HaikuGenerator
from ..services.grammar import GrammarGraph
from ..services.lexicon import Lexicon
from ..services.syllables import syllable_count
from .models import (
    HaikuLineModel,
    HaikuRequest,
    HaikuResponse,
    PartOfSpeech,
    SyllableReport,
    WordListResponse,
)
from .settings import Settings

router = APIRouter()


def get_lexicon(request: Request) -> Lexicon:
    return cast(Lexicon, request.app.state.lexicon)


def get_app_settings(request: Request) -> Settings:
    return cast(Settings, request.app.state.settings)


@router.get("/health")
async def health(request: Request) -> dict[str, object]:
    settings = get_app_settings(request)
    lexicon = get_lexicon(request)
    return {
        "status": "ok",
        "lexicon_path": str(settings.lexicon_path),
        "lexicon_size": lexicon.size(),
        "part_of_speech_counts": {pos.value: count for pos, count in lexicon.counts().items()},
        "max_attempts": settings.max_attempts,
        "syllable_pattern": list(settings.syllable_pattern),
    }


@router.post("/haiku", response_model=HaikuResponse)
def generate(payload: HaikuRequest, request: Request) -> HaikuResponse:
    settings = get_app_settings(request)
    seed = payload.seed if payload.seed is not None else settings.seed
    rng = np.random.default_rng(seed)
    generator = HaikuGenerator(
        get_lexicon(request),
        GrammarGraph(rng, jitter=settings.edge_jitter),
        rng=rng,
        max_attempts=payload.max_attempts or settings.max_attempts,
        pattern=settings.syllable_pattern,
    )
    try:
        haiku = generator.generate_haiku()
    except GenerationExhausted as exc:
        logger.warning("haiku request failed: {}", exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    return HaikuResponse(
        text=haiku.text,
        lines=[
            HaikuLineModel(text=line.text, words=list(line.words), syllables=line.syllables)
            for line in haiku.lines
        ],
        attempts=haiku.attempts,
        seed=seed,
    )


@router.get("/syllables/{word}", response_model=SyllableReport)
async def syllables(word: str, request: Request) -> SyllableReport:
    lexicon = get_lexicon(request)
    return SyllableReport(
        word=word,
        syllables=syllable_count(word),
        part_of_speech=lexicon.get_pos(word),
    )


@router.get("/lexicon/{pos}", response_model=WordListResponse)
async def word_list(
    pos: PartOfSpeech,
    request: Request,
    min_syllables: Optional[int] = Query(default=None, ge=0),
    max_syllables: Optional[int] = Query(default=None, ge=0),
) -> WordListResponse:
    if pos == PartOfSpeech.BLANK:
        raise HTTPException(status_code=404, detail="BLANK has no lexicon words")
    if (
        min_syllables is not None
        and max_syllables is not None
        and min_syllables > max_syllables
    ):
        raise HTTPException(status_code=422, detail="min_syllables exceeds max_syllables")
    words = sorted(get_lexicon(request).word_set(pos, min_syllables, max_syllables))
    return WordListResponse(
        part_of_speech=pos,
        min_syllables=min_syllables,
        max_syllables=max_syllables,
        count=len(words),
        words=words,
    )
