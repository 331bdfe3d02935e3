from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from loguru import logger

from ..services.lexicon import Lexicon
from .routes import router
from .settings import Settings, get_settings


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI instance."""
    settings = settings or get_settings()
    lexicon = Lexicon.from_file(settings.lexicon_path)
    if lexicon.is_empty():
        logger.warning("Lexicon at {} is empty; generation will fail", settings.lexicon_path)

    app = FastAPI(title="Haiku Worker", version="0.1.0")
    app.state.settings = settings
    app.state.lexicon = lexicon
    app.include_router(router)
    logger.info(
        "Haiku worker ready: {} words, pattern {}",
        lexicon.size(),
        settings.syllable_pattern,
    )
    return app


app = create_app()
