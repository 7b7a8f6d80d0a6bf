"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sketchbook import __version__
from sketchbook.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.sketchbook_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Sketchbook",
        description="Seeded generative sketches rendered to drawable primitives",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import the sketch modules so @sketch decorators fire
    _register_sketches()

    from sketchbook.api.router import api_router

    app.include_router(api_router)

    return app


def _register_sketches() -> None:
    import sketchbook.sketches  # noqa: F401


app = create_app()
