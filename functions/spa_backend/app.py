"""
FastAPI application entry point for self-hosted runs of the spa admin API.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from spa_backend.config import get_settings
from spa_backend.routes import router


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(levelname)s:%(name)s:%(message)s",
    )
    app = FastAPI(title="Spa Admin Backend (FastAPI)", version="0.1.0")
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
