"""
FastAPI Application
==================
Application factory for serving article pages.

Run with:
    inkwell serve
"""
from __future__ import annotations

import logging

from fastapi import FastAPI

from inkwell import __version__
from inkwell.config import InkwellConfig
from inkwell.content.store import ContentSource, create_store
from inkwell.web.routers import articles, health

logger = logging.getLogger(__name__)


def create_app(
    store: ContentSource | None = None,
    config: InkwellConfig | None = None,
) -> FastAPI:
    """Create the application around a content store.

    When no store is given one is built from ``config``.
    """
    config = config or InkwellConfig()
    store = store if store is not None else create_store(config)

    app = FastAPI(
        title=config.site.name,
        version=__version__,
        docs_url=None,
        redoc_url=None,
    )
    app.state.store = store
    app.state.config = config

    app.include_router(health.router, tags=["Health"])
    app.include_router(articles.router, prefix="/articles", tags=["Articles"])

    logger.info("Serving %s content from %s", config.content.backend, config.content.directory)
    return app
