"""
Articles Router
===============
Serves rendered article pages and their metadata.

Unknown slugs render the standard not-found page with a 404 status; the
metadata endpoint still answers 200 with a non-indexable descriptor.
"""
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from inkwell.articles.html import render_article_html, render_not_found_html
from inkwell.articles.page import NotFound, render_article, resolve_metadata
from inkwell.config import InkwellConfig
from inkwell.content.store import ContentSource
from inkwell.metadata import MetadataDescriptor

router = APIRouter()


def _store(request: Request) -> ContentSource:
    return request.app.state.store


def _config(request: Request) -> InkwellConfig:
    return request.app.state.config


@router.get("/{slug}", response_class=HTMLResponse)
def article_page(slug: str, request: Request) -> HTMLResponse:
    """Render one article page."""
    store = _store(request)
    site = _config(request).site
    meta = resolve_metadata(store, slug, site=site)
    page = render_article(store, slug, tz=site.tz)
    if isinstance(page, NotFound):
        return HTMLResponse(render_not_found_html(meta), status_code=404)
    return HTMLResponse(render_article_html(page, meta))


@router.get("/{slug}/metadata", response_model=MetadataDescriptor)
def article_metadata(slug: str, request: Request) -> MetadataDescriptor:
    """Return the metadata descriptor for one article."""
    return resolve_metadata(_store(request), slug, site=_config(request).site)
