"""Article pages: resolve a slug, describe it for search engines, render it."""

from inkwell.articles.html import render_article_html, render_not_found_html
from inkwell.articles.page import (
    NotFound,
    RenderDecision,
    RenderedPage,
    decide,
    format_long_date,
    list_known_identifiers,
    render_article,
    resolve_metadata,
)

__all__ = [
    "NotFound",
    "RenderDecision",
    "RenderedPage",
    "decide",
    "format_long_date",
    "list_known_identifiers",
    "render_article",
    "render_article_html",
    "render_not_found_html",
    "resolve_metadata",
]
