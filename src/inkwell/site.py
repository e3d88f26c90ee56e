"""Static build: pre-render every known article to an HTML file."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, Field

from inkwell.articles.html import render_article_html, render_not_found_html
from inkwell.articles.page import (
    CATEGORY,
    NOT_FOUND_DESCRIPTION,
    NOT_FOUND_TITLE,
    NotFound,
    list_known_identifiers,
    render_article,
    resolve_metadata,
)
from inkwell.config import SiteConfig
from inkwell.content.store import ContentSource
from inkwell.errors import ContentIntegrityError
from inkwell.metadata import construct_metadata

logger = logging.getLogger(__name__)

NOT_FOUND_FILENAME = "404.html"


class BuildResult(BaseModel):
    """Summary of a static build."""

    output_dir: Path
    written: list[Path] = Field(default_factory=list)
    upcoming: list[str] = Field(default_factory=list)

    @property
    def article_count(self) -> int:
        # 404.html is always written last and is not an article
        return max(len(self.written) - 1, 0)


def article_output_path(output_dir: Path, slug: str) -> Path:
    """Compute the output file path for one article."""
    return output_dir / CATEGORY.value / slug / "index.html"


def build_site(
    store: ContentSource,
    output_dir: Path,
    *,
    site: SiteConfig | None = None,
    now: datetime | None = None,
) -> BuildResult:
    """Render every known article plus the not-found page into ``output_dir``.

    Every render uses the same resolution time so one build classifies
    upcoming articles consistently.

    Raises:
        ContentIntegrityError: If a listed slug does not resolve.
    """
    site = site or SiteConfig()
    now = now or datetime.now(tz=UTC)
    result = BuildResult(output_dir=output_dir)

    for slug in list_known_identifiers(store):
        page = render_article(store, slug, now=now, tz=site.tz)
        if isinstance(page, NotFound):
            raise ContentIntegrityError(CATEGORY.value, slug)
        meta = resolve_metadata(store, slug, site=site)

        path = article_output_path(output_dir, slug)
        if not path.resolve().is_relative_to(output_dir.resolve()):
            raise ContentIntegrityError(CATEGORY.value, slug)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_article_html(page, meta), encoding="utf-8")
        result.written.append(path)
        if page.decision.is_future:
            result.upcoming.append(slug)
        logger.info("Rendered %s -> %s", slug, path)

    not_found = construct_metadata(
        title=NOT_FOUND_TITLE,
        description=NOT_FOUND_DESCRIPTION,
        no_index=True,
        site=site,
    )
    path = output_dir / NOT_FOUND_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_not_found_html(not_found), encoding="utf-8")
    result.written.append(path)

    return result
