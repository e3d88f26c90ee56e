"""Article page workflow: metadata, static slugs, and the rendered payload.

Every function takes the content store as an argument; nothing here holds
state between calls.  An unknown slug is an ordinary outcome: metadata
degrades to a non-indexable "not found" descriptor and rendering returns
a NotFound value for the host to turn into its standard 404 response.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict

from inkwell.config import SiteConfig
from inkwell.content.models import ContentCategory, ContentRecord, TrustedHTML
from inkwell.content.store import ContentSource
from inkwell.metadata import MetadataDescriptor, construct_metadata

logger = logging.getLogger(__name__)

CATEGORY = ContentCategory.ARTICLES
NOT_FOUND_TITLE = "Article Not Found"
NOT_FOUND_DESCRIPTION = "The requested article could not be found."
UPCOMING_BADGE = "UPCOMING"
UPCOMING_TEMPLATE = "This article will be published on Medium on {date}"
BACK_LINK_HREF = "/articles"
BACK_LINK_LABEL = "Back to articles"


class RenderDecision(BaseModel):
    """Per-request classification of a lookup result."""

    model_config = ConfigDict(frozen=True)

    found: bool
    is_future: bool = False
    formatted_date: str = ""


class BackLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    href: str = BACK_LINK_HREF
    label: str = BACK_LINK_LABEL


class RenderedPage(BaseModel):
    """Display payload for one article, ready for an HTML template."""

    model_config = ConfigDict(frozen=True)

    slug: str
    decision: RenderDecision
    header_text: str
    title: str
    tags: tuple[str, ...] = ()
    body: TrustedHTML
    back_link: BackLink = BackLink()

    @property
    def show_upcoming_badge(self) -> bool:
        return self.decision.is_future

    @property
    def has_tags(self) -> bool:
        return len(self.tags) > 0


class NotFound(BaseModel):
    """Terminal outcome: the slug did not resolve to an article."""

    model_config = ConfigDict(frozen=True)

    slug: str


def format_long_date(value: datetime, tz: tzinfo | str = UTC) -> str:
    """Format a date the way en-US long dates read, e.g. ``January 1, 2099``."""
    if isinstance(tz, str):
        tz = ZoneInfo(tz)
    local = value.astimezone(tz)
    return f"{local:%B} {local.day}, {local.year}"


def is_future(value: datetime, now: datetime) -> bool:
    """True only when ``value`` is strictly later than ``now``."""
    return value > now


def decide(
    record: ContentRecord | None,
    *,
    now: datetime | None = None,
    tz: tzinfo | str = UTC,
) -> RenderDecision:
    """Classify a lookup result at resolution time."""
    if record is None:
        return RenderDecision(found=False)
    now = now or datetime.now(tz=UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return RenderDecision(
        found=True,
        is_future=is_future(record.date, now),
        formatted_date=format_long_date(record.date, tz),
    )


def resolve_metadata(
    store: ContentSource,
    slug: str,
    *,
    site: SiteConfig | None = None,
) -> MetadataDescriptor:
    """Build the page metadata for ``slug``.

    Unknown slugs get a "not found" descriptor that tells search engines
    not to index the page.
    """
    article = store.get_content_by_slug(CATEGORY, slug)
    if article is None:
        return construct_metadata(
            title=NOT_FOUND_TITLE,
            description=NOT_FOUND_DESCRIPTION,
            no_index=True,
            site=site,
        )
    return construct_metadata(title=article.title, description=article.excerpt, site=site)


def list_known_identifiers(store: ContentSource) -> list[str]:
    """Return every article slug the site pre-renders."""
    return list(store.get_all_content_slugs(CATEGORY))


def render_article(
    store: ContentSource,
    slug: str,
    *,
    now: datetime | None = None,
    tz: tzinfo | str = UTC,
) -> RenderedPage | NotFound:
    """Resolve ``slug`` and build the article page payload."""
    article = store.get_content_by_slug(CATEGORY, slug)
    if article is None:
        logger.info("Article not found: %s", slug)
        return NotFound(slug=slug)

    decision = decide(article, now=now, tz=tz)
    if decision.is_future:
        header_text = UPCOMING_TEMPLATE.format(date=decision.formatted_date)
    else:
        header_text = decision.formatted_date

    return RenderedPage(
        slug=article.slug,
        decision=decision,
        header_text=header_text,
        title=article.title,
        tags=article.tags,
        body=article.content,
    )
