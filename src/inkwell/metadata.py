"""Search-engine and social metadata for rendered pages."""

from __future__ import annotations

from html import escape
from urllib.parse import urljoin

from pydantic import BaseModel, Field

from inkwell.config import SiteConfig


class OpenGraph(BaseModel):
    """Open Graph properties (``og:*``)."""

    title: str
    description: str
    site_name: str
    type: str = "article"
    images: list[str] = Field(default_factory=list)


class TwitterCard(BaseModel):
    """Twitter card properties (``twitter:*``)."""

    card: str = "summary_large_image"
    title: str
    description: str
    images: list[str] = Field(default_factory=list)
    creator: str = ""


class Robots(BaseModel):
    """Robots directives; only emitted when a page must not be indexed."""

    index: bool = False
    follow: bool = False


class MetadataDescriptor(BaseModel):
    """Everything a page needs in its ``<head>``."""

    title: str
    description: str
    open_graph: OpenGraph
    twitter: TwitterCard
    icons: str = ""
    metadata_base: str = ""
    robots: Robots | None = None

    @property
    def no_index(self) -> bool:
        return self.robots is not None and not self.robots.index


def construct_metadata(
    *,
    title: str,
    description: str,
    no_index: bool = False,
    image: str | None = None,
    site: SiteConfig | None = None,
) -> MetadataDescriptor:
    """Build a metadata descriptor, filling gaps from the site config."""
    site = site or SiteConfig()
    image_url = urljoin(site.url.rstrip("/") + "/", (image or site.image).lstrip("/"))
    return MetadataDescriptor(
        title=title,
        description=description,
        open_graph=OpenGraph(
            title=title,
            description=description,
            site_name=site.name,
            images=[image_url],
        ),
        twitter=TwitterCard(
            title=title,
            description=description,
            images=[image_url],
            creator=site.twitter_creator,
        ),
        icons=site.icons,
        metadata_base=site.url,
        robots=Robots(index=False, follow=False) if no_index else None,
    )


def render_head_tags(meta: MetadataDescriptor) -> list[str]:
    """Render a descriptor as escaped ``<head>`` elements, one per line."""
    tags: list[str] = [
        f"<title>{escape(meta.title)}</title>",
        _meta("name", "description", meta.description),
    ]
    if meta.robots is not None:
        index = "index" if meta.robots.index else "noindex"
        follow = "follow" if meta.robots.follow else "nofollow"
        tags.append(_meta("name", "robots", f"{index}, {follow}"))

    og = meta.open_graph
    tags.append(_meta("property", "og:title", og.title))
    tags.append(_meta("property", "og:description", og.description))
    tags.append(_meta("property", "og:site_name", og.site_name))
    tags.append(_meta("property", "og:type", og.type))
    for url in og.images:
        tags.append(_meta("property", "og:image", url))

    tw = meta.twitter
    tags.append(_meta("name", "twitter:card", tw.card))
    tags.append(_meta("name", "twitter:title", tw.title))
    tags.append(_meta("name", "twitter:description", tw.description))
    for url in tw.images:
        tags.append(_meta("name", "twitter:image", url))
    if tw.creator:
        tags.append(_meta("name", "twitter:creator", tw.creator))

    if meta.icons:
        tags.append(f'<link rel="icon" href="{escape(meta.icons)}">')
    return tags


def _meta(attr: str, key: str, value: str) -> str:
    return f'<meta {attr}="{key}" content="{escape(value)}">'
