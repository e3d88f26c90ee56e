"""HTML documents for article pages and the not-found page.

Title, header text and tags are escaped.  The article body is TrustedHTML
and is written out untouched.
"""

from __future__ import annotations

from html import escape

from inkwell.articles.page import UPCOMING_BADGE, RenderedPage
from inkwell.metadata import MetadataDescriptor, render_head_tags

BADGE_CLASS = (
    "inline-flex items-center px-2.5 py-0.5 rounded-full text-xs font-medium "
    "bg-blue-100 text-blue-800 dark:bg-blue-800/30 dark:text-blue-300"
)
BACK_ARROW_SVG = (
    '<svg class="mr-2 h-4 w-4" fill="none" stroke="currentColor" viewBox="0 0 24 24" '
    'xmlns="http://www.w3.org/2000/svg"><path stroke-linecap="round" '
    'stroke-linejoin="round" stroke-width="2" d="M10 19l-7-7m0 0l7-7m-7 7h18"/></svg>'
)


def render_article_html(page: RenderedPage, meta: MetadataDescriptor) -> str:
    """Render a complete HTML document for one article."""
    lines: list[str] = _document_start(meta)
    lines.append('<div class="max-w-4xl mx-auto px-4 sm:px-6 lg:px-8 py-16">')
    lines.append("<article>")
    lines.extend(_header(page))
    lines.append('<div class="prose prose-lg dark:prose-invert mx-auto">')
    lines.append(f"<div>{page.body}</div>")
    lines.append("</div>")
    lines.append('<div class="mt-12 pt-6 border-t border-gray-200 dark:border-gray-800">')
    lines.append(
        f'<a href="{escape(page.back_link.href)}" '
        f'class="inline-flex items-center text-primary hover:underline">'
        f"{BACK_ARROW_SVG}{escape(page.back_link.label)}</a>"
    )
    lines.append("</div>")
    lines.append("</article>")
    lines.append("</div>")
    lines.extend(_document_end())
    return "\n".join(lines)


def render_not_found_html(meta: MetadataDescriptor) -> str:
    """Render the standard not-found page."""
    lines: list[str] = _document_start(meta)
    lines.append('<div class="max-w-4xl mx-auto px-4 sm:px-6 lg:px-8 py-16 text-center">')
    lines.append(f"<h1>{escape(meta.title)}</h1>")
    lines.append(f"<p>{escape(meta.description)}</p>")
    lines.append('<a href="/articles">Back to articles</a>')
    lines.append("</div>")
    lines.extend(_document_end())
    return "\n".join(lines)


def _header(page: RenderedPage) -> list[str]:
    lines = ['<header class="mb-10">', '<div class="space-y-1 text-center">']
    lines.append('<div class="text-gray-500 dark:text-gray-400">')
    if page.show_upcoming_badge:
        lines.append(
            f'<div class="flex items-center justify-center">'
            f'<span class="{BADGE_CLASS} mb-2">{UPCOMING_BADGE}</span></div>'
        )
    lines.append(escape(page.header_text))
    lines.append("</div>")
    lines.append(
        '<h1 class="text-3xl sm:text-4xl md:text-5xl font-bold text-foreground">'
        f"{escape(page.title)}</h1>"
    )
    if page.has_tags:
        lines.append('<div class="flex justify-center flex-wrap gap-2 mt-4">')
        for tag in page.tags:
            lines.append(f'<span class="{BADGE_CLASS} tag">{escape(tag)}</span>')
        lines.append("</div>")
    lines.append("</div>")
    lines.append("</header>")
    return lines


def _document_start(meta: MetadataDescriptor) -> list[str]:
    lines = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1">',
    ]
    lines.extend(render_head_tags(meta))
    lines.append("</head>")
    lines.append("<body>")
    return lines


def _document_end() -> list[str]:
    return ["</body>", "</html>"]
