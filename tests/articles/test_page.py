"""Tests for the article page workflow."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from inkwell.articles.page import (
    NOT_FOUND_TITLE,
    NotFound,
    RenderedPage,
    decide,
    format_long_date,
    is_future,
    list_known_identifiers,
    render_article,
    resolve_metadata,
)
from inkwell.config import SiteConfig
from inkwell.content.models import ContentCategory, ContentRecord

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


class _FakeStore:
    """In-memory ContentSource that records lookups."""

    def __init__(self, *records: ContentRecord) -> None:
        self.records = {r.slug: r for r in records}
        self.lookups: list[tuple[str, str]] = []

    def get_content_by_slug(self, category, slug):
        self.lookups.append((str(category), slug))
        if category != ContentCategory.ARTICLES:
            return None
        return self.records.get(slug)

    def get_all_content_slugs(self, category):
        return sorted(self.records)


def _make_record(slug: str = "hello-world", **kwargs: object) -> ContentRecord:
    defaults: dict[str, object] = {
        "title": "Hello World",
        "excerpt": "A first post.",
        "content": "<p>Hello <strong>there</strong></p>",
        "date": "2024-03-15",
    }
    defaults.update(kwargs)
    return ContentRecord(slug=slug, **defaults)  # type: ignore[arg-type]


class TestFormatLongDate:
    def test_us_long_form(self):
        assert format_long_date(datetime(2099, 1, 1, tzinfo=UTC)) == "January 1, 2099"

    def test_no_zero_padding(self):
        assert format_long_date(datetime(2024, 3, 5, tzinfo=UTC)) == "March 5, 2024"

    def test_uses_display_zone(self):
        value = datetime(2024, 3, 15, 2, 0, tzinfo=UTC)
        assert format_long_date(value, "America/Chicago") == "March 14, 2024"

    def test_deterministic(self):
        value = datetime(2024, 12, 31, 23, 59, tzinfo=UTC)
        assert format_long_date(value) == format_long_date(value)


class TestIsFuture:
    def test_later_is_future(self):
        assert is_future(NOW + timedelta(seconds=1), NOW) is True

    def test_equal_is_not_future(self):
        assert is_future(NOW, NOW) is False

    def test_earlier_is_not_future(self):
        assert is_future(NOW - timedelta(days=1), NOW) is False

    def test_compares_instants_across_offsets(self):
        tz = timezone(timedelta(hours=2))
        assert is_future(NOW.astimezone(tz), NOW) is False


class TestDecide:
    def test_absent(self):
        decision = decide(None, now=NOW)
        assert decision.found is False
        assert decision.is_future is False

    def test_past_record(self):
        decision = decide(_make_record(date="2024-03-15"), now=NOW)
        assert decision.found is True
        assert decision.is_future is False
        assert decision.formatted_date == "March 15, 2024"

    def test_boundary_equal_to_now(self):
        decision = decide(_make_record(date=NOW), now=NOW)
        assert decision.is_future is False

    def test_naive_now_is_utc(self):
        decision = decide(_make_record(date="2099-01-01"), now=datetime(2026, 1, 1))
        assert decision.is_future is True


class TestResolveMetadata:
    def test_missing_article(self):
        meta = resolve_metadata(_FakeStore(), "missing-post")
        assert meta.title == NOT_FOUND_TITLE
        assert meta.description == "The requested article could not be found."
        assert meta.no_index is True

    def test_present_article(self):
        meta = resolve_metadata(_FakeStore(_make_record()), "hello-world")
        assert meta.title == "Hello World"
        assert meta.description == "A first post."
        assert meta.no_index is False
        assert meta.robots is None

    def test_uses_site_config(self):
        site = SiteConfig(name="Example", url="https://example.com")
        meta = resolve_metadata(_FakeStore(_make_record()), "hello-world", site=site)
        assert meta.open_graph.site_name == "Example"
        assert meta.metadata_base == "https://example.com"

    def test_queries_articles_category(self):
        store = _FakeStore(_make_record())
        resolve_metadata(store, "hello-world")
        assert store.lookups == [("articles", "hello-world")]


class TestListKnownIdentifiers:
    def test_returns_store_slugs(self):
        store = _FakeStore(_make_record("b"), _make_record("a"))
        assert list_known_identifiers(store) == ["a", "b"]

    def test_every_identifier_renders(self):
        store = _FakeStore(_make_record("a"), _make_record("future", date="2099-01-01"))
        for slug in list_known_identifiers(store):
            assert isinstance(render_article(store, slug, now=NOW), RenderedPage)
            assert resolve_metadata(store, slug).no_index is False

    def test_empty_store(self):
        assert list_known_identifiers(_FakeStore()) == []


class TestRenderArticle:
    def test_missing_is_not_found(self):
        result = render_article(_FakeStore(), "missing-post", now=NOW)
        assert isinstance(result, NotFound)
        assert result.slug == "missing-post"

    def test_upcoming_article(self):
        store = _FakeStore(_make_record(date="2099-01-01"))
        page = render_article(store, "hello-world", now=NOW)

        assert isinstance(page, RenderedPage)
        assert page.show_upcoming_badge is True
        assert page.header_text == "This article will be published on Medium on January 1, 2099"

    def test_published_article(self):
        page = render_article(_FakeStore(_make_record()), "hello-world", now=NOW)

        assert isinstance(page, RenderedPage)
        assert page.show_upcoming_badge is False
        assert page.header_text == "March 15, 2024"
        assert page.title == "Hello World"

    def test_published_exactly_now(self):
        page = render_article(_FakeStore(_make_record(date=NOW)), "hello-world", now=NOW)
        assert isinstance(page, RenderedPage)
        assert page.show_upcoming_badge is False

    def test_duplicate_tags_kept_in_order(self):
        store = _FakeStore(_make_record(tags=["x", "y", "x"]))
        page = render_article(store, "hello-world", now=NOW)

        assert isinstance(page, RenderedPage)
        assert page.tags == ("x", "y", "x")
        assert page.has_tags is True

    @pytest.mark.parametrize("tags", [None, []])
    def test_no_tags(self, tags):
        page = render_article(_FakeStore(_make_record(tags=tags)), "hello-world", now=NOW)
        assert isinstance(page, RenderedPage)
        assert page.has_tags is False

    def test_body_is_verbatim(self):
        body = '<p>Hello <strong>there</strong> &amp; <script>run()</script></p>'
        page = render_article(_FakeStore(_make_record(content=body)), "hello-world", now=NOW)
        assert isinstance(page, RenderedPage)
        assert page.body == body

    def test_back_link(self):
        page = render_article(_FakeStore(_make_record()), "hello-world", now=NOW)
        assert isinstance(page, RenderedPage)
        assert page.back_link.href == "/articles"
        assert page.back_link.label == "Back to articles"

    def test_display_zone_applies_to_header(self):
        store = _FakeStore(_make_record(date="2024-03-15T02:00:00Z"))
        page = render_article(store, "hello-world", now=NOW, tz="America/Chicago")
        assert isinstance(page, RenderedPage)
        assert page.header_text == "March 14, 2024"
