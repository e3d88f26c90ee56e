"""Tests for the static site build."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from inkwell.config import SiteConfig
from inkwell.content.models import ContentRecord, TrustedHTML
from inkwell.content.store import JsonContentStore
from inkwell.errors import ContentIntegrityError
from inkwell.site import NOT_FOUND_FILENAME, article_output_path, build_site

NOW = datetime(2026, 10, 19, tzinfo=UTC)


def _make_record(slug: str, date: str = "2024-03-15", **kwargs: object) -> ContentRecord:
    return ContentRecord(
        slug=slug,
        title=kwargs.pop("title", slug.replace("-", " ").title()),
        excerpt="Excerpt",
        content="<p>Body</p>",
        date=date,
        **kwargs,  # type: ignore[arg-type]
    )


@pytest.fixture
def store(tmp_path: Path) -> JsonContentStore:
    store = JsonContentStore(tmp_path / "content.json")
    store.upsert("articles", _make_record("first-post"))
    store.upsert("articles", _make_record("hello-world", date="2099-01-01"))
    return store


class _ListsGhosts:
    """A store whose listing and lookup disagree."""

    def get_content_by_slug(self, category, slug):
        return None

    def get_all_content_slugs(self, category):
        return ["ghost"]


class _ListsEscape:
    """A store handing out a record whose slug climbs out of its directory."""

    # model_construct skips validation, as a non-validating backend would
    record = ContentRecord.model_construct(
        slug="../../escaped",
        title="Escaped",
        excerpt="",
        content=TrustedHTML("<p>x</p>"),
        date=datetime(2024, 3, 15, tzinfo=UTC),
        tags=(),
    )

    def get_content_by_slug(self, category, slug):
        return self.record if slug == self.record.slug else None

    def get_all_content_slugs(self, category):
        return [self.record.slug]


class TestBuildSite:
    def test_writes_every_article(self, store: JsonContentStore, tmp_path: Path):
        out = tmp_path / "out"
        result = build_site(store, out, now=NOW)

        assert result.article_count == 2
        assert article_output_path(out, "first-post").exists()
        assert article_output_path(out, "hello-world").exists()

    def test_writes_not_found_page(self, store: JsonContentStore, tmp_path: Path):
        out = tmp_path / "out"
        build_site(store, out, now=NOW)

        html = (out / NOT_FOUND_FILENAME).read_text(encoding="utf-8")
        assert "Article Not Found" in html
        assert "noindex" in html

    def test_reports_upcoming(self, store: JsonContentStore, tmp_path: Path):
        result = build_site(store, tmp_path / "out", now=NOW)
        assert result.upcoming == ["hello-world"]

    def test_upcoming_page_content(self, store: JsonContentStore, tmp_path: Path):
        out = tmp_path / "out"
        build_site(store, out, now=NOW)

        html = article_output_path(out, "hello-world").read_text(encoding="utf-8")
        assert "UPCOMING" in html
        assert "This article will be published on Medium on January 1, 2099" in html

    def test_uses_site_config(self, store: JsonContentStore, tmp_path: Path):
        out = tmp_path / "out"
        build_site(store, out, site=SiteConfig(name="Example"), now=NOW)

        html = article_output_path(out, "first-post").read_text(encoding="utf-8")
        assert '<meta property="og:site_name" content="Example">' in html

    def test_empty_store(self, tmp_path: Path):
        out = tmp_path / "out"
        result = build_site(JsonContentStore(tmp_path), out, now=NOW)
        assert result.article_count == 0
        assert (out / NOT_FOUND_FILENAME).exists()

    def test_unresolvable_listing_raises(self, tmp_path: Path):
        with pytest.raises(ContentIntegrityError) as exc_info:
            build_site(_ListsGhosts(), tmp_path / "out", now=NOW)
        assert exc_info.value.slug == "ghost"

    def test_slug_outside_output_dir_raises(self, tmp_path: Path):
        out = tmp_path / "out"
        with pytest.raises(ContentIntegrityError) as exc_info:
            build_site(_ListsEscape(), out, now=NOW)
        assert exc_info.value.slug == "../../escaped"
        assert not (tmp_path / "escaped").exists()
        assert not (out / NOT_FOUND_FILENAME).exists()
