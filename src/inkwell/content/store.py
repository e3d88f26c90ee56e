"""Content stores: where article records come from.

The render workflow only needs two read operations, captured by the
ContentSource protocol.  Two backends implement it:

* MarkdownContentStore reads ``<content_dir>/<category>/<slug>.md`` files
  with YAML frontmatter and converts the body to HTML.
* JsonContentStore keeps every record in a single JSON document, loaded
  on init and saved after every write.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import markdown
import yaml
from pydantic import BaseModel, Field, ValidationError

from inkwell.content.models import ContentCategory, ContentRecord, is_valid_slug
from inkwell.errors import ContentError

if TYPE_CHECKING:
    from inkwell.config import InkwellConfig

logger = logging.getLogger(__name__)

STORE_FILENAME = ".inkwell-content.json"
MARKDOWN_EXTENSIONS = ["extra", "sane_lists"]

_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)

# Alias to avoid shadowing by JsonContentStore.list method
_list = list


@runtime_checkable
class ContentSource(Protocol):
    """Read-only view of a content store used by the render workflow."""

    def get_content_by_slug(
        self, category: ContentCategory | str, slug: str
    ) -> ContentRecord | None: ...

    def get_all_content_slugs(self, category: ContentCategory | str) -> _list[str]: ...


def split_frontmatter(text: str) -> tuple[dict[str, object], str] | None:
    """Split a markdown document into its YAML frontmatter and body.

    Returns None when the document has no frontmatter block.
    """
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        return None
    data = yaml.safe_load(match.group(1)) or {}
    if not isinstance(data, dict):
        return None
    return data, text[match.end():]


class MarkdownContentStore:
    """Markdown files with YAML frontmatter, one file per record."""

    def __init__(self, content_dir: Path) -> None:
        self.content_dir = Path(content_dir)

    def _category_dir(self, category: ContentCategory | str) -> Path:
        return self.content_dir / ContentCategory(category).value

    def _parse(self, path: Path, slug: str) -> ContentRecord:
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ContentError(path, f"not valid UTF-8: {exc}") from exc
        try:
            parsed = split_frontmatter(text)
        except yaml.YAMLError as exc:
            raise ContentError(path, f"invalid frontmatter: {exc}") from exc
        if parsed is None:
            raise ContentError(path, "missing frontmatter block")
        meta, body = parsed

        html = markdown.markdown(body.strip(), extensions=MARKDOWN_EXTENSIONS)
        try:
            return ContentRecord(
                slug=slug,
                title=meta.get("title", ""),
                excerpt=meta.get("excerpt") or "",
                content=html,
                date=meta.get("date"),
                tags=meta.get("tags"),
            )
        except ValidationError as exc:
            raise ContentError(path, str(exc)) from exc

    def get_content_by_slug(
        self, category: ContentCategory | str, slug: str
    ) -> ContentRecord | None:
        """Return the record for ``slug``, or None if no such file exists."""
        if not is_valid_slug(slug):
            return None
        path = self._category_dir(category) / f"{slug}.md"
        if not path.is_file():
            return None
        return self._parse(path, slug)

    def get_all_content_slugs(self, category: ContentCategory | str) -> _list[str]:
        """Return every slug in the category, sorted."""
        category_dir = self._category_dir(category)
        if not category_dir.is_dir():
            logger.info("No content directory at %s", category_dir)
            return []
        return sorted(
            p.stem for p in category_dir.glob("*.md") if p.is_file() and is_valid_slug(p.stem)
        )


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    categories: dict[ContentCategory, _list[ContentRecord]] = Field(default_factory=dict)


class JsonContentStore:
    """JSON-backed store for content records.

    Loads the store file on init and saves after every mutation.
    """

    def __init__(self, path: Path) -> None:
        path = Path(path)
        self._path = path if path.suffix == ".json" else path / STORE_FILENAME
        self._data = self._load()

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> _StoreData:
        if not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _StoreData.model_validate(raw)
        except (json.JSONDecodeError, ValueError, KeyError):
            logger.warning("Corrupt content store at %s, starting fresh", self._path)
            return _StoreData()

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            self._data.model_dump_json(indent=2),
            encoding="utf-8",
        )

    def _records(self, category: ContentCategory | str) -> _list[ContentRecord]:
        return self._data.categories.get(ContentCategory(category), [])

    # ── Write operations ─────────────────────────────────────────

    def upsert(self, category: ContentCategory | str, record: ContentRecord) -> None:
        """Insert or replace a content record by slug."""
        key = ContentCategory(category)
        records = [r for r in self._records(key) if r.slug != record.slug]
        records.append(record)
        self._data.categories[key] = records
        self._save()

    def delete(self, category: ContentCategory | str, slug: str) -> None:
        """Remove a record.

        Raises KeyError if the slug does not exist.
        """
        key = ContentCategory(category)
        records = self._records(key)
        remaining = [r for r in records if r.slug != slug]
        if len(remaining) == len(records):
            raise KeyError(slug)
        self._data.categories[key] = remaining
        self._save()

    # ── Read operations ──────────────────────────────────────────

    def get(self, category: ContentCategory | str, slug: str) -> ContentRecord | None:
        """Return a record by slug, or None if not found."""
        for record in self._records(category):
            if record.slug == slug:
                return record
        return None

    def list(self, category: ContentCategory | str) -> _list[ContentRecord]:
        """Return the records of a category in insertion order."""
        return _list(self._records(category))

    def exists(self, category: ContentCategory | str, slug: str) -> bool:
        """Check whether a record with this slug exists."""
        return self.get(category, slug) is not None

    # ── ContentSource ────────────────────────────────────────────

    def get_content_by_slug(
        self, category: ContentCategory | str, slug: str
    ) -> ContentRecord | None:
        return self.get(category, slug)

    def get_all_content_slugs(self, category: ContentCategory | str) -> _list[str]:
        return sorted(r.slug for r in self._records(category))


def create_store(config: InkwellConfig) -> ContentSource:
    """Create the content store selected by configuration.

    Raises:
        ValueError: If the backend is unknown.
    """
    backend = config.content.backend
    directory = Path(config.content.directory)
    if backend == "markdown":
        return MarkdownContentStore(directory)
    if backend == "json":
        return JsonContentStore(directory)
    raise ValueError(f"Unknown content backend: {backend!r}")
