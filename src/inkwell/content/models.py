"""Content domain models as pure Pydantic v2 data types.

A ContentRecord is one article as handed out by a content store.  Records
are frozen: the render workflow reads them and never writes back.  The
article body is carried as TrustedHTML so that code inserting it into a
page does so knowingly, without escaping.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler, field_validator
from pydantic_core import core_schema


class ContentCategory(StrEnum):
    """Top-level content collections held by a store."""

    ARTICLES = "articles"
    PROJECTS = "projects"


def is_valid_slug(slug: str) -> bool:
    """Reject slugs that could escape a category or output directory."""
    if not slug or slug.startswith("."):
        return False
    return "/" not in slug and "\\" not in slug and "\x00" not in slug


class TrustedHTML(str):
    """Markup that has been sanitised upstream and is inserted verbatim.

    Implements ``__html__`` so template engines that honour the protocol
    also skip escaping.
    """

    __slots__ = ()

    def __html__(self) -> str:
        return str(self)

    def __repr__(self) -> str:
        return f"TrustedHTML({str.__repr__(self)})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


class ContentRecord(BaseModel):
    """A single article as resolved from a content store."""

    model_config = ConfigDict(frozen=True)

    slug: str = Field(min_length=1)
    title: str = Field(min_length=1)
    excerpt: str = ""
    content: TrustedHTML = TrustedHTML("")
    date: datetime
    tags: tuple[str, ...] = ()

    @field_validator("slug")
    @classmethod
    def _safe_slug(cls, value: str) -> str:
        if not is_valid_slug(value):
            raise ValueError(f"Invalid slug: {value!r}")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _date_only_is_midnight(cls, value: Any) -> Any:
        # YAML frontmatter yields datetime.date for `date: 2099-01-01`
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min, tzinfo=UTC)
        return value

    @field_validator("date")
    @classmethod
    def _naive_is_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _missing_tags(cls, value: Any) -> Any:
        if value is None:
            return ()
        return value
