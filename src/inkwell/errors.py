"""Exceptions raised by inkwell.

An article that does not exist is not an error: lookups return ``None``
and the render workflow returns a ``NotFound`` value.  These exceptions
cover content that exists but cannot be used.
"""

from __future__ import annotations

from pathlib import Path


class InkwellError(Exception):
    """Base error for inkwell."""


class ContentError(InkwellError):
    """A content file exists but cannot be parsed into a record."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class ContentIntegrityError(InkwellError):
    """The store listed a slug that it cannot resolve."""

    def __init__(self, category: str, slug: str) -> None:
        self.category = category
        self.slug = slug
        super().__init__(f"Store lists {category}/{slug} but it does not resolve")
