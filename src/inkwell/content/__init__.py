"""Content domain: article records and the stores that serve them."""

from inkwell.content.models import ContentCategory, ContentRecord, TrustedHTML
from inkwell.content.store import (
    ContentSource,
    JsonContentStore,
    MarkdownContentStore,
    create_store,
)

__all__ = [
    "ContentCategory",
    "ContentRecord",
    "ContentSource",
    "JsonContentStore",
    "MarkdownContentStore",
    "TrustedHTML",
    "create_store",
]
