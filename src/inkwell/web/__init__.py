"""HTTP hosting for article pages (FastAPI)."""

from inkwell.web.app import create_app

__all__ = ["create_app"]
