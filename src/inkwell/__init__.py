"""Inkwell: article resolution and rendering for a content-driven site."""

__version__ = "0.1.0"
