"""Programmatic-SEO business directory: catalog store, page cache and search."""

__version__ = "0.1.0"
