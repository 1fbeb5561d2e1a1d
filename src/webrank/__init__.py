"""Relevance ranking core for crawled web documents."""

__version__ = "0.1.0"
