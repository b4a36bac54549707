"""Notion Bridge: a small REST proxy over the Notion content API."""

__version__ = "0.1.0"
