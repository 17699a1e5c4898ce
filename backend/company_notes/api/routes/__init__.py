"""HTTP API route handlers."""

from . import companies, notes, summaries, system

__all__ = ["companies", "notes", "summaries", "system"]
