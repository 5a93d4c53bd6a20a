"""Git repository search: object aggregation and per-type previews."""

from __future__ import annotations

from .preview import preview_entry, preview_line
from .repo import RepositoryObjectEntry, aggregate, format_entries, validate_repository

__all__ = [
    "RepositoryObjectEntry",
    "aggregate",
    "format_entries",
    "preview_entry",
    "preview_line",
    "validate_repository",
]
