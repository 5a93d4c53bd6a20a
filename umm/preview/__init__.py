"""Preview renderers for content-search rows."""

from __future__ import annotations

from .content import bat_preview_args, render_content_preview, render_excerpt

__all__ = ["bat_preview_args", "render_content_preview", "render_excerpt"]
