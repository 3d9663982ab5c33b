from __future__ import annotations

from functools import lru_cache

from .base import Renderer, format_block
from .html import HTML2TextRenderer
from ..models import RenderStyle


@lru_cache(maxsize=len(RenderStyle))
def get_renderer(style: RenderStyle | str) -> Renderer:
    try:
        resolved = RenderStyle(style)
    except ValueError as exc:
        raise KeyError(f"No renderer registered for {style}") from exc
    return HTML2TextRenderer(resolved)


__all__ = [
    "HTML2TextRenderer",
    "Renderer",
    "format_block",
    "get_renderer",
]
