from __future__ import annotations

import html2text

from ..models import RenderStyle


class HTML2TextRenderer:
    def __init__(self, style: RenderStyle = RenderStyle.TRIVIAL) -> None:
        self.style = style

    def _build_converter(self, width: int) -> html2text.HTML2Text:
        converter = html2text.HTML2Text()
        # 0 disables wrapping
        converter.body_width = width
        converter.unicode_snob = True
        if self.style is RenderStyle.TRIVIAL:
            converter.ignore_links = True
            converter.ignore_images = True
            converter.ignore_emphasis = True
            converter.ignore_tables = True
        elif self.style is RenderStyle.PLAIN:
            converter.ignore_emphasis = True
            converter.inline_links = False
            converter.images_to_alt = True
        else:
            converter.ignore_links = False
            converter.ignore_emphasis = False
            converter.inline_links = True
        return converter

    def render(self, html: bytes, width: int) -> str:
        document = html.decode("utf-8", errors="replace")
        return self._build_converter(width).handle(document)
