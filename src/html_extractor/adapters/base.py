from __future__ import annotations

from typing import Protocol

from ..models import RenderStyle
from ..utils import compact_lines


class Renderer(Protocol):
    style: RenderStyle

    def render(self, html: bytes, width: int) -> str:  # pragma: no cover - interface
        ...


def format_block(name: str, text: str, *, artifacts: bool, compact: bool) -> str:
    """Shape rendered text for the shared output file.

    Every block ends with a newline so blocks and markers stay on their
    own lines.
    """

    body = compact_lines(text) if compact else text
    if body and not body.endswith("\n"):
        body += "\n"
    if not artifacts:
        return body
    return f"# begin {name}\n{body}# end {name}\n"
