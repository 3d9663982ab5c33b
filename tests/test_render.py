import pytest

from html_extractor.adapters import HTML2TextRenderer, format_block, get_renderer
from html_extractor.models import RenderStyle

LINK = b'<p><a href="http://example.com/">link</a> and <b>bold</b></p>'


def test_trivial_drops_decoration() -> None:
    text = get_renderer(RenderStyle.TRIVIAL).render(LINK, 80)
    assert "link and bold" in text
    assert "http://example.com/" not in text
    assert "**" not in text


def test_plain_uses_link_references() -> None:
    text = get_renderer(RenderStyle.PLAIN).render(LINK, 80)
    assert "[link][1]" in text
    assert "[1]: http://example.com/" in text
    assert "**" not in text


def test_rich_keeps_links_and_emphasis() -> None:
    text = get_renderer(RenderStyle.RICH).render(LINK, 80)
    assert "[link](http://example.com/)" in text
    assert "**bold**" in text


def test_width_controls_wrapping() -> None:
    html = ("<p>" + "word " * 40 + "</p>").encode("utf-8")
    renderer = HTML2TextRenderer(RenderStyle.TRIVIAL)
    narrow = [line for line in renderer.render(html, 20).splitlines() if line]
    assert len(narrow) > 1
    assert all(len(line) <= 20 for line in narrow)
    unwrapped = [line for line in renderer.render(html, 0).splitlines() if line]
    assert len(unwrapped) == 1


def test_render_is_deterministic() -> None:
    renderer = get_renderer(RenderStyle.PLAIN)
    assert renderer.render(LINK, 30) == renderer.render(LINK, 30)


def test_render_tolerates_invalid_utf8() -> None:
    text = get_renderer(RenderStyle.TRIVIAL).render(b"<p>caf\xe9</p>", 80)
    assert "caf" in text


def test_get_renderer_accepts_style_values() -> None:
    assert get_renderer("rich").style is RenderStyle.RICH
    with pytest.raises(KeyError):
        get_renderer("fancy")


def test_format_block_compacts_and_terminates() -> None:
    assert format_block("a.html", "Hi\n\n", artifacts=False, compact=True) == "Hi\n"
    assert format_block("a.html", "Hi\n\nthere\n\n", artifacts=False, compact=False) == "Hi\n\nthere\n\n"


def test_format_block_wraps_with_markers() -> None:
    block = format_block("docs/a.html", "Hi\n\n", artifacts=True, compact=True)
    assert block == "# begin docs/a.html\nHi\n# end docs/a.html\n"


def test_format_block_empty_rendering() -> None:
    assert format_block("blank.html", "\n\n", artifacts=False, compact=True) == ""
    assert format_block("blank.html", "\n\n", artifacts=True, compact=True) == (
        "# begin blank.html\n# end blank.html\n"
    )


def test_format_block_keeps_whitespace_only_lines() -> None:
    assert format_block("pre.html", "a\n   \nb\n\n", artifacts=False, compact=True) == "a\n   \nb\n"
