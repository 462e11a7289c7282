import html
from typing import Iterator

from ..core.model import Buffer, Drawer, FormatTag, Link, PropertyLink, Span, Style, StyleKind
from ..core.ports import Renderer
from .drawer import DrawerBlock

STYLE_ELEMENTS = {
    StyleKind.BOLD: "strong",
    StyleKind.ITALIC: "em",
    StyleKind.UNDERLINE: "u",
    StyleKind.MONOSPACE: "code",
    StyleKind.STRIKETHROUGH: "del",
}


def _segments(buffer: Buffer) -> Iterator[tuple[int, int, list[Span]]]:
    """Split the buffer at every span boundary, with the spans covering each piece."""
    bounds = {0, len(buffer)}
    for span in buffer.spans:
        bounds.update((span.start, span.end))
    points = sorted(b for b in bounds if 0 <= b <= len(buffer))

    for start, end in zip(points, points[1:]):
        active = [s for s in buffer.spans if s.start <= start and s.end >= end]
        yield start, end, active


def _drawer_span(spans: list[Span]) -> Span | None:
    for span in spans:
        if isinstance(span.tag, Drawer):
            return span
    return None


class PlainTextRenderer(Renderer):
    """Buffer text with every drawer shown on its own line(s)."""

    def render(self, buffer: Buffer) -> str:
        out: list[str] = []
        for start, end, active in _segments(buffer):
            text = buffer.text[start:end]
            drawer = _drawer_span(active)
            if drawer is None:
                out.append(text)
                continue

            shown = self._drawer_text(drawer)
            if out and not out[-1].endswith("\n"):
                shown = "\n" + shown
            if end < len(buffer) and not buffer.text[end:].startswith("\n"):
                shown += "\n"
            out.append(shown)

        return "".join(out)

    def _drawer_text(self, span: Span) -> str:
        if isinstance(span.embed, DrawerBlock):
            return span.embed.display_text()
        return str(span.embed)


class HtmlRenderer(Renderer):
    """HTML fragment; drawers become ``<details>`` elements."""

    def render(self, buffer: Buffer) -> str:
        out: list[str] = []
        for start, end, active in _segments(buffer):
            drawer = _drawer_span(active)
            if drawer is not None:
                out.append(self._drawer_html(drawer))
                continue

            opening = []
            closing = []
            anchored = False
            for span in active:
                # Anchors do not nest; the first link over a segment wins
                if isinstance(span.tag, (Link, PropertyLink)):
                    if anchored:
                        continue
                    anchored = True
                open_tag, close_tag = self._element(span.tag)
                opening.append(open_tag)
                closing.insert(0, close_tag)

            out.append("".join(opening) + html.escape(buffer.text[start:end]) + "".join(closing))

        return "".join(out)

    def _element(self, tag: FormatTag) -> tuple[str, str]:
        if isinstance(tag, Style):
            name = STYLE_ELEMENTS[tag.kind]
            return f"<{name}>", f"</{name}>"
        if isinstance(tag, Link):
            return f'<a href="{html.escape(tag.target)}">', "</a>"
        if isinstance(tag, PropertyLink):
            return (
                f'<a href="#" class="property-link" '
                f'data-property-name="{html.escape(tag.name)}" '
                f'data-property-value="{html.escape(tag.value)}">',
                "</a>",
            )
        if isinstance(tag, Drawer):
            raise TypeError("Drawer spans are rendered as blocks")
        raise TypeError(f"Unknown format tag: {tag!r}")

    def _drawer_html(self, span: Span) -> str:
        block = span.embed
        if not isinstance(block, DrawerBlock):
            return html.escape(str(block))

        is_open = "" if block.folded else " open"
        return (
            f'<details class="drawer"{is_open}>'
            f"<summary>:{html.escape(block.name)}:</summary>"
            f'<div class="drawer-content">{self.render(block.content)}</div>'
            f"</details>"
        )
