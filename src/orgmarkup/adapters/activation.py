"""Dispatch of user activations (clicks, enter key) on formatted spans."""

from typing import Any, Callable

from ..core.model import Buffer, Drawer, Link, PropertyLink, Span, Style
from ..core.ports import PropertyLinkHandler
from .drawer import DrawerBlock


def activate(
    span: Span,
    on_property_link: PropertyLinkHandler,
    on_link: Callable[[str], Any] | None = None,
) -> Any:
    """
    Route an activated span to the matching host callback.

    - PropertyLink: ``on_property_link.open_note_with_property(name, value)``
    - Link: ``on_link(target)`` when given
    - Drawer: folds or unfolds the embedded DrawerBlock and returns it
    - Style: nothing to do
    """
    tag = span.tag
    if isinstance(tag, PropertyLink):
        return on_property_link.open_note_with_property(tag.name, tag.value)
    if isinstance(tag, Link):
        return on_link(tag.target) if on_link else None
    if isinstance(tag, Drawer):
        if isinstance(span.embed, DrawerBlock):
            span.embed.toggle()
        return span.embed
    if isinstance(tag, Style):
        return None
    raise TypeError(f"Unknown format tag: {tag!r}")


def activatable_span(buffer: Buffer, pos: int) -> Span | None:
    """The innermost link, property link or drawer span at ``pos``."""
    candidates = [
        s for s in buffer.spans_at(pos) if isinstance(s.tag, (Link, PropertyLink, Drawer))
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda s: s.end - s.start)
