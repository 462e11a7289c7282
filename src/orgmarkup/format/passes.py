"""The individual formatting passes.

Each pass takes the buffer left by the previous one and returns a new
buffer. Passes that replace text collect all regions first and rewrite
once at the end, so match offsets always refer to the buffer the pass
started with.
"""

import logging
import re
from typing import Iterator

from ..core.model import (
    OBJECT_REPLACEMENT,
    Buffer,
    Drawer,
    FormattedRegion,
    Link,
    PropertyLink,
    Style,
)
from ..core.ports import DrawerMaterializer
from ..core.rewrite import build_from_regions, collect_regions
from .patterns import (
    DRAWER_RE,
    MARKERS,
    PLAIN_LINK_RE,
    iter_markup,
    named_bracket_link,
    nameless_bracket_link,
)

logger = logging.getLogger(__name__)


def parse_property_links(
    buffer: Buffer,
    link_regex: str,
    prop_name: str,
    linkify: bool,
) -> Buffer:
    """[[#custom id]] and [[#custom id][name]], [[id:UUID]] and [[id:UUID][name]]

    Named links are handled first, then nameless ones.
    """
    buffer = _parse_property_link_type(
        buffer, named_bracket_link(link_regex), prop_name, "name", linkify
    )
    return _parse_property_link_type(
        buffer, nameless_bracket_link(link_regex), prop_name, "link", linkify
    )


def _parse_property_link_type(
    buffer: Buffer,
    pattern: re.Pattern[str],
    prop_name: str,
    text_group: str,
    linkify: bool,
) -> Buffer:
    def collect(buf: Buffer) -> Iterator[FormattedRegion]:
        for m in pattern.finditer(buf.text):
            value = m.group("value")
            tag = PropertyLink(prop_name, value) if linkify else None
            logger.debug("Found %s link %r", prop_name, value)
            yield FormattedRegion(m.start(), m.end(), m.group(text_group), tag)

    return collect_regions(buffer, collect)


def parse_org_links_with_name(buffer: Buffer, link_regex: str, linkify: bool) -> Buffer:
    """[[https://orgmode.org][name]]

    The name replaces the whole link as plain text.
    """
    pattern = named_bracket_link(link_regex)

    def collect(buf: Buffer) -> Iterator[FormattedRegion]:
        for m in pattern.finditer(buf.text):
            tag = Link(m.group("link")) if linkify else None
            yield FormattedRegion(m.start(), m.end(), m.group("name"), tag)

    return collect_regions(buffer, collect)


def parse_org_links(buffer: Buffer, link_regex: str, linkify: bool) -> Buffer:
    """[[https://orgmode.org]]"""
    pattern = nameless_bracket_link(link_regex)

    def collect(buf: Buffer) -> Iterator[FormattedRegion]:
        for m in pattern.finditer(buf.text):
            link = m.group("link")
            yield FormattedRegion(m.start(), m.end(), link, Link(link) if linkify else None)

    return collect_regions(buffer, collect)


def parse_plain_links(buffer: Buffer, linkify: bool) -> Buffer:
    """https://orgmode.org

    Tags in place, without rewriting.
    """
    if not linkify:
        return buffer

    for m in PLAIN_LINK_RE.finditer(buffer.text):
        # Make sure the first character is not linked already
        if not buffer.spans_at(m.start(), Link):
            buffer = buffer.tagged(m.start(), m.end(), Link(m.group("link")))

    return buffer


def parse_markup(buffer: Buffer, style: bool, with_marks: bool) -> Buffer:
    """*bold* /italic/ _underline_ =verbatim= ~code~ +strike-through+"""
    if not style:
        return buffer

    regions: list[FormattedRegion] = []
    tagged = buffer

    for m in iter_markup(buffer.text):
        for name, _marker, kind in MARKERS:
            if m.group(name) is None:
                continue

            start, end = m.span(name)
            if with_marks:
                tagged = tagged.tagged(start, end, Style(kind))
            else:
                regions.append(FormattedRegion(start, end, m.group(f"{name}_text"), Style(kind)))
            break
        else:
            raise RuntimeError(f"No markup alternative matched at offset {m.start()}")

    if with_marks:
        return tagged

    return build_from_regions(buffer, regions)


def parse_drawers(buffer: Buffer, materialize: DrawerMaterializer) -> Buffer:
    """
    :PROPERTIES:
    :CUSTOM_ID: intro
    :END:

    Drawer content is taken as a buffer slice so spans placed inside it by
    earlier passes are kept. One newline on each side of the drawer is
    absorbed into the region.
    """

    def collect(buf: Buffer) -> Iterator[FormattedRegion]:
        for m in DRAWER_RE.finditer(buf.text):
            name = m.group("name")
            content = buf.slice(*m.span("content"))

            logger.debug("Found drawer %s (%d chars)", name, len(content))

            block = materialize(name, content, True)

            yield FormattedRegion(
                m.start(), m.end(), OBJECT_REPLACEMENT, Drawer(name, folded=True), block
            )

    return collect_regions(buffer, collect)
