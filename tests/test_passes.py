"""Tests for individual passes."""

from orgmarkup.core.model import Buffer, Drawer, Link, PropertyLink, Span, Style, StyleKind
from orgmarkup.format.passes import (
    parse_drawers,
    parse_markup,
    parse_org_links,
    parse_plain_links,
    parse_property_links,
)
from orgmarkup.format.patterns import BRACKET_LINK, CUSTOM_ID_LINK


def test_property_links_named_then_nameless():
    """Test both property link forms in one pass."""
    out = parse_property_links(Buffer("[[#a][A]] [[#b]]"), CUSTOM_ID_LINK, "CUSTOM_ID", True)

    assert out.text == "A #b"
    assert out.spans == (
        Span(0, 1, PropertyLink("CUSTOM_ID", "a")),
        Span(2, 4, PropertyLink("CUSTOM_ID", "b")),
    )


def test_org_links_without_match_keep_buffer():
    """Test that a pass without matches returns the same buffer."""
    buf = Buffer("no links here")
    assert parse_org_links(buf, BRACKET_LINK, True) is buf


def test_plain_links_disabled():
    """Test that the bare-link pass does nothing when linkify is off."""
    buf = Buffer("https://a.org")
    assert parse_plain_links(buf, linkify=False) is buf


def test_plain_links_skip_linked_start():
    """Test that text whose first character is linked is not tagged again."""
    buf = Buffer("https://a.org", (Span(0, 13, Link("https://a.org")),))
    assert parse_plain_links(buf, linkify=True).spans == buf.spans


def test_plain_links_tag_in_place():
    """Test that bare links are tagged without changing text."""
    out = parse_plain_links(Buffer("a mailto:x@y.z b tel:123"), linkify=True)

    assert out.text == "a mailto:x@y.z b tel:123"
    assert out.spans == (
        Span(2, 14, Link("mailto:x@y.z")),
        Span(17, 24, Link("tel:123")),
    )


def test_markup_disabled():
    """Test that the style pass returns the same buffer when styling is off."""
    buf = Buffer("*x*")
    assert parse_markup(buf, style=False, with_marks=False) is buf


def test_markup_keeps_earlier_spans():
    """Test that spans outside emphasis survive the rewrite."""
    buf = Buffer("see https://a.com and *this*", (Span(4, 17, Link("https://a.com")),))

    out = parse_markup(buf, style=True, with_marks=False)

    assert out.text == "see https://a.com and this"
    assert out.spans == (
        Span(4, 17, Link("https://a.com")),
        Span(22, 26, Style(StyleKind.BOLD)),
    )


def test_markup_with_marks_tags_in_place():
    """Test keep-markers mode."""
    buf = Buffer("/a/ and +b+")

    out = parse_markup(buf, style=True, with_marks=True)

    assert out.text == buf.text
    assert out.spans == (
        Span(0, 3, Style(StyleKind.ITALIC)),
        Span(8, 11, Style(StyleKind.STRIKETHROUGH)),
    )


def test_drawers_call_materializer_folded():
    """Test that each drawer is materialized once, folded."""
    calls = []

    def materialize(name, content, folded):
        calls.append((name, content.text, folded))
        return name.lower()

    out = parse_drawers(Buffer(":A:\n1\n:END:\n:B:\n2\n:END:"), materialize)

    assert calls == [("A", "1", True), ("B", "2", True)]
    assert [(s.tag, s.embed) for s in out.spans] == [
        (Drawer("A", True), "a"),
        (Drawer("B", True), "b"),
    ]
