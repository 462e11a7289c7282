from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Union

# Stands in for an embedded object (a materialized drawer) in buffer text.
OBJECT_REPLACEMENT = "\ufffc"


class StyleKind(Enum):
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    MONOSPACE = "monospace"
    STRIKETHROUGH = "strikethrough"


@dataclass(frozen=True)
class Style:
    kind: StyleKind


@dataclass(frozen=True)
class Link:
    target: str  # e.g. "https://orgmode.org" or "tel:1234567"


@dataclass(frozen=True)
class PropertyLink:
    name: str  # "CUSTOM_ID" or "ID"
    value: str


@dataclass(frozen=True)
class Drawer:
    name: str
    folded: bool = True


FormatTag = Union[Style, Link, PropertyLink, Drawer]


@dataclass(frozen=True)
class Span:
    start: int
    end: int
    tag: FormatTag
    embed: Any = None  # host renderable, only set for Drawer spans

    def shifted(self, delta: int) -> Span:
        return Span(self.start + delta, self.end + delta, self.tag, self.embed)


@dataclass(frozen=True)
class Buffer:
    """
    Text plus the formatting spans attached to it.

    Buffers are never mutated: tagging or rewriting produces a new buffer.
    Spans are kept ordered by start offset; spans added later at the same
    offset sort after earlier ones.
    """

    text: str = ""
    spans: tuple[Span, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text

    def slice(self, start: int, end: int) -> Buffer:
        """Return ``[start, end)`` with every intersecting span clipped to it."""
        start = max(0, start)
        end = min(len(self.text), end)
        if start >= end:
            return Buffer()

        spans = []
        for span in self.spans:
            if span.start < end and span.end > start:
                spans.append(
                    Span(
                        max(span.start, start) - start,
                        min(span.end, end) - start,
                        span.tag,
                        span.embed,
                    )
                )
        return Buffer(self.text[start:end], tuple(spans))

    def tagged(self, start: int, end: int, tag: FormatTag, embed: Any = None) -> Buffer:
        """Return a copy with ``tag`` attached over ``[start, end)``."""
        return Buffer(self.text, _ordered([*self.spans, Span(start, end, tag, embed)]))

    def spans_at(self, pos: int, tag_type: type | None = None) -> list[Span]:
        """Spans covering the character at ``pos``, optionally of one tag type."""
        return [
            s
            for s in self.spans
            if s.start <= pos < s.end and (tag_type is None or isinstance(s.tag, tag_type))
        ]

    def tags(self) -> list[FormatTag]:
        return [s.tag for s in self.spans]


@dataclass(frozen=True)
class FormattedRegion:
    """One matched span of a pass and what replaces it."""

    start: int
    end: int
    content: Buffer | str  # str is flattened text, Buffer keeps earlier spans
    tag: FormatTag | None = None
    embed: Any = None


class BufferBuilder:
    """Append-only accumulator used by the rewrite engine."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._spans: list[Span] = []
        self._length = 0

    def append(
        self,
        content: Buffer | str,
        tag: FormatTag | None = None,
        embed: Any = None,
    ) -> None:
        text = content.text if isinstance(content, Buffer) else content
        if not text:
            return

        offset = self._length
        if isinstance(content, Buffer):
            self._spans.extend(s.shifted(offset) for s in content.spans)
        if tag is not None:
            self._spans.append(Span(offset, offset + len(text), tag, embed))

        self._parts.append(text)
        self._length += len(text)

    def build(self) -> Buffer:
        return Buffer("".join(self._parts), _ordered(self._spans))


def _ordered(spans: Iterable[Span]) -> tuple[Span, ...]:
    return tuple(sorted(spans, key=lambda s: s.start))
