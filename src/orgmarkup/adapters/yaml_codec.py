import io
import json
from typing import Any

import yaml

from ..core.model import Buffer, Drawer, Link, PropertyLink, Span, Style, StyleKind
from .drawer import DrawerBlock


def span_to_dict(span: Span) -> dict[str, Any]:
    out: dict[str, Any] = {"start": span.start, "end": span.end}
    tag = span.tag
    if isinstance(tag, Style):
        out.update(type="style", style=tag.kind.value)
    elif isinstance(tag, Link):
        out.update(type="link", target=tag.target)
    elif isinstance(tag, PropertyLink):
        out.update(type="property_link", name=tag.name, value=tag.value)
    elif isinstance(tag, Drawer):
        out.update(type="drawer", name=tag.name, folded=tag.folded)
        if isinstance(span.embed, DrawerBlock):
            # Current fold state, not the state the drawer was created in
            out["folded"] = span.embed.folded
            out["content"] = buffer_to_dict(span.embed.content)
    else:
        raise TypeError(f"Unknown format tag: {tag!r}")
    return out


def span_from_dict(data: dict[str, Any]) -> Span:
    kind = data["type"]
    embed = None
    if kind == "style":
        tag: Any = Style(StyleKind(data["style"]))
    elif kind == "link":
        tag = Link(data["target"])
    elif kind == "property_link":
        tag = PropertyLink(data["name"], data["value"])
    elif kind == "drawer":
        folded = bool(data.get("folded", True))
        if "content" in data:
            tag = Drawer(data["name"])
            embed = DrawerBlock(tag.name, buffer_from_dict(data["content"]), folded)
        else:
            tag = Drawer(data["name"], folded)
    else:
        raise ValueError(f"Unknown span type: {kind}")
    return Span(int(data["start"]), int(data["end"]), tag, embed)


def buffer_to_dict(buffer: Buffer) -> dict[str, Any]:
    return {
        "text": buffer.text,
        "spans": [span_to_dict(s) for s in buffer.spans],
    }


def buffer_from_dict(data: dict[str, Any]) -> Buffer:
    return Buffer(
        data.get("text", ""),
        tuple(span_from_dict(s) for s in data.get("spans") or []),
    )


class YamlBufferCodec:
    def encode(self, buffer: Buffer) -> str:
        buf = io.StringIO()
        yaml.safe_dump(buffer_to_dict(buffer), buf, sort_keys=False, allow_unicode=True)
        return buf.getvalue()

    def decode(self, text: str) -> Buffer:
        return buffer_from_dict(yaml.safe_load(io.StringIO(text)) or {})


class JsonBufferCodec:
    def encode(self, buffer: Buffer) -> str:
        return json.dumps(buffer_to_dict(buffer), ensure_ascii=False, indent=2)

    def decode(self, text: str) -> Buffer:
        return buffer_from_dict(json.loads(text))
