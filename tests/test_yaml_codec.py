"""Tests for buffer serialization."""

import json

import pytest
import yaml

from orgmarkup.adapters.drawer import DrawerBlock, unfold_drawers
from orgmarkup.adapters.yaml_codec import (
    JsonBufferCodec,
    YamlBufferCodec,
    buffer_from_dict,
    buffer_to_dict,
)
from orgmarkup.format import parse

DOC = """Intro with *bold* and [[#setup][setup notes]].
:PROPERTIES:
:ID: CABA8098-5969-429E-A780-94C8E0A9D206
:END:
See https://orgmode.org
"""


def test_buffer_to_dict():
    """Test the plain dict form."""
    data = buffer_to_dict(parse("Hello *world*! [[#a][A]]"))

    assert data == {
        "text": "Hello world! A",
        "spans": [
            {"start": 6, "end": 11, "type": "style", "style": "bold"},
            {"start": 13, "end": 14, "type": "property_link", "name": "CUSTOM_ID", "value": "a"},
        ],
    }


def test_drawer_content_is_nested():
    """Test that drawer spans carry their content buffer."""
    data = buffer_to_dict(parse(":LOGBOOK:\n=x=\n:END:"))

    (span,) = data["spans"]
    assert span["type"] == "drawer"
    assert span["name"] == "LOGBOOK"
    assert span["folded"] is True
    assert span["content"] == {
        "text": "x",
        "spans": [{"start": 0, "end": 1, "type": "style", "style": "monospace"}],
    }


def test_yaml_round_trip():
    """Test YAML encode and decode."""
    codec = YamlBufferCodec()
    buffer = parse(DOC)

    text = codec.encode(buffer)

    assert yaml.safe_load(text)["text"] == buffer.text
    decoded = codec.decode(text)
    assert decoded == buffer
    assert isinstance(decoded.spans[2].embed, DrawerBlock)


def test_json_encode():
    """Test the JSON form."""
    out = json.loads(JsonBufferCodec().encode(parse("[[https://a.org]]")))
    assert out["spans"] == [{"start": 0, "end": 13, "type": "link", "target": "https://a.org"}]


def test_unknown_span_type():
    """Test that unknown span types are rejected on decode."""
    with pytest.raises(ValueError):
        buffer_from_dict({"text": "x", "spans": [{"start": 0, "end": 1, "type": "blink"}]})


def test_unfolded_drawer_reports_current_state():
    """Test that an unfolded drawer is written as unfolded and read back that way."""
    buffer = parse(":LOGBOOK:\nx\n:END:")
    unfold_drawers(buffer)

    data = buffer_to_dict(buffer)
    assert data["spans"][0]["folded"] is False

    decoded = buffer_from_dict(data)
    assert decoded.spans[0].embed.folded is False
    assert decoded == buffer
