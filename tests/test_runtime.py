"""Tests for the runtime wiring."""

from pathlib import Path

from orgmarkup.adapters.property_index import PropertyIndex
from orgmarkup.config import NotesConfig, OrgMarkupConfig, StyleSettings, UIConfig
from orgmarkup.runtime import Runtime

DRAWER = "Log\n:LOGBOOK:\n- Done\n:END:\n"


def make_runtime(unfold_drawers=False, with_marks=False):
    config = OrgMarkupConfig(
        style=StyleSettings(with_marks=with_marks),
        linkify=True,
        notes=NotesConfig(root=Path(".")),
        ui=UIConfig(unfold_drawers=unfold_drawers),
    )
    return Runtime(config=config, properties=PropertyIndex(Path(".")))


def test_format_keeps_drawers_folded():
    """Test the default fold state."""
    buffer = make_runtime().format(DRAWER)
    assert buffer.spans[0].embed.folded is True


def test_format_unfold_argument():
    """Test unfolding on request."""
    buffer = make_runtime().format(DRAWER, unfold=True)
    assert buffer.spans[0].embed.folded is False


def test_format_unfold_from_config():
    """Test that [ui] unfold_drawers unfolds without being asked."""
    buffer = make_runtime(unfold_drawers=True).format(DRAWER)
    assert buffer.spans[0].embed.folded is False


def test_format_config_overrides():
    """Test per-call overrides on top of settings."""
    rt = make_runtime(with_marks=True)

    assert rt.format_config().with_marks is True
    assert rt.format_config(with_marks=False).with_marks is False
    assert rt.format_config(linkify=False).linkify is False
    assert rt.format("*a*").text == "*a*"
