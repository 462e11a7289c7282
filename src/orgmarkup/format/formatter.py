"""Main formatter driver: runs every pass over the text, in order."""

from dataclasses import dataclass
from functools import partial, reduce
from typing import Callable

from ..adapters.drawer import materialize_drawer
from ..core.model import Buffer
from ..core.ports import DrawerMaterializer, SettingsStore
from .passes import (
    parse_drawers,
    parse_markup,
    parse_org_links,
    parse_org_links_with_name,
    parse_plain_links,
    parse_property_links,
)
from .patterns import BRACKET_ANY_LINK, BRACKET_LINK, CUSTOM_ID_LINK, ID_LINK

Pass = Callable[[Buffer], Buffer]


@dataclass(frozen=True)
class FormatConfig:
    """Switches consumed by the passes."""

    # Style markup at all
    style: bool = True
    # Keep the * / _ = ~ + markers and style them too
    with_marks: bool = False
    # Attach Link and PropertyLink tags
    linkify: bool = True

    @classmethod
    def from_settings(cls, settings: SettingsStore, linkify: bool = True) -> "FormatConfig":
        """Read style switches from a settings store; linkify is per call site."""
        return cls(
            style=settings.style_text(),
            with_marks=settings.styled_text_with_marks(),
            linkify=linkify,
        )


def build_pipeline(
    config: FormatConfig,
    materialize: DrawerMaterializer = materialize_drawer,
) -> list[Pass]:
    """Return the passes in the order they must run.

    Property links go first so ``#id`` targets are never seen by the
    generic bracket passes. The any-target named pass only strips the
    brackets and is never linkified.
    """
    return [
        partial(
            parse_property_links,
            link_regex=CUSTOM_ID_LINK,
            prop_name="CUSTOM_ID",
            linkify=config.linkify,
        ),
        partial(parse_property_links, link_regex=ID_LINK, prop_name="ID", linkify=config.linkify),
        partial(parse_org_links_with_name, link_regex=BRACKET_LINK, linkify=config.linkify),
        partial(parse_org_links_with_name, link_regex=BRACKET_ANY_LINK, linkify=False),
        partial(parse_org_links, link_regex=BRACKET_LINK, linkify=config.linkify),
        partial(parse_plain_links, linkify=config.linkify),
        partial(parse_markup, style=config.style, with_marks=config.with_marks),
        partial(parse_drawers, materialize=materialize),
    ]


def parse(
    text: str,
    config: FormatConfig | None = None,
    materialize: DrawerMaterializer = materialize_drawer,
) -> Buffer:
    """Format Org markup in ``text``.

    Text that matches no pattern is kept as is; nothing in the input makes
    this fail.

    Args:
        text: Raw note text
        config: Formatting switches (defaults: style on, markers stripped, linkify on)
        materialize: Builds the object embedded for each drawer

    Returns:
        Buffer with markup removed and formatting spans attached
    """
    if config is None:
        config = FormatConfig()

    passes = build_pipeline(config, materialize)

    return reduce(lambda buffer, step: step(buffer), passes, Buffer(text))
