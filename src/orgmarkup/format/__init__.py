"""Org inline markup formatting."""

from .formatter import FormatConfig, build_pipeline, parse
from .passes import (
    parse_drawers,
    parse_markup,
    parse_org_links,
    parse_org_links_with_name,
    parse_plain_links,
    parse_property_links,
)

__all__ = [
    "FormatConfig",
    "build_pipeline",
    "parse",
    "parse_drawers",
    "parse_markup",
    "parse_org_links",
    "parse_org_links_with_name",
    "parse_plain_links",
    "parse_property_links",
]
