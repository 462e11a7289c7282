"""Org-mode inline markup to formatted text spans."""

__version__ = "0.3.0"

from .core.model import (  # noqa: E402
    Buffer,
    Drawer,
    FormatTag,
    FormattedRegion,
    Link,
    PropertyLink,
    Span,
    Style,
    StyleKind,
)
from .format.formatter import FormatConfig, parse  # noqa: E402

__all__ = [
    "__version__",
    "Buffer",
    "Drawer",
    "FormatConfig",
    "FormatTag",
    "FormattedRegion",
    "Link",
    "PropertyLink",
    "Span",
    "Style",
    "StyleKind",
    "parse",
]
