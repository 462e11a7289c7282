"""Regular expressions for Org inline markup, links and drawers."""

import re

from ..core.model import StyleKind

LINK_SCHEMES = "https?|mailto|tel|voicemail|geo|sms|smsto|mms|mmsto"

# tel:1234567
PLAIN_LINK = rf"(?P<link>(?:{LINK_SCHEMES}):\S+)"

# Same as above, but ] ends the link too. Used inside brackets.
BRACKET_LINK = rf"(?P<link>(?:{LINK_SCHEMES}):[^\]\s]+)"

# #custom-id
CUSTOM_ID_LINK = r"(?P<link>#(?P<value>[^\]]+))"

# id:CABA8098-5969-429E-A780-94C8E0A9D206
_HD = "[0-9a-fA-F]"
ID_LINK = rf"(?P<link>id:(?P<value>{_HD}{{8}}-(?:{_HD}{{4}}-){{3}}{_HD}{{12}}))"

# Anything up to the closing bracket
BRACKET_ANY_LINK = r"(?P<link>[^\]]+)"

PLAIN_LINK_RE = re.compile(PLAIN_LINK)


def named_bracket_link(target: str) -> re.Pattern[str]:
    """[[target][name]]"""
    return re.compile(rf"\[\[{target}\]\[(?P<name>[^\]]+)\]\]")


def nameless_bracket_link(target: str) -> re.Pattern[str]:
    """[[target]]"""
    return re.compile(rf"\[\[{target}\]\]")


# Emphasis boundaries
PRE = r"\- \t('\"{"
POST = r"\- \t.,:!?;'\")}\["
BORDER = r"\S"
BODY = r".*?(?:\n.*?)?"

# Group name, marker and style, in match priority order.
MARKERS: tuple[tuple[str, str, StyleKind], ...] = (
    ("bold", "*", StyleKind.BOLD),
    ("italic", "/", StyleKind.ITALIC),
    ("underline", "_", StyleKind.UNDERLINE),
    ("verbatim", "=", StyleKind.MONOSPACE),
    ("code", "~", StyleKind.MONOSPACE),
    ("strike", "+", StyleKind.STRIKETHROUGH),
)


def _markup(name: str, marker: str, prefix: str) -> str:
    m = re.escape(marker)
    return (
        rf"{prefix}(?P<{name}>{m}(?P<{name}_text>{BORDER}|{BORDER}{BODY}{BORDER}){m})"
        rf"(?:[{POST}]|(?=\r)|$)"
    )


# Opening marker at a line start or after a pre-class character.
# Lines may end in \n, \r\n or a lone \r.
MARKUP_RE = re.compile(
    "|".join(_markup(name, marker, rf"(?:^|(?<=\r)|[{PRE}])") for name, marker, _ in MARKERS),
    re.MULTILINE,
)

# Opening marker exactly at the scan position (where the previous match ended).
MARKUP_AT_RE = re.compile(
    "|".join(_markup(name, marker, "") for name, marker, _ in MARKERS),
    re.MULTILINE,
)


def iter_markup(text: str):
    """Yield emphasis matches left to right without overlaps.

    A match may begin right where the previous one ended (its trailing
    post-class character is consumed), so ``*a*,*b*`` yields both.
    """
    pos = 0
    while pos < len(text):
        m = MARKUP_AT_RE.match(text, pos) or MARKUP_RE.search(text, pos)
        if m is None:
            return
        yield m
        pos = m.end()


DRAWER_RE = re.compile(
    r"(?P<lead>\n)?^[ \t]*:(?P<name>[-a-zA-Z_0-9]+):[ \t]*\n"
    r"(?P<content>.*?)\n[ \t]*:END:[ \t]*$(?P<trail>\n)?",
    re.IGNORECASE | re.MULTILINE | re.DOTALL,
)

# :CUSTOM_ID: value, inside a PROPERTIES drawer
PROPERTY_LINE_RE = re.compile(r"^[ \t]*:(?P<key>[^:\s]+):[ \t]*(?P<value>.*?)[ \t]*$", re.MULTILINE)
